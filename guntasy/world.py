"""Tile maps: loading map files and turning cells into tiles."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from guntasy.widgets import Texture

TILE_SIZE = 150
FLOOR_TILE = "r/level/tile017.png"

TILE_PATHS: dict[str, str] = {
    " ": FLOOR_TILE,
    "/": FLOOR_TILE,
    "#": "r/level/tile001.png",
    "!": "r/level/tile016.png",
    '"': "r/level/tile000.png",
    "$": "r/level/tile025.png",
    "%": "r/level/tile003.png",
    "&": "r/level/tile065.png",
    "(": "r/level/tile064.png",
    ")": "r/level/tile067.png",
    "*": "r/level/tile030.png",
    "+": "r/level/tile049.png",
    ",": "r/level/tile021.png",
    "-": "r/level/tile019.png",
    ".": "r/level/tile014.png",
}


def map_file(root: Union[str, Path], code: str) -> Path:
    """Path of the map file for a one-character map code."""
    return Path(root) / "src" / "map" / "game_maps" / f"map{code}"


@dataclass(eq=False)
class Tile:
    """One drawable cell of the map, at world pixel coordinates."""

    path: str
    x: int
    y: int
    texture: Optional[Texture] = None


def tile_screen_position(tile: Tile, offset_x: int, offset_y: int,
                         window_size: tuple[int, int]) -> tuple[float, float]:
    """Screen position of a tile for a camera offset, centred on the window."""
    center_x = window_size[0] // 2
    center_y = window_size[1] // 2
    return (float(tile.x + offset_x + center_x - 75),
            float(tile.y + offset_y + center_y / 1.5))


def _is_letter(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


@dataclass
class GameMap:
    """A grid of characters read from a map file."""

    rows: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "GameMap":
        with open(path, encoding="latin-1", newline="") as handle:
            content = handle.read()
        lines = content.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return cls(lines)

    def cell(self, col: int, row: int) -> str:
        """Character at a grid position; IndexError outside the map."""
        if row < 0 or row >= len(self.rows):
            raise IndexError(f"row {row} outside the map")
        line = self.rows[row]
        if col < 0 or col >= len(line):
            raise IndexError(f"column {col} outside row {row}")
        return line[col]

    def cell_at(self, x: float, y: float) -> str:
        """Character under world pixel coordinates."""
        return self.cell(int(x / TILE_SIZE), int(y / TILE_SIZE))

    def find(self, ch: str) -> Optional[tuple[int, int]]:
        """(col, row) of the first occurrence of ch, scanning row by row."""
        for row, line in enumerate(self.rows):
            col = line.find(ch)
            if col >= 0:
                return (col, row)
        return None

    def tiles(self, defeated: Collection[str]) -> list[Tile]:
        """Tiles to draw; defeated enemies are shown as floor."""
        result = []
        for row, line in enumerate(self.rows):
            for col, ch in enumerate(line):
                if ch in TILE_PATHS:
                    path = TILE_PATHS[ch]
                elif _is_letter(ch):
                    path = FLOOR_TILE if ch in defeated else f"r/mobs/mob{ch}.png"
                else:
                    continue
                result.append(Tile(path, col * TILE_SIZE, row * TILE_SIZE))
        return result