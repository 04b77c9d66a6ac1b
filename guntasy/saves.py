"""Save slots: the slot picker, writing save files and reading them back."""

from __future__ import annotations

import functools
import re
import sys
import time
from pathlib import Path
from typing import Optional, Union

from guntasy.state import Character, Game
from guntasy.strutil import int_to_str
from guntasy.widgets import Button, Placement, load_button_textures

SAVE_FILE = "Saves/save_{}"
SLOT_TEXTURE = "r/UI/_load/save"
MAX_LINES = 1000
MAX_LINE_LENGTH = 1000

_SLOT_BUTTON_Y = (-230, -100, 30, 160)
_SLOT_TEXT_Y = (-265, -135, -5, 125)
_INT_FIELD = re.compile(r"\s*([+-]?\d+)")
_FIELDS = (
    "hp", "max_hp", "speed", "defence", "scene",
    "weapon_1", "weapon_2",
    "backpack_1", "backpack_2", "backpack_3",
    "backpack_4", "backpack_5", "backpack_6",
)
_ECHOED = ("weapon_1=", "backpack_4=")
_HOTBAR_WEAPONS = ("M4A1", "Glock17")


def save_label(index: int, date: str) -> str:
    """Label of a used save slot: its number and last modification date."""
    return f"Save {int_to_str(index)}\n{date}"


def _save_path(game: Game, save_id: int) -> Path:
    return Path(game.resource(SAVE_FILE.format(save_id)))


def init_saves(game: Game) -> None:
    """Create the hidden button and label of each save slot."""
    size = game.window_size
    for slot, button_y, text_y in zip(game.saves, _SLOT_BUTTON_Y, _SLOT_TEXT_Y):
        textures = load_button_textures(game.resource(SLOT_TEXTURE))
        button = Button(texture=textures[0], name="Saves", textures=textures,
                        is_vis=False, is_modal=1)
        button.set_origin(0.5, 0.5)
        text = game.ui.create_text("save_txt", 26, "")
        button.place(Placement(0.5, 0.5, 0, button_y), size)
        text.place(Placement(0.5, 0.5, -330, text_y), size)
        slot.button = button
        slot.text = text


def refresh_slot(game: Game, num: int) -> None:
    """Update a slot's label from its save file, or mark it empty."""
    slot = game.saves[num]
    path = _save_path(game, num + 1)
    try:
        with open(path, "rb"):
            pass
        mtime = path.stat().st_mtime
    except OSError:
        if slot.text is not None:
            slot.text.string = "Empty Save"
        slot.is_empty = True
        return
    slot.modified = time.ctime(mtime) + "\n"
    slot.is_empty = False
    if slot.text is not None:
        slot.text.string = save_label(num + 1, slot.modified)


def load_save_list(game: Game, is_load) -> None:
    """Refresh every slot and make its button load (true) or save (false)."""
    action = load_slot if is_load else save_slot
    for num, slot in enumerate(game.saves):
        refresh_slot(game, num)
        if slot.button is not None:
            slot.button.data_id = num + 1
            slot.button.callback = functools.partial(action, game)


def _open_slots(game: Game, is_load) -> None:
    ui = game.ui
    ui.set_button_visible("ui_pause_screen", False, 1)
    ui.ui_id = 0
    load_save_list(game, is_load)
    ui.unhover()
    ui.set_button_visible("ui_load_back", True, 0)
    ui.set_button_visible("ui_load_close", True, 0)
    for slot in game.saves:
        if slot.button is not None:
            slot.button.is_vis = True
    ui.ui_id = 1


def open_save_prompt(game: Game, btn: Optional[Button]) -> None:
    """Show the slot picker for saving."""
    _open_slots(game, False)


def open_save_load(game: Game, btn: Optional[Button]) -> None:
    """Show the slot picker for loading."""
    _open_slots(game, True)


def read_lines(path: Union[str, Path]) -> list[str]:
    """Read a file as lines of at most 999 characters, keeping line ends."""
    with open(path, encoding="latin-1", newline="") as handle:
        content = handle.read()
    limit = MAX_LINE_LENGTH - 1
    lines: list[str] = []
    for line in content.splitlines(keepends=True):
        for start in range(0, len(line), limit):
            lines.append(line[start:start + limit])
            if len(lines) == MAX_LINES:
                return lines
    return lines


def parse_save(lines: list[str]) -> dict[str, int]:
    """Integer values of the known keys; keys whose value is not an integer are left out."""
    values: dict[str, int] = {}
    for line in lines:
        for key in _FIELDS:
            prefix = key + "="
            if not line.startswith(prefix):
                continue
            match = _INT_FIELD.match(line, len(prefix))
            if match is not None:
                values[key] = int(match.group(1))
    return values


def load_main(game: Game) -> dict[str, int]:
    """Read the first save file, then close every window."""
    lines = read_lines(_save_path(game, 1))
    for line in lines:
        if line.startswith(_ECHOED):
            sys.stdout.write(line)
    values = parse_save(lines)
    game.close_all()
    return values


def _player(game: Game) -> Character:
    if game.player is None:
        raise RuntimeError("the player has not been created")
    return game.player


def stats_lines(game: Game) -> list[str]:
    player = _player(game)
    return [
        "#stats",
        f"hp={player.hp}",
        f"speed={game.stats.speed:.2f}",
        f"defence={game.stats.defence:.2f}",
        f"player damage={float(game.playerdamage):.2f}",
    ]


def hotbar_lines(game: Game) -> list[str]:
    """The hotbar section: a header, then one weapon_N line per hotbar weapon."""
    lines = ["#hotbar"]
    lines.extend(f"weapon_{number}={weapon}"
                 for number, weapon in enumerate(_HOTBAR_WEAPONS, start=1))
    return lines


def save_game_state(game: Game, save_id: int) -> Optional[Path]:
    """Write the game to a save file; return its path, or None if it cannot be written."""
    path = _save_path(game, save_id)
    lines = stats_lines(game) + hotbar_lines(game)
    try:
        with open(path, "w", encoding="latin-1", newline="") as handle:
            handle.writelines(line + "\n" for line in lines)
    except OSError:
        print("Failed to open save file for writing.")
        return None
    return path


def load_slot(game: Game, btn: Button) -> dict[str, int]:
    print("Load file")
    return load_main(game)


def save_slot(game: Game, btn: Button) -> Optional[Path]:
    return save_game_state(game, btn.data_id)