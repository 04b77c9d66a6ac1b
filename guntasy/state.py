"""The game's shared state."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from guntasy.widgets import UI, Button, Text, Texture
from guntasy.world import GameMap, Tile

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
FRAME_RATE = 60
WINDOWED = 0
COLOR_BITS = 32
SAVE_SLOTS = 4
BACKPACK_SLOTS = 7
TOOL_NAMES = ("M4A1", "G17", "X26", "Handcuffs", "Baton")
MAIN_MENU_BUTTONS = (
    "Menu Background",
    "New Game",
    "Load Game",
    "Preferences",
    "Quit Game",
    "Continue Game",
    "How to Play",
)


@dataclass
class Preferences:
    """Window and volume settings."""

    x: int = SCREEN_WIDTH
    y: int = SCREEN_HEIGHT
    fps: float = FRAME_RATE
    win: int = WINDOWED
    bgm: float = 0.0
    bgs: float = 0.0
    sfx: float = 0.0
    text: float = 0.0


@dataclass(eq=False)
class Character:
    """A character on the map; off_pos is its world position in pixels."""

    off_pos_x: float = 0.0
    off_pos_y: float = 0.0
    speed: float = 0.0
    hp: int = 0
    max_hp: int = 0
    defence: int = 0
    hostile: bool = False
    is_vis: bool = False
    lastdir: int = 0
    is_moving: bool = False
    anim_state: int = 0
    position: tuple[float, float] = (0.0, 0.0)
    scale: tuple[float, float] = (1.0, 1.0)
    frame: tuple[int, int, int, int] = (0, 0, 60, 60)
    texture: Optional[Texture] = None


@dataclass
class Stats:
    """Player progression and boosts."""

    damage: float = 0.0
    defence: float = 0.0
    hp: int = 0
    luck: float = 0.0
    speed: float = 0.0
    exp: int = 0
    level: int = 0


@dataclass
class Enemy:
    id: str = ""
    health: int = 0
    maxhealth: int = 0
    damage: int = 0


@dataclass
class Item:
    """A backpack item; type 0 is a tool, 1 a firearm."""

    name: str = ""
    texture: str = ""
    off_x: int = 0
    off_y: int = 0
    count: int = 0
    max_count: int = 0
    slot: int = 0
    type: int = 0
    burst: int = 0
    dmg: int = 0
    ammo_type: int = 0
    accuracy: int = 0


@dataclass
class Backpack:
    tools: list[Item] = field(default_factory=lambda: [Item() for _ in range(BACKPACK_SLOTS)])
    t_prim: Item = field(default_factory=Item)
    t_sec: Item = field(default_factory=Item)
    slot_texts: list[Text] = field(default_factory=list)
    buttons: list[Button] = field(default_factory=list)
    is_open: bool = False
    data: dict[str, Item] = field(default_factory=lambda: {name: Item() for name in TOOL_NAMES})


@dataclass(eq=False)
class SaveSlot:
    button: Optional[Button] = None
    text: Optional[Text] = None
    modified: Optional[str] = None
    is_empty: bool = True


@dataclass(eq=False)
class Game:
    """Everything the running game knows about itself."""

    root: Path = field(default_factory=lambda: Path("."))
    ui: UI = field(default_factory=UI)
    scene: int = 0
    paused: bool = False
    elapsed_time: int = 0
    elapsed_scene: int = 0
    saves: list[SaveSlot] = field(default_factory=lambda: [SaveSlot() for _ in range(SAVE_SLOTS)])
    backpack: Backpack = field(default_factory=Backpack)
    pref: Preferences = field(default_factory=Preferences)
    player: Optional[Character] = None
    stats: Stats = field(default_factory=Stats)
    map: Optional[GameMap] = None
    tiles: list[Tile] = field(default_factory=list)
    spawn: str = "/"
    currmap: str = ""
    dialogueline: int = 0
    dialogueid: str = ""
    in_combat: bool = False
    turn: int = 0
    playerdamage: int = 0
    is_defending: bool = False
    main_menu: bool = False
    enemy: Enemy = field(default_factory=Enemy)
    defeated: list[str] = field(default_factory=list)
    movement_time: float = 0.0
    combat_time: Optional[float] = None
    mouse: tuple[float, float] = (0.0, 0.0)
    running: bool = True

    @property
    def window_size(self) -> tuple[int, int]:
        return (self.pref.x, self.pref.y)

    def resource(self, relpath: str) -> str:
        """Path of a game resource relative to the game root."""
        return str(Path(self.root) / relpath)

    def is_defeated(self, enemy: str) -> bool:
        return enemy in self.defeated

    def defeat(self, enemy: str) -> None:
        self.defeated.append(enemy)

    def close(self) -> None:
        """Ask the main loop to stop."""
        self.running = False

    def close_all(self) -> None:
        """Close every modal window and return to the base UI layer."""
        self.paused = False
        self.backpack.is_open = False
        self.ui.unhover()
        for button in self.ui.buttons:
            if button.is_modal > 0:
                button.is_vis = False
        for text in self.ui.texts:
            if text.is_modal > 0:
                text.is_vis = False
        self.ui.set_text_visible("bp_stats", False, 0)
        for slot in self.saves:
            if slot.button is not None:
                slot.button.is_vis = False
        self.ui.ui_id = 0

    def toggle_main_menu(self, toggle) -> None:
        for name in MAIN_MENU_BUTTONS:
            self.ui.set_button_visible(name, toggle, 0)
        self.main_menu = bool(toggle)