"""Backpack window: item data, slots and the player's stats panel."""

from __future__ import annotations

import functools
from typing import Optional

from guntasy.state import Game, Item
from guntasy.widgets import Button, Placement, Text, load_button_textures, load_texture

STATS_TEXT = "bp_stats"
BACKPACK_UI = "backpack_ui"
BACKPACK_ITEM = "backpack_ui_item"


def tool_data() -> dict[str, Item]:
    """The firearms the backpack knows about, keyed by tool name."""
    return {
        "M4A1": Item(name="M4A1", texture="r/Guns/M4A1.png", off_x=0, off_y=0,
                     max_count=1, type=1, burst=3, dmg=3, ammo_type=0, accuracy=70),
        "G17": Item(name="Glock 17", texture="r/Guns/G17.png", off_x=0, off_y=0,
                    max_count=1, type=1, burst=3, dmg=3, ammo_type=0, accuracy=70),
    }


def stats_text(game: Game) -> str:
    """The text of the stats panel for the current player progression."""
    stats = game.stats
    return (
        f"Level: {stats.level} (EXP: {stats.exp})\n"
        f"Health boost: {stats.hp}\n"
        f"Damage boost: {stats.damage:.2f}\n"
        f"Defence boost: {stats.defence:.2f}\n"
        f"Luck boost: {stats.luck:.2f}\n"
        f"Speed boost: {stats.speed:.2f}"
    )


def update_stats_text(game: Game) -> None:
    game.ui.set_text(STATS_TEXT, stats_text(game), 0)
    game.ui.set_text_visible(STATS_TEXT, True, 0)


def show_backpack(game: Game, state) -> None:
    """Open (1) or close (0) the backpack window, building it on first use."""
    if game.ui.set_button_visible(BACKPACK_UI, state, 1) == 0 and state == 1:
        populate_backpack_ui(game)
        game.ui.set_button_visible(BACKPACK_UI, state, 1)
    update_stats_text(game)
    game.ui.set_text_visible(STATS_TEXT, True, 0)
    game.ui.ui_id = int(state)
    game.backpack.is_open = bool(state)
    game.paused = bool(state)


def show_backpack_button(game: Game, btn: Optional[Button]) -> None:
    """Button callback: close every window, then open the backpack."""
    game.close_all()
    show_backpack(game, 1)


def add_backpack_button(game: Game, btn: Button) -> None:
    game.backpack.buttons.append(btn)


def set_slot(game: Game, slot: int, item: Item) -> Button:
    """Add a backpack button showing an item's thumbnail for a slot."""
    texture = load_texture(game.resource(item.texture)) if item.texture else None
    button = Button(texture=texture, name=item.name, data_id=slot)
    button.textures[0] = texture
    add_backpack_button(game, button)
    return button


def create_slot(game: Game, name: str, t_path: str, vis) -> Button:
    """Create a backpack slot button anchored at its centre."""
    textures = load_button_textures(game.resource(t_path))
    button = Button(texture=textures[0], name=name, textures=textures, is_vis=bool(vis))
    button.set_origin(0.5, 0.5)
    add_backpack_button(game, button)
    return button


def link_slot_text(game: Game, text: Text) -> None:
    game.backpack.slot_texts.append(text)


def populate_slots(game: Game) -> Text:
    """Create the stats panel text of the backpack and return it."""
    stats = game.ui.create_text(STATS_TEXT, 20, "Stats go here")
    stats.place(Placement(0.5, 0.5, -225, 0), game.window_size)
    stats.set_origin(0.5, 0.5)
    game.ui.link_text(stats)
    return stats


def _fit(button: Button, width: float, height: float) -> None:
    try:
        button.resize(width, height)
    except ValueError:
        pass


def populate_backpack_ui(game: Game) -> None:
    """Build the backpack window: background, close button, item slots and texts."""
    ui = game.ui
    size = game.window_size

    back = ui.create_button(BACKPACK_UI, game.resource("r/UI/_pack/back"), 0, 3)
    back.place(Placement(0.5, 0.5, 0, -50), size)
    back.set_origin(0.5, 0.5)
    back.is_modal = 1

    close = ui.create_button(BACKPACK_UI, game.resource("r/UI/close"), 0, 3)
    close.place(Placement(0.5, 0.5, 300, 332), size)
    close.set_origin(0.5, 0.5)
    close.is_modal = 1
    close.callback = lambda _btn: game.close_all()

    for t_path, offset_x, data_id, side in (("r/Guns/M4A1", -200, 0, 320),
                                            ("r/Guns/G17", 200, 1, 270)):
        slot = create_slot(game, BACKPACK_ITEM, t_path, 0)
        slot.place(Placement(0.5, 0.5, offset_x, -165), size)
        slot.is_modal = 1
        slot.data_id = data_id
        slot.callback = None
        _fit(slot, side, side)

    label = ui.create_text(BACKPACK_UI, 20, "No item selected")
    label.place(Placement(0.5, 0.5, -205, 183), size)
    label.set_origin(0.5, 0.5)
    label.is_modal = 1
    link_slot_text(game, label)
    populate_slots(game)


def _callback(function, game: Game):
    return functools.partial(function, game)