"""Main menu, pause screen and preferences window construction."""

from __future__ import annotations

import functools
from typing import Optional

from guntasy.backpack import show_backpack_button
from guntasy.character import read_map
from guntasy.prefs import cycle_resolution, cycle_window_mode, open_preferences, update_slider
from guntasy.saves import init_saves, open_save_load, open_save_prompt
from guntasy.state import Game
from guntasy.widgets import Button, Placement

PAUSE_SCREEN = "ui_pause_screen"
FONT_PATH = "r/UI/retro_font.ttf"
HOVER_SOUND = "r/s/gen/btn_hov.wav"
MENU_MUSIC = "r/BGM/menu.ogg"
SLIDER_WIDTH = 275.0

_CENTRE = (0.5, 0.5)

_SLIDER_FILLS = (
    ("ui_pref_s_f_1", -320, -135),
    ("ui_pref_s_f_2", -320, -23),
    ("ui_pref_s_f_3", -320, -248),
    ("ui_pref_s_f_4", 68, -135),
    ("ui_pref_s_f_5", 68, -248),
)
_SLIDER_HITBOXES = (
    ("ui_pref_s_h_1", -370, -145),
    ("ui_pref_s_h_2", -370, -35),
    ("ui_pref_s_h_3", -370, -260),
    ("ui_pref_s_h_4", 15, -150),
    ("ui_pref_s_h_5", 15, -260),
)


def _button(game: Game, name: str, t_path: str, vis, index: int, placement: Placement,
            origin: Optional[tuple[float, float]] = None, modal: bool = False,
            callback=None) -> Button:
    button = game.ui.create_button(name, game.resource(t_path), vis, index)
    button.place(placement, game.window_size)
    if origin is not None:
        button.set_origin(*origin)
    if modal:
        button.is_modal = 1
    if callback is not None:
        button.callback = callback
    return button


def _bind(function, game: Game):
    return functools.partial(function, game)


def _close_all(game: Game):
    return lambda _btn: game.close_all()


def populate_init(game: Game) -> None:
    """Set the font, reset the UI lists, start the menu music and create the save slots."""
    ui = game.ui
    ui.font_path = game.resource(FONT_PATH)
    ui.sounds = []
    ui.buttons = []
    ui.texts = []
    ui.add_sound(game.resource(HOVER_SOUND), "btn_hov")
    music = ui.add_sound(game.resource(MENU_MUSIC), "main_menu")
    music.loop = True
    music.play()
    init_saves(game)


def start_new_game(game: Game, btn: Optional[Button]) -> None:
    """Load the first map."""
    read_map(game, "1", 0)


def help_display(game: Game, btn: Optional[Button]) -> None:
    """Show the how-to-play window."""
    ui = game.ui
    ui.set_button_visible("help_ui", True, 0)
    ui.set_button_visible("ui_load_close", True, 0)
    ui.ui_id = 0
    ui.unhover()
    ui.ui_id = 1


def load_main_menu(game: Game) -> None:
    """Create the main menu, the dialogue box and the hidden modal windows."""
    ui = game.ui
    corner = (1.0, 1.0)
    ui.create_button("Menu Background", game.resource("r/UI/_menu/title"), 1, 0)
    _button(game, "New Game", "r/UI/_menu/new", 1, 1, Placement(1.0, 1.0, -20, -500),
            corner, callback=_bind(start_new_game, game))
    _button(game, "Load Game", "r/UI/_menu/load", 1, 1, Placement(1.0, 1.0, -20, -370),
            corner, callback=_bind(open_save_load, game))
    _button(game, "Preferences", "r/UI/_menu/pref", 1, 1, Placement(1.0, 1.0, -140, -230),
            corner, callback=_bind(open_preferences, game))
    _button(game, "Quit Game", "r/UI/_menu/quit", 1, 1, Placement(1.0, 1.0, -140, -100),
            corner, callback=lambda _btn: game.close())

    dialogue = ui.create_text("dialogue", 50, "tmp")
    dialogue.set_origin(0.0, 1.0)
    dialogue.place(Placement(0.0, 1.0, 100, -200), game.window_size)
    ui.dialogue = dialogue

    _button(game, "Continue Game", "r/UI/_menu/continue", 1, 1,
            Placement(1.0, 1.0, -625, -350), corner, callback=_bind(start_new_game, game))
    _button(game, "How to Play", "r/UI/_menu/tutorial", 1, 1,
            Placement(1.0, 1.0, -20, -100), corner, callback=_bind(help_display, game))
    load_pause_requirements(game)


def open_main_menu(game: Game, btn: Optional[Button]) -> None:
    """Show the main menu again and toggle the pause screen."""
    game.toggle_main_menu(1)
    toggle_pause(game, 0)


def load_pause_screen(game: Game, show) -> None:
    """Create the pause screen buttons."""
    entries = (
        ("r/UI/_pause/back", 10, (0, -50), None),
        ("r/UI/_pause/title", 11, (0, -65), open_main_menu),
        ("r/UI/_pause/backpack", 11, (-170, 40), show_backpack_button),
        ("r/UI/_pause/load", 11, (57, 40), open_save_load),
        ("r/UI/_pause/save", 11, (-57, 40), open_save_prompt),
        ("r/UI/_pause/sett", 11, (170, 40), open_preferences),
    )
    for t_path, index, (dx, dy), action in entries:
        _button(game, PAUSE_SCREEN, t_path, show, index, Placement(0.5, 0.5, dx, dy),
                _CENTRE, modal=True,
                callback=_bind(action, game) if action is not None else None)


def load_pause_requirements(game: Game) -> None:
    """Create the hidden help, save-slot and preferences windows."""
    _button(game, "help_ui", "r/UI/_menu/help", 0, 2, Placement(0.5, 0.5, 0, -50),
            _CENTRE, modal=True)
    _button(game, "ui_load_back", "r/UI/_load/back", 0, 2, Placement(0.5, 0.5, 0, -50),
            _CENTRE, modal=True)
    _button(game, "ui_load_close", "r/UI/close", 0, 3, Placement(0.5, 0.5, 300, 332),
            _CENTRE, modal=True, callback=_close_all(game))
    load_settings(game)


def load_settings(game: Game) -> None:
    """Create the preferences window: arrows, window texts and sliders."""
    arrow = "r/UI/_pref/arrow_side"
    _button(game, "ui_pref_back", "r/UI/_pref/back", 0, 2, Placement(0.5, 0.5, 0, -50),
            _CENTRE, modal=True)
    _button(game, "ui_pref_close", "r/UI/close", 0, 3, Placement(0.5, 0.5, 300, 332),
            _CENTRE, modal=True, callback=_close_all(game))
    arrows = (
        ((-340, 191), cycle_resolution, False),
        ((-65, 185), cycle_resolution, True),
        ((45, 191), cycle_window_mode, False),
        ((330, 185), cycle_window_mode, True),
    )
    for (dx, dy), action, flipped in arrows:
        button = _button(game, "ui_pref_btn", arrow, 0, 3, Placement(0.5, 0.5, dx, dy),
                         _CENTRE, modal=True, callback=_bind(action, game))
        if flipped:
            button.rotation += 180.0

    for name, string, dx in (("ui_pref_windres", "1920x1080", -205),
                             ("ui_pref_windmode", "Windowed", 185)):
        text = game.ui.create_text(name, 20, string)
        text.place(Placement(0.5, 0.5, dx, 183), game.window_size)
        text.set_origin(0.5, 0.5)
        text.is_modal = 1
        game.ui.link_text(text)
    load_sliders(game)


def load_sliders(game: Game) -> None:
    """Create the five slider fills and their click areas."""
    for name, dx, dy in _SLIDER_FILLS:
        fill = _button(game, name, "r/UI/_pref/slide_fill", 0, 3,
                       Placement(0.5, 0.5, dx, dy), modal=True)
        fill.rescale(SLIDER_WIDTH, 1.0)
    for name, dx, dy in _SLIDER_HITBOXES:
        _button(game, name, "r/UI/_pref/hitbox", 0, 3, Placement(0.5, 0.5, dx, dy),
                modal=True, callback=_bind(update_slider, game))


def toggle_pause(game: Game, force: int) -> None:
    """Toggle the pause screen: force 0 toggles, 1 pauses, 2 unpauses.

    When a window is open it is closed instead.
    """
    ui = game.ui
    if ui.ui_id == 1:
        game.close_all()
        ui.ui_id = 0
        game.paused = False
        return
    if force == 2 or (game.paused and force == 0):
        game.paused = False
        ui.set_button_visible(PAUSE_SCREEN, False, 1)
        ui.ui_id = 0
    elif force == 1 or not game.paused:
        game.paused = True
        if ui.set_button_visible(PAUSE_SCREEN, True, 1) == 0:
            load_pause_screen(game, 1)
        ui.ui_id = 1