"""Preferences window: volume sliders, window mode and resolution."""

from __future__ import annotations

from typing import Optional

import pygame

from guntasy.state import Game
from guntasy.widgets import Button

SLIDER_WIDTH = 275.0
_WINDOW_MODES = {0: "Windowed", 1: "Fullscreen", 2: "Borderless"}
_RESOLUTIONS = {
    1922: (1920, 1080),
    1920: (1921, 1081),
    1921: (1922, 1082),
}


def slider_value(min_value: float, max_value: float, v: float) -> float:
    """Map a slider fill of 0..275 pixels onto min_value..max_value."""
    return min_value + (v / SLIDER_WIDTH) * (max_value - min_value)


def update_volume(game: Game) -> None:
    """Apply the music volume to the menu music."""
    sound = game.ui.find_sound("main_menu")
    if sound is not None:
        sound.set_volume(game.pref.bgm)


def apply_slider(game: Game, v: float, slot: str) -> None:
    """Store the value of slider 1-5 (bgs, sfx, bgm, fps, text speed)."""
    pref = game.pref
    if slot == "1":
        pref.bgs = slider_value(0.0, 100.0, v)
    elif slot == "2":
        pref.sfx = slider_value(0.0, 100.0, v)
    elif slot == "3":
        pref.bgm = slider_value(0.0, 100.0, v)
    elif slot == "4":
        pref.fps = int(slider_value(30.0, 120.0, v))
    elif slot == "5":
        pref.text = slider_value(0.5, 2.5, v)
    update_volume(game)


def move_slider(game: Game, btn: Button, slot: str) -> float:
    """Stretch a slider fill to the mouse and store its value."""
    value = game.mouse[0] - btn.position[0]
    value = max(0.0, min(SLIDER_WIDTH, value))
    btn.rescale(value, 1.0)
    apply_slider(game, value, slot)
    return value


def update_slider(game: Game, hitbox: Button) -> Optional[Button]:
    """Move the first slider sharing the hitbox's slot number; return it."""
    if not hitbox.name:
        return None
    at = len(hitbox.name) - 1
    last = hitbox.name[at]
    for button in game.ui.buttons:
        if len(button.name) > at and button.name[at] == last:
            move_slider(game, button, last)
            return button
    return None


def open_preferences(game: Game, btn: Optional[Button]) -> None:
    ui = game.ui
    ui.set_button_visible("ui_pause_screen", False, 1)
    ui.ui_id = 0
    ui.unhover()
    ui.ui_id = 1
    ui.set_text_visible("ui_pref_windmode", True, 0)
    ui.set_text_visible("ui_pref_windres", True, 0)
    ui.set_buttons_visible_by_prefix("ui_pref", True)


def _window_flags(win: int) -> int:
    if win == 1:
        return pygame.FULLSCREEN
    if win == 2:
        return pygame.NOFRAME
    return 0


def _update_window(game: Game) -> None:
    """Recreate the window with the current size and mode, if one is open."""
    if not pygame.display.get_init() or pygame.display.get_surface() is None:
        return
    pygame.display.set_mode((game.pref.x, game.pref.y), _window_flags(game.pref.win))


def cycle_window_mode(game: Game, btn: Optional[Button]) -> None:
    """Switch windowed, fullscreen and borderless in turn."""
    game.pref.win += 1
    if game.pref.win > 2:
        game.pref.win = 0
    game.ui.set_text("ui_pref_windmode", _WINDOW_MODES[game.pref.win], 0)
    _update_window(game)


def cycle_resolution(game: Game, btn: Optional[Button]) -> None:
    """Step to the next of the supported resolutions."""
    following = _RESOLUTIONS.get(game.pref.x)
    if following is None:
        return
    game.pref.x, game.pref.y = following
    game.ui.set_text("ui_pref_windres", f"{game.pref.x}x{game.pref.y}", 0)
    _update_window(game)