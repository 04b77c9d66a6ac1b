import pytest

from guntasy.prefs import (
    SLIDER_WIDTH,
    apply_slider,
    cycle_resolution,
    cycle_window_mode,
    move_slider,
    open_preferences,
    slider_value,
    update_slider,
    update_volume,
)
from guntasy.state import Game


@pytest.fixture
def game(tmp_path):
    return Game(root=tmp_path)


def _linked(game, name, string):
    text = game.ui.create_text(name, 20, string)
    game.ui.link_text(text)
    return text


@pytest.mark.parametrize("low, high", [(0.0, 100.0), (30.0, 120.0), (0.5, 2.5)])
def test_slider_value_ends(low, high):
    assert slider_value(low, high, 0) == pytest.approx(low)
    assert slider_value(low, high, SLIDER_WIDTH) == pytest.approx(high)


def test_slider_value_is_monotonic():
    values = [slider_value(30.0, 120.0, v) for v in range(0, 276, 25)]
    assert values == sorted(values)


def test_apply_slider_fields(game):
    apply_slider(game, SLIDER_WIDTH, "1")
    apply_slider(game, 0, "2")
    apply_slider(game, SLIDER_WIDTH, "4")
    apply_slider(game, SLIDER_WIDTH, "5")
    assert game.pref.bgs == pytest.approx(100.0)
    assert game.pref.sfx == pytest.approx(0.0)
    assert game.pref.fps == 120
    assert game.pref.text == pytest.approx(2.5)


def test_apply_slider_music_updates_menu_sound(game):
    sound = game.ui.add_sound("missing.ogg", "main_menu")
    apply_slider(game, SLIDER_WIDTH, "3")
    assert game.pref.bgm == pytest.approx(100.0)
    assert sound.volume == pytest.approx(100.0)


def test_update_volume_uses_bgm(game):
    sound = game.ui.add_sound("missing.ogg", "main_menu")
    game.pref.bgm = 40.0
    update_volume(game)
    assert sound.volume == pytest.approx(40.0)


def test_move_slider_clamps(game):
    fill = game.ui.create_button("ui_pref_s_f_1", "none", 0, 3)
    fill.position = (100.0, 0.0)
    game.mouse = (1000.0, 0.0)
    assert move_slider(game, fill, "1") == SLIDER_WIDTH
    assert fill.scale == (SLIDER_WIDTH, 1.0)
    game.mouse = (10.0, 0.0)
    assert move_slider(game, fill, "1") == 0.0
    assert game.pref.bgs == pytest.approx(0.0)


def test_move_slider_inside(game):
    fill = game.ui.create_button("ui_pref_s_f_2", "none", 0, 3)
    fill.position = (100.0, 0.0)
    game.mouse = (200.0, 0.0)
    value = move_slider(game, fill, "2")
    assert value == pytest.approx(100.0)
    assert game.pref.sfx == pytest.approx(slider_value(0.0, 100.0, value))


def test_update_slider_moves_matching_fill(game):
    fill = game.ui.create_button("ui_pref_s_f_5", "none", 0, 3)
    hitbox = game.ui.create_button("ui_pref_s_h_5", "none", 0, 3)
    fill.position = (0.0, 0.0)
    game.mouse = (SLIDER_WIDTH, 0.0)
    assert update_slider(game, hitbox) is fill
    assert fill.scale == (SLIDER_WIDTH, 1.0)
    assert game.pref.text == pytest.approx(2.5)


def test_open_preferences(game):
    pause = game.ui.create_button("ui_pause_screen", "none", 1, 11)
    pref_btn = game.ui.create_button("ui_pref_btn", "none", 0, 3)
    mode = _linked(game, "ui_pref_windmode", "Windowed")
    res = _linked(game, "ui_pref_windres", "1920x1080")
    open_preferences(game, None)
    assert pause.is_vis is False
    assert pref_btn.is_vis is True
    assert mode.is_vis and res.is_vis
    assert game.ui.ui_id == 1


def test_cycle_window_mode(game):
    text = _linked(game, "ui_pref_windmode", "Windowed")
    cycle_window_mode(game, None)
    assert (game.pref.win, text.string) == (1, "Fullscreen")
    cycle_window_mode(game, None)
    assert (game.pref.win, text.string) == (2, "Borderless")
    cycle_window_mode(game, None)
    assert (game.pref.win, text.string) == (0, "Windowed")


def test_cycle_resolution(game):
    text = _linked(game, "ui_pref_windres", "1920x1080")
    cycle_resolution(game, None)
    assert (game.pref.x, game.pref.y, text.string) == (1921, 1081, "1921x1081")
    cycle_resolution(game, None)
    assert (game.pref.x, game.pref.y, text.string) == (1922, 1082, "1922x1082")
    cycle_resolution(game, None)
    assert (game.pref.x, game.pref.y, text.string) == (1920, 1080, "1920x1080")


def test_cycle_resolution_unknown_size_unchanged(game):
    text = _linked(game, "ui_pref_windres", "custom")
    game.pref.x, game.pref.y = 1280, 720
    cycle_resolution(game, None)
    assert (game.pref.x, game.pref.y, text.string) == (1280, 720, "custom")