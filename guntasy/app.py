"""Game loop: event handling, per-frame updates, drawing and start-up."""

from __future__ import annotations

import functools
import os
import sys
from pathlib import Path
from typing import Optional

import pygame

from guntasy.backpack import show_backpack
from guntasy.character import animation_frame, enemy_damage, interact, step, update_moving
from guntasy.menus import load_main_menu, populate_init, toggle_pause
from guntasy.state import FRAME_RATE, Game
from guntasy.widgets import Button, Graphic, Text, load_texture
from guntasy.world import TILE_SIZE, tile_screen_position

TITLE = "Final Guntasy"
ICON = "r/UI/icon.png"
BACKGROUND = (24, 20, 37)
TEXT_COLOR = (255, 255, 255)

_MOVES = ((pygame.K_w, 3), (pygame.K_a, 1), (pygame.K_s, 0), (pygame.K_d, 2))


def quit_game(game: Game, btn: Optional[Button]) -> None:
    """Button callback: stop the game."""
    game.close()


def handle_key(game: Game, key: int) -> None:
    """React to a key press: Escape pauses, B opens the backpack, E talks."""
    if key == pygame.K_ESCAPE:
        toggle_pause(game, 0)
    if key == pygame.K_b:
        show_backpack(game, 1)
    if key == pygame.K_e and game.map is not None and game.player is not None:
        interact(game)


def handle_event(game: Game, event: pygame.event.Event) -> None:
    """Dispatch one window event, then refresh the hover state of buttons."""
    if event.type == pygame.QUIT:
        game.close()
    elif event.type == pygame.MOUSEMOTION:
        game.mouse = tuple(map(float, event.pos))
    elif event.type == pygame.MOUSEBUTTONDOWN:
        game.mouse = tuple(map(float, event.pos))
        if event.button == 1:
            game.ui.click(game.mouse, [slot.button for slot in game.saves])
    elif event.type == pygame.MOUSEBUTTONUP:
        game.mouse = tuple(map(float, event.pos))
        if event.button == 1:
            game.ui.unclick()
    elif event.type == pygame.KEYDOWN:
        handle_key(game, event.key)
    game.ui.hover(game.mouse)


def handle_movement(game: Game, keys, elapsed: float) -> None:
    """Advance the movement clock by elapsed seconds and step for held WASD keys.

    keys is indexed by key code, as returned by pygame.key.get_pressed().
    """
    game.movement_time += elapsed
    if game.player is None or game.main_menu:
        return
    if game.movement_time < game.player.speed:
        return
    for key, lastdir in _MOVES:
        if keys[key]:
            step(game, lastdir)


def combat_tick(game: Game, elapsed: float) -> bool:
    """Advance the combat clock; on the enemy's turn it strikes once a second.

    Returns whether the enemy struck.
    """
    if game.combat_time is not None:
        game.combat_time += elapsed
    if game.turn != 1 or not game.in_combat:
        return False
    if game.combat_time is None:
        game.combat_time = 0.0
    if game.combat_time >= 1:
        enemy_damage(game)
        game.combat_time = 0.0
        return True
    return False


@functools.lru_cache(maxsize=None)
def _font(path: Optional[str], size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    if path is not None:
        try:
            return pygame.font.Font(path, size)
        except (OSError, pygame.error):
            pass
    return pygame.font.Font(None, size)


def _draw_graphic(surface: pygame.Surface, graphic: Graphic) -> None:
    texture = graphic.texture
    if texture is None:
        return
    width, height = texture.size
    sx, sy = graphic.scale
    target = (round(abs(width * sx)), round(abs(height * sy)))
    if target[0] == 0 or target[1] == 0:
        return
    image = pygame.transform.scale(texture.surface, target)
    if sx < 0 or sy < 0:
        image = pygame.transform.flip(image, sx < 0, sy < 0)
    if graphic.rotation % 360:
        image = pygame.transform.rotate(image, -graphic.rotation)
    left, top, _, _ = graphic.bounds()
    surface.blit(image, (round(left), round(top)))


def _draw_text(surface: pygame.Surface, text: Text) -> None:
    if not text.string or text.font_size <= 0:
        return
    font = _font(text.font_path, text.font_size)
    left, top, _, _ = text.bounds()
    for number, line in enumerate(text.string.split("\n")):
        if line:
            rendered = font.render(line, True, TEXT_COLOR)
            surface.blit(rendered, (round(left), round(top + number * font.get_linesize())))


def _draw_world(game: Game, surface: pygame.Surface) -> None:
    player = game.player
    if player is None:
        return
    offset_x, offset_y = int(-player.off_pos_x), int(-player.off_pos_y)
    for tile in game.tiles:
        if tile.texture is None:
            continue
        image = pygame.transform.scale(tile.texture.surface, (TILE_SIZE, TILE_SIZE))
        x, y = tile_screen_position(tile, offset_x, offset_y, game.window_size)
        surface.blit(image, (round(x), round(y)))
    if player.texture is None:
        return
    rect = pygame.Rect(player.frame).clip(player.texture.surface.get_rect())
    if rect.width == 0 or rect.height == 0:
        return
    frame = player.texture.surface.subsurface(rect)
    sx, sy = player.scale
    target = (round(rect.width * sx), round(rect.height * sy))
    if target[0] > 0 and target[1] > 0:
        surface.blit(pygame.transform.scale(frame, target),
                     (round(player.position[0]), round(player.position[1])))


def _draw_ui(game: Game, surface: pygame.Surface) -> None:
    for button in game.ui.buttons:
        if button.is_vis:
            _draw_graphic(surface, button)
    for text in game.ui.texts:
        if text.is_vis:
            _draw_text(surface, text)
    first = game.saves[0].button if game.saves else None
    if first is not None and first.is_vis:
        for slot in game.saves:
            if slot.button is not None:
                _draw_graphic(surface, slot.button)
            if slot.text is not None:
                _draw_text(surface, slot.text)
    if game.backpack.buttons and game.backpack.is_open:
        for button in game.backpack.buttons:
            _draw_graphic(surface, button)


def render(game: Game, surface: pygame.Surface) -> None:
    """Draw one frame: background, map and player, UI, then the dialogue box."""
    surface.fill(BACKGROUND)
    if game.map is not None:
        _draw_world(game, surface)
    _draw_ui(game, surface)
    dialogue = game.ui.dialogue
    if dialogue is not None:
        if dialogue.is_vis:
            _draw_text(surface, dialogue)
        if game.dialogueline == 0:
            dialogue.is_vis = False


def destroy_all(game: Game) -> None:
    """Stop every sound and drop every UI element, save slot and tile."""
    ui = game.ui
    for item in ui.sounds:
        if item.sound is not None:
            item.sound.stop()
    ui.buttons.clear()
    ui.sprites.clear()
    ui.modals.clear()
    ui.rects.clear()
    ui.texts.clear()
    ui.sounds.clear()
    ui.dialogue = None
    game.backpack.buttons.clear()
    game.backpack.slot_texts.clear()
    for slot in game.saves:
        slot.button = None
        slot.text = None
    game.tiles = []


def _frame(game: Game, keys, elapsed: float, surface: pygame.Surface) -> None:
    if game.map is not None and game.player is not None:
        handle_movement(game, keys, elapsed)
        animation_frame(game, game.movement_time)
        update_moving(game)
        combat_tick(game, elapsed)
    render(game, surface)


def _open_window(game: Game) -> pygame.Surface:
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    icon = load_texture(game.resource(ICON))
    if icon is not None:
        pygame.display.set_icon(icon.surface)
    pygame.display.set_caption(TITLE)
    return pygame.display.set_mode(game.window_size)


def main(argv=None) -> int:
    """Start the game; "-h" prints the usage instead."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args and args[0] == "-h":
        print("USAGE:\n./guntasy")
        return 0
    pygame.init()
    game = Game(root=Path("."))
    _open_window(game)
    game.ui.ui_id = 0
    populate_init(game)
    load_main_menu(game)
    game.spawn = "/"
    clock = pygame.time.Clock()
    try:
        while game.running:
            elapsed = clock.tick(FRAME_RATE) / 1000.0
            for event in pygame.event.get():
                handle_event(game, event)
            if not game.running:
                break
            surface = pygame.display.get_surface()
            if surface is None:
                break
            _frame(game, pygame.key.get_pressed(), elapsed, surface)
            pygame.display.flip()
    finally:
        destroy_all(game)
        pygame.quit()
    return 0