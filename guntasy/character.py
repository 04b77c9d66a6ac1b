"""The player: spawning, movement, dialogue and turn-based combat."""

from __future__ import annotations

import functools
import re
import sys
from pathlib import Path
from typing import Optional

from guntasy.backpack import show_backpack_button
from guntasy.state import Character, Game
from guntasy.widgets import Button, Placement, load_texture
from guntasy.world import TILE_SIZE, GameMap, map_file

PLAYER_TEXTURE = "r/character/sheriff_sprite.png"
FRAME = 60
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LINE = re.compile(r"[^\n]*\n|[^\n]+")
_FGETS_LIMIT = 255


def direction(lastdir: int) -> tuple[int, int]:
    """Unit step (dx, dy) for a facing: 0 down, 1 left, 2 right, 3 up."""
    return {0: (0, 1), 1: (-1, 0), 2: (1, 0), 3: (0, -1)}.get(lastdir, (0, 0))


def _player(game: Game) -> Character:
    if game.player is None:
        raise RuntimeError("the player has not been created")
    return game.player


def _require_map(game: Game) -> GameMap:
    if game.map is None:
        raise RuntimeError("no map is loaded")
    return game.map


def init_player(game: Game) -> Character:
    """Create the player with base stats, place it at the spawn and build the combat UI."""
    game.movement_time = 0.0
    player = Character()
    game.player = player
    player.max_hp = 100
    game.stats.damage = 1.0
    game.stats.defence = 0.5
    game.stats.speed = 0.25
    game.playerdamage = 10
    player.hp = player.max_hp
    player.speed = 0.25
    player.texture = load_texture(game.resource(PLAYER_TEXTURE))
    player.frame = (0, 0, FRAME, FRAME)
    player.scale = (2.5, 2.5)
    player.off_pos_x, player.off_pos_y = player.position
    find_spawn(game)
    combat_menu_load(game)
    return player


def find_spawn(game: Game) -> None:
    """Move the player onto the first cell holding the spawn character."""
    player = _player(game)
    found = _require_map(game).find(game.spawn)
    col, row = found if found is not None else (-1, -1)
    player.off_pos_x = float(col * TILE_SIZE)
    player.off_pos_y = float(row * TILE_SIZE)
    center_x = game.window_size[0] // 2
    center_y = game.window_size[1] // 2
    player.position = (center_x - 75.0, center_y / 1.5)


def animation_frame(game: Game, elapsed: float) -> tuple[int, int, int, int]:
    """Pick and store the sprite-sheet rectangle for the walk animation."""
    player = _player(game)
    top = FRAME * player.lastdir
    left = 0
    if player.is_moving and elapsed < player.speed / 2:
        left = 2 * FRAME if player.anim_state == 1 else FRAME
    player.frame = (left, top, FRAME, FRAME)
    return player.frame


def update_moving(game: Game) -> bool:
    player = _player(game)
    player.is_moving = player.position != (player.off_pos_x, player.off_pos_y)
    return player.is_moving


def _cell_ahead(game: Game) -> Optional[str]:
    player = _player(game)
    dx, dy = direction(player.lastdir)
    try:
        return _require_map(game).cell_at(player.off_pos_x + dx * TILE_SIZE,
                                          player.off_pos_y + dy * TILE_SIZE)
    except IndexError:
        return None


def _cell_here(game: Game) -> Optional[str]:
    player = _player(game)
    try:
        return _require_map(game).cell_at(player.off_pos_x, player.off_pos_y)
    except IndexError:
        return None


def _move(game: Game) -> None:
    ahead = _cell_ahead(game)
    if ahead is None:
        return
    if "!" <= ahead <= "." or "A" <= ahead <= "Z":
        return
    player = _player(game)
    dx, dy = direction(player.lastdir)
    player.off_pos_x += dx * TILE_SIZE
    player.off_pos_y += dy * TILE_SIZE


def _check_doors(game: Game) -> None:
    here = _cell_here(game)
    if here is not None and "0" <= here <= "9":
        read_map(game, here, 1)


def step(game: Game, lastdir: int) -> None:
    """Take one step in a direction unless talking, paused or fighting."""
    if game.dialogueline != 0 or game.paused or game.in_combat:
        return
    player = _player(game)
    game.movement_time = 0.0
    player.lastdir = lastdir
    _move(game)
    _check_doors(game)
    check_combat(game)
    player.anim_state = 0 if player.anim_state else 1


def _dialogue_chunks(content: str) -> list[str]:
    chunks = []
    for line in _LINE.findall(content):
        chunks.extend(line[start:start + _FGETS_LIMIT]
                      for start in range(0, len(line), _FGETS_LIMIT))
    return chunks


def talk(game: Game, code: str) -> Optional[str]:
    """Show the next line of a character's dialogue; None once it is over."""
    if code != game.dialogueid:
        game.dialogueline = 0
    game.dialogueid = code
    path = Path(game.root) / "src" / "character" / "dialogs" / f"dialog_{code}"
    try:
        content = path.read_text(encoding="latin-1")
    except OSError:
        return None
    chunks = _dialogue_chunks(content)
    index = game.dialogueline
    shown = None
    at_end = True
    if index < len(chunks):
        shown = chunks[index]
        sys.stdout.write(shown)
        if game.ui.dialogue is not None:
            game.ui.dialogue.string = shown
            game.ui.dialogue.is_vis = True
        game.dialogueline += 1
        at_end = index == len(chunks) - 1 and not shown.endswith("\n")
    if at_end:
        game.dialogueline = 0
    return shown


def interact(game: Game) -> Optional[str]:
    """Talk to the character the player is facing, if any."""
    ahead = _cell_ahead(game)
    if ahead is not None and "A" <= ahead <= "Z":
        return talk(game, ahead)
    return None


def load_enemy(game: Game, code: str) -> None:
    """Read an enemy's health and damage from its data file."""
    path = Path(game.root) / "src" / "character" / "enemy" / f"enemy_{code}"
    try:
        content = path.read_text(encoding="latin-1")
    except OSError:
        return
    first = _LEADING_INT.match(content)
    if first is None:
        return
    game.enemy.health = int(first.group(1))
    second = _LEADING_INT.match(content, first.end())
    if second is None:
        return
    game.enemy.damage = int(second.group(1))
    game.enemy.maxhealth = game.enemy.health
    game.enemy.id = code


def check_combat(game: Game) -> None:
    """Start a fight when standing on an enemy that is not yet defeated."""
    here = _cell_here(game)
    if here is None or not "a" <= here <= "z":
        return
    if game.is_defeated(here):
        return
    game.in_combat = True
    game.turn = 0
    load_enemy(game, here)
    show_combat_ui(game, 1)


def level_up(game: Game) -> None:
    stats = game.stats
    if stats.exp >= 100:
        stats.exp = 0
        stats.level += 1
        stats.damage += 0.05
        stats.defence += 0.025
        stats.speed += 0.01


def _win(game: Game, gain_exp: bool) -> None:
    game.defeat(game.enemy.id)
    game.in_combat = False
    game.turn = 0
    game.spawn = game.enemy.id
    show_combat_ui(game, 0)
    if gain_exp:
        game.stats.exp += game.enemy.maxhealth
        level_up(game)
    read_map(game, game.currmap, 1)


def _attack(game: Game, power: int, gain_exp: bool) -> None:
    if game.turn != 0 or not game.in_combat:
        return
    if game.combat_time is not None:
        game.combat_time = 0.0
    game.enemy.health = int(game.enemy.health - power * game.stats.damage)
    game.turn = 1
    assign_bars(game)
    if game.enemy.health <= 0:
        _win(game, gain_exp)


def damage_enemy_primary(game: Game, btn: Optional[Button]) -> None:
    """Fire the primary weapon; no experience is gained from its kills."""
    _attack(game, 25, False)


def damage_enemy_secondary(game: Game, btn: Optional[Button]) -> None:
    """Fire the secondary weapon; a kill gives experience."""
    _attack(game, 10, True)


def defend(game: Game, btn: Optional[Button]) -> None:
    game.is_defending = True
    game.turn = 1


def enemy_damage(game: Game) -> None:
    """The enemy's turn: hurt the player, less when defending."""
    player = _player(game)
    if game.is_defending:
        player.hp = int(player.hp - game.enemy.damage * game.stats.defence)
        game.is_defending = False
    else:
        player.hp -= game.enemy.damage
    game.turn = 0
    if player.hp <= 0:
        game.close()
    assign_bars(game)


def set_bars(game: Game, name: str, length: int) -> int:
    """Stretch every button of that name to a bar length; return how many."""
    count = 0
    for button in game.ui.buttons:
        if button.name == name:
            button.scale = (float(length), 1.0)
            count += 1
    return count


def _bar(value: int, maximum: int) -> int:
    if maximum == 0:
        return 0
    return int(value / maximum * 200)


def assign_bars(game: Game) -> None:
    player = _player(game)
    set_bars(game, "enemyhealth", _bar(game.enemy.health, game.enemy.maxhealth))
    set_bars(game, "playerhealth", _bar(player.hp, player.max_hp))


def show_combat_ui(game: Game, show) -> None:
    assign_bars(game)
    game.ui.set_button_visible("combat_ui", show, 1)
    game.ui.set_button_visible("enemyhealth", show, 1)
    game.ui.set_button_visible("playerhealth", show, 1)


def _button(game: Game, name: str, t_path: str, origin: tuple[float, float],
            placement: Placement, callback=None) -> Button:
    button = game.ui.create_button(name, game.resource(t_path), 0, 1)
    button.set_origin(*origin)
    button.place(placement, game.window_size)
    if callback is not None:
        button.callback = functools.partial(callback, game)
    return button


def combat_menu_load(game: Game) -> None:
    """Create the hidden combat buttons and health bars."""
    quarter_x = game.pref.x // 4
    third_y = game.pref.y // 3
    game.ui.create_button("combat_ui", game.resource("r/UI/_menu/title"), 0, 1)
    _button(game, "combat_ui", "r/UI/_comb/prim", (2.5, 0.5),
            Placement(0.5, 0.5, quarter_x - 25, third_y - 91), damage_enemy_primary)
    _button(game, "combat_ui", "r/UI/_comb/sec", (2.5, 0.5),
            Placement(0.5, 0.5, quarter_x - 25, third_y), damage_enemy_secondary)
    _button(game, "combat_ui", "r/UI/_comb/def", (1.5, 0.5),
            Placement(0.5, 0.5, quarter_x + 140, third_y - 91), defend)
    _button(game, "combat_ui", "r/UI/_comb/items", (1.5, 0.5),
            Placement(0.5, 0.5, quarter_x + 140, third_y), show_backpack_button)
    _button(game, "combat_ui", "r/UI/_comb/hp_foe", (0.0, 0.5),
            Placement(0.5, 0.5, quarter_x, third_y))
    _button(game, "combat_ui", "r/UI/_comb/hp_plr", (0.0, 0.5),
            Placement(0.0, 0.5, 40, third_y))
    _button(game, "enemyhealth", "r/UI/_pref/slide_fill", (1.0, 0.5),
            Placement(0.5, 0.5, quarter_x + 360, third_y + 50))
    _button(game, "playerhealth", "r/UI/_pref/slide_fill", (0.0, 0.5),
            Placement(0.0, 0.5, 125, third_y + 50))


def read_map(game: Game, path: str, travel: int) -> None:
    """Load a map by code, build its tiles and place the player on it."""
    game.currmap = path
    game.tiles = []
    game.map = GameMap.load(map_file(game.root, path))
    tiles = game.map.tiles(game.defeated)
    for tile in tiles:
        tile.texture = load_texture(game.resource(tile.path))
    game.tiles = tiles
    if game.player is None:
        init_player(game)
    else:
        find_spawn(game)
    if travel >= 1:
        game.spawn = path
    game.toggle_main_menu(0)