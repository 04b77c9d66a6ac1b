import pytest

from guntasy.character import (
    animation_frame,
    assign_bars,
    check_combat,
    combat_menu_load,
    damage_enemy_primary,
    damage_enemy_secondary,
    defend,
    direction,
    enemy_damage,
    find_spawn,
    init_player,
    interact,
    level_up,
    load_enemy,
    read_map,
    set_bars,
    show_combat_ui,
    step,
    talk,
    update_moving,
)
from guntasy.state import Game
from guntasy.world import FLOOR_TILE, TILE_SIZE, map_file


def make_game(tmp_path, maps, enemies=None, dialogs=None):
    for code, rows in maps.items():
        path = map_file(tmp_path, code)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(rows) + "\n")
    for code, content in (enemies or {}).items():
        path = tmp_path / "src" / "character" / "enemy" / f"enemy_{code}"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    for code, content in (dialogs or {}).items():
        path = tmp_path / "src" / "character" / "dialogs" / f"dialog_{code}"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    game = Game(root=tmp_path)
    read_map(game, "1", 0)
    return game


ROOM = {"1": ["####", "#/ #", "####"]}


def test_direction_table():
    assert [direction(d) for d in range(4)] == [(0, 1), (-1, 0), (1, 0), (0, -1)]
    assert direction(9) == (0, 0)


def test_init_player_stats(tmp_path):
    game = make_game(tmp_path, ROOM)
    assert game.player.hp == game.player.max_hp == 100
    assert game.stats.damage == 1.0
    assert game.playerdamage == 10
    assert game.ui.set_button_visible("combat_ui", 0, 1) == 7


def test_spawn_matches_map(tmp_path):
    game = make_game(tmp_path, ROOM)
    col, row = game.map.find("/")
    assert (game.player.off_pos_x, game.player.off_pos_y) == (col * TILE_SIZE, row * TILE_SIZE)


def test_step_moves_and_blocks(tmp_path):
    game = make_game(tmp_path, ROOM)
    start = (game.player.off_pos_x, game.player.off_pos_y)
    step(game, 2)
    assert game.player.off_pos_x == start[0] + TILE_SIZE
    assert game.player.anim_state == 1
    step(game, 3)
    assert game.player.off_pos_y == start[1]
    assert game.player.anim_state == 0


def test_step_ignored_when_paused(tmp_path):
    game = make_game(tmp_path, ROOM)
    game.paused = True
    before = (game.player.off_pos_x, game.player.anim_state)
    step(game, 2)
    assert (game.player.off_pos_x, game.player.anim_state) == before


def test_door_loads_other_map(tmp_path):
    maps = {"1": ["####", "#/2#", "####"], "2": ["#####", "#/ 1#", "#####"]}
    game = make_game(tmp_path, maps)
    step(game, 2)
    assert game.currmap == "2"
    assert game.spawn == "2"
    assert game.map.rows == maps["2"]


def test_npc_blocks_and_talks(tmp_path):
    maps = {"1": ["####", "#/A#", "####"]}
    game = make_game(tmp_path, maps, dialogs={"A": "Hello\nBye\n"})
    game.ui.dialogue = game.ui.create_text("dialogue", 50, "tmp")
    x = game.player.off_pos_x
    step(game, 2)
    assert game.player.off_pos_x == x
    assert interact(game) == "Hello\n"
    assert game.ui.dialogue.string == "Hello\n"
    assert game.ui.dialogue.is_vis is True
    assert talk(game, "A") == "Bye\n"
    assert game.dialogueline == 2
    assert talk(game, "A") is None
    assert game.dialogueline == 0


def test_talk_resets_at_unterminated_last_line(tmp_path):
    game = make_game(tmp_path, ROOM, dialogs={"B": "One\nTwo"})
    assert talk(game, "B") == "One\n"
    assert talk(game, "B") == "Two"
    assert game.dialogueline == 0


def test_combat_flow(tmp_path):
    maps = {"1": ["#####", "#/a #", "#####"]}
    game = make_game(tmp_path, maps, enemies={"a": "30 5"})
    step(game, 2)
    assert game.in_combat is True
    assert (game.enemy.health, game.enemy.maxhealth, game.enemy.damage) == (30, 30, 5)
    assert all(b.is_vis for b in game.ui.buttons if b.name == "combat_ui")
    damage_enemy_primary(game, None)
    assert game.enemy.health == 30 - 25
    assert game.turn == 1
    damage_enemy_secondary(game, None)
    assert game.enemy.health == 30 - 25
    game.turn = 0
    damage_enemy_secondary(game, None)
    assert game.in_combat is False
    assert game.is_defeated("a")
    assert game.spawn == "a"
    assert game.stats.exp == 30
    col, row = game.map.find("a")
    assert (game.player.off_pos_x, game.player.off_pos_y) == (col * TILE_SIZE, row * TILE_SIZE)
    tile = [t for t in game.tiles if (t.x, t.y) == (col * TILE_SIZE, row * TILE_SIZE)][0]
    assert tile.path == FLOOR_TILE
    check_combat(game)
    assert game.in_combat is False


def test_level_up(tmp_path):
    game = make_game(tmp_path, ROOM)
    game.stats.exp = 100
    damage = game.stats.damage
    level_up(game)
    assert (game.stats.exp, game.stats.level) == (0, 1)
    assert game.stats.damage > damage
    game.stats.exp = 99
    level_up(game)
    assert game.stats.level == 1


def test_enemy_damage_and_defend(tmp_path):
    game = make_game(tmp_path, ROOM)
    game.enemy.damage = 10
    enemy_damage(game)
    plain = game.player.hp
    assert plain == 100 - 10
    defend(game, None)
    assert game.turn == 1
    enemy_damage(game)
    assert plain - 10 < game.player.hp < plain
    assert game.is_defending is False
    assert game.turn == 0


def test_player_death_closes_game(tmp_path):
    game = make_game(tmp_path, ROOM)
    game.enemy.damage = 500
    enemy_damage(game)
    assert game.running is False


def test_bars(tmp_path):
    game = make_game(tmp_path, ROOM)
    game.enemy.health = game.enemy.maxhealth = 40
    assign_bars(game)
    bars = [b for b in game.ui.buttons if b.name == "enemyhealth"]
    assert bars[0].scale == (200.0, 1.0)
    assert set_bars(game, "playerhealth", 7) == 1
    show_combat_ui(game, 0)
    assert not any(b.is_vis for b in game.ui.buttons if b.name == "enemyhealth")


def test_animation_and_moving(tmp_path):
    game = make_game(tmp_path, ROOM)
    game.player.lastdir = 2
    game.player.is_moving = True
    game.player.anim_state = 1
    assert animation_frame(game, 0.0) == (120, 120, 60, 60)
    game.player.anim_state = 0
    assert animation_frame(game, 0.0)[0] == 60
    assert animation_frame(game, game.player.speed)[0] == 0
    game.player.position = (game.player.off_pos_x, game.player.off_pos_y)
    assert update_moving(game) is False


def test_load_enemy_missing_file_leaves_enemy(tmp_path):
    game = make_game(tmp_path, ROOM)
    load_enemy(game, "z")
    assert game.enemy.id == ""


def test_read_map_missing_raises(tmp_path):
    game = make_game(tmp_path, ROOM)
    with pytest.raises(FileNotFoundError):
        read_map(game, "9", 1)


def test_find_spawn_without_map_raises(tmp_path):
    game = make_game(tmp_path, ROOM)
    game.map = None
    with pytest.raises(RuntimeError):
        find_spawn(game)


def test_combat_menu_load_adds_buttons(tmp_path):
    game = make_game(tmp_path, ROOM)
    before = len(game.ui.buttons)
    combat_menu_load(game)
    assert len(game.ui.buttons) == before * 2
    init_player(game)
    assert game.player.hp == 100