# guntasy

*Final Guntasy* is a small top-down role-playing game. You walk a sheriff
across tile maps, talk to characters, go through doors to other maps, and
fight enemies in turn-based combat. pygame handles the window, the drawing
and the sound.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Playing

Start the game from a directory that holds its resources:

- `r/`: images, the font, sounds and music
- `src/map/game_maps/map<code>`: the maps
- `src/character/dialogs/dialog_<letter>`: what each character says
- `src/character/enemy/enemy_<letter>`: each enemy's health and damage, as
  two integers
- `Saves/`: the save files

The package ships none of these files. If an image or sound is missing, that
element is not drawn or played. A missing map file raises an error when you
start a game.

```
guntasy
```

`guntasy -h` prints the usage line and exits.

### Controls

| Key            | Action                                     |
|----------------|--------------------------------------------|
| W / A / S / D  | walk up / left / down / right              |
| E              | talk to the character you are facing       |
| B              | open the backpack                          |
| Escape         | pause menu, or close the open panel        |
| Left mouse     | press buttons                              |

### Maps

A map is a text file with one character per tile, and each tile is 150 pixels
wide. What the characters mean:

- `/`: where you spawn when a game starts
- `!` to `.`: walls, which you cannot walk through
- `0` to `9`: doors that lead to the map with that code
- `A` to `Z`: characters you can talk to. You cannot walk through them.
- `a` to `z`: enemies

After you defeat an enemy, its tile is drawn as floor.

### Combat

Stepping onto an enemy you have not beaten yet starts a fight. On your turn
you choose one of these:

- **Primary** weapon: deals 25 × your damage multiplier
- **Secondary** weapon: deals 10 × your damage multiplier. Winning with it
  also adds the enemy's maximum health to your experience.
- **Defend**: the enemy's next hit is multiplied by your defence
- **Items**: opens the backpack

About one second after your move, the enemy strikes. When your health reaches
zero, the game ends. Once your experience reaches 100, it goes back to zero
and you gain a level. A level raises damage by 0.05, defence by 0.025 and
speed by 0.01.

### Pause menu

The pause menu has these buttons:

- return to the main menu
- the backpack, which shows the two firearm slots and your stats
- the save-slot pickers for saving and loading
- preferences

In preferences you can cycle the window mode (windowed, fullscreen,
borderless). You can also cycle the resolution through 1920x1080, 1921x1081
and 1922x1082. There are five sliders: background sound, effects, music,
frame rate and text speed.

## What the game does not do

- Saving writes your health, speed, defence, damage and the two hotbar weapons
  to `Saves/save_<n>`. Loading always reads `Saves/save_1`, whichever slot you
  pick. It returns the values it finds (`guntasy.saves.load_main`) but does not
  put them back into the running game.
- Of the sliders, only music changes anything you can hear or see: it sets the
  menu music volume. The other sliders only store their values.
- Backpack items cannot be used, and the luck stat has no effect.

## Layout of the package

- `guntasy.widgets`: buttons, texts, sprites, modals, rectangles and sounds,
  plus the `UI` that holds them and handles hover and click
- `guntasy.state`: the `Game` state and its preferences, characters, stats,
  enemy, items, backpack and save slots
- `guntasy.world`: map files (`GameMap`, `Tile`, `map_file`)
- `guntasy.strutil`: small integer and string helpers
- `guntasy.character`: the player, movement, dialogue, combat and `read_map`
- `guntasy.backpack`: the backpack window
- `guntasy.saves`: the save slots
- `guntasy.prefs`: the preferences window
- `guntasy.menus`: the main menu and the pause screen
- `guntasy.app`: event handling, per-frame updates, drawing and `main`