"""Final Guntasy, a tile-based role-playing game with turn-based combat."""

__version__ = "0.1.0"
__all__ = [
    "app",
    "backpack",
    "character",
    "menus",
    "prefs",
    "saves",
    "state",
    "strutil",
    "widgets",
    "world",
]