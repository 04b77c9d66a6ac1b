"""Retained-mode UI elements: buttons, texts, sprites, modals, rectangles and sounds."""

from __future__ import annotations

import functools
import math
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, TypeVar

import pygame

Vec = tuple[float, float]
Bounds = tuple[float, float, float, float]

_T = TypeVar("_T")


@dataclass(frozen=True)
class Placement:
    """A position given as a fraction of the screen plus a pixel offset."""

    s_x: float
    s_y: float
    x: float = 0.0
    y: float = 0.0

    def resolve(self, screen_size: tuple[int, int]) -> Vec:
        width, height = screen_size
        return (width * self.s_x + self.x, height * self.s_y + self.y)


@dataclass(eq=False)
class Texture:
    """An image loaded from disk."""

    path: str
    surface: pygame.Surface

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()


def load_texture(path: str) -> Optional[Texture]:
    """Load an image, or return None when it cannot be read."""
    if not os.path.isfile(path):
        return None
    try:
        surface = pygame.image.load(path)
    except (pygame.error, OSError):
        return None
    return Texture(path, surface)


def load_button_textures(t_path: str) -> list[Optional[Texture]]:
    """Load the default, hovered and selected textures of a button."""
    return [load_texture(t_path + suffix) for suffix in (".png", "_hov.png", "_sel.png")]


@dataclass(eq=False)
class Graphic:
    """A textured, transformable drawable."""

    texture: Optional[Texture] = None
    position: Vec = (0.0, 0.0)
    origin: Vec = (0.0, 0.0)
    scale: Vec = (1.0, 1.0)
    rotation: float = 0.0

    def _local_size(self) -> tuple[float, float]:
        if self.texture is None:
            return (0.0, 0.0)
        width, height = self.texture.size
        return (float(width), float(height))

    def bounds(self) -> Bounds:
        """Bounding box (left, top, width, height) on screen."""
        width, height = self._local_size()
        ox, oy = self.origin
        sx, sy = self.scale
        angle = math.radians(self.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        xs, ys = [], []
        for lx, ly in ((0.0, 0.0), (width, 0.0), (0.0, height), (width, height)):
            px = (lx - ox) * sx
            py = (ly - oy) * sy
            xs.append(px * cos_a - py * sin_a + self.position[0])
            ys.append(px * sin_a + py * cos_a + self.position[1])
        left, top = min(xs), min(ys)
        return (left, top, max(xs) - left, max(ys) - top)

    def contains(self, x: float, y: float) -> bool:
        left, top, width, height = self.bounds()
        return left <= x < left + width and top <= y < top + height

    def resize(self, width: float, height: float) -> None:
        """Scale so that the current on-screen size becomes width x height."""
        _, _, cur_w, cur_h = self.bounds()
        if cur_w == 0 or cur_h == 0:
            raise ValueError("cannot resize a graphic with an empty size")
        self.scale = (width / cur_w, height / cur_h)


@dataclass(eq=False)
class Button(Graphic):
    """A clickable sprite with default, hovered and selected textures."""

    name: str = ""
    textures: list = field(default_factory=lambda: [None, None, None])
    is_vis: bool = False
    is_hov: bool = False
    index: int = 0
    data_id: int = 0
    is_modal: int = 0
    callback: Optional[Callable[["Button"], object]] = None

    def place(self, placement: Placement, screen_size: tuple[int, int]) -> None:
        self.position = placement.resolve(screen_size)

    def resize(self, width: float, height: float) -> None:
        """Scale so that the current on-screen size becomes width x height."""
        super().resize(width, height)

    def rescale(self, x: float, y: float) -> None:
        self.scale = (x, y)

    def set_origin(self, x: float, y: float) -> None:
        """Anchor at a fraction of the on-screen size."""
        _, _, width, height = self.bounds()
        self.origin = (x * width, y * height)


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


@dataclass(eq=False)
class Text:
    """A positioned line (or lines) of text."""

    name: str = ""
    string: str = ""
    font_size: int = 30
    font_path: Optional[str] = None
    is_vis: bool = False
    is_modal: int = 0
    position: Vec = (0.0, 0.0)
    origin: Vec = (0.0, 0.0)

    def _measure(self) -> tuple[float, float]:
        if not self.string or self.font_size <= 0:
            return (0.0, 0.0)
        font = _font(self.font_path, self.font_size)
        lines = self.string.split("\n")
        width = max(font.size(line)[0] for line in lines)
        height = font.get_linesize() * (len(lines) - 1) + font.get_height()
        return (float(width), float(height))

    def bounds(self) -> Bounds:
        width, height = self._measure()
        return (self.position[0] - self.origin[0], self.position[1] - self.origin[1], width, height)

    def place(self, placement: Placement, screen_size: tuple[int, int]) -> None:
        self.position = placement.resolve(screen_size)

    def set_origin(self, x: float, y: float) -> None:
        """Anchor at a fraction of the text's size."""
        width, height = self._measure()
        self.origin = (x * width, y * height)


@dataclass(eq=False)
class SpriteItem(Graphic):
    """A named decorative sprite."""

    name: str = ""
    is_vis: bool = False
    index: int = 0


@dataclass(eq=False)
class Modal(Graphic):
    """A modal background sprite."""

    is_vis: bool = False
    index: int = 0


@dataclass(eq=False)
class RectItem:
    """A plain rectangle shape."""

    position: Vec = (0.0, 0.0)
    size: Vec = (0.0, 0.0)
    origin: Vec = (0.0, 0.0)
    is_vis: bool = False
    index: int = 0


def _load_sound(path: str) -> Optional[pygame.mixer.Sound]:
    if not os.path.isfile(path):
        return None
    try:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        return pygame.mixer.Sound(path)
    except pygame.error:
        return None


@dataclass(eq=False)
class SoundItem:
    """A named sound effect or music clip."""

    name: str
    path: str
    sound: Optional[pygame.mixer.Sound] = None
    volume: float = 100.0
    loop: bool = False
    play_count: int = 0

    def play(self) -> None:
        self.play_count += 1
        if self.sound is not None:
            self.sound.play(loops=-1 if self.loop else 0)

    def set_volume(self, volume: float) -> None:
        """Set the volume on a 0-100 scale."""
        self.volume = float(volume)
        if self.sound is not None:
            self.sound.set_volume(max(0.0, min(100.0, self.volume)) / 100.0)


def _remove_identity(items: list, obj: object) -> None:
    for position, item in enumerate(items):
        if item is obj:
            del items[position]
            return


def _apply_matching(items: Iterable[_T], name: str, group: int, apply: Callable[[_T], None]) -> int:
    found = 0
    for item in items:
        if item.name == name:
            apply(item)
            found += 1
            if not group:
                return 1
    return found


@dataclass(eq=False)
class UI:
    """All UI elements of the game and the operations on them."""

    font_path: Optional[str] = None
    buttons: list = field(default_factory=list)
    texts: list = field(default_factory=list)
    sprites: list = field(default_factory=list)
    modals: list = field(default_factory=list)
    rects: list = field(default_factory=list)
    sounds: list = field(default_factory=list)
    ui_id: int = 0
    dialogue: Optional[Text] = None

    # Buttons

    def create_button(self, name: str, t_path: str, vis, index: int) -> Button:
        textures = load_button_textures(t_path)
        button = Button(texture=textures[0], name=name, textures=textures,
                        is_vis=bool(vis), index=index)
        self.buttons.append(button)
        self.sort_buttons()
        return button

    def remove_button(self, button: Button) -> None:
        _remove_identity(self.buttons, button)

    def sort_buttons(self) -> None:
        """Order buttons by drawing index, keeping creation order for ties."""
        self.buttons.sort(key=lambda b: b.index)

    def set_button_visible(self, name: str, is_vis, group: int) -> int:
        """Show or hide the first (group 0) or every button of that name."""
        def apply(button: Button) -> None:
            button.is_vis = bool(is_vis)
        return _apply_matching(self.buttons, name, group, apply)

    def set_buttons_visible_by_prefix(self, prefix: str, is_vis) -> int:
        count = 0
        for button in self.buttons:
            if button.name.startswith(prefix):
                button.is_vis = bool(is_vis)
                count += 1
        return count

    # Texts

    def create_text(self, name: str, font_size: int, string: str) -> Text:
        """Create a text; it is only drawn once linked."""
        return Text(name=name, string=string, font_size=font_size, font_path=self.font_path)

    def link_text(self, text: Text) -> None:
        self.texts.append(text)

    def set_text_visible(self, name: str, is_vis, group: int) -> int:
        def apply(text: Text) -> None:
            text.is_vis = bool(is_vis)
        return _apply_matching(self.texts, name, group, apply)

    def set_text(self, name: str, string: str, group: int) -> int:
        def apply(text: Text) -> None:
            text.string = string
        return _apply_matching(self.texts, name, group, apply)

    # Sprites, modals, rectangles

    def create_sprite(self, name: str, t_path: str, vis, index: int) -> SpriteItem:
        sprite = SpriteItem(texture=load_texture(t_path), name=name, is_vis=bool(vis), index=index)
        self.sprites.append(sprite)
        return sprite

    def remove_sprite(self, sprite: SpriteItem) -> None:
        _remove_identity(self.sprites, sprite)

    def create_modal(self, t_path: str, vis, index: int) -> Modal:
        modal = Modal(texture=load_texture(t_path), is_vis=bool(vis), index=index)
        self.modals.append(modal)
        return modal

    def remove_modal(self, modal: Modal) -> None:
        _remove_identity(self.modals, modal)

    def create_rect(self, vis, index: int) -> RectItem:
        rect = RectItem(is_vis=bool(vis), index=index)
        self.rects.append(rect)
        return rect

    def remove_rect(self, rect: RectItem) -> None:
        _remove_identity(self.rects, rect)

    # Sounds

    def add_sound(self, s_path: str, name: str) -> SoundItem:
        item = SoundItem(name=name, path=s_path, sound=_load_sound(s_path))
        self.sounds.append(item)
        return item

    def find_sound(self, name: str) -> Optional[SoundItem]:
        return next((item for item in self.sounds if item.name == name), None)

    def play_sound(self, name: str) -> bool:
        item = self.find_sound(name)
        if item is None:
            return False
        item.play()
        return True

    # Mouse interaction

    def hover(self, mouse: Vec) -> None:
        """Update hover state of buttons of the current UI layer."""
        x, y = mouse
        for button in list(self.buttons):
            if button.textures[1] is None or self.ui_id != button.is_modal:
                continue
            if button.contains(x, y):
                button.texture = button.textures[1]
                if not button.is_hov:
                    button.is_hov = True
                    self.play_sound("btn_hov")
            elif button.is_hov:
                if button.textures[0] is not None:
                    button.texture = button.textures[0]
                button.is_hov = False

    def unhover(self) -> None:
        for button in self.buttons:
            button.is_hov = False

    @staticmethod
    def _press(button: Button, x: float, y: float) -> None:
        if not button.contains(x, y):
            return
        if button.textures[2] is not None:
            button.texture = button.textures[2]
        if button.callback is not None:
            button.callback(button)

    def click(self, mouse: Vec, extra: Iterable[Optional[Button]] = ()) -> None:
        """Fire callbacks of buttons under the mouse, then of visible extra buttons."""
        x, y = mouse
        for button in list(self.buttons):
            if button.callback is not None and self.ui_id == button.is_modal and button.is_vis:
                self._press(button, x, y)
        for button in extra:
            if button is None or not button.is_vis:
                continue
            self._press(button, x, y)

    def unclick(self) -> None:
        for button in self.buttons:
            if button.callback is not None and not button.is_hov and button.textures[2] is not None:
                button.texture = button.textures[0]