"""Rendering configuration shared by layout, rendering and sequencing."""

import dataclasses
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import InvalidInput

Color = Tuple[int, ...]

# Dark phone UI colors
BACKGROUND = (15, 23, 32)          # '#0f1720' solid fallback
SENDER_FILL = (16, 185, 129)       # '#10b981'
RECEIVER_FILL = (55, 65, 81)       # '#374151'
SENDER_TEXT = (255, 255, 255)
RECEIVER_TEXT = (243, 244, 246)    # '#f3f4f6'
SHADOW = (0, 0, 0, 89)             # rgba(0,0,0,0.35)
TICK = (236, 253, 245)
SEEN_TICK = (56, 189, 248)         # distinct tint for seen
TYPING_DOT = (229, 231, 235)
TYPING_DOT_DIM = (156, 163, 175)
TITLE_TEXT = (255, 255, 255)

# camelCase keys of the /generate request body
_ALIASES = {
    "paddingTop": "padding_top",
    "paddingBottom": "padding_bottom",
    "marginSides": "margin_sides",
    "bubblePaddingX": "bubble_padding_x",
    "bubblePaddingY": "bubble_padding_y",
    "gapBetween": "gap",
    "fontSize": "font_size",
    "maxBubbleWidth": "max_bubble_width",
    "maxBubbleWidthFraction": "max_bubble_width_fraction",
    "backgroundPath": "background_path",
    "templatePath": "background_path",
    "fontPath": "font_path",
    "cornerRadius": "corner_radius",
}


@dataclass(frozen=True)
class Style:
    """Every layout and drawing knob, with the defaults of the phone template."""

    width: int = 1080
    height: int = 1920
    padding_top: int = 140
    padding_bottom: int = 140
    margin_sides: int = 36
    bubble_padding_x: int = 28
    bubble_padding_y: int = 20
    gap: int = 18
    font_size: int = 48
    max_bubble_width_fraction: float = 0.75
    max_bubble_width: Optional[int] = None
    corner_radius: int = 24
    shadow_offset: Tuple[int, int] = (4, 8)
    background_path: Optional[str] = None
    title: Optional[str] = None
    font_path: Optional[str] = None
    workers: int = 1

    background_color: Color = BACKGROUND
    sender_fill: Color = SENDER_FILL
    receiver_fill: Color = RECEIVER_FILL
    sender_text: Color = SENDER_TEXT
    receiver_text: Color = RECEIVER_TEXT
    shadow_color: Color = SHADOW
    tick_color: Color = TICK
    seen_tick_color: Color = SEEN_TICK
    typing_dot_color: Color = TYPING_DOT
    typing_dot_dim_color: Color = TYPING_DOT_DIM
    title_color: Color = TITLE_TEXT

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidInput(f"canvas size must be positive, got {self.width}x{self.height}")
        if self.font_size <= 0:
            raise InvalidInput(f"font size must be positive, got {self.font_size}")
        if not 0 < self.max_bubble_width_fraction <= 1:
            raise InvalidInput("max_bubble_width_fraction must be in (0, 1]")
        if self.workers < 1:
            raise InvalidInput("workers must be at least 1")
        if self.max_bubble_width is not None and self.max_bubble_width > self.width - 2 * self.margin_sides:
            raise InvalidInput("max bubble width does not fit between the side margins")
        if self.bubble_width_limit <= 2 * self.bubble_padding_x:
            raise InvalidInput("max bubble width leaves no room for text")

    @property
    def bubble_width_limit(self):
        """Maximum bubble width in pixels."""
        if self.max_bubble_width is not None:
            return self.max_bubble_width
        limit = int(math.floor(self.width * self.max_bubble_width_fraction))
        return min(limit, self.width - 2 * self.margin_sides)

    @property
    def text_width_limit(self):
        return self.bubble_width_limit - 2 * self.bubble_padding_x

    @property
    def line_height(self):
        return max(self.font_size * 1.12, self.font_size + 6)

    @classmethod
    def from_options(cls, options=None, **overrides):
        """Build a style from request-style options.

        Accepts the field names as well as the camelCase keys of the
        HTTP request body. ``None`` values are ignored so absent CLI flags keep
        their defaults.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        values = {}
        merged = dict(options or {})
        merged.update(overrides)
        for key, value in merged.items():
            if value is None:
                continue
            name = _ALIASES.get(key, key)
            if name not in known:
                raise InvalidInput(f"unknown style option: {key!r}")
            if isinstance(value, list):
                value = tuple(value)
            values[name] = value
        try:
            return cls(**values)
        except TypeError as e:
            raise InvalidInput(str(e)) from e

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)
