"""Bubble sizing and vertical stacking."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .measure import checked_width
from .messages import Side
from .status import ResolvedStatus, resolve_status
from .wrap import wrap_text


@dataclass(frozen=True)
class Bubble:
    source_index: int
    side: Side
    is_typing: bool
    lines: Tuple[str, ...]
    line_height: float
    width: float
    height: float
    status: Optional[ResolvedStatus] = None

    @property
    def is_sender(self):
        return self.side is Side.SENDER

    @property
    def is_empty(self):
        """A text bubble without any text; never shown."""
        return not self.is_typing and not self.lines


@dataclass(frozen=True)
class PlacedBubble:
    bubble: Bubble
    x: float
    y: float

    @property
    def bottom(self):
        return self.y + self.bubble.height


@dataclass(frozen=True)
class LayoutPlan:
    """All bubbles of a conversation at their absolute positions."""

    placed: Tuple[PlacedBubble, ...]
    content_bottom: float

    def __len__(self):
        return len(self.placed)

    def __getitem__(self, index):
        return self.placed[index]

    def __iter__(self):
        return iter(self.placed)

    @property
    def bubbles(self):
        return tuple(p.bubble for p in self.placed)


def typing_bubble_size(font_size, max_width=None):
    width = math.ceil(font_size * 3.5)
    if max_width is not None:
        width = min(max_width, width)
    return width, math.ceil(font_size * 2)


def measure_bubble(index, message, style, measurer):
    """Size a single message as a bubble."""
    line_height = style.line_height
    status = resolve_status(message)
    if message.typing:
        width, height = typing_bubble_size(style.font_size, style.bubble_width_limit)
        return Bubble(index, message.side, True, (), line_height, width, height, status)

    lines = wrap_text(message.text.strip(), style.text_width_limit, measurer, style.font_size)
    if not lines:
        return Bubble(index, message.side, False, (), line_height, 0, 0, status)
    text_width = max(checked_width(measurer, l, style.font_size) for l in lines)
    width = min(style.bubble_width_limit, math.ceil(text_width) + style.bubble_padding_x * 2)
    height = math.ceil(len(lines) * line_height + style.bubble_padding_y * 2)
    return Bubble(index, message.side, False, tuple(lines), line_height, width, height, status)


def bubble_x(bubble, style):
    if bubble.is_sender:
        return style.width - style.margin_sides - bubble.width
    return style.margin_sides


def layout_messages(messages, style, measurer):
    """Size every message and stack the bubbles top-down in arrival order."""
    placed = []
    y = style.padding_top
    for i, message in enumerate(messages):
        bubble = measure_bubble(i, message, style, measurer)
        placed.append(PlacedBubble(bubble, bubble_x(bubble, style), y))
        if not bubble.is_empty:
            y += bubble.height + style.gap
    content_bottom = y - style.gap if y > style.padding_top else y
    return LayoutPlan(tuple(placed), content_bottom)
