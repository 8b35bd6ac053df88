"""Draws one conversation state onto a drawing surface."""

import logging

from .status import ResolvedStatus, tick_status
from .viewport import is_on_canvas

logger = logging.getLogger(__name__)


def draw_background(surface, style, background=None):
    if background is not None:
        surface.draw_image_scaled(background)
    else:
        surface.fill_rect(0, 0, surface.width, surface.height, style.background_color)


def draw_title(surface, style):
    """Center the title inside the top margin."""
    title = style.title
    tw = surface.measure_text(title, style.font_size)
    x = (surface.width - tw) / 2
    y = max(0, (style.padding_top - style.line_height) / 2)
    surface.fill_text(title, x, y, style.font_size, style.title_color)


def draw_typing_dots(surface, x, y, bubble, style, phase):
    """Three evenly spaced dots; the one at ``phase`` is highlighted."""
    r = max(2, style.font_size * 0.12)
    cy = y + bubble.height / 2
    for i in range(3):
        cx = x + bubble.width * (i + 1) / 4
        color = style.typing_dot_color if i == phase % 3 else style.typing_dot_dim_color
        surface.fill_ellipse(cx, cy, r, color)


def draw_text_lines(surface, x, y, bubble, style):
    color = style.sender_text if bubble.is_sender else style.receiver_text
    tx = x + style.bubble_padding_x
    ty = y + style.bubble_padding_y
    for line in bubble.lines:
        surface.fill_text(line, tx, ty, style.font_size, color)
        ty += bubble.line_height


def _check(x, y, size):
    """Points of a check mark whose box has its bottom-left at (x, y)."""
    return [(x, y - size * 0.45), (x + size * 0.35, y), (x + size, y - size * 0.9)]


def draw_ticks(surface, x, y, bubble, style, status):
    """Status ticks right-aligned near the bubble's bottom edge."""
    size = max(6, style.font_size * 0.3)
    stroke = max(1, round(style.font_size / 20))
    color = style.seen_tick_color if status is ResolvedStatus.SEEN else style.tick_color
    right = x + bubble.width - style.bubble_padding_x / 2
    bottom = y + bubble.height - style.bubble_padding_y / 3
    if status is ResolvedStatus.SENT:
        surface.stroke_polyline(_check(right - size, bottom, size), color, stroke)
        return
    # double check: second mark shifted right, overlapping the first
    step = size * 0.45
    surface.stroke_polyline(_check(right - size - step, bottom, size), color, stroke)
    surface.stroke_polyline(_check(right - size, bottom, size), color, stroke)


def draw_bubble(surface, placed, offset, style, phase=0):
    b = placed.bubble
    x = placed.x
    y = placed.y - offset
    dx, dy = style.shadow_offset
    surface.fill_rounded_rect(x + dx, y + dy, b.width, b.height, style.corner_radius, style.shadow_color)
    fill = style.sender_fill if b.is_sender else style.receiver_fill
    surface.fill_rounded_rect(x, y, b.width, b.height, style.corner_radius, fill)

    if b.is_typing:
        draw_typing_dots(surface, x, y, b, style, phase)
        return
    draw_text_lines(surface, x, y, b, style)
    status = tick_status(b)
    if status is not None:
        draw_ticks(surface, x, y, b, style, status)


def render_frame(plan, visible, offset, style, surface, background=None, phase=0):
    """Paint background, title and every visible bubble in index order.

    Bubbles scrolled completely off the canvas are skipped.
    """
    draw_background(surface, style, background)
    for i in visible:
        placed = plan[i]
        if not is_on_canvas(placed, offset, surface.height):
            logger.debug("Bubble %d is off canvas at offset %s", i, offset)
            continue
        draw_bubble(surface, placed, offset, style, phase=phase)
    if style.title:
        draw_title(surface, style)
