"""Vertical scroll offset keeping the newest bubble on the canvas."""


def window_offset(plan, visible, canvas_height, bottom_margin=0):
    """Scroll offset for a fixed-height canvas.

    Zero while the content up to the last visible bubble (plus the bottom
    margin) fits; otherwise just enough to bring that bubble's bottom edge,
    plus margin, to the bottom of the canvas.
    """
    if not visible:
        return 0
    used_height = plan[visible[-1]].bottom + bottom_margin
    if used_height <= canvas_height:
        return 0
    return max(0, used_height - canvas_height)


def is_on_canvas(placed, offset, canvas_height):
    """False when the bubble lies entirely above or below the canvas."""
    top = placed.y - offset
    return not (top + placed.bubble.height < 0 or top > canvas_height)
