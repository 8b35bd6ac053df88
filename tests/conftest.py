"""
Pytest fixtures for chatframes tests
"""

import pytest

from chatframes import Style


class FixedMeasurer:
    """Every character is half the font size wide."""

    def measure(self, text, font_size):
        return len(text) * font_size / 2


class RecordingSurface:
    """Drawing surface that records calls instead of drawing."""

    def __init__(self, width=360, height=640):
        self.width = width
        self.height = height
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def draw_image_scaled(self, image):
        self._record("draw_image_scaled", image)

    def fill_rect(self, x, y, w, h, color):
        self._record("fill_rect", x, y, w, h, color)

    def fill_rounded_rect(self, x, y, w, h, radius, color):
        self._record("fill_rounded_rect", x, y, w, h, radius, color)

    def fill_ellipse(self, cx, cy, r, color):
        self._record("fill_ellipse", cx, cy, r, color)

    def fill_text(self, text, x, y, font_size, color):
        self._record("fill_text", text, x, y, font_size, color)

    def measure_text(self, text, font_size):
        return FixedMeasurer().measure(text, font_size)

    def stroke_polyline(self, points, color, width):
        self._record("stroke_polyline", points, color, width)

    def named(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def measurer():
    return FixedMeasurer()


@pytest.fixture
def small_style():
    """
    A phone-sized canvas scaled down so frames render quickly.

    The text area is 250px wide and lines are 26px high.
    """
    return Style(
        width=360,
        height=640,
        padding_top=40,
        padding_bottom=40,
        margin_sides=12,
        bubble_padding_x=10,
        bubble_padding_y=8,
        gap=6,
        font_size=20,
        corner_radius=12,
    )


@pytest.fixture
def alternating_messages():
    return [
        {"sender": "Sender", "text": "hey"},
        {"sender": "Receiver", "text": "hi there"},
        {"sender": "Sender", "text": "you up?"},
        {"sender": "Receiver", "text": "yes"},
    ]


@pytest.fixture
def recording_surface():
    return RecordingSurface()
