"""
Tests for bubble sizing and stacking.
"""

import math

import pytest

from chatframes import Message, Side, Style, layout_messages, parse_messages
from chatframes.layout import typing_bubble_size


def layout(raw, style, measurer):
    return layout_messages(parse_messages(raw), style, measurer)


class TestBubbleSize:
    """Tests for the size of single bubbles."""

    def test_short_sender_bubble(self, small_style, measurer):
        """Test width, height and position of a one-line sender bubble."""
        plan = layout([{"sender": "Sender", "text": "hi"}], small_style, measurer)
        placed = plan[0]
        b = placed.bubble
        assert b.lines == ("hi",)
        assert b.width == 20 + 2 * 10
        assert b.height == math.ceil(26 + 2 * 8)
        assert placed.x == 360 - 12 - b.width
        assert placed.y == 40

    def test_receiver_is_left_aligned(self, small_style, measurer):
        """Test that receiver bubbles hug the left margin."""
        plan = layout([{"sender": "Receiver", "text": "hello"}], small_style, measurer)
        assert plan[0].x == 12
        assert plan[0].bubble.side is Side.RECEIVER

    def test_text_is_trimmed(self, small_style, measurer):
        """Test that surrounding whitespace does not widen the bubble."""
        plan = layout([{"text": "   hi   "}], small_style, measurer)
        assert plan[0].bubble.width == 40

    def test_width_capped(self, small_style, measurer):
        """Test that long text never makes a bubble wider than the limit."""
        plan = layout([{"text": "word " * 60}], small_style, measurer)
        b = plan[0].bubble
        assert b.width <= small_style.bubble_width_limit
        assert len(b.lines) > 1

    def test_height_grows_with_lines(self, small_style, measurer):
        """Test that more lines give taller bubbles."""
        texts = ["x" * n for n in (5, 30, 60, 120, 240)]
        plan = layout([{"text": t} for t in texts], small_style, measurer)
        counts = [len(p.bubble.lines) for p in plan]
        heights = [p.bubble.height for p in plan]
        assert counts == sorted(counts)
        assert heights == sorted(heights)
        for b in plan.bubbles:
            assert b.height == math.ceil(len(b.lines) * b.line_height + 16)

    def test_line_height(self, small_style):
        """Test that line height has a floor of font size plus six."""
        assert small_style.line_height == 26
        assert small_style.replace(font_size=100).line_height == pytest.approx(112)

    def test_typing_placeholder(self, small_style, measurer):
        """Test that typing bubbles get the fixed placeholder size."""
        plan = layout([{"sender": "Receiver", "typing": True}], small_style, measurer)
        b = plan[0].bubble
        assert b.is_typing
        assert b.lines == ()
        assert (b.width, b.height) == typing_bubble_size(20) == (70, 40)

    def test_empty_text(self, small_style, measurer):
        """Test that empty text gives an empty bubble that takes no room."""
        plan = layout([{"text": "a"}, {"text": "  "}, {"text": "b"}], small_style, measurer)
        assert plan[1].bubble.is_empty
        assert plan[1].bubble.height == 0
        assert plan[2].y == plan[0].bottom + small_style.gap


class TestStacking:
    """Tests for vertical stacking."""

    def test_positions_stack_with_gap(self, small_style, measurer, alternating_messages):
        """Test that each bubble starts a gap below the previous one."""
        plan = layout(alternating_messages, small_style, measurer)
        assert plan[0].y == small_style.padding_top
        for prev, cur in zip(plan, list(plan)[1:]):
            assert cur.y == prev.bottom + small_style.gap
        assert plan.content_bottom == plan[3].bottom

    def test_order_is_arrival_order(self, small_style, measurer, alternating_messages):
        """Test that source indices follow the input order."""
        plan = layout(alternating_messages, small_style, measurer)
        assert [b.source_index for b in plan.bubbles] == [0, 1, 2, 3]

    def test_layout_is_pure(self, small_style, measurer, alternating_messages):
        """Test that the same input and style give the same geometry."""
        first = layout(alternating_messages, small_style, measurer)
        second = layout(alternating_messages, small_style, measurer)
        assert first == second

    def test_accepts_message_objects(self, small_style, measurer):
        """Test that Message instances pass through unchanged."""
        msgs = parse_messages([Message("hi", Side.RECEIVER), {"text": "yo"}])
        plan = layout_messages(msgs, small_style, measurer)
        assert plan[0].x == 12
        assert plan[1].bubble.is_sender


class TestWidthLimit:
    """Tests for the bubble width cap on narrow canvases."""

    def test_typing_capped_on_narrow_canvas(self, measurer):
        """Test that a large-font typing bubble stays within the width cap."""
        style = Style(width=200, height=400, margin_sides=10, bubble_padding_x=10, font_size=48)
        plan = layout_messages(parse_messages([{"sender": "Sender", "typing": True}]), style, measurer)
        placed = plan[0]
        assert style.bubble_width_limit == 150
        assert placed.bubble.width == 150
        assert placed.x == 200 - 10 - 150
        assert placed.x >= style.margin_sides

    def test_limit_fits_between_margins(self):
        """Test that the derived width cap never exceeds the space between margins."""
        style = Style(width=240, margin_sides=36, max_bubble_width_fraction=1.0)
        assert style.bubble_width_limit == 240 - 72
