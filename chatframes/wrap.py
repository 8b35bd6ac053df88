"""Greedy word wrapping with character-level fallback."""

from .measure import checked_width


def _split_word(word, max_width, measurer, font_size, lines):
    """Break an over-long word into fragments, flushing every full fragment.

    Returns the trailing fragment, which seeds the next line.
    """
    fragment = ""
    for ch in word:
        test = fragment + ch
        if fragment and checked_width(measurer, test, font_size) > max_width:
            lines.append(fragment)
            fragment = ch
        else:
            fragment = test
    return fragment


def wrap_text(text, max_width, measurer, font_size):
    """Wrap ``text`` into lines no wider than ``max_width``.

    Words are separated by whitespace and rejoined with single spaces. A word
    wider than ``max_width`` on its own is split character by character; its
    last fragment may still collect the words that follow. Empty text gives
    no lines.
    """
    lines = []
    line = ""
    for word in text.split():
        test = f"{line} {word}" if line else word
        if checked_width(measurer, test, font_size) <= max_width:
            line = test
            continue
        if line:
            lines.append(line)
        if checked_width(measurer, word, font_size) > max_width:
            line = _split_word(word, max_width, measurer, font_size, lines)
        else:
            line = word
    if line:
        lines.append(line)
    return lines
