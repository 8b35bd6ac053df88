"""Text measurement backed by Pillow fonts."""

import functools
import logging
import math
from typing import Protocol

from PIL import ImageFont

from .errors import MeasurementFailure

logger = logging.getLogger(__name__)

# Tried in order when no font file is configured
FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/ubuntu/UbuntuSans[wdth,wght].ttf",
    "/System/Library/Fonts/Helvetica.ttc",
)


class TextMeasurer(Protocol):
    def measure(self, text: str, font_size: int) -> float:
        """Rendered width of ``text`` at ``font_size`` in layout pixels."""


@functools.lru_cache(maxsize=32)
def load_font(font_size, font_path=None):
    """Return a Pillow font at ``font_size``, falling back to the bundled default."""
    candidates = (font_path,) if font_path else FONT_CANDIDATES
    for path in candidates:
        try:
            return ImageFont.truetype(path, font_size)
        except OSError:
            if font_path:
                logger.warning("Could not load font %s, using default font", font_path)
    logger.debug("No TrueType font found, using Pillow default font at size %d", font_size)
    return ImageFont.load_default(size=font_size)


class PilTextMeasurer:
    """Measures text with the same font the surface draws with."""

    def __init__(self, font_path=None):
        self.font_path = font_path

    def font(self, font_size):
        return load_font(font_size, self.font_path)

    def measure(self, text, font_size):
        return self.font(font_size).getlength(text)


def checked_width(measurer, text, font_size):
    """Measure ``text`` and reject anything downstream sizing cannot use."""
    try:
        width = measurer.measure(text, font_size)
    except MeasurementFailure:
        raise
    except Exception as e:
        raise MeasurementFailure(f"could not measure {text!r}: {e}") from e
    try:
        width = float(width)
    except (TypeError, ValueError) as e:
        raise MeasurementFailure(f"measurer returned {width!r} for {text!r}") from e
    if not math.isfinite(width) or width < 0:
        raise MeasurementFailure(f"measurer returned {width!r} for {text!r}")
    return width
