"""Drawing surface abstraction and its Pillow implementation."""

from threading import RLock
from typing import Protocol

from PIL import Image, ImageDraw

from .errors import SurfaceFailure
from .measure import PilTextMeasurer

# FreeType faces are shared between frames rendered on worker threads
_font_lock = RLock()


class DrawingSurface(Protocol):
    width: int
    height: int

    def draw_image_scaled(self, image): ...

    def fill_rect(self, x, y, w, h, color): ...

    def fill_rounded_rect(self, x, y, w, h, radius, color): ...

    def fill_ellipse(self, cx, cy, r, color): ...

    def fill_text(self, text, x, y, font_size, color): ...

    def measure_text(self, text, font_size): ...

    def stroke_polyline(self, points, color, width): ...


def clamp_radius(w, h, radius):
    """Corner radius that cannot make the rounded corners overlap."""
    return max(0, int(min(radius, w / 2, h / 2)))


class PilSurface:
    """An RGBA Pillow canvas; translucent fills are alpha-composited."""

    def __init__(self, width, height, fonts=None):
        self.width = width
        self.height = height
        self.fonts = fonts or PilTextMeasurer()
        try:
            self.image = Image.new("RGBA", (width, height), (0, 0, 0, 255))
        except (ValueError, MemoryError) as e:
            raise SurfaceFailure(f"cannot allocate {width}x{height} canvas: {e}") from e
        self.draw = ImageDraw.Draw(self.image)

    def _layer(self, color):
        """Draw target for ``color``: the canvas itself, or a blank overlay for translucent colors."""
        if len(color) == 4 and color[3] < 255:
            overlay = Image.new("RGBA", self.image.size, (0, 0, 0, 0))
            return overlay, ImageDraw.Draw(overlay)
        return None, self.draw

    def _flatten(self, overlay):
        if overlay is not None:
            self.image.alpha_composite(overlay)

    def draw_image_scaled(self, image):
        scaled = image.convert("RGBA").resize((self.width, self.height))
        self.image.alpha_composite(scaled)

    def fill_rect(self, x, y, w, h, color):
        overlay, draw = self._layer(color)
        draw.rectangle([x, y, x + w, y + h], fill=color)
        self._flatten(overlay)

    def fill_rounded_rect(self, x, y, w, h, radius, color):
        if w <= 0 or h <= 0:
            return
        overlay, draw = self._layer(color)
        draw.rounded_rectangle([x, y, x + w, y + h], clamp_radius(w, h, radius), fill=color)
        self._flatten(overlay)

    def fill_ellipse(self, cx, cy, r, color):
        overlay, draw = self._layer(color)
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=color)
        self._flatten(overlay)

    def fill_text(self, text, x, y, font_size, color):
        # (x, y) is the top-left corner of the text line
        overlay, draw = self._layer(color)
        with _font_lock:
            draw.text((x, y), text, font=self.fonts.font(font_size), fill=color, anchor="la")
        self._flatten(overlay)

    def measure_text(self, text, font_size):
        with _font_lock:
            return self.fonts.measure(text, font_size)

    def stroke_polyline(self, points, color, width):
        overlay, draw = self._layer(color)
        draw.line(points, fill=color, width=width, joint="curve")
        self._flatten(overlay)

    def to_image(self):
        return self.image.convert("RGB")
