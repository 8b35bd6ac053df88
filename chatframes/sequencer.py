"""Turns a message list into one rendered frame per conversation state."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ChatFramesError, SurfaceFailure
from .layout import layout_messages
from .measure import PilTextMeasurer
from .messages import parse_messages
from .render import render_frame
from .style import Style
from .surface import PilSurface
from .viewport import window_offset
from .visibility import visible_indices

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """A rendered conversation state; ``index`` is the state index."""

    index: int
    width: int
    height: int
    image: Image.Image
    visible: tuple = ()
    offset: float = 0

    @property
    def pixels(self):
        """H x W x 3 uint8 array, the form video tooling consumes."""
        return np.asarray(self.image)


def load_background(path):
    """Open the background template, or None to fall back to a solid fill."""
    if not path:
        return None
    try:
        with Image.open(path) as img:
            return img.convert("RGBA")
    except (OSError, UnidentifiedImageError) as e:
        logger.warning("Background %s unusable (%s), using solid color", path, e)
        return None


def frame_states(plan):
    """States that produce a frame: every state whose message shows something."""
    return [s for s in range(len(plan)) if not plan[s].bubble.is_empty]


class FrameSequencer:
    """Lays out a conversation once and renders each of its states."""

    def __init__(self, style=None, measurer=None, surface_factory=None):
        self.style = style or Style()
        # glyphs are always drawn with Pillow fonts, whatever measures the layout
        if isinstance(measurer, PilTextMeasurer):
            self.fonts = measurer
        else:
            self.fonts = PilTextMeasurer(self.style.font_path)
        self.measurer = measurer or self.fonts
        self.surface_factory = surface_factory or self._pil_surface

    def _pil_surface(self, width, height):
        return PilSurface(width, height, self.fonts)

    def layout(self, messages, me=None):
        return layout_messages(parse_messages(messages, me=me), self.style, self.measurer)

    def render_state(self, plan, state, background=None):
        style = self.style
        visible = visible_indices(plan.bubbles, state)
        offset = window_offset(plan, visible, style.height, style.padding_bottom)
        try:
            surface = self.surface_factory(style.width, style.height)
            render_frame(plan, visible, offset, style, surface, background=background, phase=state)
            image = surface.to_image()
        except ChatFramesError:
            raise
        except (OSError, ValueError, MemoryError) as e:
            raise SurfaceFailure(f"frame {state}: {e}") from e
        logger.debug("Rendered frame %d (%d bubbles, offset %s)", state, len(visible), offset)
        return Frame(state, style.width, style.height, image, tuple(visible), offset)

    def generate(self, messages, me=None):
        plan = self.layout(messages, me=me)
        background = load_background(self.style.background_path)
        states = frame_states(plan)
        logger.info("Rendering %d frames for %d messages", len(states), len(plan))

        if self.style.workers > 1 and len(states) > 1:
            with ThreadPoolExecutor(max_workers=self.style.workers) as pool:
                # map yields in submission order, so frames stay in state order
                frames = list(pool.map(lambda s: self.render_state(plan, s, background), states))
        else:
            frames = [self.render_state(plan, s, background) for s in states]
        logger.info("Rendered %d frames", len(frames))
        return frames


def generate_frames(messages, style=None, measurer=None, surface_factory=None, me=None):
    """Render one frame per conversation state, in state order.

    Raises InvalidInput for an empty or malformed message list before any
    layout happens.
    """
    sequencer = FrameSequencer(style, measurer=measurer, surface_factory=surface_factory)
    return sequencer.generate(messages, me=me)
