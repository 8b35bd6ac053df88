"""
chatframes renders a chat conversation as one image per conversation state,
ready to be cut into short-form videos.
"""

from .errors import ChatFramesError, InvalidInput, MeasurementFailure, SurfaceFailure
from .layout import Bubble, LayoutPlan, PlacedBubble, layout_messages
from .measure import PilTextMeasurer, TextMeasurer
from .messages import Message, Side, StatusHint, load_script, parse_messages
from .render import render_frame
from .sequencer import Frame, FrameSequencer, generate_frames
from .sink import DirectoryFrameSink, StoredFrame, UploadingFrameSink, prune_old_frames
from .status import ResolvedStatus, resolve_status
from .style import Style
from .surface import DrawingSurface, PilSurface
from .viewport import window_offset
from .visibility import visible_indices
from .wrap import wrap_text

__version__ = "0.1.0"

__all__ = [
    "Bubble",
    "ChatFramesError",
    "DirectoryFrameSink",
    "DrawingSurface",
    "Frame",
    "FrameSequencer",
    "InvalidInput",
    "LayoutPlan",
    "MeasurementFailure",
    "Message",
    "PilSurface",
    "PilTextMeasurer",
    "PlacedBubble",
    "ResolvedStatus",
    "Side",
    "StoredFrame",
    "StatusHint",
    "Style",
    "SurfaceFailure",
    "TextMeasurer",
    "UploadingFrameSink",
    "generate_frames",
    "layout_messages",
    "load_script",
    "parse_messages",
    "prune_old_frames",
    "render_frame",
    "resolve_status",
    "visible_indices",
    "window_offset",
    "wrap_text",
]
