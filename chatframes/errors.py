"""Exceptions raised while building conversation frames."""


class ChatFramesError(Exception):
    """Base class for all chatframes errors."""


class InvalidInput(ChatFramesError, ValueError):
    """The message list or style options were empty or malformed."""


class MeasurementFailure(ChatFramesError):
    """Text could not be measured, so no bubble can be sized."""


class SurfaceFailure(ChatFramesError):
    """The drawing backend could not allocate or draw a frame."""
