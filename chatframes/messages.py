"""Input messages and the script loader."""

import enum
import json
from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidInput


class Side(enum.Enum):
    SENDER = "sender"      # device owner, right aligned
    RECEIVER = "receiver"  # everybody else, left aligned


_SENDER_NAMES = {"sender", "me", "right"}


@dataclass(frozen=True)
class ExplicitStatus:
    value: str


@dataclass(frozen=True)
class StatusFlags:
    seen: bool = False
    delivered: bool = False


@dataclass(frozen=True)
class StatusTimestamps:
    read_at: bool = False
    delivered_at: bool = False


@dataclass(frozen=True)
class StatusHint:
    """The status shapes a message may carry, checked in precedence order."""

    explicit: Optional[ExplicitStatus] = None
    flags: Optional[StatusFlags] = None
    timestamps: Optional[StatusTimestamps] = None

    @classmethod
    def from_fields(cls, data):
        explicit = None
        for key in ("status", "state", "tick"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                explicit = ExplicitStatus(value.strip())
                break

        flags = None
        if "seen" in data or "delivered" in data:
            flags = StatusFlags(seen=data.get("seen") is True,
                                delivered=data.get("delivered") is True)

        timestamps = None
        if data.get("read_at") or data.get("delivered_at"):
            timestamps = StatusTimestamps(read_at=bool(data.get("read_at")),
                                          delivered_at=bool(data.get("delivered_at")))
        return cls(explicit, flags, timestamps)


@dataclass(frozen=True)
class Message:
    text: str = ""
    side: Side = Side.SENDER
    typing: bool = False
    status: StatusHint = field(default_factory=StatusHint)

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise InvalidInput("message text must be a string")
        if not isinstance(self.side, Side):
            raise InvalidInput(f"message side must be a Side, got {self.side!r}")
        if self.typing and self.text.strip():
            raise InvalidInput("a typing message cannot carry text")

    @classmethod
    def from_dict(cls, data, me=None):
        if not isinstance(data, dict):
            raise InvalidInput(f"message must be an object, got {type(data).__name__}")
        text = data.get("text")
        if text is None:
            text = ""
        if not isinstance(text, str):
            raise InvalidInput("message text must be a string")
        sender = data.get("sender") or data.get("name") or "Sender"
        if not isinstance(sender, str):
            raise InvalidInput("message sender must be a string")
        typing = data.get("typing", False)
        if not isinstance(typing, bool):
            raise InvalidInput("message typing flag must be a boolean")
        return cls(text=text, side=side_for(sender, me), typing=typing,
                   status=StatusHint.from_fields(data))

    @property
    def is_sender(self):
        return self.side is Side.SENDER


def side_for(sender, me=None):
    if me is not None:
        return Side.SENDER if sender == me else Side.RECEIVER
    return Side.SENDER if sender.lower() in _SENDER_NAMES else Side.RECEIVER


def parse_messages(messages, me=None):
    """Normalize raw messages (dicts or Message) into a tuple of Message."""
    if not isinstance(messages, (list, tuple)):
        raise InvalidInput("messages must be a list")
    if not messages:
        raise InvalidInput("No messages provided")
    parsed = []
    for i, m in enumerate(messages):
        if isinstance(m, Message):
            parsed.append(m)
            continue
        if isinstance(m, (list, tuple)) and len(m) >= 2:
            # [sender, text] pairs
            m = {"sender": m[0], "text": m[1]}
        try:
            parsed.append(Message.from_dict(m, me=me))
        except InvalidInput as e:
            raise InvalidInput(f"message {i}: {e}") from e
    return tuple(parsed)


def load_script(path, me=None):
    """Load a chat script from JSON.

    Accepts either {"messages": [...], "me": "...", "title": "...", "style": {...}}
    or a bare list of message objects. A ``me`` argument overrides the
    script's own. Returns (messages, title, style_options).
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInput(f"{path}: {e}") from e
    if isinstance(data, dict):
        raw = data.get('messages')
        if raw is None or not isinstance(raw, list):
            raise InvalidInput('JSON must contain a "messages" array of objects with sender/text')
        me = me or data.get('me')
        title = data.get('title')
        style = data.get('style') or {}
        if not isinstance(style, dict):
            raise InvalidInput('"style" must be an object')
    elif isinstance(data, list):
        raw, title, style = data, None, {}
    else:
        raise InvalidInput('Unsupported script format')
    return parse_messages(raw, me=me), title, style
