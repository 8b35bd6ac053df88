"""Delivery status resolution (sent / delivered / seen)."""

import enum

from .messages import Message


class ResolvedStatus(enum.Enum):
    SENT = "sent"
    DELIVERED = "delivered"
    SEEN = "seen"


_EXPLICIT = {
    "sent": ResolvedStatus.SENT,
    "delivered": ResolvedStatus.DELIVERED,
    "seen": ResolvedStatus.SEEN,
    "read": ResolvedStatus.SEEN,
}


def resolve_status(message):
    """Map a message's status hint to a ResolvedStatus, or None.

    Precedence: explicit status string, then boolean flags, then timestamp
    presence. Seen beats delivered within the same shape.
    """
    hint = message.status if isinstance(message, Message) else message
    if hint.explicit is not None:
        status = _EXPLICIT.get(hint.explicit.value.lower())
        if status is not None:
            return status
    if hint.flags is not None:
        if hint.flags.seen:
            return ResolvedStatus.SEEN
        if hint.flags.delivered:
            return ResolvedStatus.DELIVERED
    if hint.timestamps is not None:
        if hint.timestamps.read_at:
            return ResolvedStatus.SEEN
        if hint.timestamps.delivered_at:
            return ResolvedStatus.DELIVERED
    return None


def tick_status(bubble):
    """Status to draw as ticks on a bubble, or None when it shows none.

    Only real sender-side messages carry ticks; unresolved ones show as
    delivered.
    """
    if not bubble.is_sender or bubble.is_typing or bubble.is_empty:
        return None
    return bubble.status or ResolvedStatus.DELIVERED
