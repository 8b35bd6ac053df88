"""Which bubbles are on screen once a given number of messages has arrived."""


def superseding_index(bubbles, j):
    """Index of the nearest real message after ``j`` from the same side, or None."""
    side = bubbles[j].side
    for k in range(j + 1, len(bubbles)):
        b = bubbles[k]
        if b.side is side and not b.is_typing and not b.is_empty:
            return k
    return None


def visible_indices(bubbles, state):
    """Indices of bubbles shown at ``state``, in ascending order.

    Real messages stay once they arrive. A typing placeholder stays until the
    next real message from the same side has arrived; messages from the other
    side do not dismiss it.
    """
    if not 0 <= state < len(bubbles):
        raise IndexError(f"state {state} out of range for {len(bubbles)} bubbles")
    visible = []
    for j in range(state + 1):
        b = bubbles[j]
        if b.is_empty:
            continue
        if b.is_typing:
            k = superseding_index(bubbles, j)
            if k is not None and k <= state:
                continue
        visible.append(j)
    return visible
