"""Cursor repositioning after an edit.

The cursor follows the last character the user actually got into the
field.  We count how many characters at or before the original cursor were
accepted by placeholders, then find that many fills in the new masked
string.  Dropped characters never count, so a rejected keystroke leaves the
cursor where it was.
"""

from __future__ import annotations

from .masker import fill_sources
from .types import CursorEdit, MaskResult, MaskToken, Placeholder


def accepted_before(raw: str, origin: int, tokens: tuple[MaskToken, ...]) -> int:
    """Number of placeholder fills sourced from ``raw[:origin]``.

    Uses the walk over the whole input, so a literal run split by the
    cursor is matched the same way it is when masking.
    """
    origin = max(0, min(origin, len(raw)))
    _, sources, _ = fill_sources(raw, tokens)
    return sum(1 for source in sources if source < origin)


def filled_offsets(masked: str, tokens: tuple[MaskToken, ...]) -> list[int]:
    """Offsets in ``masked`` that hold placeholder input.

    The masked string is always a prefix of the token layout, so offset k
    belongs to token k.
    """
    return [
        offset
        for offset, token in enumerate(tokens[:len(masked)])
        if isinstance(token, Placeholder)
    ]


def reposition(edit: CursorEdit, result: MaskResult, tokens: tuple[MaskToken, ...]) -> int | None:
    """New cursor offset into ``result.masked``, or None when unmasked."""
    if not tokens:
        return None

    accepted = accepted_before(edit.raw_input, edit.origin_offset, tokens)
    offsets = filled_offsets(result.masked, tokens)

    if accepted >= len(offsets):
        # at (or past) the last fill: step over trailing literals too
        return len(result.masked)
    if accepted == 0:
        return offsets[0]
    return offsets[accepted - 1] + 1
