"""Value masker — the main API.

Usage:
    from input_facade import MaskConfig, Modifiers, apply_mask, process_edit

    config = MaskConfig.compile("##.##")
    result = apply_mask("1234", config.tokens)
    print(result.masked, result.unmasked)        # "12.34" "1234"

    edit = CursorEdit(previous_masked="12.3", raw_input="12.34", origin_offset=5,
                      edit_type=EditType.INSERT)
    print(process_edit(config, edit))             # EditResult("12.34", "1234", 5)

Characters that fail a placeholder's class are dropped silently.  Nothing
in here raises for user input.
"""

from __future__ import annotations
from dataclasses import replace

from .types import (
    CursorEdit,
    EditResult,
    EditType,
    Literal,
    MaskConfig,
    MaskResult,
    MaskToken,
    Modifiers,
    Placeholder,
)


def _segments(tokens: tuple[MaskToken, ...]) -> list[str | Placeholder]:
    """Group consecutive literals into runs; placeholders stay single."""
    segments: list[str | Placeholder] = []
    run: list[str] = []
    for token in tokens:
        if isinstance(token, Literal):
            run.append(token.char)
            continue
        if run:
            segments.append("".join(run))
            run = []
        segments.append(token)
    if run:
        segments.append("".join(run))
    return segments


def _run_matches(rest: str, run: str, following: Placeholder | None) -> bool:
    if rest.startswith(run):
        return True
    # input ends inside the run: only display text can end there
    if rest and run.startswith(rest):
        return following is None or any(not following.char_class.accepts(c) for c in rest)
    return False


def fill_sources(raw: str, tokens: tuple[MaskToken, ...]) -> tuple[list[str], list[int], list[str]]:
    """Walk ``raw`` through ``tokens``.

    Returns the display parts up to the last fill, the input offset each
    placeholder was filled from, and the literal runs left after the last
    fill.  A run of consecutive literals consumes input only when the whole
    run appears there and every earlier run did too.
    """
    masked: list[str] = []
    sources: list[int] = []
    pending: list[str] = []     # literal runs waiting for the next fill
    aligned = True
    i = 0
    n = len(raw)

    segments = _segments(tokens)
    for k, segment in enumerate(segments):
        if isinstance(segment, str):
            following = segments[k + 1] if k + 1 < len(segments) else None
            if aligned and _run_matches(raw[i:], segment, following):
                i += min(len(segment), n - i)
            else:
                aligned = False
            pending.append(segment)
            continue

        while i < n and not segment.char_class.accepts(raw[i]):
            i += 1
        if i >= n:
            break

        masked.extend(pending)
        pending.clear()
        masked.append(raw[i])
        sources.append(i)
        i += 1

    return masked, sources, pending


def apply_mask(
    raw: str,
    tokens: tuple[MaskToken, ...],
    modifiers: Modifiers | None = None,
) -> MaskResult:
    """Format ``raw`` through ``tokens``.

    Walks the input left to right, one placeholder at a time.  Literals are
    held back until the next placeholder is filled, so the display never
    shows punctuation past the point the user has reached (apart from the
    run directly after the last fill, see ``short``/``prefill``).

    Formatted text such as ``+1 777`` re-masks to itself, while raw ``123``
    through ``1-###`` keeps its leading ``1`` (see ``fill_sources``).
    """
    raw = raw or ""
    if not tokens:
        return MaskResult(masked=raw, unmasked=raw)
    modifiers = modifiers or Modifiers()

    masked, sources, pending = fill_sources(raw, tokens)
    unmasked = "".join(raw[i] for i in sources)
    if pending and _show_trailing(bool(sources), modifiers):
        masked.extend(pending)

    return MaskResult(masked="".join(masked), unmasked=unmasked)


def _show_trailing(filled: bool, modifiers: Modifiers) -> bool:
    # short wins once something is filled; prefill covers the empty field
    if filled:
        return not modifiers.short
    return modifiers.prefill


def mask_value(config: MaskConfig, raw: str | None) -> MaskResult:
    """Re-run masking on a field's current value."""
    return apply_mask("" if raw is None else str(raw), config.tokens, config.modifiers)


def _is_subsequence(part: str, whole: str) -> bool:
    chars = iter(whole)
    return all(c in chars for c in part)


def resolve_edit_type(edit: CursorEdit) -> EditType:
    """Guess the edit direction when the host gave no hint.

    Only a value that is the previous one with characters removed counts as
    a delete; pasting shorter text over a selection is an insert.
    """
    if edit.edit_type is not EditType.UNKNOWN:
        return edit.edit_type
    raw, previous = edit.raw_input, edit.previous_masked
    if len(raw) < len(previous) and _is_subsequence(raw, previous):
        return EditType.DELETE
    return EditType.INSERT


def process_edit(config: MaskConfig, edit: CursorEdit) -> EditResult:
    """Mask the edited value and work out where the cursor goes.

    With no mask configured the raw value passes through and the cursor
    offset is ``None``.  Deletions mask with ``short`` forced on so that
    backspacing over a trailing literal actually removes it.
    """
    from .cursor import reposition

    if config.is_passthrough:
        return EditResult(masked=edit.raw_input, unmasked=edit.raw_input)

    modifiers = config.modifiers
    if resolve_edit_type(edit) is EditType.DELETE and not modifiers.short:
        modifiers = replace(modifiers, short=True)

    result = apply_mask(edit.raw_input, config.tokens, modifiers)
    offset = reposition(edit, result, config.tokens)
    return EditResult(masked=result.masked, unmasked=result.unmasked, cursor_offset=offset)
