"""Mask tokenizer — turns a pattern like ``AAA-###`` into placeholder/literal slots.

Symbols (case-sensitive):
    #   one digit
    A   one letter
    *   one letter or digit
Anything else is a literal and is inserted verbatim.  There is no escape
character, so a literal ``#``, ``A`` or ``*`` cannot be expressed.
"""

from __future__ import annotations

from .types import CharClass, Literal, MaskToken, Placeholder

_SYMBOLS: dict[str, CharClass] = {cls.value: cls for cls in CharClass}


def tokenize(pattern: str | None) -> tuple[MaskToken, ...]:
    """Compile a mask pattern.  An empty pattern yields no tokens."""
    tokens: list[MaskToken] = []
    for char in pattern or "":
        char_class = _SYMBOLS.get(char)
        if char_class is not None:
            tokens.append(Placeholder(char_class))
        else:
            tokens.append(Literal(char))
    return tuple(tokens)


def describe(tokens: tuple[MaskToken, ...]) -> str:
    """Render tokens back into pattern syntax."""
    return "".join(
        t.symbol if isinstance(t, Placeholder) else t.char
        for t in tokens
    )


def placeholder_count(tokens: tuple[MaskToken, ...]) -> int:
    return sum(1 for t in tokens if isinstance(t, Placeholder))
