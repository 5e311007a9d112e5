"""Core types."""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Union

logger = logging.getLogger(__name__)


class CharClass(Enum):
    """Character class accepted by a placeholder, keyed by its mask symbol."""
    DIGIT = "#"
    LETTER = "A"
    ALPHANUMERIC = "*"

    def accepts(self, char: str) -> bool:
        return _CLASS_PATTERNS[self].fullmatch(char) is not None


_CLASS_PATTERNS: dict[CharClass, re.Pattern] = {
    CharClass.DIGIT: re.compile(r"[0-9]"),
    CharClass.LETTER: re.compile(r"[a-zA-Z]"),
    CharClass.ALPHANUMERIC: re.compile(r"[0-9a-zA-Z]"),
}


@dataclass(frozen=True, slots=True)
class Literal:
    """Fixed mask character, inserted automatically."""
    char: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Mask slot filled by one accepted input character."""
    char_class: CharClass

    @property
    def symbol(self) -> str:
        return self.char_class.value


MaskToken = Union[Literal, Placeholder]


MODIFIER_NAMES = ("short", "prefill")


@dataclass(frozen=True, slots=True)
class Modifiers:
    """Display options for a mask."""
    short: bool = False      # trim trailing literals past the last fill
    prefill: bool = False    # show leading literals before any input

    @classmethod
    def from_flags(cls, flags: Iterable[str] | str | None) -> "Modifiers":
        """Build from flag names, e.g. ``["short"]`` or ``"short.prefill"``."""
        if flags is None:
            return cls()
        if isinstance(flags, str):
            flags = [f for f in flags.split(".") if f]
        enabled: dict[str, bool] = {}
        for flag in flags:
            name = flag.strip().lower()
            if name in MODIFIER_NAMES:
                enabled[name] = True
            else:
                logger.debug("Ignoring unknown mask modifier %r", flag)
        return cls(**enabled)


@dataclass(slots=True)
class MaskConfig:
    """Live configuration for one bound field."""
    pattern: str
    tokens: tuple[MaskToken, ...] = ()
    modifiers: Modifiers = field(default_factory=Modifiers)
    last_value: str = ""     # last masked value written to the field

    @classmethod
    def compile(cls, pattern: str | None, modifiers: Modifiers | None = None) -> "MaskConfig":
        from .tokens import tokenize
        pattern = pattern or ""
        return cls(pattern=pattern, tokens=tokenize(pattern), modifiers=modifiers or Modifiers())

    def update(self, pattern: str | None, modifiers: Modifiers | None = None) -> bool:
        """Re-tokenize for a new pattern.  Returns True if anything changed."""
        from .tokens import tokenize
        pattern = pattern or ""
        modifiers = modifiers or Modifiers()
        changed = pattern != self.pattern or modifiers != self.modifiers
        self.pattern = pattern
        self.tokens = tokenize(pattern)
        self.modifiers = modifiers
        return changed

    def copy(self) -> "MaskConfig":
        return replace(self, last_value="")

    @property
    def is_passthrough(self) -> bool:
        return not self.tokens


@dataclass(frozen=True, slots=True)
class MaskResult:
    """Masked display value and the characters that filled placeholders."""
    masked: str
    unmasked: str


class EditType(Enum):
    INSERT = "insert"
    DELETE = "delete"
    UNKNOWN = "unknown"

    @classmethod
    def from_input_type(cls, input_type: str | None) -> "EditType":
        """Map a host hint such as ``insertText`` or ``deleteContentBackward``."""
        if not input_type:
            return cls.UNKNOWN
        if input_type.startswith("insert"):
            return cls.INSERT
        if input_type.startswith("delete"):
            return cls.DELETE
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class CursorEdit:
    """One edit event, as seen by the cursor repositioner."""
    previous_masked: str
    raw_input: str
    origin_offset: int
    edit_type: EditType = EditType.UNKNOWN


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of processing one edit."""
    masked: str
    unmasked: str
    cursor_offset: int | None = None   # None = leave the native cursor alone


@dataclass(frozen=True, slots=True)
class InputEvent:
    """Native edit notification delivered by the host."""
    input_type: str | None = None
    synthetic: bool = False            # emitted by the binder itself
