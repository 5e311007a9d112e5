"""input-facade — input masks with natural cursor tracking for text fields."""

from .types import (
    CharClass, Literal, Placeholder, MaskToken,
    Modifiers, MaskConfig, MaskResult,
    EditType, CursorEdit, EditResult, InputEvent,
)
from .tokens import tokenize, describe
from .masker import apply_mask, mask_value, process_edit
from .cursor import reposition
from .store import ConfigStore
from .binder import ElementBinder
from .config import ConfigError, load_config, load_from_yaml

__all__ = [
    "CharClass", "Literal", "Placeholder", "MaskToken",
    "Modifiers", "MaskConfig", "MaskResult",
    "EditType", "CursorEdit", "EditResult", "InputEvent",
    "tokenize", "describe",
    "apply_mask", "mask_value", "process_edit",
    "reposition",
    "ConfigStore",
    "ElementBinder",
    "ConfigError", "load_config", "load_from_yaml",
]
__version__ = "0.1.0"
