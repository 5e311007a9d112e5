"""YAML/dict config loader for named masks.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    input_facade:
      masks:
        price: "##.##"
        plate: "AAA-###-"
        phone:
          pattern: "+1 (###) ###-####"
          modifiers: [prefill]
        date:
          pattern: "##/##/####"
          modifiers: short
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .types import MaskConfig, Modifiers


class ConfigError(ValueError):
    """Raised for a malformed mask configuration."""


def _parse_modifiers(name: str, raw: Any) -> Modifiers:
    if raw is None or isinstance(raw, str):
        return Modifiers.from_flags(raw)
    if isinstance(raw, (list, tuple)):
        return Modifiers.from_flags([str(flag) for flag in raw])
    if isinstance(raw, dict):
        return Modifiers.from_flags([flag for flag, on in raw.items() if on])
    raise ConfigError(f"mask {name!r}: modifiers must be a list, string or mapping")


def _parse_mask(name: str, entry: Any) -> MaskConfig:
    if isinstance(entry, str):
        return MaskConfig.compile(entry)
    if not isinstance(entry, dict):
        raise ConfigError(f"mask {name!r}: expected a pattern string or a mapping")
    pattern = entry.get("pattern", "")
    if not isinstance(pattern, str):
        raise ConfigError(f"mask {name!r}: pattern must be a string")
    return MaskConfig.compile(pattern, _parse_modifiers(name, entry.get("modifiers")))


def load_config(data: dict[str, Any] | None) -> dict[str, MaskConfig]:
    """Normalize a config dict (from YAML or inline) into named masks."""
    data = data or {}
    # Support nested under "input_facade" key or flat
    if "input_facade" in data:
        data = data["input_facade"] or {}

    masks = data.get("masks", {}) or {}
    if not isinstance(masks, dict):
        raise ConfigError("'masks' must be a mapping of name to pattern")
    return {str(name): _parse_mask(str(name), entry) for name, entry in masks.items()}


def load_from_yaml(path: str | Path) -> dict[str, MaskConfig]:
    """Load named masks from a YAML file."""
    import yaml  # optional dependency
    with open(Path(path).expanduser(), encoding="utf-8") as f:
        return load_config(yaml.safe_load(f))


def get_mask(masks: dict[str, MaskConfig], name: str) -> MaskConfig:
    try:
        return masks[name]
    except KeyError:
        raise ConfigError(f"unknown mask {name!r}; known: {', '.join(sorted(masks)) or 'none'}") from None
