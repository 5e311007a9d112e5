"""Config store — per-field mask configuration, keyed by field identity.

Design goals:
  - Non-owning: holds a weak reference only, so a dropped field takes its
    entry with it
  - Identity-keyed: two fields that compare equal still get separate entries
  - Fast: one dict lookup per edit event
"""

from __future__ import annotations
import logging
import weakref
from typing import Any

from .types import MaskConfig

logger = logging.getLogger(__name__)


class ConfigStore:
    """Side table mapping a bound field to its live ``MaskConfig``."""

    __slots__ = ("_entries", "__weakref__")

    def __init__(self) -> None:
        # id(field) → (weakref to field, config)
        self._entries: dict[int, tuple[weakref.ref, MaskConfig]] = {}

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def set(self, element: Any, config: MaskConfig) -> None:
        """Associate ``config`` with ``element``, replacing any previous one."""
        key = id(element)
        entry = self._entries.get(key)
        if entry is not None and entry[0]() is element:
            self._entries[key] = (entry[0], config)
            return

        store_ref = weakref.ref(self)

        def _evict(ref: weakref.ref, key: int = key) -> None:
            store = store_ref()
            if store is not None:
                store._discard(key, ref)

        self._entries[key] = (weakref.ref(element, _evict), config)

    def get(self, element: Any) -> MaskConfig | None:
        """Return the element's config, or None if it was never bound."""
        entry = self._entries.get(id(element))
        if entry is None or entry[0]() is not element:
            return None
        return entry[1]

    def remove(self, element: Any) -> MaskConfig | None:
        """Drop the element's entry eagerly.  Returns the removed config."""
        key = id(element)
        entry = self._entries.get(key)
        if entry is None or entry[0]() is not element:
            return None
        del self._entries[key]
        return entry[1]

    def _discard(self, key: int, ref: weakref.ref) -> None:
        entry = self._entries.get(key)
        if entry is not None and entry[0] is ref:
            del self._entries[key]
            logger.debug("Evicted mask config for collected field %#x", key)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __contains__(self, element: Any) -> bool:
        return self.get(element) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
