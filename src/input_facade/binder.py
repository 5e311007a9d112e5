"""Element binder — drives a host text field through the masking engine.

The host owns the widget and its lifecycle.  It calls ``bind`` when a field
appears, ``update`` when the mask setting changes, ``handle_input`` for each
native edit event, and ``unbind`` when the field goes away.  Any object that
looks like this works as a field:

    class Field:
        value: str
        selection_end: int | None
        focused: bool                      # optional, defaults to True
        def set_selection_range(self, start: int, end: int) -> None: ...

A wrapper without ``value`` may expose ``query_input()`` returning its first
inner field; the binder then works on that field.

Usage:
    binder = ElementBinder(on_input=lambda field, value: print(value))
    binder.bind(field, "##.##")
    field.value = "1234"
    binder.handle_input(field, InputEvent("insertText"))   # prints "12.34"
"""

from __future__ import annotations
import logging
from typing import Any, Callable

from .masker import mask_value, process_edit
from .store import ConfigStore
from .types import CursorEdit, EditResult, EditType, InputEvent, MaskConfig, Modifiers

logger = logging.getLogger(__name__)

InputListener = Callable[[Any, str], None]


def resolve_field(element: Any) -> Any | None:
    """Return the text field for ``element``, looking inside wrappers."""
    if element is None:
        return None
    if hasattr(element, "value"):
        return element
    finder = getattr(element, "query_input", None)
    if callable(finder):
        return finder()
    return None


def _is_active(field: Any) -> bool:
    return bool(getattr(field, "focused", True))


class ElementBinder:
    """Attaches masks to fields and reacts to their edit events."""

    def __init__(
        self,
        store: ConfigStore | None = None,
        *,
        on_input: InputListener | None = None,
    ) -> None:
        self.store = store if store is not None else ConfigStore()
        self.on_input = on_input

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def bind(
        self,
        element: Any,
        pattern: str | MaskConfig | None,
        modifiers: Modifiers | None = None,
    ) -> EditResult | None:
        """Attach a mask and format the field's current value."""
        field = resolve_field(element)
        if field is None:
            logger.warning("No input field found on %r; mask not bound", element)
            return None

        if isinstance(pattern, MaskConfig):
            config = pattern.copy()
        else:
            config = MaskConfig.compile(pattern, modifiers)
        self.store.set(field, config)
        logger.debug("Bound mask %r (%s) to %r", config.pattern, config.modifiers, field)
        return self._apply(field, config, force=True)

    def update(
        self,
        element: Any,
        pattern: str | None,
        modifiers: Modifiers | None = None,
    ) -> EditResult | None:
        """Switch to a new pattern; re-format if anything changed."""
        field = resolve_field(element)
        config = self.store.get(field) if field is not None else None
        if config is None:
            logger.debug("update() on unbound element %r ignored", element)
            return None
        if not config.update(pattern, modifiers):
            return None
        logger.debug("Mask for %r changed to %r", field, config.pattern)
        return self._apply(field, config, force=True)

    def reapply(self, element: Any) -> EditResult | None:
        """Re-format whatever the field currently holds."""
        field = resolve_field(element)
        config = self.store.get(field) if field is not None else None
        if config is None:
            logger.debug("reapply() on unbound element %r ignored", element)
            return None
        return self._apply(field, config, force=True)

    def rebind(self, old: Any, new: Any) -> EditResult | None:
        """Move a mask to a replacement field (host re-rendered a wrapper)."""
        old_field = resolve_field(old)
        config = self.store.remove(old_field) if old_field is not None else None
        if config is None:
            logger.debug("rebind() from unbound element %r ignored", old)
            return None
        return self.bind(new, config)

    def unbind(self, element: Any) -> None:
        field = resolve_field(element)
        if field is not None and self.store.remove(field) is not None:
            logger.debug("Unbound mask from %r", field)

    def config_for(self, element: Any) -> MaskConfig | None:
        field = resolve_field(element)
        return self.store.get(field) if field is not None else None

    # ------------------------------------------------------------------
    # Edit events
    # ------------------------------------------------------------------

    def handle_input(self, element: Any, event: InputEvent | None = None) -> EditResult | None:
        """Re-mask after a native edit and restore the cursor."""
        event = event or InputEvent()
        if event.synthetic:
            return None

        field = resolve_field(element)
        config = self.store.get(field) if field is not None else None
        if config is None:
            logger.debug("Input on unbound element %r ignored", element)
            return None

        raw = field.value or ""
        origin = getattr(field, "selection_end", None)
        edit = CursorEdit(
            previous_masked=config.last_value,
            raw_input=raw,
            origin_offset=len(raw) if origin is None else origin,
            edit_type=EditType.from_input_type(event.input_type),
        )
        result = process_edit(config, edit)

        field.value = result.masked
        field.unmasked_value = result.unmasked
        if result.cursor_offset is not None and _is_active(field):
            field.set_selection_range(result.cursor_offset, result.cursor_offset)

        changed = result.masked != config.last_value
        config.last_value = result.masked
        if changed:
            self._notify(field, result.masked)
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, field: Any, config: MaskConfig, *, force: bool = False) -> EditResult:
        result = mask_value(config, field.value)
        field.value = result.masked
        field.unmasked_value = result.unmasked
        changed = result.masked != config.last_value
        config.last_value = result.masked
        if force or changed:
            self._notify(field, result.masked)
        return EditResult(masked=result.masked, unmasked=result.unmasked)

    def _notify(self, field: Any, masked: str) -> None:
        if self.on_input is not None:
            self.on_input(field, masked)
