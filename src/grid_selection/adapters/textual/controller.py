"""Textual adapter feeding key presses into a SelectionModel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from textual import events

from grid_selection.selections import KeyEvent, SelectionModel, SelectionSnapshot

_TEXTUAL_ARROWS = {
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def key_event_from_textual(key: str) -> KeyEvent:
    """Translate a Textual key name such as ``"shift+right"``."""

    *modifiers, name = key.lower().split("+")
    return KeyEvent(key=_TEXTUAL_ARROWS.get(name, name), shift_key="shift" in modifiers)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_selection: Callable[[SelectionSnapshot], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualSelectionAdapter:
    """Bridges a SelectionModel and its bus events to Textual callbacks."""

    def __init__(self, model: SelectionModel, hooks: TextualUIHooks) -> None:
        self.model = model
        self.hooks = hooks
        self.model.bus.subscribe("selection.changed", self._handle_change)
        self._refresh()

    def handle_textual_key(self, key: str) -> bool:
        """Resize the active selection for a shift+arrow key; returns ``changed``."""

        event = key_event_from_textual(key)
        self._log_state("key ->", key=key, shift=event.shift_key)
        if event.direction is None or not event.shift_key:
            self.hooks.update_status("ignored")
            self._log_state("result <-", status="ignored")
            return False

        changed = self.model.resize_from_key(event)
        status = "resized" if changed else "unchanged"
        self.hooks.update_status(status)
        if not changed:
            self._refresh()
        self._log_state("result <-", status=status)
        return changed

    def on_key(self, event: events.Key) -> bool:
        return self.handle_textual_key(event.key)

    def _handle_change(self, payload: object | None) -> None:
        self._log_state("event ->", event="selection.changed", payload=payload)
        self.hooks.handle_event("selection.changed", payload)
        self._refresh()

    def _refresh(self) -> None:
        self.hooks.update_selection(self.model.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "model": self.model.name,
            "revision": self.model.revision(),
            "active_cell": self.model.active_cell,
            "count": len(self.model.selections),
        }


__all__ = ["TextualSelectionAdapter", "TextualUIHooks", "key_event_from_textual"]
