"""Textual integration for the selection engine."""

from .controller import TextualSelectionAdapter, TextualUIHooks, key_event_from_textual

__all__ = ["TextualSelectionAdapter", "TextualUIHooks", "key_event_from_textual"]
