"""Draft buffer for the one example currently open in the example editor."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dictionary_editor.exceptions import DictionaryEditorError, IndexOutOfRangeError
from dictionary_editor.models import EXAMPLE_FIELDS, Example, ExampleDraft
from dictionary_editor.store import DocumentStateStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActiveExample:
    """Where the draft will be written back to."""

    definition_index: int
    example_index: int
    is_new: bool = False


class ExampleEditorSession:
    """At most one example being edited at a time, with commit/discard."""

    def __init__(self, store: DocumentStateStore) -> None:
        self._store = store
        self._active: ActiveExample | None = None
        self._draft: ExampleDraft | None = None

    @property
    def active(self) -> ActiveExample | None:
        return self._active

    @property
    def draft(self) -> ExampleDraft | None:
        return self._draft

    @property
    def is_open(self) -> bool:
        return self._active is not None

    def open(
        self, definition_index: int, example_index: int, *, is_new: bool = False
    ) -> ExampleDraft:
        """Start editing an example, replacing any session already open."""
        examples = self._store.examples(definition_index)
        if not isinstance(example_index, int) or not 0 <= example_index < len(examples):
            raise IndexOutOfRangeError(
                f"Example index {example_index!r} out of range (0..{len(examples) - 1})"
            )
        current = examples[example_index]
        self._active = ActiveExample(definition_index, example_index, is_new)
        self._draft = ExampleDraft.from_example(current)
        return self._draft

    def update(self, **fields: str) -> ExampleDraft:
        if self._draft is None:
            raise DictionaryEditorError("No example is being edited")
        for name, value in fields.items():
            if name not in EXAMPLE_FIELDS:
                raise TypeError(f"Unknown example field: {name}")
            setattr(self._draft, name, value or "")
        return self._draft

    def commit(self) -> Example | None:
        """Write the trimmed draft back at its recorded index and close."""
        if self._active is None or self._draft is None:
            self.close()
            return None
        example = self._draft.to_example()
        active = self._active
        # Stays open if the write is rejected
        self._store.set_example(active.definition_index, active.example_index, example)
        self.close()
        return example

    def discard(self) -> None:
        """Close without saving; a freshly added example is removed again."""
        active = self._active
        self.close()
        if active is None or not active.is_new:
            return
        examples = list(self._store.examples(active.definition_index))
        if 0 <= active.example_index < len(examples):
            del examples[active.example_index]
            self._store.replace_examples(active.definition_index, examples)

    def close(self) -> None:
        self._active = None
        self._draft = None

    # ------------------------------------------------------------------
    # Keeping the recorded position valid across structural edits
    # ------------------------------------------------------------------

    def example_deleted(self, definition_index: int, example_index: int) -> None:
        active = self._active
        if active is None or active.definition_index != definition_index:
            return
        if active.example_index == example_index:
            logger.debug("Closing example editor: its example was deleted")
            self.close()
        elif active.example_index > example_index:
            self._active = ActiveExample(
                definition_index, active.example_index - 1, active.is_new
            )

    def definition_deleted(self, definition_index: int) -> None:
        active = self._active
        if active is None:
            return
        if active.definition_index == definition_index:
            logger.debug("Closing example editor: its definition was deleted")
            self.close()
        elif active.definition_index > definition_index:
            self._active = ActiveExample(
                active.definition_index - 1, active.example_index, active.is_new
            )

    def definition_inserted(self, definition_index: int) -> None:
        active = self._active
        if active is not None and active.definition_index >= definition_index:
            self._active = ActiveExample(
                active.definition_index + 1, active.example_index, active.is_new
            )
