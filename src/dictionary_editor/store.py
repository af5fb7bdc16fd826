"""In-memory owner of the entry being edited.

Every mutation builds a new immutable :class:`EntrySnapshot`, installs it in
one assignment and then notifies subscribers, so readers never observe a
half-applied change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from dictionary_editor.exceptions import IndexOutOfRangeError, ValidationError
from dictionary_editor.models import (
    LETTERS,
    PLACEHOLDER_MEANING,
    Definition,
    EntrySnapshot,
    Example,
    Word,
    WordSnapshot,
)

logger = logging.getLogger(__name__)

_WORD_FIELDS = frozenset({"lemma", "root"})
_DEFINITION_FIELDS = frozenset(
    f.name for f in fields(Definition) if f.name not in ("number", "example")
)


class ChangeKind(str, Enum):
    """What part of the entry a store mutation touched."""

    WORD = "word"
    DEFINITIONS = "definitions"
    EXAMPLES = "examples"
    LETTER = "letter"
    STATUS = "status"
    ASSIGNED_TO = "assigned_to"
    REPLACE = "replace"


@dataclass(frozen=True, slots=True)
class StoreChange:
    """Notification delivered to subscribers after a mutation."""

    kind: ChangeKind
    snapshot: EntrySnapshot
    definition_index: int | None = None
    example_index: int | None = None


Subscriber = Callable[[StoreChange], None]


def _renumber(values: Iterable[Definition]) -> tuple[Definition, ...]:
    """Number definitions by position; an empty example list gets one blank example."""
    normalized = []
    for i, d in enumerate(values):
        if d.number != i + 1:
            d = replace(d, number=i + 1)
        if not d.examples:
            d = d.with_examples(())
        normalized.append(d)
    return tuple(normalized)


def _check_index(index: int, length: int, what: str) -> None:
    if not isinstance(index, int) or not 0 <= index < length:
        raise IndexOutOfRangeError(
            f"{what} index {index!r} out of range (0..{length - 1})"
        )


def new_definition(number: int) -> Definition:
    """Placeholder definition used when the editor adds a sense."""
    return Definition(number=number, meaning=PLACEHOLDER_MEANING, example=Example())


def normalize_letter(letter: str) -> str:
    """Lowercase *letter* and check it is one of :data:`LETTERS`."""
    normalized = (letter or "").strip().lower()
    if len(normalized) != 1 or normalized not in LETTERS:
        raise ValidationError(f"Invalid letter: {letter!r}")
    return normalized


class DocumentStateStore:
    """Owns the entry snapshot for the duration of an editing session."""

    def __init__(self, snapshot: EntrySnapshot) -> None:
        self._snapshot = replace(
            snapshot, word=replace(snapshot.word, values=_renumber(snapshot.word.values))
        )
        self._subscribers: list[Subscriber] = []

    @classmethod
    def from_word_snapshot(cls, loaded: WordSnapshot) -> DocumentStateStore:
        return cls(EntrySnapshot(
            word=loaded.word,
            letter=loaded.letter,
            status=loaded.status,
            assigned_to=loaded.assigned_to,
        ))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> EntrySnapshot:
        return self._snapshot

    @property
    def word(self) -> Word:
        return self._snapshot.word

    @property
    def letter(self) -> str:
        return self._snapshot.letter

    @property
    def status(self) -> str:
        return self._snapshot.status

    @property
    def assigned_to(self) -> int | None:
        return self._snapshot.assigned_to

    def definition(self, index: int) -> Definition:
        values = self._snapshot.word.values
        _check_index(index, len(values), "Definition")
        return values[index]

    def examples(self, definition_index: int) -> tuple[Example, ...]:
        return self.definition(definition_index).examples

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback*; the returned function unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, change: StoreChange) -> None:
        for callback in list(self._subscribers):
            try:
                callback(change)
            except Exception:
                logger.exception("Store subscriber failed on %s change", change.kind.value)

    def _install(
        self,
        snapshot: EntrySnapshot,
        kind: ChangeKind,
        *,
        definition_index: int | None = None,
        example_index: int | None = None,
    ) -> EntrySnapshot:
        self._snapshot = snapshot
        logger.debug("Applied %s change to %r", kind.value, snapshot.word.lemma)
        self._publish(StoreChange(
            kind=kind,
            snapshot=snapshot,
            definition_index=definition_index,
            example_index=example_index,
        ))
        return snapshot

    def _install_word(self, word: Word, kind: ChangeKind, **where: int | None) -> EntrySnapshot:
        return self._install(replace(self._snapshot, word=word), kind, **where)

    def replace_snapshot(self, snapshot: EntrySnapshot) -> EntrySnapshot:
        """Swap in a whole new entry snapshot."""
        word = replace(snapshot.word, values=_renumber(snapshot.word.values))
        return self._install(replace(snapshot, word=word), ChangeKind.REPLACE)

    # ------------------------------------------------------------------
    # Word-level fields
    # ------------------------------------------------------------------

    def patch_word(self, **changes: Any) -> EntrySnapshot:
        """Update the lemma and/or root of the word."""
        unknown = set(changes) - _WORD_FIELDS
        if unknown:
            raise TypeError(f"Unknown word field(s): {', '.join(sorted(unknown))}")
        normalized = {k: "" if v is None else v for k, v in changes.items()}
        return self._install_word(replace(self.word, **normalized), ChangeKind.WORD)

    def set_letter(self, letter: str) -> EntrySnapshot:
        normalized = normalize_letter(letter)
        return self._install(replace(self._snapshot, letter=normalized), ChangeKind.LETTER)

    def set_status(self, status: str) -> EntrySnapshot:
        value = str(getattr(status, "value", status))
        return self._install(replace(self._snapshot, status=value), ChangeKind.STATUS)

    def set_assigned_to(self, user_id: int | None) -> EntrySnapshot:
        return self._install(
            replace(self._snapshot, assigned_to=user_id), ChangeKind.ASSIGNED_TO
        )

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    def patch_definition(self, index: int, **changes: Any) -> EntrySnapshot:
        """Update metadata fields of the definition at *index*."""
        current = self.definition(index)
        unknown = set(changes) - _DEFINITION_FIELDS
        if unknown:
            raise TypeError(f"Unknown definition field(s): {', '.join(sorted(unknown))}")
        if "categories" in changes:
            changes["categories"] = tuple(changes["categories"] or ())
        if "styles" in changes:
            changes["styles"] = tuple(changes["styles"]) if changes["styles"] else None

        values = list(self.word.values)
        values[index] = replace(current, **changes)
        return self._install_word(
            replace(self.word, values=tuple(values)),
            ChangeKind.DEFINITIONS,
            definition_index=index,
        )

    def insert_definition(self, after_index: int | None = None) -> int:
        """Insert a placeholder definition and return its index.

        With *after_index* the new definition goes right after it, otherwise
        at the end. Numbers are reassigned for the whole sequence.
        """
        values = list(self.word.values)
        if after_index is None:
            position = len(values)
        else:
            if not isinstance(after_index, int) or not -1 <= after_index < len(values):
                raise IndexOutOfRangeError(
                    f"Cannot insert after definition {after_index!r} "
                    f"(word has {len(values)})"
                )
            position = after_index + 1
        values.insert(position, new_definition(position + 1))
        self._install_word(
            replace(self.word, values=_renumber(values)),
            ChangeKind.DEFINITIONS,
            definition_index=position,
        )
        return position

    def delete_definition(self, index: int) -> EntrySnapshot:
        values = list(self.word.values)
        _check_index(index, len(values), "Definition")
        del values[index]
        return self._install_word(
            replace(self.word, values=_renumber(values)),
            ChangeKind.DEFINITIONS,
            definition_index=index,
        )

    # ------------------------------------------------------------------
    # Examples
    # ------------------------------------------------------------------

    def replace_examples(
        self, definition_index: int, examples: Iterable[Example]
    ) -> EntrySnapshot:
        """Replace the examples of a definition; an empty list keeps one blank example."""
        current = self.definition(definition_index)
        values = list(self.word.values)
        values[definition_index] = current.with_examples(tuple(examples))
        return self._install_word(
            replace(self.word, values=tuple(values)),
            ChangeKind.EXAMPLES,
            definition_index=definition_index,
        )

    def add_example(self, definition_index: int) -> int:
        """Append an empty example and return its index."""
        examples = self.examples(definition_index)
        self.replace_examples(definition_index, examples + (Example(),))
        return len(examples)

    def set_example(
        self, definition_index: int, example_index: int, example: Example
    ) -> EntrySnapshot:
        examples = list(self.examples(definition_index))
        _check_index(example_index, len(examples), "Example")
        examples[example_index] = example
        return self.replace_examples(definition_index, examples)

    def delete_example(self, definition_index: int, example_index: int) -> EntrySnapshot:
        """Remove one example; the last example of a definition cannot go."""
        examples = list(self.examples(definition_index))
        _check_index(example_index, len(examples), "Example")
        if len(examples) <= 1:
            logger.warning(
                "Refused to delete the only example of definition %d of %r",
                definition_index + 1, self.word.lemma,
            )
            raise ValidationError("A definition must keep at least one example")
        del examples[example_index]
        return self.replace_examples(definition_index, examples)
