"""Domain model dataclasses and enums for dictionary-editor."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

# Letter classification of an entry, in alphabetical order (ñ after n).
LETTERS = "abcdefghijklmnñopqrstuvwxyz"

# Meaning given to a freshly inserted definition.
PLACEHOLDER_MEANING = "Nueva definición"

EXAMPLE_FIELDS = ("value", "author", "title", "source", "date", "page")

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Role(str, Enum):
    """Editorial role of the signed-in user."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    COORDINATOR = "coordinator"
    LEXICOGRAPHER = "lexicographer"
    NONE = "none"

    @classmethod
    def parse(cls, value: str | Role | None) -> Role:
        """Map a raw role string to a Role; unknown or missing is NONE."""
        if isinstance(value, Role):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.NONE


class EntryStatus(str, Enum):
    """Editorial status values known to this package.

    The dictionary defines the authoritative list; statuses travel as plain
    strings so values missing here still round-trip.
    """

    DRAFT = "draft"
    IMPORTED = "imported"
    INCLUDED = "included"
    PREREDACTED = "preredacted"
    REDACTED = "redacted"
    REVIEWED = "reviewed"
    REVISED = "revised"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class SaveStatus(str, Enum):
    """Autosave indicator shown to the editor."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class ValidationSeverity(str, Enum):
    """Severity level for validation results."""

    ERROR = "ERROR"
    WARNING = "WARNING"


# ---------------------------------------------------------------------------
# Document dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Example:
    """A usage citation with optional bibliographic metadata."""

    value: str = ""
    author: str | None = None
    title: str | None = None
    source: str | None = None
    date: str | None = None
    page: str | None = None


@dataclass(frozen=True, slots=True)
class Definition:
    """One numbered sense of a lemma."""

    number: int
    meaning: str | None = None
    origin: str | None = None
    remission: str | None = None
    observation: str | None = None
    categories: tuple[str, ...] = ()
    styles: tuple[str, ...] | None = None
    example: Example | tuple[Example, ...] = field(default_factory=Example)
    variant: str | None = None

    @property
    def examples(self) -> tuple[Example, ...]:
        """The examples as a tuple, whatever shape they are stored in."""
        if isinstance(self.example, Example):
            return (self.example,)
        return tuple(self.example)

    def with_examples(self, examples: tuple[Example, ...] | list[Example]) -> Definition:
        """Return a copy holding *examples*; a single one is stored bare."""
        normalized = tuple(examples) or (Example(),)
        stored = normalized[0] if len(normalized) == 1 else normalized
        return replace(self, example=stored)


@dataclass(frozen=True, slots=True)
class Word:
    """A dictionary entry: lemma, root word and ordered definitions."""

    lemma: str
    root: str = ""
    values: tuple[Definition, ...] = ()


@dataclass(frozen=True, slots=True)
class EntrySnapshot:
    """Everything the autosave sends: the word plus its tracked metadata."""

    word: Word
    letter: str
    status: str
    assigned_to: int | None = None


# ---------------------------------------------------------------------------
# Editing context and drafts
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EditContext:
    """Who is editing and the ownership facts that decide their rights."""

    current_user_id: int | None
    current_user_role: Role
    created_by: int | None
    assigned_to: int | None
    status: str


@dataclass(slots=True)
class ExampleDraft:
    """Raw, editable string fields of an example being edited."""

    value: str = ""
    author: str = ""
    title: str = ""
    source: str = ""
    date: str = ""
    page: str = ""

    @classmethod
    def from_example(cls, example: Example) -> ExampleDraft:
        return cls(**{name: getattr(example, name) or "" for name in EXAMPLE_FIELDS})

    def to_example(self) -> Example:
        """Trim every field and drop the optional ones left blank."""
        optional = {}
        for name in EXAMPLE_FIELDS[1:]:
            text = getattr(self, name).strip()
            if text:
                optional[name] = text
        return Example(value=self.value.strip(), **optional)


# ---------------------------------------------------------------------------
# Collaborator records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SessionUser:
    """The signed-in user as reported by the session lookup."""

    id: int
    role: Role


@dataclass(frozen=True, slots=True)
class User:
    """A user listed in the assignment directory."""

    id: int
    username: str
    role: Role


@dataclass(frozen=True, slots=True)
class WordSnapshot:
    """An entry as loaded from the dictionary for an editing session."""

    word: Word
    letter: str
    status: str
    assigned_to: int | None
    created_by: int | None
    word_id: int | None = None
    comments: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """A single validation finding (error or warning)."""

    rule_id: str
    severity: str
    entity_type: str
    entity_id: str
    message: str
    details: dict[str, Any] | None
