"""Shared test fixtures for dictionary-editor."""

import pytest

from dictionary_editor.autosave import AutoSaveConfig
from dictionary_editor.collaborators import InMemoryDictionary
from dictionary_editor.config import EditorSettings
from dictionary_editor.models import (
    Definition,
    EntrySnapshot,
    Example,
    Role,
    SessionUser,
    User,
    Word,
    WordSnapshot,
)
from dictionary_editor.store import DocumentStateStore

# Short timings so autosave tests finish quickly.
FAST = AutoSaveConfig(quiet_period=0.05, saved_display=0.05, error_display=0.05)
FAST_SETTINGS = EditorSettings(quiet_period=0.05, saved_display=0.05, error_display=0.05)


def make_word(lemma="casa"):
    return Word(
        lemma=lemma,
        root="casa",
        values=(
            Definition(
                number=1,
                meaning="Edificio para habitar",
                categories=("f.",),
                example=Example(value="Vive en una casa grande", author="Anónimo"),
            ),
            Definition(
                number=2,
                meaning="Familia o linaje",
                categories=("f.",),
                example=(
                    Example(value="La casa de Austria"),
                    Example(value="Es de buena casa", source="Tradición oral"),
                ),
            ),
        ),
    )


def make_entry(lemma="casa", *, status="preredacted", assigned_to=7, created_by=5):
    return WordSnapshot(
        word=make_word(lemma),
        letter=lemma[0],
        status=status,
        assigned_to=assigned_to,
        created_by=created_by,
        word_id=42,
    )


@pytest.fixture
def word():
    return make_word()


@pytest.fixture
def entry():
    return make_entry()


@pytest.fixture
def store(word):
    """Store over a two-definition word; the second has two examples."""
    return DocumentStateStore(EntrySnapshot(word=word, letter="c", status="preredacted"))


@pytest.fixture
def users():
    return [
        User(id=1, username="root", role=Role.SUPERADMIN),
        User(id=5, username="creator", role=Role.LEXICOGRAPHER),
        User(id=7, username="assignee", role=Role.LEXICOGRAPHER),
    ]


@pytest.fixture
def dictionary(entry, users):
    """In-memory dictionary holding 'casa', signed in as its assignee."""
    return InMemoryDictionary(
        [entry],
        users=users,
        session_user=SessionUser(id=7, role=Role.LEXICOGRAPHER),
    )
