"""Interfaces the editing core consumes, plus an in-memory implementation.

The real dictionary (database, HTTP API, authentication) lives outside this
package. Anything providing these coroutine methods can be plugged into
:class:`~dictionary_editor.editor.EntryEditor`.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterable
from dataclasses import replace
from typing import Protocol
from urllib.parse import unquote

from dictionary_editor.models import EntrySnapshot, EntryStatus, SessionUser, User, WordSnapshot

logger = logging.getLogger(__name__)

# Statuses visible without the "include drafts" flag.
PUBLIC_STATUSES = frozenset({EntryStatus.PUBLISHED.value})


def normalize_lemma(lemma: str) -> str:
    """Decode a URL-encoded lemma and bring it to a canonical form."""
    return unicodedata.normalize("NFC", unquote(lemma or "")).strip()


class SnapshotLoader(Protocol):
    async def load_word(
        self, lemma: str, *, include_drafts: bool = False
    ) -> WordSnapshot | None: ...


class PersistenceEndpoint(Protocol):
    async def save_word(self, previous_lemma: str, payload: EntrySnapshot) -> bool: ...


class SessionLookup(Protocol):
    async def current_user(self) -> SessionUser | None: ...


class UserDirectory(Protocol):
    async def list_users(self) -> list[User]: ...


class InMemoryDictionary:
    """A dictionary held in a dict, keyed by normalized lemma.

    Implements every collaborator protocol; used by the command line and the
    tests. Saves are last-write-wins: no version check is made.
    """

    def __init__(
        self,
        entries: Iterable[WordSnapshot] = (),
        *,
        users: Iterable[User] = (),
        session_user: SessionUser | None = None,
    ) -> None:
        self._entries: dict[str, WordSnapshot] = {}
        for entry in entries:
            self.add(entry)
        self._users = list(users)
        self.session_user = session_user
        self.reject_saves = False
        self.saves: list[tuple[str, EntrySnapshot]] = []

    def add(self, entry: WordSnapshot) -> None:
        self._entries[normalize_lemma(entry.word.lemma)] = entry

    def get(self, lemma: str) -> WordSnapshot | None:
        return self._entries.get(normalize_lemma(lemma))

    def __len__(self) -> int:
        return len(self._entries)

    async def load_word(
        self, lemma: str, *, include_drafts: bool = False
    ) -> WordSnapshot | None:
        entry = self.get(lemma)
        if entry is None:
            return None
        if not include_drafts and entry.status not in PUBLIC_STATUSES:
            return None
        return entry

    async def save_word(self, previous_lemma: str, payload: EntrySnapshot) -> bool:
        self.saves.append((previous_lemma, payload))
        if self.reject_saves:
            return False
        key = normalize_lemma(previous_lemma)
        existing = self._entries.pop(key, None)
        if existing is None:
            logger.warning("Cannot save %r: no entry stored under that lemma", previous_lemma)
            return False
        self.add(replace(
            existing,
            word=payload.word,
            letter=payload.letter,
            status=payload.status,
            assigned_to=payload.assigned_to,
        ))
        return True

    async def current_user(self) -> SessionUser | None:
        return self.session_user

    async def list_users(self) -> list[User]:
        return list(self._users)
