"""EntryEditor: main entry point for editing one dictionary entry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from dictionary_editor.autosave import AutoSaveScheduler, StatusListener
from dictionary_editor.collaborators import (
    PersistenceEndpoint,
    SessionLookup,
    SnapshotLoader,
    UserDirectory,
    normalize_lemma,
)
from dictionary_editor.config import EditorSettings
from dictionary_editor.example_session import ActiveExample, ExampleEditorSession
from dictionary_editor.exceptions import EntityNotFoundError, PermissionDeniedError
from dictionary_editor.models import (
    EditContext,
    EntrySnapshot,
    Example,
    ExampleDraft,
    Role,
    SaveStatus,
    SessionUser,
    User,
    ValidationResult,
    Word,
    WordSnapshot,
)
from dictionary_editor.permissions import PermissionFlags, evaluate_permissions
from dictionary_editor.store import DocumentStateStore, Subscriber
from dictionary_editor.validator import validate_word

logger = logging.getLogger(__name__)


class EntryEditor:
    """Editing session for one entry: state, rights, drafts and autosave."""

    def __init__(
        self,
        loaded: WordSnapshot,
        *,
        persistence: PersistenceEndpoint,
        current_user: SessionUser | None = None,
        editor_mode: bool = False,
        users: Sequence[User] = (),
        settings: EditorSettings | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        settings = settings or EditorSettings(editor_mode=editor_mode)
        self._created_by = loaded.created_by
        self._word_id = loaded.word_id
        self._comments = loaded.comments
        self._user = current_user
        self._users = tuple(users)
        self._editor_mode = editor_mode
        self._store = DocumentStateStore.from_word_snapshot(loaded)
        self._examples = ExampleEditorSession(self._store)
        self._autosave = AutoSaveScheduler(
            snapshot_provider=lambda: self._store.snapshot,
            save=persistence.save_word,
            last_saved_lemma=loaded.word.lemma,
            enabled=editor_mode,
            config=settings.autosave_config(),
            loop=loop,
        )
        self._unsubscribe = self._store.subscribe(self._autosave.handle_store_change)

    @classmethod
    async def open(
        cls,
        lemma: str,
        *,
        loader: SnapshotLoader,
        persistence: PersistenceEndpoint,
        session: SessionLookup | None = None,
        directory: UserDirectory | None = None,
        editor_mode: bool = False,
        settings: EditorSettings | None = None,
    ) -> EntryEditor:
        """Load *lemma* and start an editing session for it."""
        normalized = normalize_lemma(lemma)
        loaded = await loader.load_word(normalized, include_drafts=editor_mode)
        if loaded is None:
            raise EntityNotFoundError(f"Word not found: {normalized!r}")
        current_user = await session.current_user() if session is not None else None
        users: list[User] = []
        if editor_mode and directory is not None:
            users = await directory.list_users()
        logger.debug("Opened %r (editor_mode=%s)", normalized, editor_mode)
        return cls(
            loaded,
            persistence=persistence,
            current_user=current_user,
            editor_mode=editor_mode,
            users=users,
            settings=settings,
        )

    def close(self) -> None:
        """Stop autosaving; a save already in flight still completes."""
        self._unsubscribe()
        self._autosave.close()
        self._examples.close()

    def __enter__(self) -> EntryEditor:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def word(self) -> Word:
        return self._store.word

    @property
    def snapshot(self) -> EntrySnapshot:
        return self._store.snapshot

    @property
    def letter(self) -> str:
        return self._store.letter

    @property
    def status(self) -> str:
        return self._store.status

    @property
    def assigned_to(self) -> int | None:
        return self._store.assigned_to

    @property
    def created_by(self) -> int | None:
        return self._created_by

    @property
    def word_id(self) -> int | None:
        return self._word_id

    @property
    def comments(self) -> tuple[dict[str, Any], ...]:
        return self._comments

    @property
    def users(self) -> tuple[User, ...]:
        return self._users

    @property
    def editor_mode(self) -> bool:
        return self._editor_mode

    @property
    def save_status(self) -> SaveStatus:
        return self._autosave.status

    @property
    def last_saved_lemma(self) -> str:
        """Key under which the entry is currently stored remotely."""
        return self._autosave.last_saved_lemma

    @property
    def context(self) -> EditContext:
        return EditContext(
            current_user_id=self._user.id if self._user else None,
            current_user_role=self._user.role if self._user else Role.NONE,
            created_by=self._created_by,
            assigned_to=self._store.assigned_to,
            status=self._store.status,
        )

    @property
    def permissions(self) -> PermissionFlags:
        return evaluate_permissions(self.context, editor_mode=self._editor_mode)

    @property
    def active_example(self) -> ActiveExample | None:
        return self._examples.active

    @property
    def example_draft(self) -> ExampleDraft | None:
        return self._examples.draft

    def subscribe(self, callback: Subscriber):
        return self._store.subscribe(callback)

    def add_status_listener(self, listener: StatusListener):
        return self._autosave.add_status_listener(listener)

    def validate(self) -> list[ValidationResult]:
        return validate_word(self.word, letter=self.letter)

    # ------------------------------------------------------------------
    # Modes and saving
    # ------------------------------------------------------------------

    def set_editor_mode(self, enabled: bool) -> None:
        self._editor_mode = enabled
        self._autosave.set_enabled(enabled)
        if not enabled:
            self._examples.close()

    async def flush(self) -> bool:
        """Save now (manual re-trigger after an error, or before leaving)."""
        return await self._autosave.flush()

    async def wait_for_saves(self) -> None:
        await self._autosave.wait_for_saves()

    # ------------------------------------------------------------------
    # Gated mutations
    # ------------------------------------------------------------------

    def _require(self, allowed: bool, action: str) -> None:
        if not allowed:
            logger.warning("Permission denied: cannot %s %r", action, self.word.lemma)
            raise PermissionDeniedError(f"Not allowed to {action}")

    def _require_edit(self, action: str) -> None:
        self._require(self.permissions.can_actually_edit, action)

    def patch_word(self, **changes: Any) -> EntrySnapshot:
        self._require_edit("edit the word")
        return self._store.patch_word(**changes)

    def set_letter(self, letter: str) -> EntrySnapshot:
        self._require_edit("change the letter")
        return self._store.set_letter(letter)

    def set_status(self, status: str) -> EntrySnapshot:
        self._require(self.permissions.can_edit_status, "change the status")
        return self._store.set_status(status)

    def set_assigned_to(self, user_id: int | None) -> EntrySnapshot:
        self._require(self.permissions.can_edit_assignment, "reassign")
        return self._store.set_assigned_to(user_id)

    def patch_definition(self, index: int, **changes: Any) -> EntrySnapshot:
        self._require_edit("edit definitions")
        return self._store.patch_definition(index, **changes)

    def insert_definition(self, after_index: int | None = None) -> int:
        self._require_edit("add definitions")
        index = self._store.insert_definition(after_index)
        self._examples.definition_inserted(index)
        return index

    def delete_definition(self, index: int) -> EntrySnapshot:
        self._require_edit("delete definitions")
        snapshot = self._store.delete_definition(index)
        self._examples.definition_deleted(index)
        return snapshot

    def replace_examples(
        self, definition_index: int, examples: Iterable[Example]
    ) -> EntrySnapshot:
        self._require_edit("edit examples")
        return self._store.replace_examples(definition_index, examples)

    def delete_example(self, definition_index: int, example_index: int) -> EntrySnapshot:
        self._require_edit("delete examples")
        snapshot = self._store.delete_example(definition_index, example_index)
        self._examples.example_deleted(definition_index, example_index)
        return snapshot

    # ------------------------------------------------------------------
    # Example editor
    # ------------------------------------------------------------------

    def add_example(self, definition_index: int) -> ExampleDraft:
        """Append an empty example and open it in the example editor."""
        self._require_edit("add examples")
        index = self._store.add_example(definition_index)
        return self._examples.open(definition_index, index, is_new=True)

    def edit_example(self, definition_index: int, example_index: int) -> ExampleDraft:
        self._require_edit("edit examples")
        return self._examples.open(definition_index, example_index)

    def update_example_draft(self, **fields: str) -> ExampleDraft:
        return self._examples.update(**fields)

    def commit_example(self) -> Example | None:
        self._require_edit("edit examples")
        return self._examples.commit()

    def discard_example(self) -> None:
        self._examples.discard()
