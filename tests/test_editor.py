"""Tests for the EntryEditor facade."""

import asyncio

import pytest

from dictionary_editor.editor import EntryEditor
from dictionary_editor.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from dictionary_editor.models import Example, Role, SaveStatus, SessionUser

from conftest import FAST_SETTINGS, make_entry


async def open_editor(dictionary, lemma="casa", editor_mode=True):
    return await EntryEditor.open(
        lemma,
        loader=dictionary,
        persistence=dictionary,
        session=dictionary,
        directory=dictionary,
        editor_mode=editor_mode,
        settings=FAST_SETTINGS,
    )


async def settle(editor, delay=0.2):
    await asyncio.sleep(delay)
    await editor.wait_for_saves()


class TestOpen:

    @pytest.mark.asyncio
    async def test_open_loads_entry_and_user(self, dictionary):
        editor = await open_editor(dictionary)
        assert editor.word.lemma == "casa"
        assert editor.created_by == 5
        assert editor.word_id == 42
        assert editor.context.current_user_id == 7
        assert [u.username for u in editor.users] == ["root", "creator", "assignee"]
        assert editor.save_status is SaveStatus.IDLE
        editor.close()

    @pytest.mark.asyncio
    async def test_open_url_encoded_lemma(self, dictionary):
        editor = await open_editor(dictionary, lemma="%20casa")
        assert editor.word.lemma == "casa"
        editor.close()

    @pytest.mark.asyncio
    async def test_missing_lemma(self, dictionary):
        with pytest.raises(EntityNotFoundError):
            await open_editor(dictionary, lemma="perro")

    @pytest.mark.asyncio
    async def test_drafts_hidden_outside_editor_mode(self, dictionary):
        with pytest.raises(EntityNotFoundError):
            await open_editor(dictionary, editor_mode=False)

    @pytest.mark.asyncio
    async def test_published_visible_outside_editor_mode(self, dictionary):
        dictionary.add(make_entry("perro", status="published"))
        editor = await open_editor(dictionary, lemma="perro", editor_mode=False)
        assert editor.permissions.can_actually_edit is False
        assert editor.users == ()
        editor.close()


class TestGating:

    def test_read_only_mode_rejects_mutations(self, entry, dictionary):
        editor = EntryEditor(
            entry,
            persistence=dictionary,
            current_user=SessionUser(id=7, role=Role.LEXICOGRAPHER),
            editor_mode=False,
        )
        with pytest.raises(PermissionDeniedError):
            editor.patch_word(lemma="x")
        with pytest.raises(PermissionDeniedError):
            editor.insert_definition()
        with pytest.raises(PermissionDeniedError):
            editor.add_example(0)
        assert editor.word.lemma == "casa"

    def test_stranger_cannot_edit(self, entry, dictionary):
        editor = EntryEditor(
            entry,
            persistence=dictionary,
            current_user=SessionUser(id=99, role=Role.LEXICOGRAPHER),
            editor_mode=True,
        )
        with pytest.raises(PermissionDeniedError):
            editor.patch_definition(0, meaning="x")
        with pytest.raises(PermissionDeniedError):
            editor.set_assigned_to(99)
        with pytest.raises(PermissionDeniedError):
            editor.set_status("included")

    def test_anonymous_cannot_edit(self, entry, dictionary):
        editor = EntryEditor(entry, persistence=dictionary, editor_mode=True)
        assert editor.permissions.can_actually_edit is False

    @pytest.mark.asyncio
    async def test_superadmin_changes_status_in_read_only_entry(self, dictionary):
        dictionary.add(make_entry("perro", status="reviewed"))
        dictionary.session_user = SessionUser(id=1, role=Role.SUPERADMIN)
        editor = await open_editor(dictionary, lemma="perro")
        assert editor.permissions.can_actually_edit is False
        editor.set_status("published")
        assert editor.status == "published"
        with pytest.raises(PermissionDeniedError):
            editor.set_letter("q")
        editor.close()

    @pytest.mark.asyncio
    async def test_rights_follow_status_change(self, dictionary):
        dictionary.session_user = SessionUser(id=1, role=Role.ADMIN)
        editor = await open_editor(dictionary)
        editor.set_status("redacted")
        assert editor.permissions.can_actually_edit is False
        with pytest.raises(PermissionDeniedError):
            editor.patch_word(root="x")
        editor.close()

    @pytest.mark.asyncio
    async def test_leaving_editor_mode_closes_example(self, dictionary):
        editor = await open_editor(dictionary)
        editor.edit_example(0, 0)
        editor.set_editor_mode(False)
        assert editor.active_example is None
        assert editor.permissions.can_actually_edit is False
        editor.close()


class TestEditing:

    @pytest.mark.asyncio
    async def test_edits_are_autosaved(self, dictionary):
        editor = await open_editor(dictionary)
        editor.patch_definition(0, meaning="Vivienda")
        editor.set_letter("C")
        await settle(editor)

        assert len(dictionary.saves) == 1
        key, payload = dictionary.saves[0]
        assert key == "casa"
        assert payload.letter == "c"
        assert dictionary.get("casa").word.values[0].meaning == "Vivienda"
        editor.close()

    @pytest.mark.asyncio
    async def test_rename_moves_stored_entry(self, dictionary):
        editor = await open_editor(dictionary)
        editor.patch_word(lemma="casita")
        await settle(editor)
        editor.patch_definition(0, meaning="Casa pequeña")
        await settle(editor)

        assert [key for key, _ in dictionary.saves] == ["casa", "casita"]
        assert dictionary.get("casa") is None
        assert dictionary.get("casita").word.values[0].meaning == "Casa pequeña"
        assert editor.last_saved_lemma == "casita"
        editor.close()

    @pytest.mark.asyncio
    async def test_rejected_save_sets_error(self, dictionary):
        dictionary.reject_saves = True
        editor = await open_editor(dictionary)
        statuses = []
        editor.add_status_listener(statuses.append)
        editor.set_letter("d")
        await settle(editor, delay=0.08)
        assert statuses[:2] == [SaveStatus.SAVING, SaveStatus.ERROR]
        assert editor.letter == "d"
        dictionary.reject_saves = False
        assert await editor.flush() is True
        editor.close()

    @pytest.mark.asyncio
    async def test_add_example_then_commit(self, dictionary):
        editor = await open_editor(dictionary)
        editor.add_example(0)
        assert editor.active_example.is_new
        editor.update_example_draft(value=" Casa de campo ", author=" ")
        committed = editor.commit_example()
        assert committed == Example(value="Casa de campo")
        assert editor.word.values[0].examples[1] == committed
        editor.close()

    @pytest.mark.asyncio
    async def test_add_example_then_discard(self, dictionary):
        editor = await open_editor(dictionary)
        before = editor.word.values[1].examples
        editor.add_example(1)
        editor.discard_example()
        assert editor.word.values[1].examples == before
        editor.close()

    @pytest.mark.asyncio
    async def test_delete_definition_shifts_open_example(self, dictionary):
        editor = await open_editor(dictionary)
        editor.edit_example(1, 0)
        editor.delete_definition(0)
        assert editor.active_example.definition_index == 0
        editor.update_example_draft(value="La casa real")
        editor.commit_example()
        assert editor.word.values[0].examples[0].value == "La casa real"
        editor.close()

    @pytest.mark.asyncio
    async def test_insert_definition_shifts_open_example(self, dictionary):
        editor = await open_editor(dictionary)
        editor.edit_example(1, 1)
        editor.insert_definition(-1)
        assert editor.active_example.definition_index == 2
        editor.close()

    @pytest.mark.asyncio
    async def test_delete_last_example_rejected(self, dictionary):
        editor = await open_editor(dictionary)
        with pytest.raises(ValidationError):
            editor.delete_example(0, 0)
        assert len(editor.word.values[0].examples) == 1
        editor.close()

    @pytest.mark.asyncio
    async def test_assignee_can_reassign_while_editing(self, dictionary):
        editor = await open_editor(dictionary)
        assert editor.permissions.can_assign is False
        editor.set_assigned_to(5)
        assert editor.assigned_to == 5
        # No longer the assignee
        assert editor.permissions.can_actually_edit is False
        editor.close()

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, dictionary):
        with await open_editor(dictionary) as editor:
            editor.set_letter("d")
        await settle(editor)
        assert dictionary.saves == []

    @pytest.mark.asyncio
    async def test_validate(self, dictionary):
        editor = await open_editor(dictionary)
        editor.insert_definition()
        rule_ids = {r.rule_id for r in editor.validate()}
        assert "VAL-DEF-002" in rule_ids
        editor.close()
