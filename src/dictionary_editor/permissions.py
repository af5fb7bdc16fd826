"""Mutation rights derived from role, ownership and entry status."""

from __future__ import annotations

from dataclasses import dataclass

from dictionary_editor.models import EditContext, EntryStatus, Role

# Statuses in which the entry body may be edited at all.
EDITABLE_STATUSES = frozenset({
    EntryStatus.PREREDACTED.value,
    EntryStatus.INCLUDED.value,
    EntryStatus.IMPORTED.value,
})

_ADMIN_ROLES = frozenset({Role.SUPERADMIN, Role.ADMIN})
_ASSIGNER_ROLES = frozenset({Role.SUPERADMIN, Role.ADMIN, Role.COORDINATOR})


@dataclass(frozen=True, slots=True)
class PermissionFlags:
    """Derived mutation rights for one editing context."""

    can_edit: bool
    can_assign: bool
    can_change_status: bool
    can_actually_edit: bool

    @property
    def can_edit_assignment(self) -> bool:
        """Whether the "assigned to" field is editable.

        Full edit rights also unlock reassignment, not only assigner roles.
        """
        return self.can_assign or self.can_actually_edit

    @property
    def can_edit_status(self) -> bool:
        return self.can_actually_edit or self.can_change_status


def evaluate_permissions(context: EditContext, *, editor_mode: bool) -> PermissionFlags:
    """Compute the permission flags for *context*.

    Pure function of its inputs; call it again whenever any input changes.
    """
    role = Role.parse(context.current_user_role)
    status = str(getattr(context.status, "value", context.status))
    # Plain equality: a missing user id matches a missing creator.
    is_creator = context.current_user_id == context.created_by
    is_assignee = (
        context.assigned_to is not None
        and context.current_user_id == context.assigned_to
    )

    can_edit = role in _ADMIN_ROLES or is_creator or is_assignee
    can_assign = role in _ASSIGNER_ROLES or is_creator
    can_change_status = (
        (role is Role.ADMIN and status != EntryStatus.PREREDACTED.value)
        or role is Role.SUPERADMIN
    )
    can_actually_edit = (
        editor_mode and can_edit and status in EDITABLE_STATUSES
    )
    return PermissionFlags(
        can_edit=can_edit,
        can_assign=can_assign,
        can_change_status=can_change_status,
        can_actually_edit=can_actually_edit,
    )
