"""
Validation for batch change requests.

Provides schema validation (required fields, types) and, when the target
word is given, referential validation (lemma matches, definition numbers
exist).
"""
from __future__ import annotations

from typing import List, Optional

from ..models import LETTERS, Word
from .schema import (
    NUMBER_FIELDS,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    Change,
    ChangeRequest,
    OperationType,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)


def validate_change_request(
    request: ChangeRequest,
    word: Optional[Word] = None,
) -> ValidationResult:
    """Validate a change request.

    Args:
        request: The change request to validate
        word: If given, check the request targets this word and that the
            definition numbers it references exist

    Returns:
        ValidationResult with errors and warnings
    """
    errors: List[ValidationError] = []
    warnings: List[ValidationWarning] = []

    if word is not None and request.lemma != word.lemma:
        errors.append(
            ValidationError(
                index=-1,
                operation="",
                field="lemma",
                message=f"Request targets '{request.lemma}' but the entry is '{word.lemma}'",
            )
        )

    # Definition count as it evolves through the request
    definition_count = len(word.values) if word is not None else None

    for i, change in enumerate(request.changes):
        change_errors, change_warnings = _validate_change(change, i, definition_count)
        errors.extend(change_errors)
        warnings.extend(change_warnings)
        if definition_count is not None and not change_errors:
            if change.operation == OperationType.INSERT_DEFINITION.value:
                definition_count += 1
            elif change.operation == OperationType.DELETE_DEFINITION.value:
                definition_count -= 1

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_change(
    change: Change,
    index: int,
    definition_count: Optional[int],
) -> tuple[List[ValidationError], List[ValidationWarning]]:
    """Validate a single change operation.

    Returns:
        Tuple of (errors, warnings)
    """
    errors: List[ValidationError] = []
    warnings: List[ValidationWarning] = []

    def error(field: str, message: str) -> None:
        errors.append(
            ValidationError(
                index=index,
                operation=change.operation,
                field=field,
                message=message,
                line_number=change.line_number,
            )
        )

    valid_operations = {op.value for op in OperationType}
    if change.operation not in valid_operations:
        error(
            "operation",
            f"Unknown operation '{change.operation}'. Valid: {', '.join(sorted(valid_operations))}",
        )
        return errors, warnings

    op = change.operation
    required = REQUIRED_FIELDS.get(op, [])
    for field in required:
        if field not in change.params or change.params[field] is None:
            error(field, f"Missing required field '{field}'")

    known = set(required) | set(OPTIONAL_FIELDS.get(op, []))
    for field in sorted(set(change.params) - known):
        warnings.append(
            ValidationWarning(
                index=index,
                operation=op,
                message=f"Ignoring unknown field '{field}'",
                line_number=change.line_number,
            )
        )

    for field in NUMBER_FIELDS:
        value = change.params.get(field)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            error(field, f"Field '{field}' must be a positive integer")
        elif (
            field == "definition"
            and definition_count is not None
            and value > definition_count
        ):
            error(field, f"Definition {value} does not exist (entry has {definition_count})")
        elif (
            field == "after"
            and definition_count is not None
            and value > definition_count
        ):
            error(field, f"Cannot insert after definition {value} (entry has {definition_count})")

    if op == OperationType.SET_LETTER.value:
        letter = str(change.params.get("letter") or "").lower()
        if len(letter) != 1 or letter not in LETTERS:
            error("letter", f"Invalid letter '{change.params.get('letter')}'")

    if op == OperationType.SET_ASSIGNED_TO.value:
        user = change.params.get("user")
        if user is not None and (isinstance(user, bool) or not isinstance(user, int)):
            error("user", "Field 'user' must be a user id")

    if op == OperationType.PATCH_WORD.value and not change.params:
        warnings.append(
            ValidationWarning(
                index=index,
                operation=op,
                message="patch_word without fields has no effect",
                line_number=change.line_number,
            )
        )

    if op == OperationType.PATCH_WORD.value and "lemma" in change.params:
        lemma = change.params["lemma"]
        if not isinstance(lemma, str) or not lemma.strip():
            error("lemma", "Field 'lemma' cannot be blank")

    return errors, warnings
