"""
Executor for batch change requests.

Applies changes, in order, to the entry held by a DocumentStateStore.
Definition and example positions in requests are 1-based.
"""
from __future__ import annotations

import logging
import time
from typing import List

from ..exceptions import DictionaryEditorError
from ..serialization import example_from_dict
from ..store import DocumentStateStore
from .schema import (
    OPTIONAL_FIELDS,
    BatchResult,
    Change,
    ChangeRequest,
    ChangeResult,
    OperationType,
)

logger = logging.getLogger(__name__)


def execute_change_request(
    request: ChangeRequest,
    store: DocumentStateStore,
    dry_run: bool = False,
) -> BatchResult:
    """Execute a batch change request.

    Args:
        request: The change request to execute
        store: Store holding the entry to modify
        dry_run: If True, only simulate execution without making changes

    Returns:
        BatchResult with details of each change
    """
    start_time = time.time()
    results: List[ChangeResult] = []

    for i, change in enumerate(request.changes):
        results.append(_execute_change(change, i, store, dry_run))

    success_count = sum(1 for r in results if r.success)
    failure_count = sum(1 for r in results if not r.success)

    return BatchResult(
        lemma=request.lemma,
        total_count=len(results),
        success_count=success_count,
        failure_count=failure_count,
        changes=results,
        duration_seconds=time.time() - start_time,
    )


def _execute_change(
    change: Change,
    index: int,
    store: DocumentStateStore,
    dry_run: bool,
) -> ChangeResult:
    """Execute a single change operation.

    Returns:
        ChangeResult with success/failure status
    """
    op = change.operation
    params = change.params

    try:
        if dry_run:
            return _ok(index, op, f"Would execute {op}", _target(change))

        if op == OperationType.PATCH_WORD.value:
            fields = {k: params[k] for k in ("lemma", "root") if k in params}
            store.patch_word(**fields)
            return _ok(index, op, f"Updated {', '.join(fields) or 'nothing'}", store.word.lemma)

        elif op == OperationType.SET_LETTER.value:
            store.set_letter(params["letter"])
            return _ok(index, op, f"Letter set to '{store.letter}'")

        elif op == OperationType.SET_STATUS.value:
            store.set_status(str(params["status"]))
            return _ok(index, op, f"Status set to '{store.status}'")

        elif op == OperationType.SET_ASSIGNED_TO.value:
            store.set_assigned_to(params.get("user"))
            return _ok(index, op, f"Assigned to {store.assigned_to}")

        elif op == OperationType.PATCH_DEFINITION.value:
            position = params["definition"] - 1
            fields = {
                k: v for k, v in params.items()
                if k in OPTIONAL_FIELDS[op]
            }
            store.patch_definition(position, **fields)
            return _ok(index, op, "Updated definition", _target(change))

        elif op == OperationType.INSERT_DEFINITION.value:
            after = params.get("after")
            position = store.insert_definition(after - 1 if after is not None else None)
            fields = {k: params[k] for k in ("meaning", "categories") if k in params}
            if fields:
                store.patch_definition(position, **fields)
            return _ok(index, op, f"Inserted definition {position + 1}", f"#{position + 1}")

        elif op == OperationType.DELETE_DEFINITION.value:
            store.delete_definition(params["definition"] - 1)
            return _ok(index, op, "Deleted definition", _target(change))

        elif op == OperationType.ADD_EXAMPLE.value:
            position = params["definition"] - 1
            examples = store.examples(position)
            new_example = example_from_dict(params["example"])
            if len(examples) == 1 and not examples[0].value.strip():
                # Blank placeholder left by insert_definition
                store.set_example(position, 0, new_example)
            else:
                store.replace_examples(position, examples + (new_example,))
            return _ok(index, op, "Added example", _target(change))

        elif op == OperationType.SET_EXAMPLE.value:
            store.set_example(
                params["definition"] - 1,
                params["index"] - 1,
                example_from_dict(params["example"]),
            )
            return _ok(index, op, "Replaced example", _target(change))

        elif op == OperationType.DELETE_EXAMPLE.value:
            store.delete_example(params["definition"] - 1, params["index"] - 1)
            return _ok(index, op, "Deleted example", _target(change))

        else:
            return ChangeResult(
                index=index,
                operation=op,
                success=False,
                message=f"Unknown operation: {op}",
                error=f"Unknown operation: {op}",
            )

    except (DictionaryEditorError, KeyError, TypeError) as e:
        logger.warning("Change #%d (%s) failed: %s", index + 1, op, e)
        return ChangeResult(
            index=index,
            operation=op,
            success=False,
            message=f"Error: {e}",
            target=_target(change),
            error=str(e),
        )


def _target(change: Change) -> str | None:
    if change.definition is None:
        return None
    target = f"#{change.definition}"
    if change.params.get("index") is not None:
        target += f".{change.params['index']}"
    return target


def _ok(index: int, op: str, message: str, target: str | None = None) -> ChangeResult:
    return ChangeResult(
        index=index,
        operation=op,
        success=True,
        message=message,
        target=target,
    )
