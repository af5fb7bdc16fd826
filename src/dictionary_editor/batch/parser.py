"""
YAML parser for batch change requests.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import ParseError
from ..serialization import load_yaml
from .schema import Change, ChangeRequest


def load_change_request(
    source: Union[str, Path, Dict[str, Any]],
) -> ChangeRequest:
    """Load a change request from a YAML file, YAML string or dictionary.

    Args:
        source: Path to YAML file, YAML string, or parsed dictionary

    Returns:
        ChangeRequest object

    Raises:
        ParseError: If the content cannot be parsed or is invalid
        FileNotFoundError: If the file does not exist
    """
    source_path: Optional[Path] = None

    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or _is_file_path(source):
        source_path = Path(source)
        data = load_yaml(source_path)
    else:
        data = load_yaml(source)

    return _parse_change_request(data, source_path)


def _is_file_path(s: str) -> bool:
    """Check if a string looks like a file path."""
    if "\n" in s:
        return False
    if "/" in s or "\\" in s:
        return True
    return s.endswith((".yaml", ".yml"))


def _parse_change_request(
    data: Dict[str, Any],
    source_path: Optional[Path] = None,
) -> ChangeRequest:
    """Parse a dictionary into a ChangeRequest object."""
    lemma = data.get("lemma")
    if not lemma:
        raise ParseError("Missing required field: 'lemma'")
    if not isinstance(lemma, str):
        raise ParseError("Field 'lemma' must be a string")

    session = data.get("session") or {}
    if not isinstance(session, dict):
        raise ParseError("Field 'session' must be a mapping")

    changes_data = data.get("changes")
    if changes_data is None:
        raise ParseError("Missing required field: 'changes'")
    if not isinstance(changes_data, list):
        raise ParseError("Field 'changes' must be a list")
    if len(changes_data) == 0:
        raise ParseError("Field 'changes' cannot be empty")

    return ChangeRequest(
        lemma=lemma,
        changes=_parse_changes(changes_data),
        session_name=session.get("name"),
        session_description=session.get("description"),
        source_file=source_path,
    )


def _parse_changes(changes_data: List[Any]) -> List[Change]:
    """Parse a list of change dictionaries into Change objects."""
    changes = []

    for i, change_data in enumerate(changes_data):
        if not isinstance(change_data, dict):
            raise ParseError(f"Change #{i + 1} must be a mapping (dictionary)")

        operation = change_data.get("operation")
        if not operation:
            raise ParseError(f"Change #{i + 1}: Missing required field 'operation'")
        if not isinstance(operation, str):
            raise ParseError(f"Change #{i + 1}: Field 'operation' must be a string")

        params = {k: v for k, v in change_data.items() if k != "operation"}
        changes.append(Change(operation=operation, params=params))

    return changes
