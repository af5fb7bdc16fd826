"""Conversion between domain objects and plain dicts / YAML documents.

The dict layout matches the JSON the dictionary API exchanges: a word is
``{lemma, root, values}``, and entry metadata uses camelCase keys
(``assignedTo``, ``createdBy``, ``wordId``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from dictionary_editor.exceptions import ParseError
from dictionary_editor.models import (
    EXAMPLE_FIELDS,
    Definition,
    EntrySnapshot,
    EntryStatus,
    Example,
    Word,
    WordSnapshot,
)


# =============================================================================
# Examples and definitions
# =============================================================================

def example_to_dict(example: Example) -> Dict[str, Any]:
    data: Dict[str, Any] = {"value": example.value}
    for name in EXAMPLE_FIELDS[1:]:
        value = getattr(example, name)
        if value:
            data[name] = value
    return data


def example_from_dict(data: Any) -> Example:
    if isinstance(data, str):
        return Example(value=data)
    if not isinstance(data, dict):
        raise ParseError("Example must be a mapping or a string")
    optional = {}
    for name in EXAMPLE_FIELDS[1:]:
        value = data.get(name)
        if value is not None and str(value).strip():
            optional[name] = str(value).strip()
    return Example(value=str(data.get("value") or ""), **optional)


def definition_to_dict(definition: Definition) -> Dict[str, Any]:
    examples = [example_to_dict(e) for e in definition.examples]
    return {
        "number": definition.number,
        "origin": definition.origin,
        "categories": list(definition.categories),
        "remission": definition.remission,
        "meaning": definition.meaning,
        "styles": list(definition.styles) if definition.styles else None,
        "observation": definition.observation,
        "example": examples[0] if len(examples) == 1 else examples,
        "variant": definition.variant,
    }


def _string_list(value: Any, field: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ParseError(f"Field '{field}' must be a list")
    return [str(v) for v in value]


def definition_from_dict(data: Dict[str, Any], position: int) -> Definition:
    if not isinstance(data, dict):
        raise ParseError(f"Definition #{position} must be a mapping")

    raw_examples = data.get("example")
    if raw_examples is None:
        examples: List[Example] = []
    elif isinstance(raw_examples, list):
        examples = [example_from_dict(e) for e in raw_examples]
    else:
        examples = [example_from_dict(raw_examples)]

    styles = _string_list(data.get("styles"), "styles")
    definition = Definition(
        number=position,
        meaning=data.get("meaning"),
        origin=data.get("origin"),
        remission=data.get("remission"),
        observation=data.get("observation"),
        categories=tuple(_string_list(data.get("categories"), "categories")),
        styles=tuple(styles) if styles else None,
        variant=data.get("variant"),
    )
    return definition.with_examples(examples)


# =============================================================================
# Words and entries
# =============================================================================

def word_to_dict(word: Word) -> Dict[str, Any]:
    return {
        "lemma": word.lemma,
        "root": word.root,
        "values": [definition_to_dict(d) for d in word.values],
    }


def word_from_dict(data: Dict[str, Any]) -> Word:
    """Build a Word; definition numbers are taken from list position."""
    if not isinstance(data, dict):
        raise ParseError("Word must be a mapping")
    lemma = data.get("lemma")
    if not lemma or not isinstance(lemma, str):
        raise ParseError("Missing required field: 'lemma'")
    values = data.get("values") or []
    if not isinstance(values, list):
        raise ParseError("Field 'values' must be a list")
    return Word(
        lemma=lemma,
        root=str(data.get("root") or ""),
        values=tuple(definition_from_dict(d, i + 1) for i, d in enumerate(values)),
    )


def entry_to_dict(entry: EntrySnapshot) -> Dict[str, Any]:
    """Payload sent to the persistence endpoint."""
    return {
        "word": word_to_dict(entry.word),
        "letter": entry.letter,
        "status": entry.status,
        "assignedTo": entry.assigned_to,
    }


def snapshot_to_dict(snapshot: WordSnapshot) -> Dict[str, Any]:
    data = {
        "word": word_to_dict(snapshot.word),
        "letter": snapshot.letter,
        "status": snapshot.status,
        "assignedTo": snapshot.assigned_to,
        "createdBy": snapshot.created_by,
    }
    if snapshot.word_id is not None:
        data["wordId"] = snapshot.word_id
    if snapshot.comments:
        data["comments"] = [dict(c) for c in snapshot.comments]
    return data


def _optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Field '{key}' must be an integer") from e


def snapshot_from_dict(data: Dict[str, Any]) -> WordSnapshot:
    """Parse a stored entry: ``{word, letter, status, assignedTo, createdBy}``."""
    if not isinstance(data, dict):
        raise ParseError("Entry must be a mapping")
    word = word_from_dict(data.get("word") if "word" in data else data)
    letter = data.get("letter") or word.lemma[:1].lower()
    comments = data.get("comments") or []
    if not isinstance(comments, list):
        raise ParseError("Field 'comments' must be a list")
    return WordSnapshot(
        word=word,
        letter=str(letter),
        status=str(data.get("status") or EntryStatus.DRAFT.value),
        assigned_to=_optional_int(data, "assignedTo"),
        created_by=_optional_int(data, "createdBy"),
        word_id=_optional_int(data, "wordId"),
        comments=tuple(c for c in comments if isinstance(c, dict)),
    )


# =============================================================================
# YAML files
# =============================================================================

def load_yaml(source: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML mapping from a file path or a YAML string."""
    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"File not found: {source}")
        text = source.read_text(encoding="utf-8")
    else:
        text = source

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise ParseError(f"Invalid YAML: {e}", line=mark.line + 1 if mark else None) from e

    if data is None:
        raise ParseError("Empty YAML content")
    if not isinstance(data, dict):
        raise ParseError("YAML root must be a mapping (dictionary)")
    return data


def load_entry_file(path: Union[str, Path]) -> WordSnapshot:
    return snapshot_from_dict(load_yaml(Path(path)))


def dump_entry_file(snapshot: WordSnapshot, path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(snapshot_to_dict(snapshot), f, allow_unicode=True, sort_keys=False)
