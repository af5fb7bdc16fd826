"""Editorial checks run over a word before or while it is edited."""

from __future__ import annotations

from dictionary_editor.models import (
    LETTERS,
    PLACEHOLDER_MEANING,
    ValidationResult,
    ValidationSeverity,
    Word,
)


def _result(
    rule_id: str,
    severity: ValidationSeverity,
    entity_type: str,
    entity_id: str,
    message: str,
    details: dict | None = None,
) -> ValidationResult:
    return ValidationResult(
        rule_id=rule_id,
        severity=severity.value,
        entity_type=entity_type,
        entity_id=entity_id,
        message=message,
        details=details,
    )


def validate_word(word: Word, *, letter: str | None = None) -> list[ValidationResult]:
    """Run all validation rules over *word*."""
    results: list[ValidationResult] = []
    results.extend(_val_wrd(word, letter))
    for index in range(len(word.values)):
        results.extend(_val_def(word, index))
        results.extend(_val_ex(word, index))
    return results


def has_errors(results: list[ValidationResult]) -> bool:
    return any(r.severity == ValidationSeverity.ERROR.value for r in results)


def _val_wrd(word: Word, letter: str | None) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    lemma = word.lemma or ""

    # VAL-WRD-001: blank lemma
    if not lemma.strip():
        results.append(_result(
            "VAL-WRD-001", ValidationSeverity.ERROR, "word", lemma,
            "Word has a blank lemma",
        ))

    # VAL-WRD-002: letter outside the alphabet
    if letter is not None and (len(letter) != 1 or letter not in LETTERS):
        results.append(_result(
            "VAL-WRD-002", ValidationSeverity.ERROR, "word", lemma,
            f"Letter {letter!r} is not a single lowercase letter",
            {"letter": letter},
        ))

    # VAL-WRD-003: no definitions
    if not word.values:
        results.append(_result(
            "VAL-WRD-003", ValidationSeverity.WARNING, "word", lemma,
            "Word has no definitions",
        ))
    return results


def _val_def(word: Word, index: int) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    definition = word.values[index]
    entity_id = f"{word.lemma}#{index + 1}"

    # VAL-DEF-001: numbering out of sync with position
    if definition.number != index + 1:
        results.append(_result(
            "VAL-DEF-001", ValidationSeverity.ERROR, "definition", entity_id,
            f"Definition at position {index + 1} is numbered {definition.number}",
            {"number": definition.number, "position": index + 1},
        ))

    # VAL-DEF-002: blank or untouched placeholder meaning
    meaning = (definition.meaning or "").strip()
    if not meaning:
        results.append(_result(
            "VAL-DEF-002", ValidationSeverity.WARNING, "definition", entity_id,
            "Definition has a blank meaning",
        ))
    elif meaning == PLACEHOLDER_MEANING:
        results.append(_result(
            "VAL-DEF-002", ValidationSeverity.WARNING, "definition", entity_id,
            "Definition still has the placeholder meaning",
        ))

    # VAL-DEF-003: no grammatical categories
    if not definition.categories:
        results.append(_result(
            "VAL-DEF-003", ValidationSeverity.WARNING, "definition", entity_id,
            "Definition has no grammatical categories",
        ))
    return results


def _val_ex(word: Word, index: int) -> list[ValidationResult]:
    results = []
    for ex_index, example in enumerate(word.values[index].examples):
        # VAL-EX-001: blank example text
        if not example.value.strip():
            results.append(_result(
                "VAL-EX-001", ValidationSeverity.WARNING, "example",
                f"{word.lemma}#{index + 1}.{ex_index + 1}",
                "Example has no text",
            ))
    return results
