"""
Command-line interface for dictionary-editor.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .batch import (
    BatchResult,
    ValidationResult,
    execute_change_request,
    load_change_request,
    validate_change_request,
)
from .config import load_settings
from .exceptions import ConfigError, ParseError
from .models import WordSnapshot
from .serialization import dump_entry_file, load_entry_file
from .store import DocumentStateStore
from .validator import has_errors, validate_word


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the dictionary-editor CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"\n  [CONFIG ERROR] {e}")
        return 1
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    return args.func(args)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dictionary-editor",
        description="Inspect and edit dictionary entry files",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s (dictionary-editor)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML settings file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Print an entry's definitions",
    )
    show_parser.add_argument("file", type=Path, help="YAML entry file")
    show_parser.set_defaults(func=cmd_show)

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check an entry for editorial problems",
    )
    validate_parser.add_argument("file", type=Path, help="YAML entry file")
    validate_parser.add_argument(
        "--letter",
        help="Check against this letter instead of the one stored in the file",
    )
    validate_parser.set_defaults(func=cmd_validate)

    # apply command
    apply_parser = subparsers.add_parser(
        "apply",
        help="Apply a change request to an entry file",
    )
    apply_parser.add_argument("file", type=Path, help="YAML entry file")
    apply_parser.add_argument("changes", type=Path, help="YAML change request")
    apply_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulate execution without writing anything",
    )
    apply_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write the result here instead of overwriting the entry file",
    )
    apply_parser.set_defaults(func=cmd_apply)

    return parser


def _load_entry(path: Path) -> Optional[WordSnapshot]:
    try:
        return load_entry_file(path)
    except ParseError as e:
        print(f"\n  [PARSE ERROR] {e}")
        if e.line:
            print(f"               Line: {e.line}")
    except FileNotFoundError as e:
        print(f"\n  [ERROR] {e}")
    return None


def cmd_show(args: argparse.Namespace) -> int:
    """Handle show command."""
    entry = _load_entry(args.file)
    if entry is None:
        return 1

    word = entry.word
    print(f"\n{word.lemma}  [{entry.letter.upper()}]  status: {entry.status}")
    if word.root:
        print(f"  Root: {word.root}")
    print(f"  Assigned to: {entry.assigned_to if entry.assigned_to is not None else '-'}")
    print()
    for definition in word.values:
        categories = ", ".join(definition.categories) or "-"
        print(f"  {definition.number}. {definition.meaning or ''}")
        print(f"     categories: {categories}   examples: {len(definition.examples)}")
    if not word.values:
        print("  (no definitions)")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    print(f"\nValidating {args.file}...")
    entry = _load_entry(args.file)
    if entry is None:
        return 1

    letter = args.letter.lower() if args.letter else entry.letter
    results = validate_word(entry.word, letter=letter)
    if not results:
        print("\nNo problems found.")
        return 0

    for r in results:
        print(f"  [{r.severity}] {r.rule_id} {r.entity_id}: {r.message}")

    errors = sum(1 for r in results if r.severity == "ERROR")
    print(f"\nFound {errors} error(s), {len(results) - errors} warning(s)")
    return 1 if has_errors(results) else 0


def cmd_apply(args: argparse.Namespace) -> int:
    """Handle apply command."""
    entry = _load_entry(args.file)
    if entry is None:
        return 1

    print(f"\nLoading {args.changes}...")
    try:
        request = load_change_request(args.changes)
    except ParseError as e:
        print(f"\n  [PARSE ERROR] {e}")
        return 1
    except FileNotFoundError as e:
        print(f"\n  [ERROR] {e}")
        return 1

    print(f"  Lemma: {request.lemma}")
    print(f"  Changes: {len(request.changes)}")
    if request.session_name:
        print(f"  Session: \"{request.session_name}\"")

    print("\nValidating...")
    validation = validate_change_request(request, entry.word)
    if not validation.is_valid:
        print("\nValidation failed:")
        _print_validation_result(validation)
        print(f"\nFound {validation.error_count} error(s). Fix errors before applying.")
        return 1
    if validation.warning_count > 0:
        _print_validation_result(validation)

    store = DocumentStateStore.from_word_snapshot(entry)
    if args.dry_run:
        print("\n[DRY RUN] Simulating execution...")
    result = execute_change_request(request, store, dry_run=args.dry_run)
    _print_batch_result(result)

    if result.failure_count > 0:
        return 1
    if args.dry_run:
        return 0

    snapshot = store.snapshot
    updated = replace(
        entry,
        word=snapshot.word,
        letter=snapshot.letter,
        status=snapshot.status,
        assigned_to=snapshot.assigned_to,
    )
    destination = args.output or args.file
    dump_entry_file(updated, destination)
    print(f"\nWrote {destination}")
    return 0


def _print_validation_result(result: ValidationResult) -> None:
    for error in result.errors:
        print(f"  [ERROR] #{error.index + 1} {error.operation}: {error.field}: {error.message}")
    for warning in result.warnings:
        print(f"  [WARNING] #{warning.index + 1} {warning.operation}: {warning.message}")


def _print_batch_result(result: BatchResult) -> None:
    print("\nResults:")
    for change in result.changes:
        mark = "OK" if change.success else "FAILED"
        target = f" {change.target}" if change.target else ""
        print(f"  [{mark}] #{change.index + 1} {change.operation}{target}: {change.message}")
    print(
        f"\n{result.success_count}/{result.total_count} succeeded "
        f"in {result.duration_seconds:.2f}s"
    )


if __name__ == "__main__":
    sys.exit(main())
