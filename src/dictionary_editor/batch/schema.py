"""
Data classes and constants for batch change requests against one entry.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


# =============================================================================
# Operation Types
# =============================================================================

class OperationType(str, Enum):
    """Supported batch operations."""
    PATCH_WORD = "patch_word"
    SET_LETTER = "set_letter"
    SET_STATUS = "set_status"
    SET_ASSIGNED_TO = "set_assigned_to"
    PATCH_DEFINITION = "patch_definition"
    INSERT_DEFINITION = "insert_definition"
    DELETE_DEFINITION = "delete_definition"
    ADD_EXAMPLE = "add_example"
    SET_EXAMPLE = "set_example"
    DELETE_EXAMPLE = "delete_example"


# =============================================================================
# Field Requirements
# =============================================================================

# Required fields for each operation
REQUIRED_FIELDS: Dict[str, List[str]] = {
    OperationType.PATCH_WORD.value: [],
    OperationType.SET_LETTER.value: ["letter"],
    OperationType.SET_STATUS.value: ["status"],
    OperationType.SET_ASSIGNED_TO.value: [],
    OperationType.PATCH_DEFINITION.value: ["definition"],
    OperationType.INSERT_DEFINITION.value: [],
    OperationType.DELETE_DEFINITION.value: ["definition"],
    OperationType.ADD_EXAMPLE.value: ["definition", "example"],
    OperationType.SET_EXAMPLE.value: ["definition", "index", "example"],
    OperationType.DELETE_EXAMPLE.value: ["definition", "index"],
}

# Optional fields for each operation
OPTIONAL_FIELDS: Dict[str, List[str]] = {
    OperationType.PATCH_WORD.value: ["lemma", "root"],
    OperationType.SET_LETTER.value: [],
    OperationType.SET_STATUS.value: [],
    OperationType.SET_ASSIGNED_TO.value: ["user"],
    OperationType.PATCH_DEFINITION.value: [
        "meaning", "origin", "remission", "observation",
        "categories", "styles", "variant",
    ],
    OperationType.INSERT_DEFINITION.value: ["after", "meaning", "categories"],
    OperationType.DELETE_DEFINITION.value: [],
    OperationType.ADD_EXAMPLE.value: [],
    OperationType.SET_EXAMPLE.value: [],
    OperationType.DELETE_EXAMPLE.value: [],
}

# Fields holding 1-based definition or example numbers
NUMBER_FIELDS = ("definition", "index", "after")


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class Change:
    """Single change operation."""
    operation: str
    params: Dict[str, Any]
    line_number: Optional[int] = None

    @property
    def definition(self) -> Optional[int]:
        """1-based definition number, if present."""
        return self.params.get("definition")


@dataclass
class ChangeRequest:
    """Parsed change request from YAML."""
    lemma: str
    changes: List[Change]
    session_name: Optional[str] = None
    session_description: Optional[str] = None
    source_file: Optional[Path] = None


@dataclass
class ValidationError:
    """Validation error for a specific change."""
    index: int
    operation: str
    field: str
    message: str
    line_number: Optional[int] = None


@dataclass
class ValidationWarning:
    """Validation warning for a specific change."""
    index: int
    operation: str
    message: str
    line_number: Optional[int] = None


@dataclass
class ValidationResult:
    """Result of validating a change request."""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)


@dataclass
class ChangeResult:
    """Result of executing a single change."""
    index: int
    operation: str
    success: bool
    message: str
    target: Optional[str] = None
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Result of executing a batch change request."""
    lemma: str
    total_count: int
    success_count: int
    failure_count: int
    changes: List[ChangeResult]
    duration_seconds: float

    @property
    def skipped_count(self) -> int:
        return self.total_count - self.success_count - self.failure_count
