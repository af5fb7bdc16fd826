__version__ = "0.1.0"

from .editor import (
    EntryEditor as EntryEditor,
)

from .models import (
    LETTERS as LETTERS,
    PLACEHOLDER_MEANING as PLACEHOLDER_MEANING,
    Role as Role,
    EntryStatus as EntryStatus,
    SaveStatus as SaveStatus,
    Example as Example,
    Definition as Definition,
    Word as Word,
    EntrySnapshot as EntrySnapshot,
    EditContext as EditContext,
    ExampleDraft as ExampleDraft,
    SessionUser as SessionUser,
    User as User,
    WordSnapshot as WordSnapshot,
    ValidationResult as ValidationResult,
)

from .permissions import (
    EDITABLE_STATUSES as EDITABLE_STATUSES,
    PermissionFlags as PermissionFlags,
    evaluate_permissions as evaluate_permissions,
)

from .store import (
    ChangeKind as ChangeKind,
    StoreChange as StoreChange,
    DocumentStateStore as DocumentStateStore,
)

from .example_session import (
    ActiveExample as ActiveExample,
    ExampleEditorSession as ExampleEditorSession,
)

from .autosave import (
    AutoSaveConfig as AutoSaveConfig,
    AutoSaveScheduler as AutoSaveScheduler,
)

from .collaborators import (
    InMemoryDictionary as InMemoryDictionary,
    PersistenceEndpoint as PersistenceEndpoint,
    SessionLookup as SessionLookup,
    SnapshotLoader as SnapshotLoader,
    UserDirectory as UserDirectory,
    normalize_lemma as normalize_lemma,
)

from .config import (
    EditorSettings as EditorSettings,
    load_settings as load_settings,
)

from .validator import (
    validate_word as validate_word,
)

from .exceptions import (
    DictionaryEditorError as DictionaryEditorError,
    ValidationError as ValidationError,
    IndexOutOfRangeError as IndexOutOfRangeError,
    PermissionDeniedError as PermissionDeniedError,
    EntityNotFoundError as EntityNotFoundError,
    PersistenceError as PersistenceError,
    ParseError as ParseError,
    ConfigError as ConfigError,
)

# Batch module - import as submodule to avoid naming conflicts
from . import batch

__all__ = [
    # Batch module
    "batch",
    # Editing session
    "EntryEditor",
    "DocumentStateStore",
    "ExampleEditorSession",
    "AutoSaveScheduler",
    "AutoSaveConfig",
    "ActiveExample",
    "ChangeKind",
    "StoreChange",
    # Permissions
    "EDITABLE_STATUSES",
    "PermissionFlags",
    "evaluate_permissions",
    # Enums and constants
    "LETTERS",
    "PLACEHOLDER_MEANING",
    "Role",
    "EntryStatus",
    "SaveStatus",
    # Models
    "Example",
    "Definition",
    "Word",
    "EntrySnapshot",
    "EditContext",
    "ExampleDraft",
    "SessionUser",
    "User",
    "WordSnapshot",
    "ValidationResult",
    # Collaborators
    "InMemoryDictionary",
    "PersistenceEndpoint",
    "SessionLookup",
    "SnapshotLoader",
    "UserDirectory",
    "normalize_lemma",
    # Settings
    "EditorSettings",
    "load_settings",
    # Validation
    "validate_word",
    # Exceptions
    "DictionaryEditorError",
    "ValidationError",
    "IndexOutOfRangeError",
    "PermissionDeniedError",
    "EntityNotFoundError",
    "PersistenceError",
    "ParseError",
    "ConfigError",
]
