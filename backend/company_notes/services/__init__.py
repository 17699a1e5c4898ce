"""Service layer for business logic and external integrations."""

from .auth import AuthError, AuthService, get_auth_service
from .backends import CompanySource, MemoryNoteBackend, NoteBackend, StoreBackends, select_backends
from .config import AppConfig, get_config, reload_config
from .file_backend import FileNoteBackend
from .firestore_backend import FirestoreCompanySource, FirestoreNoteBackend, init_firebase
from .note_store import (
    NoteErrorKind,
    NoteStore,
    NoteStoreError,
    build_note_store,
    get_note_store,
    is_owned_by,
    is_visible_to,
)
from .summary import SummaryError, SummaryService, get_summary_service

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "AuthService",
    "AuthError",
    "get_auth_service",
    "NoteBackend",
    "CompanySource",
    "MemoryNoteBackend",
    "StoreBackends",
    "select_backends",
    "FileNoteBackend",
    "FirestoreNoteBackend",
    "FirestoreCompanySource",
    "init_firebase",
    "NoteStore",
    "NoteStoreError",
    "NoteErrorKind",
    "build_note_store",
    "get_note_store",
    "is_owned_by",
    "is_visible_to",
    "SummaryService",
    "SummaryError",
    "get_summary_service",
]
