"""Storage backend interfaces and backend selection."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from firebase_admin import App

from ..models.company import Company
from ..models.note import Note
from .config import AppConfig

logger = logging.getLogger(__name__)


class NoteBackend(abc.ABC):
    """Record-level persistence for notes."""

    @abc.abstractmethod
    async def list_notes(self, company_id: int) -> List[Note]:
        """Return every stored note attached to the company, unfiltered."""

    @abc.abstractmethod
    async def get_note(self, note_id: str) -> Optional[Note]:
        """Return the note with this id, or None."""

    @abc.abstractmethod
    async def insert_note(self, note: Note) -> None:
        pass

    @abc.abstractmethod
    async def replace_note(self, note: Note) -> bool:
        """Overwrite the stored record that shares ``note.id``; False if it is gone."""

    @abc.abstractmethod
    async def remove_note(self, note_id: str) -> None:
        pass


class CompanySource(abc.ABC):
    """Read-only access to company reference data."""

    @abc.abstractmethod
    async def list_companies(self) -> List[Company]:
        pass

    @abc.abstractmethod
    async def get_company(self, company_id: int) -> Optional[Company]:
        pass


class MemoryNoteBackend(NoteBackend):
    """Keeps notes in an insertion-ordered dict for the lifetime of the object."""

    def __init__(self, notes: Optional[List[Note]] = None) -> None:
        self._notes: Dict[str, Note] = {note.id: note for note in notes or []}

    async def list_notes(self, company_id: int) -> List[Note]:
        return [note for note in self._notes.values() if note.company_id == company_id]

    async def get_note(self, note_id: str) -> Optional[Note]:
        return self._notes.get(note_id)

    async def insert_note(self, note: Note) -> None:
        self._notes[note.id] = note

    async def replace_note(self, note: Note) -> bool:
        if note.id not in self._notes:
            return False
        self._notes[note.id] = note
        return True

    async def remove_note(self, note_id: str) -> None:
        self._notes.pop(note_id, None)


@dataclass(frozen=True)
class StoreBackends:
    """Backends resolved once at startup."""

    notes: NoteBackend
    companies: Optional[CompanySource]


def select_backends(config: AppConfig, firebase_app: Optional[App]) -> StoreBackends:
    """
    Pick the storage backends for this process.

    Firestore serves both notes and companies when a service account is
    configured and the Firebase app is initialised; otherwise notes live in
    the local JSON file and companies are unavailable.
    """
    if config.firebase_service_account and firebase_app is not None:
        from .firestore_backend import (
            FirestoreCompanySource,
            FirestoreNoteBackend,
            firestore_client,
        )

        client = firestore_client(firebase_app)
        logger.info("Using Firestore backend for notes and companies")
        return StoreBackends(
            notes=FirestoreNoteBackend(client),
            companies=FirestoreCompanySource(client),
        )

    from .file_backend import FileNoteBackend

    logger.info("Using local JSON backend for notes: %s", config.notes_file_path)
    return StoreBackends(
        notes=FileNoteBackend(config.notes_file_path),
        companies=None,
    )


__all__ = [
    "NoteBackend",
    "CompanySource",
    "MemoryNoteBackend",
    "StoreBackends",
    "select_backends",
]
