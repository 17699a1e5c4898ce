"""Note persistence with ownership and visibility enforcement."""

from __future__ import annotations

import enum
import logging
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import List, Optional

from ..models.company import Company
from ..models.note import Note, NoteCreate, NoteUpdate
from .backends import CompanySource, NoteBackend, select_backends
from .config import AppConfig, get_config
from .firestore_backend import get_firebase_app

logger = logging.getLogger(__name__)


class NoteErrorKind(str, enum.Enum):
    NOT_CONFIGURED = "not_configured"
    NOT_FOUND = "not_found"
    NOT_AUTHORIZED = "not_authorized"
    AUTHENTICATION_REQUIRED = "authentication_required"


class NoteStoreError(Exception):
    """Failure of a single store operation, tagged with its kind."""

    def __init__(self, kind: NoteErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def utcnow_iso() -> str:
    """UTC now as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_owned_by(note: Note, requester_id: Optional[str]) -> bool:
    """Absent ids never match, even each other."""
    return bool(note.user_id) and bool(requester_id) and note.user_id == requester_id


def is_visible_to(note: Note, requester_id: Optional[str]) -> bool:
    """Public notes are visible to everyone, private ones only to their author."""
    return not note.is_private or is_owned_by(note, requester_id)


class NoteStore:
    """CRUD for notes plus read-only company lookups over injected backends."""

    def __init__(self, notes: NoteBackend, companies: Optional[CompanySource] = None) -> None:
        self.notes = notes
        self.companies = companies

    def _require_companies(self) -> CompanySource:
        if self.companies is None:
            raise NoteStoreError(
                NoteErrorKind.NOT_CONFIGURED, "Firestore not configured for companies"
            )
        return self.companies

    async def list_companies(self) -> List[Company]:
        return await self._require_companies().list_companies()

    async def get_company_by_id(self, company_id: int) -> Optional[Company]:
        return await self._require_companies().get_company(company_id)

    async def list_notes_for_company(
        self, company_id: int, requester_id: Optional[str] = None
    ) -> List[Note]:
        notes = await self.notes.list_notes(company_id)
        return [
            note
            for note in notes
            if note.company_id == company_id and is_visible_to(note, requester_id)
        ]

    async def create_note(self, payload: NoteCreate, requester_id: Optional[str]) -> Note:
        if not requester_id:
            raise NoteStoreError(
                NoteErrorKind.AUTHENTICATION_REQUIRED, "User is not authenticated."
            )

        note = Note(
            id=str(uuid.uuid4()),
            company_id=payload.company_id,
            content=payload.content,
            is_private=payload.is_private if payload.is_private is not None else False,
            user_id=requester_id,
            created_at=utcnow_iso(),
        )
        await self.notes.insert_note(note)
        logger.info("Created note %s for company %s", note.id, note.company_id)
        return note

    async def _get_owned_note(
        self, note_id: str, requester_id: Optional[str], action: str
    ) -> Note:
        existing = await self.notes.get_note(note_id)
        if existing is None:
            raise NoteStoreError(NoteErrorKind.NOT_FOUND, "Note not found")
        if not is_owned_by(existing, requester_id):
            raise NoteStoreError(
                NoteErrorKind.NOT_AUTHORIZED, f"Not authorized to {action} this note"
            )
        return existing

    async def update_note(
        self, note_id: str, updates: NoteUpdate, requester_id: Optional[str]
    ) -> Note:
        existing = await self._get_owned_note(note_id, requester_id, "edit")

        changes = {}
        if updates.content is not None:
            changes["content"] = updates.content
        if updates.is_private is not None:
            changes["is_private"] = updates.is_private
        updated = existing.model_copy(update=changes)

        if not await self.notes.replace_note(updated):
            raise NoteStoreError(NoteErrorKind.NOT_FOUND, "Note not found")
        logger.info("Updated note %s", note_id)
        return updated

    async def delete_note(self, note_id: str, requester_id: Optional[str]) -> None:
        await self._get_owned_note(note_id, requester_id, "delete")
        await self.notes.remove_note(note_id)
        logger.info("Deleted note %s", note_id)


def build_note_store(config: AppConfig, firebase_app=None) -> NoteStore:
    backends = select_backends(config, firebase_app)
    return NoteStore(backends.notes, backends.companies)


@lru_cache(maxsize=1)
def get_note_store() -> NoteStore:
    """Process-wide store, built on first use from the cached config."""
    return build_note_store(get_config(), get_firebase_app())


__all__ = [
    "NoteStore",
    "NoteStoreError",
    "NoteErrorKind",
    "is_visible_to",
    "is_owned_by",
    "build_note_store",
    "get_note_store",
    "utcnow_iso",
]
