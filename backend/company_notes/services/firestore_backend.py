"""Firestore-backed storage for notes and companies."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud.firestore_v1.base_query import FieldFilter

from ..models.company import Company
from ..models.note import Note
from .backends import CompanySource, NoteBackend
from .config import AppConfig, get_config

logger = logging.getLogger(__name__)

NOTES_COLLECTION = "notes"
COMPANIES_COLLECTION = "companies"


def init_firebase(config: AppConfig) -> Optional[firebase_admin.App]:
    """
    Initialise the default Firebase app from the configured service account.

    Returns None when no service account is configured. Reuses an already
    initialised default app.
    """
    if not config.firebase_service_account:
        return None
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass
    try:
        creds = json.loads(config.firebase_service_account)
    except json.JSONDecodeError as exc:
        raise ValueError("FIREBASE_SERVICE_ACCOUNT must be valid JSON") from exc
    app = firebase_admin.initialize_app(credentials.Certificate(creds))
    logger.info("Firebase app initialised for project %s", creds.get("project_id"))
    return app


def firestore_client(app: firebase_admin.App) -> Any:
    return firestore_async.client(app)


@lru_cache(maxsize=1)
def get_firebase_app() -> Optional[firebase_admin.App]:
    """Firebase app for this process, or None when Firestore is not configured."""
    return init_firebase(get_config())


def _company_from_document(doc: Any) -> Company:
    data: Dict[str, Any] = doc.to_dict() or {}
    raw_id = data.get("id")
    if not isinstance(raw_id, int):
        raw_id = int(raw_id if raw_id is not None else doc.id)
    return Company.model_validate({**data, "id": raw_id})


class FirestoreNoteBackend(NoteBackend):
    """One Firestore document per note, keyed by the note id."""

    def __init__(self, client: Any) -> None:
        self._collection = client.collection(NOTES_COLLECTION)

    async def list_notes(self, company_id: int) -> List[Note]:
        query = self._collection.where(filter=FieldFilter("companyId", "==", company_id))
        return [Note.model_validate(doc.to_dict()) async for doc in query.stream()]

    async def get_note(self, note_id: str) -> Optional[Note]:
        snap = await self._collection.document(note_id).get()
        if not snap.exists:
            return None
        return Note.model_validate(snap.to_dict())

    async def insert_note(self, note: Note) -> None:
        await self._collection.document(note.id).set(note.to_record())

    async def replace_note(self, note: Note) -> bool:
        await self._collection.document(note.id).set(note.to_record(), merge=True)
        return True

    async def remove_note(self, note_id: str) -> None:
        await self._collection.document(note_id).delete()


class FirestoreCompanySource(CompanySource):
    """Company reference data from the ``companies`` collection."""

    def __init__(self, client: Any) -> None:
        self._collection = client.collection(COMPANIES_COLLECTION)

    async def list_companies(self) -> List[Company]:
        return [_company_from_document(doc) async for doc in self._collection.stream()]

    async def get_company(self, company_id: int) -> Optional[Company]:
        # Document keys are not guaranteed to match the logical id field.
        query = self._collection.where(filter=FieldFilter("id", "==", company_id)).limit(1)
        async for doc in query.stream():
            return _company_from_document(doc)
        return None


__all__ = [
    "FirestoreNoteBackend",
    "FirestoreCompanySource",
    "init_firebase",
    "firestore_client",
    "get_firebase_app",
    "NOTES_COLLECTION",
    "COMPANIES_COLLECTION",
]
