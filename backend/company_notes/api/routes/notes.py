"""HTTP API routes for note operations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...models.note import NoteCreate, NoteEnvelope, NoteUpdate
from ...services.note_store import NoteStore, get_note_store
from ..middleware import require_requester_id

router = APIRouter()


@router.post("/notes", response_model=NoteEnvelope, status_code=status.HTTP_201_CREATED)
async def create_note(
    create: NoteCreate,
    store: Annotated[NoteStore, Depends(get_note_store)],
    requester_id: Annotated[str, Depends(require_requester_id)],
) -> NoteEnvelope:
    """Create a note owned by the caller."""
    note = await store.create_note(create, requester_id)
    return NoteEnvelope(note=note)


@router.put("/notes/{note_id}", response_model=NoteEnvelope)
async def update_note(
    note_id: str,
    updates: NoteUpdate,
    store: Annotated[NoteStore, Depends(get_note_store)],
    requester_id: Annotated[str, Depends(require_requester_id)],
) -> NoteEnvelope:
    """Edit the content or visibility of one of the caller's notes."""
    if not updates.content:
        raise HTTPException(status_code=400, detail="content is required")
    note = await store.update_note(note_id, updates, requester_id)
    return NoteEnvelope(note=note)


@router.delete("/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    store: Annotated[NoteStore, Depends(get_note_store)],
    requester_id: Annotated[str, Depends(require_requester_id)],
) -> Response:
    await store.delete_note(note_id, requester_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
