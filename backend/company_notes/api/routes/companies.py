"""HTTP API routes for company reference data."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from ...models.company import CompanyList
from ...models.note import NoteList
from ...services.note_store import NoteStore, get_note_store
from ..middleware import get_requester_id, require_requester_id

router = APIRouter()


@router.get("/companies", response_model=CompanyList)
async def list_companies(
    store: Annotated[NoteStore, Depends(get_note_store)],
    requester_id: Annotated[str, Depends(require_requester_id)],
) -> CompanyList:
    """List every company in the directory."""
    return CompanyList(companies=await store.list_companies())


@router.get("/companies/{company_id}/notes", response_model=NoteList)
async def list_company_notes(
    company_id: int,
    store: Annotated[NoteStore, Depends(get_note_store)],
    requester_id: Annotated[Optional[str], Depends(get_requester_id)],
) -> NoteList:
    """List the notes on a company that the caller is allowed to see."""
    notes = await store.list_notes_for_company(company_id, requester_id)
    return NoteList(notes=notes)
