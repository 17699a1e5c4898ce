"""HTTP API route for AI company summaries."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException

from ...models.summary import SummaryRequest, SummaryResponse
from ...services.note_store import NoteStore, get_note_store
from ...services.summary import SummaryError, SummaryService, get_summary_service
from ..middleware import get_requester_id

router = APIRouter()


@router.post("/summaries", response_model=SummaryResponse)
async def create_summary(
    payload: SummaryRequest,
    store: Annotated[NoteStore, Depends(get_note_store)],
    summary_service: Annotated[SummaryService, Depends(get_summary_service)],
    requester_id: Annotated[Optional[str], Depends(get_requester_id)],
) -> SummaryResponse:
    """Generate a short overview of a company."""
    company = await store.get_company_by_id(payload.company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")

    try:
        summary = await summary_service.summarize(company)
    except SummaryError as exc:
        raise HTTPException(
            status_code=500,
            detail={"error": exc.error, "message": exc.message},
        ) from exc

    return SummaryResponse(company_id=payload.company_id, summary=summary)
