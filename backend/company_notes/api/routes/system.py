"""System routes for health checks."""

from fastapi import APIRouter

from ...services.note_store import utcnow_iso

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok", "time": utcnow_iso()}
