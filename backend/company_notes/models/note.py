"""Note-related Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Note(BaseModel):
    """A note attached to a company, as persisted by every backend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "0b6c8a7e-2f4e-4b55-9a51-0d0f7c1f2a33",
                "companyId": 1,
                "content": "Met their CTO at the conference.",
                "isPrivate": False,
                "userId": "user-1",
                "createdAt": "2025-01-10T09:00:00.000Z",
            }
        },
    )

    id: str = Field(..., description="Opaque unique identifier")
    company_id: int = Field(..., description="Company the note is attached to")
    content: str = Field(..., description="Note text")
    is_private: bool = Field(False, description="Only the author may see private notes")
    user_id: Optional[str] = Field(None, description="Author user ID")
    created_at: str = Field(..., description="ISO-8601 creation timestamp")

    def to_record(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used on disk and in Firestore."""
        return self.model_dump(by_alias=True)


class NoteCreate(BaseModel):
    """Request payload to create a note."""

    model_config = CAMEL_CONFIG

    company_id: int = Field(..., ge=1)
    content: str = Field(..., min_length=1)
    is_private: Optional[bool] = None


class NoteUpdate(BaseModel):
    """Request payload to update a note. Unset fields keep their stored value."""

    model_config = CAMEL_CONFIG

    content: Optional[str] = None
    is_private: Optional[bool] = None


class NoteEnvelope(BaseModel):
    """Response wrapper for a single note."""

    note: Note


class NoteList(BaseModel):
    """Response wrapper for note listings."""

    notes: list[Note]


__all__ = ["Note", "NoteCreate", "NoteUpdate", "NoteEnvelope", "NoteList"]
