"""Pydantic models for data validation and serialization."""

from .auth import JWTPayload
from .company import Company, CompanyList
from .note import Note, NoteCreate, NoteEnvelope, NoteList, NoteUpdate
from .summary import SummaryRequest, SummaryResponse

__all__ = [
    "Company",
    "CompanyList",
    "Note",
    "NoteCreate",
    "NoteUpdate",
    "NoteEnvelope",
    "NoteList",
    "SummaryRequest",
    "SummaryResponse",
    "JWTPayload",
]
