"""Company reference data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Company(BaseModel):
    """A company in the directory (read-only)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., description="Stable company identifier")
    name: str = ""
    description: str = ""
    sector: str = ""
    website: str = ""
    employees: int = Field(0, ge=0, description="Headcount")


class CompanyList(BaseModel):
    """Response wrapper for company listings."""

    companies: list[Company]


__all__ = ["Company", "CompanyList"]
