from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import CamelModel, blank_to_none

NoteKind = Literal["note", "log"]


class NoteSection(str, Enum):
    """Known section tags. Stored as free text, so unknown tags are kept as-is."""

    JOBS = "jobs"
    CUSTOMERS = "customers"
    WORKERS = "workers"
    WORKERS_ATTENDANCE = "workers_attendance"
    INVENTORY = "inventory"
    EXPENSES = "expenses"
    TRAVEL = "travel"


class NoteBase(CamelModel):
    kind: NoteKind = Field(default="note", validation_alias=AliasChoices("kind", "type"))
    section: str
    attribute: Optional[str] = None
    content: str

    @field_validator("kind", mode="before")
    @classmethod
    def lower_kind(cls, v):
        if v is None:
            return "note"
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("attribute", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class NoteCreate(NoteBase):
    reference_id: Optional[int] = None


class NoteUpdate(CamelModel):
    attribute: Optional[str] = None
    content: Optional[str] = None


class NoteResponse(NoteBase):
    id: int
    owner_id: int
    reference_id: Optional[int] = None
    created_at: datetime
