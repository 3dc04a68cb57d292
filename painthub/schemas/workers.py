import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field, field_validator

from .base import Amount, CamelModel, blank_to_none

AttendanceStatus = Literal["full", "half", "absent"]


class WorkerBase(CamelModel):
    name: str
    role: str
    phone: Optional[str] = None
    address: Optional[str] = None
    document_url: Optional[str] = None
    daily_wage: Amount
    is_active: bool = True
    rating: Optional[int] = Field(default=0, ge=0, le=5)

    @field_validator("phone", "address", "document_url", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class WorkerCreate(WorkerBase):
    job_id: Optional[int] = None


class WorkerUpdate(CamelModel):
    name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    document_url: Optional[str] = None
    daily_wage: Optional[Decimal] = None
    is_active: Optional[bool] = None
    rating: Optional[int] = Field(default=None, ge=0, le=5)
    job_id: Optional[int] = None


class WorkerResponse(WorkerBase):
    id: int
    owner_id: int
    job_id: Optional[int] = None


class AttendanceBase(CamelModel):
    date: dt.date
    status: AttendanceStatus
    extra_allowance: Optional[Amount] = Decimal("0")

    @field_validator("status", mode="before")
    @classmethod
    def lower_status(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("extra_allowance", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class AttendanceCreate(AttendanceBase):
    worker_id: Optional[int] = None
    job_id: Optional[int] = None


class AttendanceResponse(AttendanceBase):
    id: int
    owner_id: int
    worker_id: Optional[int] = None
    job_id: Optional[int] = None


class WorkerDocumentBase(CamelModel):
    url: str
    name: str


class WorkerDocumentCreate(WorkerDocumentBase):
    worker_id: int


class WorkerDocumentResponse(WorkerDocumentBase):
    id: int
    owner_id: int
    worker_id: int
    created_at: dt.datetime
