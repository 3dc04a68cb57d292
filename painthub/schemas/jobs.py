import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import Amount, CamelModel, blank_to_none

JobStatus = Literal["quoted", "in_progress", "completed", "cancelled"]


def normalize_job_status(v):
    # "In Progress" / "in-progress" -> "in_progress"
    if isinstance(v, str):
        return v.strip().lower().replace(" ", "_").replace("-", "_")
    return v


class JobBase(CamelModel):
    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "jobName"))
    category: str = "Interior painting"
    description: str
    location: str
    status: JobStatus = "quoted"
    quoted_amount: Amount
    agreed_amount: Optional[Amount] = None
    paid_amount: Amount = Decimal("0")
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @field_validator("name", "agreed_amount", "start_date", "end_date", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def status_key(cls, v):
        return normalize_job_status(v)


class JobCreate(JobBase):
    customer_id: Optional[int] = None


class JobUpdate(CamelModel):
    # job_code is fixed at creation and deliberately absent here
    name: Optional[str] = None
    customer_id: Optional[int] = None
    category: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    status: Optional[JobStatus] = None
    quoted_amount: Optional[Decimal] = None
    agreed_amount: Optional[Decimal] = None
    paid_amount: Optional[Decimal] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None

    @field_validator("status", mode="before")
    @classmethod
    def status_key(cls, v):
        return normalize_job_status(v)


class JobResponse(JobBase):
    id: int
    owner_id: int
    job_code: Optional[str] = None
    customer_id: Optional[int] = None


class JobPhotoBase(CamelModel):
    url: str
    caption: Optional[str] = Field(default=None, validation_alias=AliasChoices("caption", "description"))

    @field_validator("caption", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class JobPhotoCreate(JobPhotoBase):
    job_id: int


class JobPhotoResponse(JobPhotoBase):
    id: int
    owner_id: int
    job_id: int
    created_at: dt.datetime
