"""Backup document shapes.

Rows reuse the entity base schemas and add the document-local ``id`` plus
loosely typed reference fields; references are only resolved (or dropped)
once the id maps for the restore are built.
"""
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .base import DocumentId
from .customers import CustomerBase, CustomerPhotoBase
from .expenses import ExpenseBase
from .inventory import InventoryBase
from .jobs import JobBase, JobPhotoBase
from .notes import NoteBase
from .travel import TravelBase
from .workers import AttendanceBase, WorkerBase, WorkerDocumentBase


class CustomerRow(CustomerBase):
    id: Optional[DocumentId] = None


class JobRow(JobBase):
    id: Optional[DocumentId] = None
    customer_id: Optional[DocumentId] = None


class WorkerRow(WorkerBase):
    id: Optional[DocumentId] = None
    job_id: Optional[DocumentId] = None


class ExpenseRow(ExpenseBase):
    id: Optional[DocumentId] = None
    job_id: Optional[DocumentId] = None


class InventoryRow(InventoryBase):
    id: Optional[DocumentId] = None
    job_id: Optional[DocumentId] = None
    assigned_to_job_id: Optional[DocumentId] = None


class TravelRow(TravelBase):
    id: Optional[DocumentId] = None
    job_id: Optional[DocumentId] = None


class NoteRow(NoteBase):
    id: Optional[DocumentId] = None
    reference_id: Optional[DocumentId] = None


class AttendanceRow(AttendanceBase):
    id: Optional[DocumentId] = None
    worker_id: Optional[DocumentId] = None
    job_id: Optional[DocumentId] = None


class JobPhotoRow(JobPhotoBase):
    id: Optional[DocumentId] = None
    job_id: Optional[DocumentId] = None


class WorkerDocumentRow(WorkerDocumentBase):
    id: Optional[DocumentId] = None
    worker_id: Optional[DocumentId] = None


class CustomerPhotoRow(CustomerPhotoBase):
    id: Optional[DocumentId] = None
    customer_id: Optional[DocumentId] = None


class BackupDocument(BaseModel):
    """Everything one owner has, as produced by export. Missing lists are empty; unknown keys are ignored."""

    customers: List[CustomerRow] = Field(default_factory=list)
    jobs: List[JobRow] = Field(default_factory=list)
    expenses: List[ExpenseRow] = Field(default_factory=list)
    inventory: List[InventoryRow] = Field(default_factory=list)
    notes: List[NoteRow] = Field(default_factory=list)
    travel: List[TravelRow] = Field(
        default_factory=list, validation_alias=AliasChoices("travel", "travelLogs")
    )
    workers: List[WorkerRow] = Field(default_factory=list)
    attendance: List[AttendanceRow] = Field(default_factory=list)
    job_photos: List[JobPhotoRow] = Field(
        default_factory=list, validation_alias=AliasChoices("jobPhotos", "jobImages", "job_photos")
    )
    worker_documents: List[WorkerDocumentRow] = Field(
        default_factory=list, validation_alias=AliasChoices("workerDocuments", "worker_documents")
    )
    customer_photos: List[CustomerPhotoRow] = Field(
        default_factory=list, validation_alias=AliasChoices("customerPhotos", "customerImages", "customer_photos")
    )

    class Config:
        extra = "ignore"

    @field_validator("*", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return [] if v is None else v


class RestoreSummary(BaseModel):
    """Row counts per table for one import."""

    deleted: Dict[str, int] = Field(default_factory=dict)
    inserted: Dict[str, int] = Field(default_factory=dict)
    skipped: Dict[str, int] = Field(default_factory=dict)
