"""
Per-owner backup and restore.

Export dumps every row the owner has into one JSON-ready document. Import
replaces the owner's data with a document's contents in a single
transaction: delete everything the owner has, then insert the document's
rows in dependency order while translating the document's ids into the
freshly assigned ones.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, Union

import structlog
from sqlalchemy.orm import Session

from ..config import settings
from ..db import unit_of_work
from ..models.models import (
    Attendance,
    Customer,
    CustomerPhoto,
    Expense,
    InventoryItem,
    Job,
    JobPhoto,
    Note,
    TravelLog,
    Worker,
    WorkerDocument,
)
from ..schemas.backup import BackupDocument, RestoreSummary
from ..schemas.customers import CustomerPhotoResponse, CustomerResponse
from ..schemas.expenses import ExpenseResponse
from ..schemas.inventory import InventoryResponse
from ..schemas.jobs import JobPhotoResponse, JobResponse
from ..schemas.notes import NoteResponse, NoteSection
from ..schemas.travel import TravelResponse
from ..schemas.workers import AttendanceResponse, WorkerDocumentResponse, WorkerResponse
from .jobs import insert_job
from .owners import require_owner
from .scoped import insert_owned, list_owned, purge_owned

logger = structlog.get_logger(__name__)

IdMap = Dict[str, int]

# (document key, model, row schema) in document order
EXPORT_TABLES = (
    ("customers", Customer, CustomerResponse),
    ("jobs", Job, JobResponse),
    ("expenses", Expense, ExpenseResponse),
    ("inventory", InventoryItem, InventoryResponse),
    ("notes", Note, NoteResponse),
    ("travel", TravelLog, TravelResponse),
    ("workers", Worker, WorkerResponse),
    ("attendance", Attendance, AttendanceResponse),
    ("jobPhotos", JobPhoto, JobPhotoResponse),
    ("workerDocuments", WorkerDocument, WorkerDocumentResponse),
    ("customerPhotos", CustomerPhoto, CustomerPhotoResponse),
)

# Children before parents
DELETE_ORDER = (
    JobPhoto,
    WorkerDocument,
    CustomerPhoto,
    Attendance,
    InventoryItem,
    TravelLog,
    Expense,
    Note,
    Worker,
    Job,
    Customer,
)


@dataclass
class IdMaps:
    """Document id -> new id, one map per table other rows point at. Lives for one import."""

    customers: IdMap = field(default_factory=dict)
    jobs: IdMap = field(default_factory=dict)
    workers: IdMap = field(default_factory=dict)

    def get(self, name: str) -> IdMap:
        return getattr(self, name)


# Which map resolves Note.reference_id for a section; sections not listed lose the reference
NOTE_REFERENCE_MAPS = {
    NoteSection.JOBS: "jobs",
    NoteSection.WORKERS_ATTENDANCE: "jobs",
    NoteSection.CUSTOMERS: "customers",
    NoteSection.WORKERS: "workers",
}


def _key(document_id) -> Optional[str]:
    if document_id is None:
        return None
    key = str(document_id).strip()
    return key or None


def remap(id_map: IdMap, document_id) -> Optional[int]:
    """New id for a document id; None when absent or unknown."""
    key = _key(document_id)
    if key is None:
        return None
    return id_map.get(key)


def note_reference_map(section: Optional[str]) -> Optional[str]:
    try:
        tag = NoteSection((section or "").strip().lower())
    except ValueError:
        return None
    return NOTE_REFERENCE_MAPS.get(tag)


def _remap_note_reference(row, maps: IdMaps) -> Dict[str, Any]:
    map_name = note_reference_map(row.section)
    if map_name is None:
        return {"reference_id": None}
    return {"reference_id": remap(maps.get(map_name), row.reference_id)}


@dataclass(frozen=True)
class TablePlan:
    """How one document list is written back."""

    attr: str
    model: Type
    # (column, map name): unmappable values become None
    optional_refs: Tuple[Tuple[str, str], ...] = ()
    # (column, map name): unmappable value skips the row
    parent: Optional[Tuple[str, str]] = None
    # map that receives this table's document id -> new id
    remember: Optional[str] = None
    resolve: Optional[Callable[[Any, IdMaps], Dict[str, Any]]] = None
    insert: Optional[Callable[[Session, int, Dict[str, Any]], Any]] = None

    @property
    def ref_columns(self) -> set:
        columns = {column for column, _ in self.optional_refs}
        if self.parent:
            columns.add(self.parent[0])
        return columns


INSERT_PLAN = (
    TablePlan("customers", Customer, remember="customers"),
    TablePlan("jobs", Job, optional_refs=(("customer_id", "customers"),), remember="jobs", insert=insert_job),
    TablePlan("workers", Worker, optional_refs=(("job_id", "jobs"),), remember="workers"),
    TablePlan("expenses", Expense, optional_refs=(("job_id", "jobs"),)),
    TablePlan("inventory", InventoryItem, optional_refs=(("job_id", "jobs"), ("assigned_to_job_id", "jobs"))),
    TablePlan("travel", TravelLog, optional_refs=(("job_id", "jobs"),)),
    TablePlan("notes", Note, resolve=_remap_note_reference),
    TablePlan("attendance", Attendance, optional_refs=(("worker_id", "workers"), ("job_id", "jobs"))),
    TablePlan("job_photos", JobPhoto, parent=("job_id", "jobs")),
    TablePlan("worker_documents", WorkerDocument, parent=("worker_id", "workers")),
    TablePlan("customer_photos", CustomerPhoto, parent=("customer_id", "customers")),
)


def _collect(db: Session, owner_id: int) -> Dict[str, List[Dict[str, Any]]]:
    require_owner(db, owner_id)
    document = {}
    for key, model, schema in EXPORT_TABLES:
        document[key] = [
            schema.model_validate(row).model_dump(mode="json", by_alias=True)
            for row in list_owned(db, model, owner_id)
        ]
    return document


def export_owner_data(db: Session, owner_id: int) -> Dict[str, List[Dict[str, Any]]]:
    """
    Snapshot of every row the owner has, keyed by table, rows ordered by id.

    Reads happen in one transaction. Inside a caller's open transaction
    export reads through it; otherwise it uses a short-lived session of its
    own (at the configured isolation level on PostgreSQL), so the caller's
    session and its pending objects are left alone.
    """
    if db.in_transaction():
        document = _collect(db, owner_id)
    else:
        with Session(bind=db.get_bind()) as snapshot:
            if snapshot.get_bind().dialect.name == "postgresql":
                snapshot.connection(execution_options={"isolation_level": settings.export_isolation_level})
            document = _collect(snapshot, owner_id)

    logger.info(
        "backup_export_completed",
        owner_id=owner_id,
        counts={key: len(rows) for key, rows in document.items()},
    )
    return document


def _delete_owner_rows(db: Session, owner_id: int, summary: RestoreSummary) -> None:
    for model in DELETE_ORDER:
        summary.deleted[model.__tablename__] = purge_owned(db, model, owner_id)


def _restore_table(db: Session, owner_id: int, plan: TablePlan, rows: list, maps: IdMaps, summary: RestoreSummary) -> None:
    table = plan.model.__tablename__
    inserted = skipped = 0
    for row in rows:
        values = row.model_dump(exclude={"id", *plan.ref_columns})

        if plan.parent:
            column, map_name = plan.parent
            parent_id = remap(maps.get(map_name), getattr(row, column))
            if parent_id is None:
                skipped += 1
                logger.warning(
                    "backup_import_row_skipped",
                    owner_id=owner_id,
                    table=table,
                    row_id=row.id,
                    missing=column,
                    document_ref=getattr(row, column),
                )
                continue
            values[column] = parent_id

        for column, map_name in plan.optional_refs:
            values[column] = remap(maps.get(map_name), getattr(row, column))
        if plan.resolve:
            values.update(plan.resolve(row, maps))

        if plan.insert:
            obj = plan.insert(db, owner_id, values)
        else:
            obj = insert_owned(db, plan.model, owner_id, values)

        if plan.remember:
            key = _key(row.id)
            if key is not None:
                maps.get(plan.remember)[key] = obj.id
        inserted += 1

    summary.inserted[table] = inserted
    summary.skipped[table] = skipped


def import_owner_data(
    db: Session,
    owner_id: int,
    document: Union[BackupDocument, Mapping[str, Any], None],
) -> RestoreSummary:
    """
    Replace all of the owner's data with the document's contents.

    All or nothing: the delete and insert phases share one transaction that
    is committed on success and rolled back on any exception, which is then
    re-raised unchanged. Rows of other owners are never touched.
    """
    logger.info("backup_import_started", owner_id=owner_id)
    try:
        if isinstance(document, BackupDocument):
            doc = document
        else:
            doc = BackupDocument.model_validate(document or {})

        summary = RestoreSummary()
        maps = IdMaps()
        with unit_of_work(db):
            require_owner(db, owner_id)
            _delete_owner_rows(db, owner_id, summary)
            for plan in INSERT_PLAN:
                _restore_table(db, owner_id, plan, getattr(doc, plan.attr), maps, summary)
    except Exception as exc:
        logger.error("backup_import_failed", owner_id=owner_id, error=str(exc), error_type=type(exc).__name__)
        raise

    logger.info(
        "backup_import_completed",
        owner_id=owner_id,
        deleted=summary.deleted,
        inserted=summary.inserted,
        skipped=summary.skipped,
    )
    return summary
