from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from ..errors import ConflictError
from ..models.models import Attendance, Job, Worker, WorkerDocument
from ..schemas.notes import NoteSection
from ..schemas.workers import AttendanceCreate, WorkerCreate, WorkerDocumentCreate, WorkerUpdate
from .notes import add_log
from .scoped import (
    delete_owned,
    ensure_references,
    get_owned,
    get_owned_or_404,
    insert_owned,
    list_owned,
    owned,
    update_owned,
)

logger = structlog.get_logger(__name__)


def _name_taken(db: Session, owner_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
    query = owned(db, Worker, owner_id).filter(Worker.name == name)
    if exclude_id is not None:
        query = query.filter(Worker.id != exclude_id)
    return db.query(query.exists()).scalar()


def list_workers(db: Session, owner_id: int) -> List[Worker]:
    return list_owned(db, Worker, owner_id)


def get_worker(db: Session, owner_id: int, worker_id: int) -> Worker:
    return get_owned_or_404(db, Worker, owner_id, worker_id, "Worker")


def create_worker(db: Session, owner_id: int, payload: WorkerCreate) -> Worker:
    if _name_taken(db, owner_id, payload.name):
        raise ConflictError("Worker name already exists")
    ensure_references(db, owner_id, (Job, payload.job_id))
    values = payload.model_dump()
    if values.get("rating") is None:
        values["rating"] = 0
    return insert_owned(db, Worker, owner_id, values)


def update_worker(db: Session, owner_id: int, worker_id: int, payload: WorkerUpdate) -> Worker:
    values = payload.model_dump(exclude_unset=True)
    if values.get("name"):
        values["name"] = values["name"].strip()
        if _name_taken(db, owner_id, values["name"], exclude_id=worker_id):
            raise ConflictError("Worker name already exists")
    ensure_references(db, owner_id, (Job, values.get("job_id")))
    return update_owned(db, Worker, owner_id, worker_id, values, "Worker")


def delete_worker(db: Session, owner_id: int, worker_id: int) -> None:
    delete_owned(db, Worker, owner_id, worker_id, "Worker")


def list_worker_documents(db: Session, owner_id: int, worker_id: int) -> List[WorkerDocument]:
    return (
        owned(db, WorkerDocument, owner_id)
        .filter(WorkerDocument.worker_id == worker_id)
        .order_by(WorkerDocument.created_at.desc(), WorkerDocument.id.desc())
        .all()
    )


def add_worker_document(db: Session, owner_id: int, payload: WorkerDocumentCreate) -> WorkerDocument:
    get_worker(db, owner_id, payload.worker_id)
    return insert_owned(db, WorkerDocument, owner_id, payload.model_dump())


def delete_worker_document(db: Session, owner_id: int, document_id: int) -> None:
    delete_owned(db, WorkerDocument, owner_id, document_id, "Worker document")


def list_attendance(db: Session, owner_id: int, worker_id: Optional[int] = None) -> List[Attendance]:
    query = owned(db, Attendance, owner_id)
    if worker_id is not None:
        query = query.filter(Attendance.worker_id == worker_id)
    return query.order_by(Attendance.date.desc(), Attendance.id.desc()).all()


def record_attendance(db: Session, owner_id: int, payload: AttendanceCreate) -> Attendance:
    """Store one attendance mark and append a history log under the job."""
    ensure_references(db, owner_id, (Worker, payload.worker_id), (Job, payload.job_id))
    record = insert_owned(db, Attendance, owner_id, payload.model_dump())

    worker = get_owned(db, Worker, owner_id, payload.worker_id)
    job = get_owned(db, Job, owner_id, payload.job_id)
    content = (
        f"Attendance recorded for {worker.name if worker else 'Worker'} "
        f"on {record.date.isoformat()}: {record.status.upper()}"
    )
    if job:
        content += f" (Job: {job.name or job.description})"
    # reference_id is the job so restore can remap it through the jobs map
    add_log(
        db,
        owner_id,
        section=NoteSection.WORKERS_ATTENDANCE.value,
        reference_id=record.job_id,
        attribute="attendance",
        content=content,
    )
    logger.info("attendance_recorded", attendance_id=record.id, worker_id=record.worker_id, job_id=record.job_id)
    return record
