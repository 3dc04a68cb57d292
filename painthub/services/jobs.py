from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pytz
from sqlalchemy.orm import Session

from ..config import settings
from ..models.models import Customer, Job, JobPhoto
from ..schemas.jobs import JobCreate, JobPhotoCreate, JobUpdate
from .scoped import (
    delete_owned,
    ensure_references,
    get_owned_or_404,
    insert_owned,
    list_owned,
    owned,
    update_owned,
)


def local_today() -> date:
    return datetime.now(pytz.timezone(settings.tz_default)).date()


def next_job_code(db: Session, owner_id: int, category: Optional[str], today: Optional[date] = None) -> str:
    """
    Code for the job about to be inserted: #{ordinal}{initial}{DDMMYYYY}.

    ordinal is the owner's job count including the new one, initial the first
    letter of the category (X when there is none).
    """
    ordinal = owned(db, Job, owner_id).count() + 1
    initial = (category or "").strip()[:1].upper() or "X"
    today = today or local_today()
    return f"#{ordinal}{initial}{today.strftime('%d%m%Y')}"


def insert_job(db: Session, owner_id: int, values: Dict[str, Any]) -> Job:
    """Insert with the creation defaults applied; references must already be valid for the owner."""
    values = dict(values)
    if values.get("agreed_amount") is None:
        values["agreed_amount"] = values["quoted_amount"]
    values["job_code"] = next_job_code(db, owner_id, values.get("category"))
    return insert_owned(db, Job, owner_id, values)


def list_jobs(db: Session, owner_id: int) -> List[Job]:
    return list_owned(db, Job, owner_id)


def get_job(db: Session, owner_id: int, job_id: int) -> Job:
    return get_owned_or_404(db, Job, owner_id, job_id, "Job")


def create_job(db: Session, owner_id: int, payload: JobCreate) -> Job:
    ensure_references(db, owner_id, (Customer, payload.customer_id))
    return insert_job(db, owner_id, payload.model_dump())


def update_job(db: Session, owner_id: int, job_id: int, payload: JobUpdate) -> Job:
    values = payload.model_dump(exclude_unset=True)
    ensure_references(db, owner_id, (Customer, values.get("customer_id")))
    return update_owned(db, Job, owner_id, job_id, values, "Job")


def delete_job(db: Session, owner_id: int, job_id: int) -> None:
    delete_owned(db, Job, owner_id, job_id, "Job")


def list_job_photos(db: Session, owner_id: int, job_id: Optional[int] = None) -> List[JobPhoto]:
    query = owned(db, JobPhoto, owner_id)
    if job_id is not None:
        query = query.filter(JobPhoto.job_id == job_id)
    return query.order_by(JobPhoto.created_at.desc(), JobPhoto.id.desc()).all()


def add_job_photo(db: Session, owner_id: int, payload: JobPhotoCreate) -> JobPhoto:
    get_job(db, owner_id, payload.job_id)
    return insert_owned(db, JobPhoto, owner_id, payload.model_dump())


def delete_job_photo(db: Session, owner_id: int, photo_id: int) -> None:
    delete_owned(db, JobPhoto, owner_id, photo_id, "Job photo")
