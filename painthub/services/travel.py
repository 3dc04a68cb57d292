from typing import List

from sqlalchemy.orm import Session

from ..models.models import Job, TravelLog
from ..schemas.travel import TravelCreate
from .scoped import delete_owned, ensure_references, insert_owned, owned


def list_travel_logs(db: Session, owner_id: int) -> List[TravelLog]:
    return owned(db, TravelLog, owner_id).order_by(TravelLog.date.desc(), TravelLog.id.desc()).all()


def create_travel_log(db: Session, owner_id: int, payload: TravelCreate) -> TravelLog:
    ensure_references(db, owner_id, (Job, payload.job_id))
    return insert_owned(db, TravelLog, owner_id, payload.model_dump())


def delete_travel_log(db: Session, owner_id: int, travel_id: int) -> None:
    delete_owned(db, TravelLog, owner_id, travel_id, "Travel log")
