from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.models import Note
from ..schemas.notes import NoteCreate, NoteUpdate
from .scoped import delete_owned, insert_owned, owned, update_owned


def list_notes(db: Session, owner_id: int, section: Optional[str] = None, reference_id: Optional[int] = None) -> List[Note]:
    """Newest first."""
    query = owned(db, Note, owner_id)
    if section is not None:
        query = query.filter(Note.section == section)
    if reference_id is not None:
        query = query.filter(Note.reference_id == reference_id)
    return query.order_by(Note.created_at.desc(), Note.id.desc()).all()


def create_note(db: Session, owner_id: int, payload: NoteCreate) -> Note:
    return insert_owned(db, Note, owner_id, payload.model_dump())


def update_note(db: Session, owner_id: int, note_id: int, payload: NoteUpdate) -> Note:
    return update_owned(db, Note, owner_id, note_id, payload.model_dump(exclude_unset=True), "Note")


def delete_note(db: Session, owner_id: int, note_id: int) -> None:
    delete_owned(db, Note, owner_id, note_id, "Note")


def add_log(
    db: Session,
    owner_id: int,
    *,
    section: str,
    content: str,
    reference_id: Optional[int] = None,
    attribute: Optional[str] = None,
) -> Note:
    """System-generated history entry (kind=log)."""
    return insert_owned(
        db,
        Note,
        owner_id,
        {
            "kind": "log",
            "section": section,
            "reference_id": reference_id,
            "attribute": attribute,
            "content": content,
        },
    )
