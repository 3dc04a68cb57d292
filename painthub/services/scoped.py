"""
Owner-scoped query helpers.

Every business table carries owner_id; nothing in the services reads or
writes a row without filtering on it. Helpers flush but never commit, the
caller decides the transaction boundary (see db.unit_of_work).
"""
from typing import Any, Dict, List, Optional, Tuple, Type

from sqlalchemy.orm import Query, Session

from ..errors import NotFoundError


def owned(db: Session, model: Type, owner_id: int) -> Query:
    return db.query(model).filter(model.owner_id == owner_id)


def list_owned(db: Session, model: Type, owner_id: int) -> List[Any]:
    return owned(db, model, owner_id).order_by(model.id.asc()).all()


def get_owned(db: Session, model: Type, owner_id: int, entity_id: Optional[int]):
    if entity_id is None:
        return None
    return owned(db, model, owner_id).filter(model.id == entity_id).first()


def get_owned_or_404(db: Session, model: Type, owner_id: int, entity_id: Optional[int], label: Optional[str] = None):
    obj = get_owned(db, model, owner_id, entity_id)
    if obj is None:
        raise NotFoundError(label or model.__name__, entity_id)
    return obj


def ensure_references(db: Session, owner_id: int, *refs: Tuple[Type, Optional[int]]) -> None:
    """Every non-null (model, id) pair must name a row of this owner."""
    for model, entity_id in refs:
        if entity_id is not None:
            get_owned_or_404(db, model, owner_id, entity_id)


def insert_owned(db: Session, model: Type, owner_id: int, values: Dict[str, Any]):
    obj = model(owner_id=owner_id, **values)
    db.add(obj)
    db.flush()
    return obj


def update_owned(db: Session, model: Type, owner_id: int, entity_id: int, values: Dict[str, Any], label: Optional[str] = None):
    obj = get_owned_or_404(db, model, owner_id, entity_id, label)
    columns = model.__table__.c
    for key, value in values.items():
        # An explicit null on a required column means "leave it"
        if value is None and key in columns and not columns[key].nullable:
            continue
        setattr(obj, key, value)
    db.flush()
    return obj


def delete_owned(db: Session, model: Type, owner_id: int, entity_id: int, label: Optional[str] = None) -> None:
    obj = get_owned_or_404(db, model, owner_id, entity_id, label)
    db.delete(obj)
    db.flush()


def purge_owned(db: Session, model: Type, owner_id: int) -> int:
    """Bulk-delete every row of the owner in one table; returns the row count."""
    return owned(db, model, owner_id).delete()
