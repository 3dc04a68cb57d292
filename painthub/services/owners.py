from typing import Optional

import structlog
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError
from ..models.models import User

logger = structlog.get_logger(__name__)


def get_owner(db: Session, owner_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == owner_id).first()


def get_owner_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username.strip()).first()


def require_owner(db: Session, owner_id: int) -> User:
    owner = get_owner(db, owner_id)
    if owner is None:
        raise NotFoundError("Owner", owner_id)
    return owner


def create_owner(db: Session, username: str) -> User:
    username = (username or "").strip()
    if not username:
        raise ValueError("username is required")
    if get_owner_by_username(db, username):
        raise ConflictError("Username already exists")
    owner = User(username=username)
    db.add(owner)
    db.flush()
    logger.info("owner_created", owner_id=owner.id, username=username)
    return owner
