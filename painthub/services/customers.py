from typing import List

from sqlalchemy.orm import Session

from ..models.models import Customer, CustomerPhoto
from ..schemas.customers import CustomerCreate, CustomerPhotoCreate, CustomerUpdate
from .scoped import delete_owned, get_owned_or_404, insert_owned, list_owned, owned, update_owned


def list_customers(db: Session, owner_id: int) -> List[Customer]:
    return list_owned(db, Customer, owner_id)


def get_customer(db: Session, owner_id: int, customer_id: int) -> Customer:
    return get_owned_or_404(db, Customer, owner_id, customer_id, "Customer")


def create_customer(db: Session, owner_id: int, payload: CustomerCreate) -> Customer:
    return insert_owned(db, Customer, owner_id, payload.model_dump())


def update_customer(db: Session, owner_id: int, customer_id: int, payload: CustomerUpdate) -> Customer:
    return update_owned(db, Customer, owner_id, customer_id, payload.model_dump(exclude_unset=True), "Customer")


def delete_customer(db: Session, owner_id: int, customer_id: int) -> None:
    # Jobs keep their history with customer_id nulled; photos go with the customer
    delete_owned(db, Customer, owner_id, customer_id, "Customer")


def list_customer_photos(db: Session, owner_id: int, customer_id: int) -> List[CustomerPhoto]:
    return (
        owned(db, CustomerPhoto, owner_id)
        .filter(CustomerPhoto.customer_id == customer_id)
        .order_by(CustomerPhoto.created_at.desc(), CustomerPhoto.id.desc())
        .all()
    )


def add_customer_photo(db: Session, owner_id: int, payload: CustomerPhotoCreate) -> CustomerPhoto:
    get_customer(db, owner_id, payload.customer_id)
    return insert_owned(db, CustomerPhoto, owner_id, payload.model_dump())


def delete_customer_photo(db: Session, owner_id: int, photo_id: int) -> None:
    delete_owned(db, CustomerPhoto, owner_id, photo_id, "Customer photo")
