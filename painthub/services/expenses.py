from typing import List

from sqlalchemy.orm import Session

from ..models.models import Expense, Job
from ..schemas.expenses import ExpenseCreate, ExpenseUpdate
from .scoped import delete_owned, ensure_references, insert_owned, list_owned, update_owned


def list_expenses(db: Session, owner_id: int) -> List[Expense]:
    return list_owned(db, Expense, owner_id)


def create_expense(db: Session, owner_id: int, payload: ExpenseCreate) -> Expense:
    ensure_references(db, owner_id, (Job, payload.job_id))
    return insert_owned(db, Expense, owner_id, payload.model_dump())


def update_expense(db: Session, owner_id: int, expense_id: int, payload: ExpenseUpdate) -> Expense:
    values = payload.model_dump(exclude_unset=True)
    ensure_references(db, owner_id, (Job, values.get("job_id")))
    return update_owned(db, Expense, owner_id, expense_id, values, "Expense")


def delete_expense(db: Session, owner_id: int, expense_id: int) -> None:
    delete_owned(db, Expense, owner_id, expense_id, "Expense")
