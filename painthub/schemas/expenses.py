import datetime as dt
from decimal import Decimal
from typing import Optional

from .base import Amount, CamelModel


class ExpenseBase(CamelModel):
    category: str
    description: str
    amount: Amount
    paid_amount: Amount = Decimal("0")
    paid_full: bool = False
    date: dt.date
    is_required: bool = True


class ExpenseCreate(ExpenseBase):
    job_id: Optional[int] = None


class ExpenseUpdate(CamelModel):
    job_id: Optional[int] = None
    category: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    paid_amount: Optional[Decimal] = None
    paid_full: Optional[bool] = None
    date: Optional[dt.date] = None
    is_required: Optional[bool] = None


class ExpenseResponse(ExpenseBase):
    id: int
    owner_id: int
    job_id: Optional[int] = None
