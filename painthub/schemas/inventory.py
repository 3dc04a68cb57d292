from decimal import Decimal
from typing import Optional

from .base import Amount, CamelModel


class InventoryBase(CamelModel):
    name: str
    category: str
    quantity: Amount
    unit: str
    cost_per_unit: Amount


class InventoryCreate(InventoryBase):
    job_id: Optional[int] = None
    assigned_to_job_id: Optional[int] = None


class InventoryUpdate(CamelModel):
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    cost_per_unit: Optional[Decimal] = None
    job_id: Optional[int] = None
    assigned_to_job_id: Optional[int] = None


class InventoryResponse(InventoryBase):
    id: int
    owner_id: int
    job_id: Optional[int] = None
    assigned_to_job_id: Optional[int] = None
