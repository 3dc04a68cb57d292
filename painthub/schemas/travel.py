import datetime as dt
from typing import Optional

from .base import Amount, CamelModel


class TravelBase(CamelModel):
    date: dt.date
    kilometers: Amount
    fuel_cost: Amount


class TravelCreate(TravelBase):
    job_id: Optional[int] = None


class TravelResponse(TravelBase):
    id: int
    owner_id: int
    job_id: Optional[int] = None
