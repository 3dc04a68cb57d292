from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from .base import CamelModel, blank_to_none


class CustomerBase(CamelModel):
    name: str
    phone: str
    address: str


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class CustomerResponse(CustomerBase):
    id: int
    owner_id: int


class CustomerPhotoBase(CamelModel):
    url: str
    # Older backups call it "description"
    caption: Optional[str] = Field(default=None, validation_alias=AliasChoices("caption", "description"))

    @field_validator("caption", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        return blank_to_none(v)


class CustomerPhotoCreate(CustomerPhotoBase):
    customer_id: int


class CustomerPhotoResponse(CustomerPhotoBase):
    id: int
    owner_id: int
    customer_id: int
    created_at: datetime
