from decimal import Decimal
from typing import Annotated, Union

from pydantic import BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel

# Ids as written in a backup document; only meaningful inside that document
DocumentId = Union[int, str]


def decimal_text(value: Decimal) -> str:
    # Fixed-point, no padding: SQLite hands unscaled numerics back as "100.1250000000"
    return format(value.normalize(), "f")


# Money and measures: exact Decimal in Python, plain numeric string in JSON
Amount = Annotated[Decimal, PlainSerializer(decimal_text, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (backup documents, API payloads)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def blank_to_none(v):
    if v is None:
        return None
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v
