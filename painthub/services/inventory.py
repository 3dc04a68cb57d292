from decimal import Decimal
from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from ..models.models import InventoryItem, Job
from ..schemas.inventory import InventoryCreate, InventoryUpdate
from ..schemas.notes import NoteSection
from .notes import add_log
from .scoped import delete_owned, ensure_references, get_owned, get_owned_or_404, insert_owned, list_owned, update_owned

logger = structlog.get_logger(__name__)

GENERAL_INVENTORY = "General Inventory"


def _format_quantity(quantity) -> str:
    return format(Decimal(quantity).normalize(), "f")


def _location_label(db: Session, owner_id: int, job_id: Optional[int]) -> str:
    if job_id is None:
        return GENERAL_INVENTORY
    job = get_owned(db, Job, owner_id, job_id)
    if job is None:
        return f"Job #{job_id}"
    return f"Job {job.job_code}" if job.job_code else f"Job #{job.id}"


def _log_reassignment(db: Session, owner_id: int, item: InventoryItem, content: str) -> None:
    add_log(
        db,
        owner_id,
        section=NoteSection.INVENTORY.value,
        reference_id=item.id,
        attribute="reassignment",
        content=content,
    )
    logger.info("inventory_audit_logged", item_id=item.id)


def list_inventory(db: Session, owner_id: int) -> List[InventoryItem]:
    return list_owned(db, InventoryItem, owner_id)


def create_inventory_item(db: Session, owner_id: int, payload: InventoryCreate) -> InventoryItem:
    ensure_references(db, owner_id, (Job, payload.job_id), (Job, payload.assigned_to_job_id))
    item = insert_owned(db, InventoryItem, owner_id, payload.model_dump())
    target = _location_label(db, owner_id, item.assigned_to_job_id)
    _log_reassignment(
        db,
        owner_id,
        item,
        f"Initial assignment of {item.name} ({_format_quantity(item.quantity)} {item.unit}) to {target}",
    )
    return item


def update_inventory_item(db: Session, owner_id: int, item_id: int, payload: InventoryUpdate) -> InventoryItem:
    """Apply the change and record an audit note when location or quantity moved."""
    item = get_owned_or_404(db, InventoryItem, owner_id, item_id, "Inventory item")
    values = payload.model_dump(exclude_unset=True)
    ensure_references(db, owner_id, (Job, values.get("job_id")), (Job, values.get("assigned_to_job_id")))

    changes = []
    if "assigned_to_job_id" in values and values["assigned_to_job_id"] != item.assigned_to_job_id:
        changes.append(
            f"Reassigned from {_location_label(db, owner_id, item.assigned_to_job_id)} "
            f"to {_location_label(db, owner_id, values['assigned_to_job_id'])}."
        )
    if values.get("quantity") is not None and Decimal(values["quantity"]) != Decimal(item.quantity):
        changes.append(
            f"Quantity changed from {_format_quantity(item.quantity)} to {_format_quantity(values['quantity'])}."
        )
    name = values.get("name") or item.name

    item = update_owned(db, InventoryItem, owner_id, item_id, values, "Inventory item")
    if changes:
        _log_reassignment(db, owner_id, item, f'Inventory item "{name}" updated: ' + " ".join(changes))
    return item


def delete_inventory_item(db: Session, owner_id: int, item_id: int) -> None:
    delete_owned(db, InventoryItem, owner_id, item_id, "Inventory item")
