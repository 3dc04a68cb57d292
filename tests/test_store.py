"""Owner-scoped services: creation defaults, audit notes and access checks."""

import re
from datetime import date
from decimal import Decimal

import pytest

from painthub.errors import ConflictError, NotFoundError
from painthub.models.models import Customer, Job, JobPhoto, Note
from painthub.schemas.customers import CustomerCreate, CustomerUpdate
from painthub.schemas.expenses import ExpenseCreate, ExpenseUpdate
from painthub.schemas.inventory import InventoryCreate, InventoryUpdate
from painthub.schemas.jobs import JobCreate, JobPhotoCreate, JobUpdate
from painthub.schemas.notes import NoteCreate, NoteUpdate
from painthub.schemas.travel import TravelCreate
from painthub.schemas.workers import AttendanceCreate, WorkerCreate, WorkerUpdate
from painthub.services.customers import (
    create_customer,
    delete_customer,
    get_customer,
    list_customers,
    update_customer,
)
from painthub.services.expenses import create_expense, list_expenses, update_expense
from painthub.services.inventory import create_inventory_item, update_inventory_item
from painthub.services.jobs import add_job_photo, create_job, list_job_photos, next_job_code, update_job
from painthub.services.notes import create_note, delete_note, list_notes, update_note
from painthub.services.owners import create_owner, require_owner
from painthub.services.travel import create_travel_log, delete_travel_log, list_travel_logs
from painthub.services.workers import create_worker, list_attendance, record_attendance, update_worker


def _create_customer(db, owner_id, name="Ana Souza"):
    return create_customer(db, owner_id, CustomerCreate(name=name, phone="555-0100", address="12 Oak St"))


def _create_job(db, owner_id, **overrides):
    data = {
        "description": "Repaint kitchen",
        "location": "12 Oak St",
        "quoted_amount": Decimal("800"),
    }
    data.update(overrides)
    return create_job(db, owner_id, JobCreate(**data))


def _create_worker(db, owner_id, name="Carlos"):
    return create_worker(db, owner_id, WorkerCreate(name=name, role="Painter", daily_wage=Decimal("160")))


# ---------------------------------------------------------------------------
# Owners
# ---------------------------------------------------------------------------


def test_duplicate_username_conflicts(test_db, owner):
    with pytest.raises(ConflictError) as exc:
        create_owner(test_db, "  maria ")
    assert exc.value.status_code == 409


def test_require_owner_unknown_id(test_db):
    with pytest.raises(NotFoundError) as exc:
        require_owner(test_db, 999)
    assert exc.value.detail == "Owner not found"


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


def test_next_job_code_format(test_db, owner):
    today = date(2026, 10, 19)

    assert next_job_code(test_db, owner.id, "Exterior painting", today=today) == "#1E19102026"
    assert next_job_code(test_db, owner.id, "  drywall", today=today) == "#1D19102026"
    assert next_job_code(test_db, owner.id, "", today=today) == "#1X19102026"
    assert next_job_code(test_db, owner.id, None, today=today) == "#1X19102026"


def test_job_code_counts_only_the_owners_jobs(test_db, owner, other_owner):
    _create_job(test_db, other_owner.id)
    first = _create_job(test_db, owner.id)
    second = _create_job(test_db, owner.id, category="Exterior painting")

    assert re.fullmatch(r"#1I\d{8}", first.job_code)
    assert re.fullmatch(r"#2E\d{8}", second.job_code)


def test_agreed_amount_defaults_to_quote(test_db, owner):
    job = _create_job(test_db, owner.id, quoted_amount=Decimal("1250.50"))
    explicit = _create_job(test_db, owner.id, agreed_amount=Decimal("700"))

    assert job.agreed_amount == Decimal("1250.50")
    assert explicit.agreed_amount == Decimal("700")
    assert job.status == "quoted"
    assert job.paid_amount == Decimal("0")


def test_update_job_keeps_code_and_ignores_null_for_required_fields(test_db, owner):
    job = _create_job(test_db, owner.id)
    code = job.job_code

    updated = update_job(test_db, owner.id, job.id, JobUpdate(status="In Progress", location=None, paid_amount=Decimal("200")))

    assert updated.job_code == code
    assert updated.status == "in_progress"
    assert updated.location == "12 Oak St"
    assert updated.paid_amount == Decimal("200")


def test_job_cannot_reference_another_owners_customer(test_db, owner, other_owner):
    foreign = _create_customer(test_db, other_owner.id)

    with pytest.raises(NotFoundError) as exc:
        _create_job(test_db, owner.id, customer_id=foreign.id)
    assert exc.value.status_code == 404
    assert test_db.query(Job).filter(Job.owner_id == owner.id).count() == 0


def test_job_photos_listed_newest_first_and_require_owned_job(test_db, owner, other_owner):
    job = _create_job(test_db, owner.id)
    foreign_job = _create_job(test_db, other_owner.id)
    first = add_job_photo(test_db, owner.id, JobPhotoCreate(job_id=job.id, url="https://img.example/1.jpg"))
    second = add_job_photo(test_db, owner.id, JobPhotoCreate(job_id=job.id, url="https://img.example/2.jpg"))

    assert [p.id for p in list_job_photos(test_db, owner.id, job.id)] == [second.id, first.id]
    assert list_job_photos(test_db, other_owner.id) == []
    with pytest.raises(NotFoundError):
        add_job_photo(test_db, owner.id, JobPhotoCreate(job_id=foreign_job.id, url="https://img.example/x.jpg"))


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------


def test_customers_are_scoped_to_their_owner(test_db, owner, other_owner):
    mine = _create_customer(test_db, owner.id)
    theirs = _create_customer(test_db, other_owner.id, name="Other")

    assert [c.id for c in list_customers(test_db, owner.id)] == [mine.id]
    with pytest.raises(NotFoundError):
        get_customer(test_db, owner.id, theirs.id)
    with pytest.raises(NotFoundError):
        update_customer(test_db, owner.id, theirs.id, CustomerUpdate(name="Hijack"))
    with pytest.raises(NotFoundError):
        delete_customer(test_db, owner.id, theirs.id)
    assert test_db.query(Customer).filter(Customer.id == theirs.id).one().name == "Other"


def test_deleting_customer_keeps_job_and_drops_reference(test_db, owner):
    customer = _create_customer(test_db, owner.id)
    job = _create_job(test_db, owner.id, customer_id=customer.id)
    test_db.commit()

    delete_customer(test_db, owner.id, customer.id)
    test_db.commit()

    refreshed = test_db.query(Job).filter(Job.id == job.id).one()
    assert refreshed.customer_id is None


def test_update_missing_customer_raises_not_found(test_db, owner):
    with pytest.raises(NotFoundError) as exc:
        update_customer(test_db, owner.id, 12345, CustomerUpdate(phone="1"))
    assert exc.value.detail == "Customer not found"


# ---------------------------------------------------------------------------
# Workers and attendance
# ---------------------------------------------------------------------------


def test_worker_name_unique_per_owner(test_db, owner, other_owner):
    _create_worker(test_db, owner.id, name="Carlos")
    _create_worker(test_db, other_owner.id, name="Carlos")

    with pytest.raises(ConflictError) as exc:
        _create_worker(test_db, owner.id, name=" Carlos ")
    assert exc.value.status_code == 409
    assert exc.value.detail == "Worker name already exists"


def test_worker_rename_to_taken_name_conflicts(test_db, owner):
    _create_worker(test_db, owner.id, name="Carlos")
    other = _create_worker(test_db, owner.id, name="Pedro")

    with pytest.raises(ConflictError):
        update_worker(test_db, owner.id, other.id, WorkerUpdate(name="Carlos"))
    renamed = update_worker(test_db, owner.id, other.id, WorkerUpdate(name="Pedro", rating=5))
    assert renamed.rating == 5


def test_record_attendance_writes_log_note_under_job(test_db, owner):
    job = _create_job(test_db, owner.id, name="Kitchen")
    worker = _create_worker(test_db, owner.id)

    record = record_attendance(
        test_db,
        owner.id,
        AttendanceCreate(worker_id=worker.id, job_id=job.id, date=date(2024, 4, 3), status="Half"),
    )

    assert record.status == "half"
    assert [a.id for a in list_attendance(test_db, owner.id, worker.id)] == [record.id]
    note = test_db.query(Note).filter(Note.owner_id == owner.id, Note.section == "workers_attendance").one()
    assert note.kind == "log"
    assert note.attribute == "attendance"
    assert note.reference_id == job.id
    assert note.content == "Attendance recorded for Carlos on 2024-04-03: HALF (Job: Kitchen)"


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


def test_inventory_creation_and_reassignment_are_audited(test_db, owner):
    job = _create_job(test_db, owner.id)
    item = create_inventory_item(
        test_db,
        owner.id,
        InventoryCreate(
            name="Primer",
            category="Paint",
            quantity=Decimal("5"),
            unit="L",
            cost_per_unit=Decimal("14.00"),
            assigned_to_job_id=job.id,
        ),
    )

    update_inventory_item(test_db, owner.id, item.id, InventoryUpdate(assigned_to_job_id=None, quantity=Decimal("3")))

    notes = list_notes(test_db, owner.id, section="inventory")
    assert [n.attribute for n in notes] == ["reassignment", "reassignment"]
    assert all(n.reference_id == item.id and n.kind == "log" for n in notes)
    # Newest first
    assert notes[0].content == (
        f'Inventory item "Primer" updated: Reassigned from Job {job.job_code} to General Inventory. '
        "Quantity changed from 5 to 3."
    )
    assert notes[1].content == f"Initial assignment of Primer (5 L) to Job {job.job_code}"


def test_inventory_update_without_movement_adds_no_note(test_db, owner):
    item = create_inventory_item(
        test_db,
        owner.id,
        InventoryCreate(name="Tape", category="Supplies", quantity=Decimal("2"), unit="rolls", cost_per_unit=Decimal("3")),
    )

    update_inventory_item(test_db, owner.id, item.id, InventoryUpdate(cost_per_unit=Decimal("3.50"), quantity=Decimal("2")))

    notes = list_notes(test_db, owner.id, section="inventory")
    assert len(notes) == 1
    assert notes[0].content == "Initial assignment of Tape (2 rolls) to General Inventory"


# ---------------------------------------------------------------------------
# Expenses, travel, notes
# ---------------------------------------------------------------------------


def test_expense_update_and_foreign_job_rejected(test_db, owner, other_owner):
    foreign_job = _create_job(test_db, other_owner.id)
    expense = create_expense(
        test_db,
        owner.id,
        ExpenseCreate(category="Paint", description="Gallons", amount=Decimal("120"), date=date(2024, 1, 5)),
    )

    updated = update_expense(test_db, owner.id, expense.id, ExpenseUpdate(paid_amount=Decimal("120"), paid_full=True))
    assert updated.paid_full is True
    assert [e.id for e in list_expenses(test_db, owner.id)] == [expense.id]
    with pytest.raises(NotFoundError):
        update_expense(test_db, owner.id, expense.id, ExpenseUpdate(job_id=foreign_job.id))


def test_travel_logs_create_list_delete(test_db, owner):
    job = _create_job(test_db, owner.id)
    log = create_travel_log(
        test_db, owner.id, TravelCreate(job_id=job.id, date=date(2024, 2, 1), kilometers=Decimal("18.4"), fuel_cost=Decimal("6.20"))
    )

    assert [t.id for t in list_travel_logs(test_db, owner.id)] == [log.id]
    delete_travel_log(test_db, owner.id, log.id)
    assert list_travel_logs(test_db, owner.id) == []
    with pytest.raises(NotFoundError):
        delete_travel_log(test_db, owner.id, log.id)


def test_notes_newest_first_update_and_delete(test_db, owner):
    first = create_note(test_db, owner.id, NoteCreate(section="jobs", content="first"))
    second = create_note(test_db, owner.id, NoteCreate(section="jobs", content="second"))

    assert [n.id for n in list_notes(test_db, owner.id)] == [second.id, first.id]
    assert update_note(test_db, owner.id, first.id, NoteUpdate(content="edited")).content == "edited"
    delete_note(test_db, owner.id, second.id)
    assert [n.content for n in list_notes(test_db, owner.id)] == ["edited"]
