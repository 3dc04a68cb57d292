import datetime as dt
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base


def int_pk() -> Mapped[int]:
    return mapped_column(Integer, primary_key=True, autoincrement=True)


def owner_fk() -> Mapped[int]:
    return mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Owner account; every business row below is partitioned by it."""
    __tablename__ = "users"

    id: Mapped[int] = int_pk()
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    job_code: Mapped[Optional[str]] = mapped_column(String(50), index=True)  # e.g. #3I19102026, set once
    name: Mapped[Optional[str]] = mapped_column(String(255))
    customer_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("customers.id", ondelete="SET NULL"), index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="Interior painting")
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="quoted")  # quoted|in_progress|completed|cancelled
    quoted_amount: Mapped[Decimal] = mapped_column(Numeric(), nullable=False)
    agreed_amount: Mapped[Decimal] = mapped_column(Numeric(), nullable=False, default=Decimal("0"))
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(), nullable=False, default=Decimal("0"))
    start_date: Mapped[Optional[dt.date]] = mapped_column(Date)
    end_date: Mapped[Optional[dt.date]] = mapped_column(Date)


class Worker(Base):
    __tablename__ = "workers"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    job_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("jobs.id", ondelete="SET NULL"))  # current assignment
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    address: Mapped[Optional[str]] = mapped_column(String(500))
    document_url: Mapped[Optional[str]] = mapped_column(String(1000))
    daily_wage: Mapped[Decimal] = mapped_column(Numeric(), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    rating: Mapped[Optional[int]] = mapped_column(Integer, default=0)  # 0-5

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_worker_owner_name"),
    )


class Attendance(Base):
    __tablename__ = "attendance"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    worker_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("workers.id", ondelete="SET NULL"), index=True)
    job_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("jobs.id", ondelete="SET NULL"), index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False)  # full|half|absent
    extra_allowance: Mapped[Optional[Decimal]] = mapped_column(Numeric(), default=Decimal("0"))


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    job_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("jobs.id", ondelete="SET NULL"), index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(), nullable=False)
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(), nullable=False, default=Decimal("0"))
    paid_full: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class InventoryItem(Base):
    __tablename__ = "inventory"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    # Origin job (where the stock was bought for) and current deployment are separate relations
    job_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("jobs.id", ondelete="SET NULL"))
    assigned_to_job_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("jobs.id", ondelete="SET NULL"))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(), nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    cost_per_unit: Mapped[Decimal] = mapped_column(Numeric(), nullable=False)


class TravelLog(Base):
    __tablename__ = "travel_logs"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    job_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("jobs.id", ondelete="SET NULL"), index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    kilometers: Mapped[Decimal] = mapped_column(Numeric(), nullable=False)
    fuel_cost: Mapped[Decimal] = mapped_column(Numeric(), nullable=False)


class JobPhoto(Base):
    __tablename__ = "job_photos"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    job_id: Mapped[int] = mapped_column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    caption: Mapped[Optional[str]] = mapped_column(String(1000))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class WorkerDocument(Base):
    __tablename__ = "worker_documents"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    worker_id: Mapped[int] = mapped_column(Integer, ForeignKey("workers.id", ondelete="CASCADE"), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class CustomerPhoto(Base):
    __tablename__ = "customer_photos"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    customer_id: Mapped[int] = mapped_column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    caption: Mapped[Optional[str]] = mapped_column(String(1000))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class Note(Base):
    """User notes and system logs. reference_id points into the table named by section."""
    __tablename__ = "notes"

    id: Mapped[int] = int_pk()
    owner_id: Mapped[int] = owner_fk()
    kind: Mapped[str] = mapped_column(String(10), nullable=False, default="note")  # note|log
    section: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    reference_id: Mapped[Optional[int]] = mapped_column(Integer)
    attribute: Mapped[Optional[str]] = mapped_column(String(100))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
