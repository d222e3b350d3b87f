"""Task ORM model. Parent entity of reminder rules, with denormalized display fields."""

from datetime import datetime
from decimal import Decimal

import sqlalchemy as sa
from sqlalchemy import JSON, CheckConstraint, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import RecordModel
from app.shared.utils.generators import TASK_NUMBER_START

TASK_NUMBER_SEQ = sa.Sequence(
    "task_number_seq", start=TASK_NUMBER_START, metadata=Base.metadata
)


class Task(RecordModel, Base):
    """Task. Table: task.

    assigned_to / assigned_by / contact_id are plain references (no FK):
    a dangling reference leaves the *_name fields null instead of failing
    the write.
    """

    __tablename__ = "task"

    task_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="To Do", server_default="To Do"
    )
    priority: Mapped[str] = mapped_column(
        String(32), nullable=False, default="Medium", server_default="Medium"
    )
    category: Mapped[str] = mapped_column(
        String(64), nullable=False, default="Other", server_default="Other"
    )
    assigned_to: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    assigned_to_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    assigned_by: Mapped[str | None] = mapped_column(String, nullable=True)
    assigned_by_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    completion_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    estimated_hours: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    actual_hours: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    progress_percentage: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="task_progress_percentage_check",
        ),
    )
