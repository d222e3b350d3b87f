"""ReminderRule ORM model. Time-based reminder anchored to a task date or a custom datetime."""

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import OffsetDirection, OffsetUnit, ReferenceType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import RecordModel, in_check


class ReminderRule(RecordModel, Base):
    """Reminder rule. Table: task_reminder.

    custom_datetime is set iff reference_type is 'custom'.
    is_sent flips to true once, together with sent_at.
    """

    __tablename__ = "task_reminder"

    task_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("task.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reference_type: Mapped[str] = mapped_column(String(16), nullable=False)
    custom_datetime: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    offset_direction: Mapped[str] = mapped_column(String(16), nullable=False)
    offset_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    offset_unit: Mapped[str] = mapped_column(String(16), nullable=False)
    calculated_fire_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_sent: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.false()
    )
    sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_task_reminder_due", "is_sent", "calculated_fire_time"),
        CheckConstraint(
            in_check("reference_type", ReferenceType.values()),
            name="task_reminder_reference_type_check",
        ),
        CheckConstraint(
            in_check("offset_direction", OffsetDirection.values()),
            name="task_reminder_offset_direction_check",
        ),
        CheckConstraint(
            in_check("offset_unit", OffsetUnit.values()),
            name="task_reminder_offset_unit_check",
        ),
        CheckConstraint("offset_amount >= 0", name="task_reminder_offset_amount_check"),
        CheckConstraint(
            "(reference_type = 'custom' AND custom_datetime IS NOT NULL) OR "
            "(reference_type <> 'custom' AND custom_datetime IS NULL)",
            name="task_reminder_custom_datetime_check",
        ),
    )
