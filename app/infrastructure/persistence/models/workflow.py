"""WorkflowDefinition and WorkflowExecution ORM models. Event-driven automation."""

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.domain.enums import WorkflowStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    RecordModel,
    in_check,
)
from app.shared.enums import WorkflowExecutionStatus


class WorkflowDefinition(RecordModel, Base):
    """Workflow definition. Table: workflow_definition. Ordered nodes JSON."""

    __tablename__ = "workflow_definition"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=WorkflowStatus.DRAFT.value,
        server_default=WorkflowStatus.DRAFT.value,
        index=True,
    )
    nodes: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )

    __table_args__ = (
        CheckConstraint(
            in_check("status", WorkflowStatus.values()),
            name="workflow_definition_status_check",
        ),
    )


class WorkflowExecution(CuidMixin, Base):
    """Pending or finished run of a definition. Table: workflow_execution.

    The engine inserts rows as pending; the external runner owns every
    later state change.
    """

    __tablename__ = "workflow_execution"

    workflow_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("workflow_definition.id", ondelete="CASCADE"),
        nullable=False,
    )
    trigger_type: Mapped[str] = mapped_column(String(100), nullable=False)
    trigger_snapshot: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=WorkflowExecutionStatus.PENDING.value,
        server_default=WorkflowExecutionStatus.PENDING.value,
        index=True,
    )
    steps_completed: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    total_steps: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_workflow_execution_workflow_created", "workflow_id", "created_at"),
        CheckConstraint(
            in_check("status", WorkflowExecutionStatus.values()),
            name="workflow_execution_status_check",
        ),
    )
