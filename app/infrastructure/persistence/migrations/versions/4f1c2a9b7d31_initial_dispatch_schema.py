"""Initial schema: webhooks, workflows, tasks, reminders, directory

Revision ID: 4f1c2a9b7d31
Revises:
Create Date: 2026-10-19 09:12:41.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9b7d31"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create initial schema."""
    # Referenced records (read by the denormalization resolver)
    op.create_table(
        "admin_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "contact",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=32), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # Webhook subscriptions
    op.create_table(
        "webhook_subscription",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("trigger_event", sa.String(length=100), nullable=False),
        sa.Column("endpoint_url", sa.Text(), nullable=False),
        sa.Column("http_method", sa.String(length=10), server_default="POST", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("total_calls", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("success_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("failure_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("last_triggered", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "http_method IN ('POST', 'GET')", name="webhook_subscription_method_check"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_webhook_subscription_trigger_active",
        "webhook_subscription",
        ["trigger_event", "is_active"],
        unique=False,
    )

    # Workflow definitions and executions
    op.create_table(
        "workflow_definition",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), server_default="draft", nullable=False),
        sa.Column("nodes", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('active', 'paused', 'draft')",
            name="workflow_definition_status_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_workflow_definition_status"), "workflow_definition", ["status"], unique=False
    )
    op.create_table(
        "workflow_execution",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("workflow_id", sa.String(), nullable=False),
        sa.Column("trigger_type", sa.String(length=100), nullable=False),
        sa.Column("trigger_snapshot", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="pending", nullable=False),
        sa.Column("steps_completed", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("total_steps", sa.Integer(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'running', 'completed', 'failed')",
            name="workflow_execution_status_check",
        ),
        sa.ForeignKeyConstraint(
            ["workflow_id"], ["workflow_definition.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_workflow_execution_status"), "workflow_execution", ["status"], unique=False
    )
    op.create_index(
        "ix_workflow_execution_workflow_created",
        "workflow_execution",
        ["workflow_id", "created_at"],
        unique=False,
    )

    # Tasks (parent of reminders)
    op.execute(sa.schema.CreateSequence(sa.Sequence("task_number_seq", start=10001)))
    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("task_number", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), server_default="To Do", nullable=False),
        sa.Column("priority", sa.String(length=32), server_default="Medium", nullable=False),
        sa.Column("category", sa.String(length=64), server_default="Other", nullable=False),
        sa.Column("assigned_to", sa.String(), nullable=True),
        sa.Column("assigned_to_name", sa.String(length=200), nullable=True),
        sa.Column("assigned_by", sa.String(), nullable=True),
        sa.Column("assigned_by_name", sa.String(length=200), nullable=True),
        sa.Column("contact_id", sa.String(), nullable=True),
        sa.Column("contact_name", sa.String(length=200), nullable=True),
        sa.Column("contact_phone", sa.String(length=32), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completion_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("estimated_hours", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("actual_hours", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column(
            "progress_percentage", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="task_progress_percentage_check",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("task_number"),
    )
    op.create_index(op.f("ix_task_assigned_to"), "task", ["assigned_to"], unique=False)
    op.create_index(op.f("ix_task_contact_id"), "task", ["contact_id"], unique=False)
    op.create_index(op.f("ix_task_due_date"), "task", ["due_date"], unique=False)

    # Reminder rules
    op.create_table(
        "task_reminder",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column("reference_type", sa.String(length=16), nullable=False),
        sa.Column("custom_datetime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("offset_direction", sa.String(length=16), nullable=False),
        sa.Column("offset_amount", sa.Integer(), nullable=False),
        sa.Column("offset_unit", sa.String(length=16), nullable=False),
        sa.Column("calculated_fire_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_sent", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "reference_type IN ('start', 'due', 'custom')",
            name="task_reminder_reference_type_check",
        ),
        sa.CheckConstraint(
            "offset_direction IN ('before', 'after')",
            name="task_reminder_offset_direction_check",
        ),
        sa.CheckConstraint(
            "offset_unit IN ('minutes', 'hours', 'days')",
            name="task_reminder_offset_unit_check",
        ),
        sa.CheckConstraint("offset_amount >= 0", name="task_reminder_offset_amount_check"),
        sa.CheckConstraint(
            "(reference_type = 'custom' AND custom_datetime IS NOT NULL) OR "
            "(reference_type <> 'custom' AND custom_datetime IS NULL)",
            name="task_reminder_custom_datetime_check",
        ),
        sa.ForeignKeyConstraint(["task_id"], ["task.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_task_reminder_task_id"), "task_reminder", ["task_id"], unique=False)
    op.create_index(
        "ix_task_reminder_due",
        "task_reminder",
        ["is_sent", "calculated_fire_time"],
        unique=False,
    )


def downgrade() -> None:
    """Drop initial schema."""
    op.drop_index("ix_task_reminder_due", table_name="task_reminder")
    op.drop_index(op.f("ix_task_reminder_task_id"), table_name="task_reminder")
    op.drop_table("task_reminder")
    op.drop_index(op.f("ix_task_due_date"), table_name="task")
    op.drop_index(op.f("ix_task_contact_id"), table_name="task")
    op.drop_index(op.f("ix_task_assigned_to"), table_name="task")
    op.drop_table("task")
    op.execute(sa.schema.DropSequence(sa.Sequence("task_number_seq")))
    op.drop_index("ix_workflow_execution_workflow_created", table_name="workflow_execution")
    op.drop_index(op.f("ix_workflow_execution_status"), table_name="workflow_execution")
    op.drop_table("workflow_execution")
    op.drop_index(op.f("ix_workflow_definition_status"), table_name="workflow_definition")
    op.drop_table("workflow_definition")
    op.drop_index("ix_webhook_subscription_trigger_active", table_name="webhook_subscription")
    op.drop_table("webhook_subscription")
    op.drop_table("contact")
    op.drop_table("admin_user")
