"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.enums import WorkflowExecutionStatus
from app.shared.utils import (
    as_utc_datetime,
    ensure_utc,
    format_task_number,
    generate_cuid,
    utc_now,
)

__all__ = [
    "WorkflowExecutionStatus",
    "as_utc_datetime",
    "ensure_utc",
    "format_task_number",
    "generate_cuid",
    "utc_now",
]
