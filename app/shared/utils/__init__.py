"""Shared utilities: datetime and generators."""

from app.shared.utils.datetime import as_utc_datetime, ensure_utc, utc_now
from app.shared.utils.generators import format_task_number, generate_cuid

__all__ = [
    "as_utc_datetime",
    "ensure_utc",
    "format_task_number",
    "generate_cuid",
    "utc_now",
]
