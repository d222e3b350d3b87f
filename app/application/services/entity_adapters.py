"""Per-entity event adapters: event name per operation and the fields
reported under "previous" on updates.

One generic builder consults these; adding an entity kind means adding
an adapter here, not another builder.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from app.domain.enums import EntityType, OperationType
from app.domain.exceptions import ValidationException

TASK_REMINDER = "TASK_REMINDER"


@dataclass(frozen=True)
class EntityAdapter:
    """Static event description for one entity kind."""

    entity_type: EntityType
    event_names: Mapping[OperationType, str]
    previous_fields: tuple[str, ...] = ()

    def event_name_for(
        self,
        operation: OperationType,
        fields: Mapping[str, Any],
        old_fields: Mapping[str, Any] | None,
    ) -> str | None:
        """Return the trigger_event for the mutation, or None to emit nothing."""
        return self.event_names.get(operation)


@dataclass(frozen=True)
class AttendanceAdapter(EntityAdapter):
    """Check-in on create; check-out only on the update that sets check_out."""

    check_out_field: str = field(default="check_out")

    def event_name_for(
        self,
        operation: OperationType,
        fields: Mapping[str, Any],
        old_fields: Mapping[str, Any] | None,
    ) -> str | None:
        if operation is OperationType.UPDATE:
            was_open = old_fields is None or old_fields.get(self.check_out_field) is None
            if not (was_open and fields.get(self.check_out_field) is not None):
                return None
        return super().event_name_for(operation, fields, old_fields)


def _names(created: str, updated: str, deleted: str) -> dict[OperationType, str]:
    return {
        OperationType.CREATE: created,
        OperationType.UPDATE: updated,
        OperationType.DELETE: deleted,
    }


ENTITY_ADAPTERS: dict[EntityType, EntityAdapter] = {
    adapter.entity_type: adapter
    for adapter in (
        EntityAdapter(
            EntityType.TASK,
            _names("TASK_CREATED", "TASK_UPDATED", "TASK_DELETED"),
            ("status", "priority", "assigned_to", "due_date", "progress_percentage"),
        ),
        EntityAdapter(
            EntityType.LEAD,
            _names("LEAD_CREATED", "LEAD_UPDATED", "LEAD_DELETED"),
            ("status", "interest", "owner", "notes", "last_contact", "lead_score"),
        ),
        EntityAdapter(
            EntityType.CONTACT,
            _names("CONTACT_ADDED", "CONTACT_UPDATED", "CONTACT_DELETED"),
            (
                "full_name", "email", "phone", "date_of_birth", "gender",
                "education_level", "profession", "experience", "business_name",
                "address", "city", "state", "pincode", "gst_number",
                "contact_type", "status", "notes", "last_contacted", "tags",
            ),
        ),
        EntityAdapter(
            EntityType.TICKET,
            _names("TICKET_CREATED", "TICKET_UPDATED", "TICKET_DELETED"),
            ("priority", "status", "category", "assigned_to", "response_time", "satisfaction"),
        ),
        EntityAdapter(
            EntityType.AFFILIATE,
            _names("AFFILIATE_ADDED", "AFFILIATE_UPDATED", "AFFILIATE_DELETED"),
            (
                "status", "commission_pct", "referrals", "earnings_paid",
                "earnings_pending", "notes", "last_activity",
            ),
        ),
        EntityAdapter(
            EntityType.PRODUCT,
            _names("PRODUCT_ADDED", "PRODUCT_UPDATED", "PRODUCT_DELETED"),
            (
                "product_name", "product_type", "pricing_model",
                "product_price", "is_active", "category",
            ),
        ),
        EntityAdapter(
            EntityType.APPOINTMENT,
            _names("APPOINTMENT_CREATED", "APPOINTMENT_UPDATED", "APPOINTMENT_DELETED"),
            ("status", "appointment_date", "appointment_time"),
        ),
        EntityAdapter(
            EntityType.MEMBER,
            _names("MEMBER_ADDED", "MEMBER_UPDATED", "MEMBER_DELETED"),
            (
                "status", "payment_status", "payment_amount", "subscription_type",
                "progress_percentage", "last_activity", "notes",
            ),
        ),
        EntityAdapter(
            EntityType.USER,
            _names("USER_ADDED", "USER_UPDATED", "USER_DELETED"),
            (
                "email", "full_name", "role", "permissions", "is_active",
                "phone", "department", "status", "member_id",
            ),
        ),
        EntityAdapter(
            EntityType.EXPENSE,
            _names("EXPENSE_ADDED", "EXPENSE_UPDATED", "EXPENSE_DELETED"),
            (
                "category", "amount", "description", "expense_date",
                "payment_method", "status", "approved_by", "approved_at",
            ),
        ),
        EntityAdapter(
            EntityType.LEAVE_REQUEST,
            _names("LEAVE_REQUEST_ADDED", "LEAVE_REQUEST_UPDATED", "LEAVE_REQUEST_DELETED"),
            (
                "request_type", "start_date", "end_date", "total_days", "reason",
                "status", "approved_by", "approved_at", "rejection_reason",
            ),
        ),
        EntityAdapter(
            EntityType.ESTIMATE,
            _names("ESTIMATE_CREATED", "ESTIMATE_UPDATED", "ESTIMATE_DELETED"),
            ("status", "total_amount"),
        ),
        EntityAdapter(
            EntityType.INVOICE,
            _names("INVOICE_CREATED", "INVOICE_UPDATED", "INVOICE_DELETED"),
            ("status", "paid_amount", "balance_due"),
        ),
        EntityAdapter(
            EntityType.RECEIPT,
            _names("RECEIPT_CREATED", "RECEIPT_UPDATED", "RECEIPT_DELETED"),
            ("status",),
        ),
        EntityAdapter(
            EntityType.SUBSCRIPTION,
            _names("SUBSCRIPTION_CREATED", "SUBSCRIPTION_UPDATED", "SUBSCRIPTION_DELETED"),
            ("status", "next_billing_date"),
        ),
        AttendanceAdapter(
            EntityType.ATTENDANCE,
            {
                OperationType.CREATE: "ATTENDANCE_CHECKIN",
                OperationType.UPDATE: "ATTENDANCE_CHECKOUT",
            },
        ),
    )
}


def get_adapter(entity_type: EntityType | str) -> EntityAdapter:
    """Return the adapter for the entity kind.

    Raises:
        ValidationException: Unknown entity type.
    """
    try:
        return ENTITY_ADAPTERS[EntityType(entity_type)]
    except (KeyError, ValueError):
        raise ValidationException(
            f"Unknown entity type: {entity_type}", field="entity_type"
        ) from None


def known_event_names() -> set[str]:
    """All trigger_event values an entity mutation can produce, plus reminders."""
    names = {
        name for adapter in ENTITY_ADAPTERS.values() for name in adapter.event_names.values()
    }
    names.add(TASK_REMINDER)
    return names

