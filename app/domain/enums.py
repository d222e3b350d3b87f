"""Domain enumerations for the dispatch engine.

Enums represent fixed sets of domain values: the entity kinds that emit
change events, mutation operations, reminder anchors and offsets, and
workflow definition status.
"""

from enum import Enum

from app.shared.enums import _ValuesMixin


class EntityType(_ValuesMixin, str, Enum):
    """Business entity kinds whose mutations produce change events."""

    TASK = "task"
    LEAD = "lead"
    CONTACT = "contact"
    TICKET = "ticket"
    AFFILIATE = "affiliate"
    PRODUCT = "product"
    APPOINTMENT = "appointment"
    MEMBER = "member"
    USER = "user"
    ATTENDANCE = "attendance"
    EXPENSE = "expense"
    LEAVE_REQUEST = "leave_request"
    ESTIMATE = "estimate"
    INVOICE = "invoice"
    RECEIPT = "receipt"
    SUBSCRIPTION = "subscription"


class OperationType(_ValuesMixin, str, Enum):
    """Mutation kind reported for an entity."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ReferenceType(_ValuesMixin, str, Enum):
    """Anchor a reminder is computed from."""

    START = "start"
    DUE = "due"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        """Human label used in reminder display text (e.g. 'Due Date')."""
        return _REFERENCE_LABELS[self]


_REFERENCE_LABELS = {
    ReferenceType.START: "Start Date",
    ReferenceType.DUE: "Due Date",
    ReferenceType.CUSTOM: "Custom Date",
}


class OffsetDirection(_ValuesMixin, str, Enum):
    BEFORE = "before"
    AFTER = "after"


class OffsetUnit(_ValuesMixin, str, Enum):
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


class WorkflowStatus(_ValuesMixin, str, Enum):
    """Workflow definition status. Only ACTIVE definitions are enqueued."""

    ACTIVE = "active"
    PAUSED = "paused"
    DRAFT = "draft"


class NodeType(_ValuesMixin, str, Enum):
    TRIGGER = "trigger"
    ACTION = "action"


class HttpMethod(_ValuesMixin, str, Enum):
    """HTTP method used when calling a webhook subscription."""

    POST = "POST"
    GET = "GET"
