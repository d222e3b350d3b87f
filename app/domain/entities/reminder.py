"""Reminder schedule domain entity.

Holds what a reminder rule says (anchor + offset) independent of
persistence, and computes the fire time from a parent's dates.
"""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import ReferenceType
from app.domain.exceptions import ReminderRuleException
from app.domain.value_objects.core import ReminderOffset
from app.shared.utils.datetime import as_utc_datetime


def validate_reference_pairing(
    reference_type: ReferenceType | str, custom_datetime: datetime | None
) -> None:
    """custom_datetime must be set for custom anchors and absent otherwise."""
    reference_type = ReferenceType(reference_type)
    if reference_type is ReferenceType.CUSTOM and custom_datetime is None:
        raise ReminderRuleException(
            "custom_datetime is required when reference_type is 'custom'",
            reference_type.value,
        )
    if reference_type is not ReferenceType.CUSTOM and custom_datetime is not None:
        raise ReminderRuleException(
            "custom_datetime is only allowed when reference_type is 'custom'",
            reference_type.value,
        )


@dataclass(frozen=True)
class ReminderSchedule:
    """Anchor and offset of one reminder rule."""

    reference_type: ReferenceType
    offset: ReminderOffset
    custom_datetime: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "reference_type", ReferenceType(self.reference_type))
        validate_reference_pairing(self.reference_type, self.custom_datetime)

    @property
    def follows_parent(self) -> bool:
        """Whether the anchor is a parent date (and so moves with it)."""
        return self.reference_type is not ReferenceType.CUSTOM

    def resolve_reference(
        self, start_date: datetime | None, due_date: datetime | None
    ) -> datetime | None:
        if self.reference_type is ReferenceType.CUSTOM:
            return as_utc_datetime(self.custom_datetime)
        if self.reference_type is ReferenceType.START:
            return as_utc_datetime(start_date)
        return as_utc_datetime(due_date)

    def fire_time(
        self, start_date: datetime | None, due_date: datetime | None
    ) -> datetime | None:
        """Return the fire instant, or None when the anchor is unset."""
        reference = self.resolve_reference(start_date, due_date)
        if reference is None:
            return None
        return self.offset.apply(reference)

    def display(self) -> str:
        return self.offset.display(self.reference_type)
