"""Domain value objects for the dispatch engine.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from app.domain.enums import OffsetDirection, OffsetUnit, ReferenceType
from app.domain.exceptions import ValidationException


@dataclass(frozen=True)
class ReminderOffset:
    """Signed distance from a reminder anchor (e.g. 2 hours before).

    The amount is a non-negative count of units; the direction carries
    the sign.
    """

    direction: OffsetDirection
    amount: int
    unit: OffsetUnit

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValidationException(
                "Reminder offset must be non-negative", field="offset_amount"
            )
        # Allow raw strings from persistence; normalize to enums.
        object.__setattr__(self, "direction", OffsetDirection(self.direction))
        object.__setattr__(self, "unit", OffsetUnit(self.unit))

    def to_timedelta(self) -> timedelta:
        return timedelta(**{self.unit.value: self.amount})

    def apply(self, reference: datetime) -> datetime:
        """Return the instant this offset lands on relative to reference."""
        if self.direction is OffsetDirection.BEFORE:
            return reference - self.to_timedelta()
        return reference + self.to_timedelta()

    def display(self, reference_type: ReferenceType) -> str:
        """Render e.g. '2 hours before Due Date'."""
        return (
            f"{self.amount} {self.unit.value} {self.direction.value} "
            f"{ReferenceType(reference_type).label}"
        )
