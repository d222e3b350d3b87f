"""ReminderRule repository: rule CRUD, due selection and the sent claim."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.reminder import ReminderRuleCreate, ReminderRuleResult
from app.domain.enums import ReferenceType
from app.infrastructure.persistence.models.reminder import ReminderRule
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc

_EDITABLE = (
    "reference_type",
    "custom_datetime",
    "offset_direction",
    "offset_amount",
    "offset_unit",
)
_PARENT_ANCHORED = (ReferenceType.START.value, ReferenceType.DUE.value)


def _to_result(r: ReminderRule) -> ReminderRuleResult:
    """Map ReminderRule ORM to ReminderRuleResult DTO."""
    return ReminderRuleResult(
        id=r.id,
        task_id=r.task_id,
        reference_type=r.reference_type,
        custom_datetime=ensure_utc(r.custom_datetime),
        offset_direction=r.offset_direction,
        offset_amount=r.offset_amount,
        offset_unit=r.offset_unit,
        calculated_fire_time=ensure_utc(r.calculated_fire_time),
        is_sent=r.is_sent,
        sent_at=ensure_utc(r.sent_at),
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


class ReminderRuleRepository(BaseRepository[ReminderRule]):
    """Reminder rule repository. Implements IReminderRuleRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ReminderRule)

    async def create_rule(
        self, data: ReminderRuleCreate, calculated_fire_time: datetime | None
    ) -> ReminderRuleResult:
        rule = ReminderRule(
            task_id=data.task_id,
            reference_type=data.reference_type,
            custom_datetime=data.custom_datetime,
            offset_direction=data.offset_direction,
            offset_amount=data.offset_amount,
            offset_unit=data.offset_unit,
            calculated_fire_time=calculated_fire_time,
            is_sent=False,
        )
        return _to_result(await self.create(rule))

    async def get_rule(self, rule_id: str) -> ReminderRuleResult | None:
        rule = await self.get_by_id(rule_id)
        return _to_result(rule) if rule else None

    async def list_by_task(self, task_id: str) -> list[ReminderRuleResult]:
        result = await self.db.execute(
            select(ReminderRule)
            .where(ReminderRule.task_id == task_id)
            .order_by(ReminderRule.calculated_fire_time.asc(), ReminderRule.id.asc())
        )
        return [_to_result(r) for r in result.scalars().all()]

    async def update_rule(
        self,
        rule_id: str,
        fields: dict[str, Any],
        calculated_fire_time: datetime | None,
    ) -> ReminderRuleResult | None:
        rule = await self.get_by_id(rule_id)
        if rule is None:
            return None
        values = self._writable(fields, _EDITABLE)
        values["calculated_fire_time"] = calculated_fire_time
        return _to_result(await self.update(rule, values))

    async def delete_rule(self, rule_id: str) -> bool:
        rule = await self.get_by_id(rule_id)
        if rule is None:
            return False
        await self.delete(rule)
        return True

    async def delete_by_task(self, task_id: str) -> int:
        result = await self.db.execute(
            delete(ReminderRule)
            .where(ReminderRule.task_id == task_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def list_recalculable(self, task_id: str) -> list[ReminderRuleResult]:
        result = await self.db.execute(
            select(ReminderRule).where(
                ReminderRule.task_id == task_id,
                ReminderRule.reference_type.in_(_PARENT_ANCHORED),
                ReminderRule.is_sent.is_(False),
            )
        )
        return [_to_result(r) for r in result.scalars().all()]

    async def set_fire_time(self, rule_id: str, fire_time: datetime | None) -> None:
        await self.db.execute(
            update(ReminderRule)
            .where(ReminderRule.id == rule_id, ReminderRule.is_sent.is_(False))
            .values(calculated_fire_time=fire_time)
            .execution_options(synchronize_session=False)
        )

    async def get_due(self, now: datetime, limit: int) -> list[ReminderRuleResult]:
        """Unsent rules whose fire time has passed, earliest first."""
        result = await self.db.execute(
            select(ReminderRule)
            .where(
                ReminderRule.is_sent.is_(False),
                ReminderRule.calculated_fire_time.is_not(None),
                ReminderRule.calculated_fire_time <= now,
            )
            .order_by(ReminderRule.calculated_fire_time.asc(), ReminderRule.id.asc())
            .limit(limit)
        )
        return [_to_result(r) for r in result.scalars().all()]

    async def claim(
        self, rule_id: str, sent_at: datetime, due_by: datetime
    ) -> ReminderRuleResult | None:
        """Conditionally mark sent and return the claimed rule.

        The guard repeats the due condition, so a rule rescheduled past
        ``due_by`` after selection is not claimed. Exactly one concurrent
        caller gets the rule back; the others get None.
        """
        result = await self.db.execute(
            update(ReminderRule)
            .where(
                ReminderRule.id == rule_id,
                ReminderRule.is_sent.is_(False),
                ReminderRule.calculated_fire_time.is_not(None),
                ReminderRule.calculated_fire_time <= due_by,
            )
            .values(is_sent=True, sent_at=sent_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None
        claimed = await self.db.execute(
            select(ReminderRule)
            .where(ReminderRule.id == rule_id)
            .execution_options(populate_existing=True)
        )
        return _to_result(claimed.scalar_one())
