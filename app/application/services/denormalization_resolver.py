"""Fills denormalized display fields from referenced records (implements IDenormalizationResolver).

A task stores assigned_to / assigned_by / contact_id; the resolver copies
the referenced names and phones next to them so envelopes and reads do
not need joins. Lookups never fail the write: a missing record or a
lookup error leaves the display fields null.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.enums import EntityType
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IDirectoryRepository

logger = get_logger(__name__)

ADMIN_USER = "admin_user"
CONTACT = "contact"


@dataclass(frozen=True)
class ReferenceRule:
    """Copy attributes of the record referenced by source_field into targets."""

    source_field: str
    kind: str
    targets: tuple[tuple[str, str], ...]  # (display field, record attribute)


REFERENCE_RULES: dict[EntityType, tuple[ReferenceRule, ...]] = {
    EntityType.TASK: (
        ReferenceRule(
            "assigned_to",
            ADMIN_USER,
            (("assigned_to_name", "full_name"), ("assigned_to_phone", "phone")),
        ),
        ReferenceRule(
            "assigned_by",
            ADMIN_USER,
            (("assigned_by_name", "full_name"), ("assigned_by_phone", "phone")),
        ),
        ReferenceRule(
            "contact_id",
            CONTACT,
            (("contact_name", "full_name"), ("contact_phone", "phone")),
        ),
    ),
}


class DenormalizationResolver:
    """Resolves display fields for every declared reference of an entity."""

    def __init__(
        self,
        directory_repo: IDirectoryRepository,
        rules: dict[EntityType, tuple[ReferenceRule, ...]] | None = None,
    ) -> None:
        self._directory_repo = directory_repo
        self._rules = REFERENCE_RULES if rules is None else rules

    async def resolve(self, entity_type: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of fields with display fields filled (or nulled).

        Entities without reference rules are returned unchanged.
        """
        try:
            rules = self._rules.get(EntityType(entity_type), ())
        except ValueError:
            rules = ()
        resolved = dict(fields)
        for rule in rules:
            values = await self._lookup(rule, fields.get(rule.source_field))
            for target, attribute in rule.targets:
                resolved[target] = values.get(attribute)
        return resolved

    async def _lookup(self, rule: ReferenceRule, record_id: Any) -> dict[str, Any]:
        if record_id is None or record_id == "":
            return {}
        try:
            record = await self._directory_repo.lookup(rule.kind, str(record_id))
        except Exception:
            logger.warning(
                "Lookup of %s %s for %s failed; leaving display fields empty",
                rule.kind,
                record_id,
                rule.source_field,
                exc_info=True,
            )
            return {}
        if record is None:
            logger.debug("%s %s not found for %s", rule.kind, record_id, rule.source_field)
            return {}
        return {attribute: getattr(record, attribute, None) for _, attribute in rule.targets}
