"""DenormalizationResolver unit tests with a mocked directory repository."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.directory import DirectoryEntry
from app.application.services.denormalization_resolver import (
    ADMIN_USER,
    CONTACT,
    DenormalizationResolver,
)

ANA = DirectoryEntry(id="usr_ana", full_name="Ana Ortiz", phone="+15550101", email=None)
ACME = DirectoryEntry(id="con_acme", full_name="Acme Buyer", phone="+15550199", email=None)


def _directory(records: dict[tuple[str, str], DirectoryEntry]) -> AsyncMock:
    repo = AsyncMock()
    repo.lookup = AsyncMock(side_effect=lambda kind, record_id: records.get((kind, record_id)))
    return repo


async def test_task_references_resolved() -> None:
    repo = _directory({(ADMIN_USER, "usr_ana"): ANA, (CONTACT, "con_acme"): ACME})
    resolver = DenormalizationResolver(repo)
    fields = {"title": "Call", "assigned_to": "usr_ana", "contact_id": "con_acme"}

    resolved = await resolver.resolve("task", fields)

    assert resolved["assigned_to_name"] == "Ana Ortiz"
    assert resolved["assigned_to_phone"] == "+15550101"
    assert resolved["contact_name"] == "Acme Buyer"
    assert resolved["contact_phone"] == "+15550199"
    assert resolved["assigned_by_name"] is None
    assert fields == {"title": "Call", "assigned_to": "usr_ana", "contact_id": "con_acme"}


async def test_null_reference_clears_stale_display_fields() -> None:
    resolver = DenormalizationResolver(_directory({}))
    resolved = await resolver.resolve(
        "task", {"assigned_to": None, "assigned_to_name": "Old Name"}
    )
    assert resolved["assigned_to_name"] is None


async def test_missing_record_leaves_display_fields_null() -> None:
    resolver = DenormalizationResolver(_directory({}))
    resolved = await resolver.resolve("task", {"assigned_to": "usr_gone"})
    assert resolved["assigned_to_name"] is None
    assert resolved["assigned_to_phone"] is None


async def test_lookup_error_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    repo = AsyncMock()
    repo.lookup = AsyncMock(side_effect=ConnectionError("directory down"))
    resolver = DenormalizationResolver(repo)

    resolved = await resolver.resolve("task", {"assigned_to": "usr_ana", "title": "Call"})

    assert resolved["assigned_to_name"] is None
    assert resolved["title"] == "Call"
    assert "leaving display fields empty" in caplog.text


async def test_entity_without_references_unchanged() -> None:
    repo = _directory({})
    resolver = DenormalizationResolver(repo)
    fields = {"id": "l1", "owner": "usr_ana"}
    assert await resolver.resolve("lead", fields) == fields
    repo.lookup.assert_not_awaited()
