"""DTO for referenced directory records (admin users, contacts)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DirectoryEntry:
    id: str
    full_name: str | None
    phone: str | None
    email: str | None = None
