"""AdminUser and Contact ORM models: records referenced by tasks.

The engine only reads them (display-field resolution); their CRUD lives
with the wider CRM.
"""

import sqlalchemy as sa
from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import RecordModel


class AdminUser(RecordModel, Base):
    """Staff user. Table: admin_user."""

    __tablename__ = "admin_user"

    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, unique=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.true()
    )


class Contact(RecordModel, Base):
    """Customer contact. Table: contact."""

    __tablename__ = "contact"

    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
