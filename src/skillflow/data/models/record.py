"""ORM model for the key-value record store.

Every logical collection (user directory, session, announcements, audit
log, per-user skill lists) is stored as one JSON document under a string
key in this table.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from skillflow.data.db import Base


class Record(Base):
    """One stored blob.

    Attributes:
        key: Logical key, e.g. ``skillflow_users_v2``.
        value: Serialized JSON document.
        updated_at: UTC timestamp of the last write.
    """

    __tablename__ = "records"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )
