"""Company ORM — persists a GST-registered company.

Invariants:
    - gst_no is NOT NULL and UNIQUE across the table
    - created_at/updated_at are written by the storage layer, never by the DB
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from sales_report.db.base import Base


class Company(Base):
    """Company row."""
    __tablename__ = "companies"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_name: Mapped[str] = mapped_column(Text, nullable=False)
    gst_no: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    state_code: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
