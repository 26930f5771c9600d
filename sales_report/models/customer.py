"""Customer ORM — maps a report customer name to its Tally ledger name.

Invariants:
    - report_customer and tally_customer are NOT NULL
    - gst_no and state_code are nullable; gst_no is NOT unique for customers
    - category_id is a soft reference (no FK), checked by CustomerService when configured strict
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from sales_report.db.base import Base


class Customer(Base):
    """Customer row."""
    __tablename__ = "customers"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_customer: Mapped[str] = mapped_column(Text, nullable=False)
    tally_customer: Mapped[str] = mapped_column(Text, nullable=False)
    gst_no: Mapped[str | None] = mapped_column(Text, nullable=True)
    state_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
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
