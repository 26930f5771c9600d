"""ORM Models — SQLAlchemy declarative models, one table per record kind.

Invariants:
    - All models inherit from Base (db/base.py)
    - companies.gst_no carries a UNIQUE constraint, mirroring InMemoryStorage
    - Ids are AUTOINCREMENT: SQLite never reuses an id after delete

Design Decisions:
    - One file per entity for locality
    - customers.category_id is a plain INTEGER, not a ForeignKey: Category and Customer
      storage stay independent and no delete cascade is defined between them
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from sales_report.models.company import Company  # noqa: F401
from sales_report.models.category import Category  # noqa: F401
from sales_report.models.customer import Customer  # noqa: F401
