"""ORM Models - SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every row is scoped by tenant_id

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all
"""

from app.models.store_setting import StoreSetting  # noqa: F401
from app.models.page_document import PageDocument  # noqa: F401
