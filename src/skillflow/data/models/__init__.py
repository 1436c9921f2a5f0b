"""ORM models package for database tables.

- Record: one JSON document stored under a string key

All models inherit from the shared Base declarative class defined in data.db.
"""

from skillflow.data.db import Base
from skillflow.data.models.record import Record

__all__ = ["Base", "Record"]
