"""Storage layer — raw driver value conversion and the SQLAlchemy column type.

This layer depends on stdlib and third-party libs (SQLAlchemy, pydantic).
``nullable.storage.types`` imports the container itself, so it is not
re-exported here.
"""

from nullable.storage.convert import convert_assign
from nullable.storage.null import StorageNull

__all__ = ["StorageNull", "convert_assign"]
