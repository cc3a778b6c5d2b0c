"""Model module imports for SQLAlchemy metadata registration."""

from hellokit.db.models.resource import Base
from hellokit.db.models.resource import Resource

__all__ = [
    "Base",
    "Resource",
]
