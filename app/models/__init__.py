"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Order matters — import parent tables before child tables.
"""

from app.models.user import User, UserRole
from app.models.environment import Environment, EnvironmentType
from app.models.access_log import AccessLog

__all__ = [
    "User",
    "UserRole",
    "Environment",
    "EnvironmentType",
    "AccessLog",
]
