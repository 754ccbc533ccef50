"""Database package."""

from recruit_crm.db.base import Base, get_db, init_db
from recruit_crm.db.tables import (
    Address,
    Company,
    Contact,
    Email,
    FieldDefinition,
    Phone,
)

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "Company",
    "Contact",
    "Address",
    "Email",
    "Phone",
    "FieldDefinition",
]
