"""
Contact methods (addresses, emails, phones) attached to a company or contact.

Records are keyed by (entity_type, entity_id). At most one record per parent
and kind is primary: marking a record primary locks the parent row, clears the
siblings and writes the record in one transaction, and a partial unique index
rejects anything that slips past.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from recruit_crm.db.base import commit
from recruit_crm.db.enums import EntityType
from recruit_crm.db.tables import Address, Company, Contact, Email, Phone, utcnow
from recruit_crm.errors import ConflictError, NotFoundError, ValidationError
from recruit_crm.schemas import (
    AddressCreate,
    AddressUpdate,
    EmailCreate,
    EmailUpdate,
    PhoneCreate,
    PhoneUpdate,
)

logger = logging.getLogger(__name__)

# Set server-side from the parent; never taken from the client
PARENT_KEYS = ("entityType", "entity_type", "entityId", "entity_id")


@dataclass(frozen=True)
class SubEntityKind:
    model: Any
    create_schema: Any
    update_schema: Any
    label: str


KINDS = {
    "addresses": SubEntityKind(Address, AddressCreate, AddressUpdate, "Address"),
    "emails": SubEntityKind(Email, EmailCreate, EmailUpdate, "Email"),
    "phones": SubEntityKind(Phone, PhoneCreate, PhoneUpdate, "Phone"),
}

PARENTS = {
    EntityType.COMPANY.value: (Company, "Company"),
    EntityType.CONTACT.value: (Contact, "Contact"),
}


class SubEntityStore:
    def __init__(self, db: Session, kind: str):
        self.db = db
        self.kind = KINDS[kind]
        self.model = self.kind.model

    def list(self, parent_type: str, parent_id: str) -> list:
        """All records for a live parent, primary first, then creation order."""
        self._parent(parent_type, parent_id)
        stmt = (
            select(self.model)
            .where(self.model.entity_type == parent_type, self.model.entity_id == parent_id)
            .order_by(self.model.is_primary.desc(), self.model.created_at, self.model.id)
        )
        return list(self.db.scalars(stmt).all())

    def get(self, record_id: str, parent: tuple[str, str] | None = None):
        row = self.db.get(self.model, record_id)
        if row is None or (parent is not None and (row.entity_type, row.entity_id) != tuple(parent)):
            raise NotFoundError(self.kind.label)
        return row

    def create(self, parent_type: str, parent_id: str, data: dict[str, Any]):
        values = {key: value for key, value in data.items() if key not in PARENT_KEYS}
        values.update(entityType=parent_type, entityId=parent_id)
        payload = self._validate(self.kind.create_schema, values)
        self._parent(parent_type, parent_id, lock=payload.is_primary)

        row = self.model(**payload.model_dump())
        try:
            if payload.is_primary:
                self._clear_primary(parent_type, parent_id)
            self.db.add(row)
            commit(self.db)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Another primary {self.kind.label.lower()} was set concurrently") from None
        self.db.refresh(row)
        logger.info(f"Created {self.kind.label.lower()} {row.id} for {parent_type} {parent_id}")
        return row

    def update(self, record_id: str, data: dict[str, Any], parent: tuple[str, str] | None = None):
        row = self.get(record_id, parent)
        values = {key: value for key, value in data.items() if key not in PARENT_KEYS}
        changes = self._validate(self.kind.update_schema, values).model_dump(exclude_unset=True)

        try:
            if changes.get("is_primary"):
                self._parent(row.entity_type, row.entity_id, lock=True, require_live=False)
                self._clear_primary(row.entity_type, row.entity_id, exclude_id=row.id)
            for key, value in changes.items():
                setattr(row, key, value)
            row.updated_at = utcnow()
            commit(self.db)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Another primary {self.kind.label.lower()} was set concurrently") from None
        self.db.refresh(row)
        return row

    def delete(self, record_id: str, parent: tuple[str, str] | None = None) -> None:
        """Hard delete. A deleted primary is not replaced."""
        row = self.get(record_id, parent)
        self.db.delete(row)
        commit(self.db)
        logger.info(f"Deleted {self.kind.label.lower()} {record_id}")

    def _parent(self, parent_type: str, parent_id: str, lock: bool = False, require_live: bool = True):
        if parent_type not in PARENTS:
            raise ValidationError.for_field("entityType", f"Unsupported parent type '{parent_type}'")
        model, label = PARENTS[parent_type]
        stmt = select(model).where(model.id == parent_id)
        if lock:
            # Serializes primary changes per parent
            stmt = stmt.with_for_update()
        parent = self.db.scalars(stmt).first()
        if require_live and (parent is None or parent.is_deleted):
            raise NotFoundError(label)
        return parent

    def _clear_primary(self, parent_type: str, parent_id: str, exclude_id: str | None = None) -> None:
        stmt = update(self.model).where(
            self.model.entity_type == parent_type,
            self.model.entity_id == parent_id,
            self.model.is_primary.is_(True),
        )
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        self.db.execute(stmt.values(is_primary=False, updated_at=utcnow()))

    def _validate(self, schema, values: dict[str, Any]):
        try:
            return schema.model_validate(values)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc, f"Invalid {self.kind.label.lower()} data") from None
