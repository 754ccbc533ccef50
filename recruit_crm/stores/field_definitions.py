"""Custom field catalog and validation of customFields maps against it."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from recruit_crm.db.base import commit
from recruit_crm.db.enums import FieldType
from recruit_crm.db.tables import FieldDefinition, utcnow
from recruit_crm.errors import ConflictError, NotFoundError, ValidationError
from recruit_crm.schemas import OPTION_TYPES, FieldDefinitionCreate, FieldDefinitionUpdate, UrlStr

logger = logging.getLogger(__name__)

_email = TypeAdapter(EmailStr)
_url = TypeAdapter(UrlStr)


class FieldDefinitionStore:
    def __init__(self, db: Session):
        self.db = db

    def list(self, entity_type: str | None = None) -> list[FieldDefinition]:
        """Active definitions, ordered by label."""
        stmt = select(FieldDefinition).where(FieldDefinition.is_active.is_(True))
        if entity_type:
            stmt = stmt.where(FieldDefinition.entity_type == entity_type)
        return list(self.db.scalars(stmt.order_by(FieldDefinition.label, FieldDefinition.key)).all())

    def get(self, definition_id: str) -> FieldDefinition:
        definition = self.db.get(FieldDefinition, definition_id)
        if definition is None:
            raise NotFoundError("Field definition")
        return definition

    def create(self, payload: FieldDefinitionCreate) -> FieldDefinition:
        values = payload.model_dump()
        values["options"] = values["options"] or []

        existing = self.db.scalars(
            select(FieldDefinition).where(
                FieldDefinition.entity_type == values["entity_type"], FieldDefinition.key == values["key"]
            )
        ).first()
        if existing:
            raise ConflictError(f"Field '{values['key']}' is already defined for {values['entity_type']}")

        definition = FieldDefinition(**values)
        self.db.add(definition)
        try:
            commit(self.db)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Field '{values['key']}' is already defined for {values['entity_type']}") from None
        self.db.refresh(definition)
        logger.info(f"Created field definition {definition.entity_type}.{definition.key}")
        return definition

    def update(self, definition_id: str, payload: FieldDefinitionUpdate) -> FieldDefinition:
        definition = self.get(definition_id)
        values = payload.model_dump(exclude_unset=True)
        if "options" in values and values["options"] is None:
            values["options"] = []

        field_type = values.get("type", definition.type)
        options = values.get("options", definition.options)
        if field_type in OPTION_TYPES and not options:
            raise ValidationError.for_field(
                "options", "options are required for select fields", "Invalid field definition data"
            )

        for key, value in values.items():
            setattr(definition, key, value)
        definition.updated_at = utcnow()
        commit(self.db)
        self.db.refresh(definition)
        return definition

    def delete(self, definition_id: str) -> None:
        """Deactivate; stored custom values are kept."""
        definition = self.get(definition_id)
        definition.is_active = False
        definition.updated_at = utcnow()
        commit(self.db)
        logger.info(f"Deactivated field definition {definition.entity_type}.{definition.key}")

    def validate_custom_fields(self, entity_type: str, values: dict[str, Any]) -> list[dict[str, Any]]:
        """Check a customFields map against the active definitions for an entity type.

        Returns a list of field errors: unknown keys, missing required keys,
        and values that do not match the definition's type or options.
        """
        definitions = {d.key: d for d in self.list(entity_type)}
        errors = []

        for key, value in values.items():
            definition = definitions.get(key)
            if definition is None:
                errors.append({"field": f"customFields.{key}", "message": "Unknown custom field"})
                continue
            if value is None:
                continue
            problem = _check_value(definition, value)
            if problem:
                errors.append({"field": f"customFields.{key}", "message": problem})

        for key, definition in definitions.items():
            if definition.is_required and values.get(key) is None:
                errors.append({"field": f"customFields.{key}", "message": f"{definition.label} is required"})

        return errors


def _check_value(definition: FieldDefinition, value: Any) -> str | None:
    field_type = definition.type
    options = definition.options or []

    if field_type == FieldType.NUMBER.value:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return "Expected a number"
    elif field_type == FieldType.BOOLEAN.value:
        if not isinstance(value, bool):
            return "Expected true or false"
    elif field_type == FieldType.SELECT.value:
        if value not in options:
            return f"Expected one of: {', '.join(options)}"
    elif field_type == FieldType.MULTI_SELECT.value:
        if not isinstance(value, list) or any(item not in options for item in value):
            return f"Expected a list drawn from: {', '.join(options)}"
    elif not isinstance(value, str):
        return "Expected a string"
    elif field_type == FieldType.DATE.value:
        try:
            date.fromisoformat(value)
        except ValueError:
            return "Expected an ISO date (YYYY-MM-DD)"
    elif field_type == FieldType.EMAIL.value:
        try:
            _email.validate_python(value)
        except PydanticValidationError:
            return "Invalid email format"
    elif field_type == FieldType.URL.value:
        try:
            _url.validate_python(value)
        except PydanticValidationError:
            return "Invalid URL"
    elif field_type == FieldType.PHONE.value and not value.strip():
        return "Expected a phone number"
    return None
