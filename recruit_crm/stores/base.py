"""Store shared by the primary entities (Company, Contact)."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel
from sqlalchemy import DateTime, String, cast, exists, func, or_, select
from sqlalchemy.orm import Session, selectinload

from recruit_crm.config import settings
from recruit_crm.db.base import commit
from recruit_crm.db.enums import EntityType
from recruit_crm.db.tables import Address, utcnow
from recruit_crm.errors import NotFoundError, ValidationError
from recruit_crm.stores.field_definitions import FieldDefinitionStore
from recruit_crm.stores.query import (
    ListParams,
    Page,
    check_limit,
    decode_cursor,
    encode_cursor,
    keyset_condition,
    order_by,
    parse_include,
    parse_sort,
)

logger = logging.getLogger(__name__)


class EntityStore:
    """CRUD plus the list-query pipeline for one soft-deletable entity.

    Subclasses declare the model and the per-entity query surface.
    """

    model: Any
    entity_type: EntityType
    label: str
    # Case-insensitive substring search over these columns
    search_fields: tuple[str, ...] = ()
    # JSON list columns searched for an exact element
    search_array_fields: tuple[str, ...] = ()
    # Exact-match filters, plus "country" handled through addresses
    filter_fields: tuple[str, ...] = ()
    # Wire name -> column attribute; only non-null columns
    sort_fields: dict[str, str] = {"createdAt": "created_at", "updatedAt": "updated_at"}
    relations: tuple[str, ...] = ("addresses", "emails", "phones")
    # JSON columns an explicit null resets to empty
    json_fields: dict[str, type] = {"tags": list, "custom_fields": dict}

    def __init__(self, db: Session):
        self.db = db

    # Reads

    def get(self, record_id: str, include=()):
        """Return a live record, eager-loading the named relations."""
        names = parse_include(include, self.relations)
        row = self.db.get(self.model, record_id, options=self._load_options(names))
        if row is None or row.is_deleted:
            raise NotFoundError(self.label)
        return row

    def list(self, params: ListParams) -> Page:
        sort = parse_sort(params.sort, self.sort_fields)
        limit = check_limit(params.limit, settings.max_page_size)
        names = parse_include(params.include, self.relations)

        base = [] if params.include_deleted else [self.model.is_deleted.is_(False)]
        conditions = list(base)
        conditions.extend(self._filter_conditions(params.filters))
        if params.q:
            conditions.append(self._search_condition(params.q))
        if params.cursor:
            datetime_column = isinstance(getattr(self.model, sort.attr).type, DateTime)
            value, last_id = decode_cursor(params.cursor, sort, datetime_column)
            conditions.append(keyset_condition(self.model, sort, value, last_id))

        stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(*order_by(self.model, sort))
            .limit(limit + 1)  # One extra row tells us whether there is a next page
            .options(*self._load_options(names))
        )
        rows = list(self.db.scalars(stmt).all())
        has_next = len(rows) > limit
        rows = rows[:limit]

        # Corpus size under the soft-delete condition only, not the filtered count
        total = self.db.scalar(select(func.count()).select_from(self.model).where(*base))

        next_cursor = encode_cursor(sort, rows[-1]) if has_next and rows else None
        return Page(rows=rows, total=total, has_next=has_next, next_cursor=next_cursor)

    # Writes

    def create(self, payload: BaseModel):
        values = payload.model_dump(exclude_unset=True)
        errors = self._prepare(values, None)
        errors.extend(self._check_custom_fields(values.get("custom_fields") or {}))
        if errors:
            raise ValidationError(f"Invalid {self.label.lower()} data", errors)

        row = self.model(**self._column_values(values))
        self.db.add(row)
        commit(self.db)
        self.db.refresh(row)
        logger.info(f"Created {self.label.lower()} {row.id}")
        return row

    def update(self, record_id: str, payload: BaseModel):
        row = self.get(record_id)
        values = payload.model_dump(exclude_unset=True)
        errors = self._prepare(values, row)
        if "custom_fields" in values:
            errors.extend(self._check_custom_fields(values["custom_fields"] or {}))
        if errors:
            raise ValidationError(f"Invalid {self.label.lower()} data", errors)

        for key, value in self._column_values(values).items():
            setattr(row, key, value)
        row.updated_at = utcnow()
        commit(self.db)
        self.db.refresh(row)
        logger.info(f"Updated {self.label.lower()} {row.id}: {', '.join(sorted(values)) or 'no fields'}")
        return row

    def delete(self, record_id: str) -> None:
        """Soft delete. Sub-entities and child records are left in place."""
        row = self.get(record_id)
        row.is_deleted = True
        row.updated_at = utcnow()
        commit(self.db)
        logger.info(f"Soft-deleted {self.label.lower()} {record_id}")

    # Hooks and helpers

    def _prepare(self, values: dict[str, Any], existing) -> list[dict[str, Any]]:
        """Entity-specific checks and derived values. Returns field errors."""
        return []

    def _check_custom_fields(self, custom_fields: dict[str, Any]) -> list[dict[str, Any]]:
        return FieldDefinitionStore(self.db).validate_custom_fields(self.entity_type.value, custom_fields)

    def _column_values(self, values: dict[str, Any]) -> dict[str, Any]:
        result = dict(values)
        for key, factory in self.json_fields.items():
            if key in result and result[key] is None:
                result[key] = factory()
        return result

    def _load_options(self, names: tuple[str, ...]) -> list:
        return [selectinload(getattr(self.model, name)) for name in names]

    def _search_condition(self, q: str):
        clauses = [getattr(self.model, name).icontains(q, autoescape=True) for name in self.search_fields]
        for name in self.search_array_fields:
            # JSON arrays serialize their string elements in double quotes
            clauses.append(cast(getattr(self.model, name), String).icontains(f'"{q}"', autoescape=True))
        return or_(*clauses)

    def _filter_conditions(self, filters: dict[str, Any]) -> list:
        conditions = []
        for key, value in filters.items():
            if value is None:
                continue
            if key == "country":
                conditions.append(self._country_condition(value))
            elif key in self.filter_fields:
                conditions.append(getattr(self.model, key) == value)
            else:
                raise ValidationError.for_field(key, "Unknown filter", "Invalid query parameters")
        return conditions

    def _country_condition(self, country: str):
        return exists(
            select(Address.id).where(
                Address.entity_type == self.entity_type.value,
                Address.entity_id == self.model.id,
                func.lower(Address.country_code) == country.lower(),
            )
        )
