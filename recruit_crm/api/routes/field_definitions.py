"""Custom field definition endpoints."""

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from recruit_crm.api.limiter import limiter
from recruit_crm.api.serializers import dump
from recruit_crm.config import settings
from recruit_crm.db import get_db
from recruit_crm.db.enums import EntityType
from recruit_crm.schemas import FieldDefinitionCreate, FieldDefinitionResponse, FieldDefinitionUpdate
from recruit_crm.stores import FieldDefinitionStore

router = APIRouter()


@router.get("")
def list_field_definitions(
    entity_type: EntityType | None = Query(None, alias="entityType"),
    db: Session = Depends(get_db),
):
    """List active field definitions, optionally for one entity type."""
    definitions = FieldDefinitionStore(db).list(entity_type.value if entity_type else None)
    return {"data": [dump(FieldDefinitionResponse, d) for d in definitions]}


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit)
def create_field_definition(request: Request, payload: FieldDefinitionCreate, db: Session = Depends(get_db)):
    """Create a field definition."""
    definition = FieldDefinitionStore(db).create(payload)
    return {"data": dump(FieldDefinitionResponse, definition)}


@router.patch("/{definition_id}")
@limiter.limit(settings.rate_limit)
def update_field_definition(
    request: Request, definition_id: str, payload: FieldDefinitionUpdate, db: Session = Depends(get_db)
):
    """Update a field definition."""
    definition = FieldDefinitionStore(db).update(definition_id, payload)
    return {"data": dump(FieldDefinitionResponse, definition)}


@router.delete("/{definition_id}", status_code=204)
@limiter.limit(settings.rate_limit)
def delete_field_definition(request: Request, definition_id: str, db: Session = Depends(get_db)):
    """Deactivate a field definition."""
    FieldDefinitionStore(db).delete(definition_id)
    return Response(status_code=204)
