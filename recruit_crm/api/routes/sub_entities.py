"""Nested address/email/phone endpoints under a company or contact."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response
from sqlalchemy.orm import Session

from recruit_crm.api.limiter import limiter
from recruit_crm.api.serializers import dump
from recruit_crm.config import settings
from recruit_crm.db import get_db
from recruit_crm.db.enums import EntityType
from recruit_crm.schemas import AddressResponse, EmailResponse, PhoneResponse
from recruit_crm.stores import SubEntityStore

RESPONSE_SCHEMAS = {
    "addresses": AddressResponse,
    "emails": EmailResponse,
    "phones": PhoneResponse,
}


def register_sub_entity_routes(router: APIRouter, parent_type: EntityType) -> None:
    """Add list/create/update/delete routes for every contact method kind."""
    for kind, schema in RESPONSE_SCHEMAS.items():
        _register_kind(router, parent_type.value, kind, schema)


def _register_kind(router: APIRouter, parent_type: str, kind: str, schema) -> None:
    collection = f"/{{parent_id}}/{kind}"
    item = f"/{{parent_id}}/{kind}/{{record_id}}"

    def list_records(parent_id: str, db: Session = Depends(get_db)):
        rows = SubEntityStore(db, kind).list(parent_type, parent_id)
        return {"data": [dump(schema, row) for row in rows]}

    def create_record(
        request: Request,
        parent_id: str,
        payload: dict[str, Any] = Body(...),
        db: Session = Depends(get_db),
    ):
        # The parent's type and id always come from the path
        row = SubEntityStore(db, kind).create(parent_type, parent_id, payload)
        return {"data": dump(schema, row)}

    def update_record(
        request: Request,
        parent_id: str,
        record_id: str,
        payload: dict[str, Any] = Body(...),
        db: Session = Depends(get_db),
    ):
        row = SubEntityStore(db, kind).update(record_id, payload, parent=(parent_type, parent_id))
        return {"data": dump(schema, row)}

    def delete_record(request: Request, parent_id: str, record_id: str, db: Session = Depends(get_db)):
        SubEntityStore(db, kind).delete(record_id, parent=(parent_type, parent_id))
        return Response(status_code=204)

    # Unique names keep route ids and rate-limit buckets apart
    for endpoint, verb in (
        (list_records, "list"),
        (create_record, "create"),
        (update_record, "update"),
        (delete_record, "delete"),
    ):
        endpoint.__name__ = f"{verb}_{parent_type}_{kind}"
        endpoint.__qualname__ = endpoint.__name__

    router.add_api_route(collection, list_records, methods=["GET"])
    limit = limiter.limit(settings.rate_limit)
    router.add_api_route(collection, limit(create_record), methods=["POST"], status_code=201)
    router.add_api_route(item, limit(update_record), methods=["PATCH"])
    router.add_api_route(item, limit(delete_record), methods=["DELETE"], status_code=204)
