"""Contact endpoints."""

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from recruit_crm.api.limiter import limiter
from recruit_crm.api.routes.sub_entities import register_sub_entity_routes
from recruit_crm.api.serializers import dump, dump_with_relations, page_envelope
from recruit_crm.config import settings
from recruit_crm.db import get_db
from recruit_crm.db.enums import EntityType, LifecycleStage, RecordStatus, Seniority
from recruit_crm.schemas import ContactCreate, ContactResponse, ContactUpdate
from recruit_crm.stores import ContactStore, ListParams
from recruit_crm.stores.query import DEFAULT_SORT, parse_include

router = APIRouter()


@router.get("")
def list_contacts(
    request: Request,
    q: str | None = None,
    company_id: str | None = Query(None, alias="companyId"),
    seniority: Seniority | None = None,
    lifecycle_stage: LifecycleStage | None = Query(None, alias="lifecycleStage"),
    record_status: RecordStatus | None = Query(None, alias="recordStatus"),
    country: str | None = None,
    sort: str = DEFAULT_SORT,
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    cursor: str | None = None,
    include_deleted: bool = Query(False, alias="includeDeleted"),
    include: str | None = None,
    db: Session = Depends(get_db),
):
    """List contacts with search, filters and cursor pagination."""
    store = ContactStore(db)
    names = parse_include(include, store.relations)
    filters = {"seniority": seniority, "lifecycle_stage": lifecycle_stage, "record_status": record_status}
    params = ListParams(
        q=q,
        filters={key: value.value for key, value in filters.items() if value is not None},
        sort=sort,
        limit=limit,
        cursor=cursor,
        include_deleted=include_deleted,
        include=names,
    )
    if company_id:
        params.filters["company_id"] = company_id
    if country:
        params.filters["country"] = country

    page = store.list(params)
    return page_envelope(request, page, ContactResponse, names)


@router.get("/{contact_id}")
def get_contact(contact_id: str, include: str | None = None, db: Session = Depends(get_db)):
    """Get a contact, optionally with addresses, emails, phones and company."""
    store = ContactStore(db)
    names = parse_include(include, store.relations)
    contact = store.get(contact_id, names)
    return {"data": dump_with_relations(ContactResponse, contact, names)}


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit)
def create_contact(request: Request, payload: ContactCreate, db: Session = Depends(get_db)):
    """Create a contact."""
    contact = ContactStore(db).create(payload)
    return {"data": dump(ContactResponse, contact)}


@router.patch("/{contact_id}")
@limiter.limit(settings.rate_limit)
def update_contact(request: Request, contact_id: str, payload: ContactUpdate, db: Session = Depends(get_db)):
    """Update the supplied fields of a contact."""
    contact = ContactStore(db).update(contact_id, payload)
    return {"data": dump(ContactResponse, contact)}


@router.delete("/{contact_id}", status_code=204)
@limiter.limit(settings.rate_limit)
def delete_contact(request: Request, contact_id: str, db: Session = Depends(get_db)):
    """Soft-delete a contact."""
    ContactStore(db).delete(contact_id)
    return Response(status_code=204)


register_sub_entity_routes(router, EntityType.CONTACT)
