"""Company endpoints."""

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from recruit_crm.api.limiter import limiter
from recruit_crm.api.routes.sub_entities import register_sub_entity_routes
from recruit_crm.api.serializers import dump, dump_with_relations, page_envelope
from recruit_crm.config import settings
from recruit_crm.db import get_db
from recruit_crm.db.enums import CompanyType, EmployeeCountRange, EntityType, Industry, LifecycleStage, RecordStatus
from recruit_crm.schemas import CompanyCreate, CompanyResponse, CompanyUpdate
from recruit_crm.stores import CompanyStore, ListParams
from recruit_crm.stores.query import DEFAULT_SORT, parse_include

router = APIRouter()


@router.get("")
def list_companies(
    request: Request,
    q: str | None = None,
    industry: Industry | None = None,
    company_type: CompanyType | None = Query(None, alias="companyType"),
    employee_count_range: EmployeeCountRange | None = Query(None, alias="employeeCountRange"),
    record_status: RecordStatus | None = Query(None, alias="recordStatus"),
    lifecycle_stage: LifecycleStage | None = Query(None, alias="lifecycleStage"),
    country: str | None = None,
    sort: str = DEFAULT_SORT,
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    cursor: str | None = None,
    include_deleted: bool = Query(False, alias="includeDeleted"),
    include: str | None = None,
    db: Session = Depends(get_db),
):
    """List companies with search, filters and cursor pagination."""
    store = CompanyStore(db)
    names = parse_include(include, store.relations)
    filters = {
        "industry": industry,
        "company_type": company_type,
        "employee_count_range": employee_count_range,
        "record_status": record_status,
        "lifecycle_stage": lifecycle_stage,
    }
    params = ListParams(
        q=q,
        filters={key: value.value for key, value in filters.items() if value is not None},
        sort=sort,
        limit=limit,
        cursor=cursor,
        include_deleted=include_deleted,
        include=names,
    )
    if country:
        params.filters["country"] = country

    page = store.list(params)
    return page_envelope(request, page, CompanyResponse, names)


@router.get("/{company_id}")
def get_company(company_id: str, include: str | None = None, db: Session = Depends(get_db)):
    """Get a company, optionally with addresses, emails, phones and contacts."""
    store = CompanyStore(db)
    names = parse_include(include, store.relations)
    company = store.get(company_id, names)
    return {"data": dump_with_relations(CompanyResponse, company, names)}


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit)
def create_company(request: Request, payload: CompanyCreate, db: Session = Depends(get_db)):
    """Create a company."""
    company = CompanyStore(db).create(payload)
    return {"data": dump(CompanyResponse, company)}


@router.patch("/{company_id}")
@limiter.limit(settings.rate_limit)
def update_company(request: Request, company_id: str, payload: CompanyUpdate, db: Session = Depends(get_db)):
    """Update the supplied fields of a company."""
    company = CompanyStore(db).update(company_id, payload)
    return {"data": dump(CompanyResponse, company)}


@router.delete("/{company_id}", status_code=204)
@limiter.limit(settings.rate_limit)
def delete_company(request: Request, company_id: str, db: Session = Depends(get_db)):
    """Soft-delete a company."""
    CompanyStore(db).delete(company_id)
    return Response(status_code=204)


register_sub_entity_routes(router, EntityType.COMPANY)
