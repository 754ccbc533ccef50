"""Response envelopes: {data}, plus meta/links for lists."""

from urllib.parse import urlencode

from fastapi import Request

from recruit_crm.schemas import AddressResponse, CompanyResponse, ContactResponse, EmailResponse, PhoneResponse
from recruit_crm.stores.query import Page

RELATION_SCHEMAS = {
    "addresses": AddressResponse,
    "emails": EmailResponse,
    "phones": PhoneResponse,
    "contacts": ContactResponse,
    "company": CompanyResponse,
}


def dump(schema, obj) -> dict:
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def dump_with_relations(schema, obj, include=()) -> dict:
    """Serialize a record and any relations that were requested."""
    data = dump(schema, obj)
    for name in include:
        related = getattr(obj, name)
        related_schema = RELATION_SCHEMAS[name]
        if related is None:
            data[name] = None
        elif isinstance(related, list):
            data[name] = [dump(related_schema, item) for item in related]
        else:
            data[name] = dump(related_schema, related)
    return data


def page_envelope(request: Request, page: Page, schema, include=()) -> dict:
    next_link = None
    if page.next_cursor:
        query = dict(request.query_params)
        query["cursor"] = page.next_cursor
        next_link = f"{request.url.path}?{urlencode(query)}"

    return {
        "data": [dump_with_relations(schema, row, include) for row in page.rows],
        "meta": {"count": page.count, "total": page.total, "hasNext": page.has_next},
        "links": {"next": next_link},
    }
