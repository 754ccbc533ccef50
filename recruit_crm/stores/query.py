"""
List-query pipeline shared by the Company and Contact stores.

Search, exact-match filters, sort, soft-delete and keyset pagination.
Cursors are opaque: urlsafe base64 of a small JSON document holding the
sort they were issued for, the last row's sort value and the last row's id.
"""

import base64
import binascii
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import and_, or_

from recruit_crm.errors import ValidationError

DEFAULT_SORT = "updatedAt:desc"
SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class ListParams:
    """Parsed list parameters. Filter keys are column attribute names."""

    q: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)
    sort: str = DEFAULT_SORT
    limit: int = 25
    cursor: str | None = None
    include_deleted: bool = False
    include: tuple[str, ...] = ()


@dataclass
class Page:
    rows: list
    total: int
    has_next: bool
    next_cursor: str | None = None

    @property
    def count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class SortSpec:
    key: str  # wire name, e.g. "updatedAt"
    attr: str  # column attribute, e.g. "updated_at"
    descending: bool

    @property
    def token(self) -> str:
        return f"{self.key}:{'desc' if self.descending else 'asc'}"


def parse_sort(sort: str | None, sortable: dict[str, str]) -> SortSpec:
    """Parse `field:direction` against the store's sortable columns.

    The direction defaults to desc when omitted.
    """
    sort = sort or DEFAULT_SORT
    key, _, direction = sort.partition(":")
    direction = (direction or "desc").lower()
    if key not in sortable:
        raise ValidationError.for_field(
            "sort",
            f"Cannot sort by '{key}'. Allowed fields: {', '.join(sortable)}",
            "Invalid query parameters",
        )
    if direction not in SORT_DIRECTIONS:
        raise ValidationError.for_field(
            "sort", f"Sort direction must be one of: {', '.join(SORT_DIRECTIONS)}", "Invalid query parameters"
        )
    return SortSpec(key=key, attr=sortable[key], descending=direction == "desc")


def encode_cursor(sort: SortSpec, row) -> str:
    value = getattr(row, sort.attr)
    if isinstance(value, datetime):
        payload = {"s": sort.token, "t": "dt", "v": value.isoformat(), "id": row.id}
    else:
        payload = {"s": sort.token, "t": "str", "v": value, "id": row.id}
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def decode_cursor(cursor: str, sort: SortSpec, datetime_column: bool = False) -> tuple[Any, str]:
    """Return (sort value, id) for a cursor issued under the same sort.

    `datetime_column` says whether the sort column holds timestamps; the
    cursor value must be of the matching kind.
    """
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded.encode()))
        kind, value, last_id, issued_for = payload["t"], payload["v"], payload["id"], payload["s"]
    except (binascii.Error, ValueError, KeyError, TypeError):
        raise ValidationError.for_field("cursor", "Malformed cursor", "Invalid query parameters") from None

    if issued_for != sort.token:
        raise ValidationError.for_field(
            "cursor",
            f"Cursor was issued for sort '{issued_for}', not '{sort.token}'",
            "Invalid query parameters",
        )

    try:
        if kind != ("dt" if datetime_column else "str"):
            raise ValueError("cursor value kind does not match the sort column")
        if not isinstance(value, str) or not isinstance(last_id, str):
            raise ValueError("cursor value and id must be strings")
        if kind == "dt":
            value = datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError.for_field("cursor", "Malformed cursor", "Invalid query parameters") from None
    return value, last_id


def keyset_condition(model, sort: SortSpec, value, last_id: str):
    """Rows strictly after (value, last_id) in the sort direction, id as tie-breaker."""
    column = getattr(model, sort.attr)
    if sort.descending:
        return or_(column < value, and_(column == value, model.id < last_id))
    return or_(column > value, and_(column == value, model.id > last_id))


def order_by(model, sort: SortSpec) -> list:
    column = getattr(model, sort.attr)
    if sort.descending:
        return [column.desc(), model.id.desc()]
    return [column.asc(), model.id.asc()]


def check_limit(limit: int, max_limit: int) -> int:
    if limit < 1 or limit > max_limit:
        raise ValidationError.for_field(
            "limit", f"Limit must be between 1 and {max_limit}", "Invalid query parameters"
        )
    return limit


def parse_include(include, allowed: tuple[str, ...]) -> tuple[str, ...]:
    """Accept a comma separated string or a sequence of relation names."""
    if not include:
        return ()
    if isinstance(include, str):
        include = include.split(",")
    names = tuple(dict.fromkeys(name.strip() for name in include if name.strip()))
    unknown = [name for name in names if name not in allowed]
    if unknown:
        raise ValidationError.for_field(
            "include",
            f"Unknown relation(s): {', '.join(unknown)}. Allowed: {', '.join(allowed)}",
            "Invalid query parameters",
        )
    return names
