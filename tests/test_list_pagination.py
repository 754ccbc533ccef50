"""Store-level tests for the list pipeline: sort, keyset cursors, soft delete."""

import base64
import json

import pytest

from recruit_crm.errors import ValidationError
from recruit_crm.stores import CompanyStore, ContactStore, ListParams
from recruit_crm.stores.query import decode_cursor, encode_cursor, parse_include, parse_sort


def _forge_cursor(payload):
    return base64.urlsafe_b64encode(json.dumps(payload).encode()).decode().rstrip("=")


def _page_through(store, **params):
    """Follow cursors to the end and return every row id in order."""
    ids = []
    cursor = None
    while True:
        page = store.list(ListParams(cursor=cursor, **params))
        assert page.count == len(page.rows)
        assert page.count <= params.get("limit", 25)
        ids.extend(row.id for row in page.rows)
        if not page.has_next:
            assert page.next_cursor is None
            return ids
        cursor = page.next_cursor


class TestKeysetPagination:
    @pytest.mark.parametrize("sort", ["name:asc", "name:desc", "createdAt:asc", "updatedAt:desc"])
    def test_pages_cover_every_row_once(self, db, make_company, sort):
        # Repeated names force the id tie-breaker to do its job
        for name in ["Delta", "Alpha", "Charlie", "Alpha", "Bravo", "Charlie", "Echo", "Alpha"]:
            make_company(name)
        store = CompanyStore(db)

        everything = store.list(ListParams(sort=sort, limit=100)).rows
        paged = _page_through(store, sort=sort, limit=3)

        assert paged == [row.id for row in everything]
        assert len(set(paged)) == 8

    def test_rows_are_in_sort_order(self, db, make_contact):
        for first, last in [("A", "Zed"), ("B", "Young"), ("C", "Xavier"), ("D", "Young")]:
            make_contact(first, last)
        store = ContactStore(db)

        ids = _page_through(store, sort="lastName:asc", limit=2)
        rows = [db.get(store.model, record_id) for record_id in ids]

        assert [row.last_name for row in rows] == ["Xavier", "Young", "Young", "Zed"]

    def test_exact_page_size_has_no_next(self, db, make_company):
        for name in ["A", "B", "C"]:
            make_company(name)

        page = CompanyStore(db).list(ListParams(sort="name:asc", limit=3))

        assert page.count == 3
        assert page.has_next is False
        assert page.next_cursor is None

    def test_filters_apply_on_every_page(self, db, make_company):
        for i in range(5):
            make_company(f"Tech {i}", industry="technology")
            make_company(f"Bank {i}", industry="finance")
        store = CompanyStore(db)

        ids = _page_through(store, sort="name:asc", limit=2, filters={"industry": "finance"})
        names = [db.get(store.model, record_id).name for record_id in ids]

        assert names == [f"Bank {i}" for i in range(5)]

    def test_total_ignores_search_and_filters(self, db, make_company):
        for name in ["Acme", "Globex", "Initech"]:
            make_company(name)

        page = CompanyStore(db).list(ListParams(q="glob", limit=1))

        assert page.count == 1
        assert page.total == 3


class TestCursorValidation:
    def test_cursor_from_another_sort_is_rejected(self, db, make_company):
        for name in ["A", "B", "C"]:
            make_company(name)
        store = CompanyStore(db)
        page = store.list(ListParams(sort="name:asc", limit=1))

        with pytest.raises(ValidationError) as exc_info:
            store.list(ListParams(sort="createdAt:asc", limit=1, cursor=page.next_cursor))

        assert exc_info.value.errors[0]["field"] == "cursor"

    @pytest.mark.parametrize(
        "sort, cursor",
        [
            ("updatedAt:desc", "not-a-cursor"),
            ("updatedAt:desc", "e30"),
            ("updatedAt:desc", "%%%"),
            ("name:asc", _forge_cursor({"s": "name:asc", "t": "str", "v": {"a": 1}, "id": "x"})),
            ("name:asc", _forge_cursor({"s": "name:asc", "t": "str", "v": "Acme", "id": 7})),
            ("name:asc", _forge_cursor({"s": "name:asc", "t": "dt", "v": "2024-01-01T00:00:00", "id": "x"})),
            ("updatedAt:desc", _forge_cursor({"s": "updatedAt:desc", "t": "str", "v": "not-a-date", "id": "x"})),
            ("updatedAt:desc", _forge_cursor({"s": "updatedAt:desc", "t": "dt", "v": "yesterday", "id": "x"})),
            ("updatedAt:desc", _forge_cursor({"s": "updatedAt:desc", "t": "dt", "v": 1700000000, "id": "x"})),
        ],
    )
    def test_malformed_cursor_is_rejected(self, db, make_company, sort, cursor):
        make_company()

        with pytest.raises(ValidationError) as exc_info:
            CompanyStore(db).list(ListParams(sort=sort, cursor=cursor))

        assert exc_info.value.errors[0]["field"] == "cursor"

    def test_cursor_round_trips_datetimes(self, make_company):
        company = make_company()
        sort = parse_sort("updatedAt:desc", {"updatedAt": "updated_at"})

        value, last_id = decode_cursor(encode_cursor(sort, company), sort, datetime_column=True)

        assert value == company.updated_at
        assert last_id == company.id


class TestQueryParsing:
    def test_direction_defaults_to_desc(self):
        spec = parse_sort("name", {"name": "name"})

        assert spec.descending is True
        assert spec.token == "name:desc"

    @pytest.mark.parametrize("sort", ["website:asc", "name:up"])
    def test_bad_sort_is_rejected(self, sort):
        with pytest.raises(ValidationError) as exc_info:
            parse_sort(sort, {"name": "name"})

        assert exc_info.value.message == "Invalid query parameters"

    def test_include_accepts_strings_and_sequences(self):
        allowed = ("addresses", "emails", "phones")

        assert parse_include("emails, phones,emails", allowed) == ("emails", "phones")
        assert parse_include(["addresses"], allowed) == ("addresses",)
        assert parse_include(None, allowed) == ()

    @pytest.mark.parametrize("limit", [0, -1, 101])
    def test_limit_out_of_range(self, db, limit):
        with pytest.raises(ValidationError):
            CompanyStore(db).list(ListParams(limit=limit))

    def test_unknown_filter_is_rejected(self, db):
        with pytest.raises(ValidationError):
            CompanyStore(db).list(ListParams(filters={"website_url": "x"}))


class TestSoftDelete:
    def test_deleted_rows_only_with_include_deleted(self, db, make_company):
        keep = make_company("Keep")
        gone = make_company("Gone")
        store = CompanyStore(db)
        store.delete(gone.id)

        live = store.list(ListParams())
        everything = store.list(ListParams(include_deleted=True))

        assert [row.id for row in live.rows] == [keep.id]
        assert live.total == 1
        assert {row.id for row in everything.rows} == {keep.id, gone.id}
        assert everything.total == 2

    def test_deleted_contacts_leave_company_contacts(self, db, make_company, make_contact):
        acme = make_company()
        make_contact("Ada", "Lovelace", companyId=acme.id)
        gone = make_contact("Alan", "Turing", companyId=acme.id)
        ContactStore(db).delete(gone.id)
        db.expire_all()

        company = CompanyStore(db).get(acme.id, include=("contacts",))

        assert [c.first_name for c in company.contacts] == ["Ada"]
