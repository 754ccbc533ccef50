"""Custom field definitions and customFields validation."""

from typing import Any, get_type_hints

import pytest

from recruit_crm.errors import ConflictError, NotFoundError, ValidationError
from recruit_crm.schemas import CompanyCreate, FieldDefinitionCreate, FieldDefinitionUpdate
from recruit_crm.stores import CompanyStore, FieldDefinitionStore
from recruit_crm.stores.base import EntityStore


def _define(db, **fields):
    data = {"entityType": "company", "key": "tier", "label": "Tier", "type": "text", **fields}
    return FieldDefinitionStore(db).create(FieldDefinitionCreate.model_validate(data))


class TestFieldDefinitionApi:
    def test_create_and_list(self, client):
        response = client.post(
            "/api/field-definitions",
            json={"entityType": "company", "key": "tier", "label": "Tier", "type": "select", "options": ["A", "B"]},
        )

        assert response.status_code == 201
        created = response.json()["data"]
        assert created["isActive"] is True
        assert created["isRequired"] is False
        assert created["options"] == ["A", "B"]

        listed = client.get("/api/field-definitions", params={"entityType": "company"}).json()["data"]
        assert [d["key"] for d in listed] == ["tier"]
        assert client.get("/api/field-definitions", params={"entityType": "contact"}).json()["data"] == []

    def test_duplicate_key_conflicts(self, client):
        body = {"entityType": "contact", "key": "source", "label": "Source", "type": "text"}
        assert client.post("/api/field-definitions", json=body).status_code == 201

        response = client.post("/api/field-definitions", json=body)

        assert response.status_code == 409
        assert "source" in response.json()["message"]

    def test_same_key_on_other_entity_is_allowed(self, client):
        body = {"key": "source", "label": "Source", "type": "text"}

        assert client.post("/api/field-definitions", json={**body, "entityType": "company"}).status_code == 201
        assert client.post("/api/field-definitions", json={**body, "entityType": "contact"}).status_code == 201

    def test_select_requires_options(self, client):
        response = client.post(
            "/api/field-definitions",
            json={"entityType": "company", "key": "tier", "label": "Tier", "type": "multi_select"},
        )

        assert response.status_code == 400

    def test_invalid_key(self, client):
        response = client.post(
            "/api/field-definitions",
            json={"entityType": "company", "key": "1st choice", "label": "First", "type": "text"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "key"

    def test_update_and_deactivate(self, client):
        created = client.post(
            "/api/field-definitions",
            json={"entityType": "company", "key": "tier", "label": "Tier", "type": "text"},
        ).json()["data"]

        patched = client.patch(f"/api/field-definitions/{created['id']}", json={"label": "Account tier"})
        assert patched.status_code == 200
        assert patched.json()["data"]["label"] == "Account tier"

        assert client.delete(f"/api/field-definitions/{created['id']}").status_code == 204
        assert client.get("/api/field-definitions").json()["data"] == []

    def test_missing_definition(self, client):
        assert client.patch("/api/field-definitions/missing", json={"label": "X"}).status_code == 404
        assert client.delete("/api/field-definitions/missing").status_code == 404


class TestFieldDefinitionStore:
    def test_duplicate_raises_conflict(self, db):
        _define(db)

        with pytest.raises(ConflictError):
            _define(db, label="Other")

    def test_switching_to_select_needs_options(self, db):
        definition = _define(db)

        with pytest.raises(ValidationError) as exc_info:
            FieldDefinitionStore(db).update(definition.id, FieldDefinitionUpdate(type="select"))

        assert exc_info.value.errors[0]["field"] == "options"

    def test_get_missing(self, db):
        with pytest.raises(NotFoundError):
            FieldDefinitionStore(db).get("missing")

    @pytest.mark.parametrize(
        "field_type, options, good, bad",
        [
            ("number", None, 3.5, "three"),
            ("boolean", None, True, "yes"),
            ("date", None, "2024-02-29", "29/02/2024"),
            ("select", ["A", "B"], "A", "C"),
            ("multi_select", ["A", "B"], ["A", "B"], ["A", "Z"]),
            ("email", None, "ops@acme.com", "ops"),
            ("url", None, "https://acme.com", "acme"),
            ("text", None, "anything", 42),
        ],
    )
    def test_value_types(self, db, field_type, options, good, bad):
        _define(db, key="extra", label="Extra", type=field_type, options=options)
        store = FieldDefinitionStore(db)

        assert store.validate_custom_fields("company", {"extra": good}) == []
        errors = store.validate_custom_fields("company", {"extra": bad})
        assert [err["field"] for err in errors] == ["customFields.extra"]


class TestCustomFieldsOnRecords:
    def test_unknown_key_is_rejected(self, db):
        with pytest.raises(ValidationError) as exc_info:
            CompanyStore(db).create(CompanyCreate.model_validate({"name": "Acme", "customFields": {"tier": "A"}}))

        assert exc_info.value.errors == [{"field": "customFields.tier", "message": "Unknown custom field"}]

    def test_required_key_must_be_present(self, db):
        _define(db, isRequired=True)

        with pytest.raises(ValidationError):
            CompanyStore(db).create(CompanyCreate.model_validate({"name": "Acme"}))

    def test_valid_values_are_stored(self, client, db):
        _define(db, type="select", options=["gold", "silver"])

        response = client.post("/api/companies", json={"name": "Acme", "customFields": {"tier": "gold"}})

        assert response.status_code == 201
        assert response.json()["data"]["customFields"] == {"tier": "gold"}

    def test_invalid_value_over_http(self, client, db):
        _define(db, type="number")

        response = client.post("/api/companies", json={"name": "Acme", "customFields": {"tier": "high"}})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "customFields.tier", "message": "Expected a number"}]

    def test_deactivated_definition_no_longer_accepts_values(self, db):
        definition = _define(db)
        FieldDefinitionStore(db).delete(definition.id)

        with pytest.raises(ValidationError):
            CompanyStore(db).create(CompanyCreate.model_validate({"name": "Acme", "customFields": {"tier": "A"}}))

    def test_contact_fields_are_separate(self, client, db):
        _define(db, entityType="contact", key="source", label="Source")

        response = client.post("/api/companies", json={"name": "Acme", "customFields": {"source": "referral"}})

        assert response.status_code == 400


def test_store_annotations_resolve_to_builtins():
    # Stores define a `list` method; annotations in the same class must still mean the builtin
    assert get_type_hints(FieldDefinitionStore.validate_custom_fields)["return"] == list[dict[str, Any]]
    assert get_type_hints(EntityStore._prepare)["return"] == list[dict[str, Any]]
