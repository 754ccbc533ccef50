"""Contact store."""

from typing import Any

from recruit_crm.db.enums import EntityType
from recruit_crm.db.tables import Company, Contact
from recruit_crm.stores.base import EntityStore


class ContactStore(EntityStore):
    model = Contact
    entity_type = EntityType.CONTACT
    label = "Contact"
    search_fields = ("first_name", "last_name", "title", "headline", "company_name_snapshot")
    filter_fields = ("company_id", "seniority", "lifecycle_stage", "record_status")
    sort_fields = {
        "firstName": "first_name",
        "lastName": "last_name",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }
    relations = ("addresses", "emails", "phones", "company")
    json_fields = {"employment_history": list, "tags": list, "custom_fields": dict}

    def _prepare(self, values: dict[str, Any], existing) -> list[dict[str, Any]]:
        errors = []

        company_id = values.get("company_id")
        changed = company_id is not None and (existing is None or company_id != existing.company_id)
        if changed:
            company = self.db.get(Company, company_id)
            if company is None or company.is_deleted:
                errors.append({"field": "companyId", "message": "Company not found"})
            elif "company_name_snapshot" not in values:
                values["company_name_snapshot"] = company.name

        if existing is not None:
            start = values.get("employment_start_date", existing.employment_start_date)
            end = values.get("employment_end_date", existing.employment_end_date)
            if start and end and end < start:
                errors.append(
                    {"field": "employmentEndDate", "message": "Must not be before employmentStartDate"}
                )

        return errors
