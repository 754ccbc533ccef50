"""Company store."""

from recruit_crm.db.enums import EntityType
from recruit_crm.db.tables import Company
from recruit_crm.stores.base import EntityStore


class CompanyStore(EntityStore):
    model = Company
    entity_type = EntityType.COMPANY
    label = "Company"
    search_fields = ("name", "legal_name", "description")
    search_array_fields = ("email_domains",)
    filter_fields = ("industry", "company_type", "employee_count_range", "record_status", "lifecycle_stage")
    sort_fields = {"name": "name", "createdAt": "created_at", "updatedAt": "updated_at"}
    relations = ("addresses", "emails", "phones", "contacts")
    json_fields = {"email_domains": list, "specialties": list, "tags": list, "custom_fields": dict}
