"""Data access for companies, contacts, their contact methods and custom fields."""

from recruit_crm.stores.companies import CompanyStore
from recruit_crm.stores.contacts import ContactStore
from recruit_crm.stores.field_definitions import FieldDefinitionStore
from recruit_crm.stores.query import ListParams, Page
from recruit_crm.stores.sub_entities import SubEntityStore

__all__ = [
    "CompanyStore",
    "ContactStore",
    "FieldDefinitionStore",
    "SubEntityStore",
    "ListParams",
    "Page",
]
