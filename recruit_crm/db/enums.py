"""Closed value sets shared by tables, schemas and stores."""

from enum import Enum


class EntityType(str, Enum):
    COMPANY = "company"
    CONTACT = "contact"


class CompanyType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    NONPROFIT = "nonprofit"
    GOVERNMENT = "government"
    PARTNERSHIP = "partnership"
    SOLE_PROPRIETORSHIP = "sole_proprietorship"


class EmployeeCountRange(str, Enum):
    ONE = "1"
    TWO_TO_TEN = "2-10"
    ELEVEN_TO_FIFTY = "11-50"
    FIFTY_ONE_TO_TWO_HUNDRED = "51-200"
    TWO_HUNDRED_ONE_TO_FIVE_HUNDRED = "201-500"
    FIVE_HUNDRED_ONE_TO_ONE_THOUSAND = "501-1000"
    ONE_THOUSAND_ONE_TO_FIVE_THOUSAND = "1001-5000"
    FIVE_THOUSAND_ONE_TO_TEN_THOUSAND = "5001-10000"
    TEN_THOUSAND_PLUS = "10000+"


class Industry(str, Enum):
    TECHNOLOGY = "technology"
    FINANCE = "finance"
    HEALTHCARE = "healthcare"
    RETAIL = "retail"
    MANUFACTURING = "manufacturing"
    CONSULTING = "consulting"
    EDUCATION = "education"
    REAL_ESTATE = "real_estate"
    TRANSPORTATION = "transportation"
    ENERGY = "energy"
    MEDIA = "media"
    HOSPITALITY = "hospitality"


class LifecycleStage(str, Enum):
    SUBSCRIBER = "subscriber"
    LEAD = "lead"
    MARKETING_QUALIFIED_LEAD = "marketing_qualified_lead"
    SALES_QUALIFIED_LEAD = "sales_qualified_lead"
    OPPORTUNITY = "opportunity"
    CUSTOMER = "customer"
    EVANGELIST = "evangelist"
    OTHER = "other"


class RecordStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class Seniority(str, Enum):
    INTERN = "intern"
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    PRINCIPAL = "principal"
    MANAGER = "manager"
    DIRECTOR = "director"
    VP = "vp"
    C_LEVEL = "c_level"
    OWNER = "owner"


class AddressType(str, Enum):
    HQ = "hq"
    BILLING = "billing"
    SHIPPING = "shipping"
    OFFICE = "office"
    REMOTE = "remote"
    HOME = "home"
    OTHER = "other"


class EmailType(str, Enum):
    WORK = "work"
    PERSONAL = "personal"
    SALES = "sales"
    SUPPORT = "support"
    BILLING = "billing"
    OTHER = "other"


class PhoneType(str, Enum):
    WORK = "work"
    PERSONAL = "personal"
    MOBILE = "mobile"
    FAX = "fax"
    OTHER = "other"


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    EMAIL = "email"
    URL = "url"
    PHONE = "phone"
