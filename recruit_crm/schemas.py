"""Request/response schemas.

Fields are snake_case in Python and camelCase on the wire.
"""

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, EmailStr, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from recruit_crm.db.enums import (
    AddressType,
    CompanyType,
    EmailType,
    EmployeeCountRange,
    EntityType,
    FieldType,
    Industry,
    LifecycleStage,
    PhoneType,
    RecordStatus,
    Seniority,
)

MIN_FOUNDED_YEAR = 1800

_http_url = TypeAdapter(AnyHttpUrl)


def _check_url(value: str) -> str:
    # Validate only; the original string is stored as given
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Invalid URL") from None
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]


def _reject_null(value):
    if value is None:
        raise ValueError("Field may not be null")
    return value


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        use_enum_values = True


# Company schemas
class CompanyFields(CamelModel):
    legal_name: str | None = None
    description: str | None = None
    email_domains: list[str] | None = None
    specialties: list[str] | None = None
    company_type: CompanyType | None = None
    employee_count_range: EmployeeCountRange | None = None
    industry: Industry | None = None
    founded_year: int | None = Field(default=None, ge=MIN_FOUNDED_YEAR)
    website_url: UrlStr | None = None
    linkedin_url: UrlStr | None = None
    logo_url: UrlStr | None = None
    banner_url: UrlStr | None = None
    lifecycle_stage: LifecycleStage | None = None
    record_status: RecordStatus | None = None
    owner_id: str | None = None
    tags: list[str] | None = None
    custom_fields: dict[str, Any] | None = None

    @field_validator("founded_year")
    @classmethod
    def founded_year_not_in_future(cls, value: int | None) -> int | None:
        if value is not None and value > date.today().year:
            raise ValueError(f"Founded year must be between {MIN_FOUNDED_YEAR} and {date.today().year}")
        return value

    @field_validator("lifecycle_stage", "record_status")
    @classmethod
    def status_not_null(cls, value):
        return _reject_null(value)


class CompanyCreate(CompanyFields):
    name: str = Field(min_length=1)


class CompanyUpdate(CompanyFields):
    name: str | None = Field(default=None, min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        return _reject_null(value)


class CompanyResponse(CamelModel):
    id: str
    name: str
    legal_name: str | None
    description: str | None
    email_domains: list[str]
    specialties: list[str]
    company_type: str | None
    employee_count_range: str | None
    industry: str | None
    founded_year: int | None
    website_url: str | None
    linkedin_url: str | None
    logo_url: str | None
    banner_url: str | None
    lifecycle_stage: str
    record_status: str
    owner_id: str | None
    tags: list[str]
    custom_fields: dict[str, Any]
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


# Contact schemas
class ContactFields(CamelModel):
    prefix: str | None = None
    middle_name: str | None = None
    suffix: str | None = None
    preferred_name: str | None = None
    pronouns: str | None = None
    headline: str | None = None
    title: str | None = None
    department: str | None = None
    seniority: Seniority | None = None
    company_id: str | None = None
    company_name_snapshot: str | None = None
    linkedin_url: UrlStr | None = None
    location_label: str | None = None
    time_zone: str | None = None
    employment_start_date: date | None = None
    employment_end_date: date | None = None
    is_current_employee: bool | None = None
    employment_history: list[Any] | None = None
    lifecycle_stage: LifecycleStage | None = None
    record_status: RecordStatus | None = None
    owner_id: str | None = None
    tags: list[str] | None = None
    notes: str | None = None
    custom_fields: dict[str, Any] | None = None

    @field_validator("lifecycle_stage", "record_status", "is_current_employee")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)

    @model_validator(mode="after")
    def employment_dates_ordered(self):
        start, end = self.employment_start_date, self.employment_end_date
        if start and end and end < start:
            raise ValueError("employmentEndDate must not be before employmentStartDate")
        return self


class ContactCreate(ContactFields):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)


class ContactUpdate(ContactFields):
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_null(cls, value):
        return _reject_null(value)


class ContactResponse(CamelModel):
    id: str
    prefix: str | None
    first_name: str
    middle_name: str | None
    last_name: str
    suffix: str | None
    preferred_name: str | None
    pronouns: str | None
    headline: str | None
    title: str | None
    department: str | None
    seniority: str | None
    company_id: str | None
    company_name_snapshot: str | None
    linkedin_url: str | None
    location_label: str | None
    time_zone: str | None
    employment_start_date: date | None
    employment_end_date: date | None
    is_current_employee: bool
    employment_history: list[Any]
    lifecycle_stage: str
    record_status: str
    owner_id: str | None
    tags: list[str]
    notes: str | None
    custom_fields: dict[str, Any]
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


# Sub-entity schemas
class SubEntityCreate(CamelModel):
    entity_type: EntityType
    entity_id: str = Field(min_length=1)
    is_primary: bool = False


class SubEntityUpdate(CamelModel):
    is_primary: bool | None = None

    @field_validator("is_primary")
    @classmethod
    def primary_not_null(cls, value):
        return _reject_null(value)


class AddressFields(CamelModel):
    label: str | None = None
    street1: str | None = None
    street2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country_code: str | None = Field(default=None, max_length=8)
    latitude: str | None = None
    longitude: str | None = None


class AddressCreate(AddressFields, SubEntityCreate):
    type: AddressType = AddressType.OTHER.value


class AddressUpdate(AddressFields, SubEntityUpdate):
    type: AddressType | None = None

    @field_validator("type")
    @classmethod
    def type_not_null(cls, value):
        return _reject_null(value)


class EmailCreate(SubEntityCreate):
    type: EmailType = EmailType.OTHER.value
    email: EmailStr
    is_verified: bool = False


class EmailUpdate(SubEntityUpdate):
    type: EmailType | None = None
    email: EmailStr | None = None
    is_verified: bool | None = None

    @field_validator("type", "email", "is_verified")
    @classmethod
    def fields_not_null(cls, value):
        return _reject_null(value)


class PhoneCreate(SubEntityCreate):
    type: PhoneType = PhoneType.OTHER.value
    phone: str = Field(min_length=1)
    is_verified: bool = False


class PhoneUpdate(SubEntityUpdate):
    type: PhoneType | None = None
    phone: str | None = Field(default=None, min_length=1)
    is_verified: bool | None = None

    @field_validator("type", "phone", "is_verified")
    @classmethod
    def fields_not_null(cls, value):
        return _reject_null(value)


class SubEntityResponse(CamelModel):
    id: str
    entity_type: str
    entity_id: str
    type: str
    is_primary: bool
    created_at: datetime
    updated_at: datetime


class AddressResponse(SubEntityResponse):
    label: str | None
    street1: str | None
    street2: str | None
    city: str | None
    state: str | None
    postal_code: str | None
    country_code: str | None
    latitude: str | None
    longitude: str | None


class EmailResponse(SubEntityResponse):
    email: str
    is_verified: bool


class PhoneResponse(SubEntityResponse):
    phone: str
    is_verified: bool


# Field definition schemas
OPTION_TYPES = (FieldType.SELECT.value, FieldType.MULTI_SELECT.value)


class FieldDefinitionCreate(CamelModel):
    entity_type: EntityType
    key: str = Field(min_length=1, max_length=100, pattern=r"^[A-Za-z][A-Za-z0-9_]*$")
    label: str = Field(min_length=1)
    type: FieldType
    options: list[str] | None = None
    is_required: bool = False

    @model_validator(mode="after")
    def options_for_select(self):
        if self.type in OPTION_TYPES and not self.options:
            raise ValueError("options are required for select fields")
        return self


class FieldDefinitionUpdate(CamelModel):
    label: str | None = Field(default=None, min_length=1)
    type: FieldType | None = None
    options: list[str] | None = None
    is_required: bool | None = None

    @field_validator("label", "type", "is_required")
    @classmethod
    def fields_not_null(cls, value):
        return _reject_null(value)


class FieldDefinitionResponse(CamelModel):
    id: str
    entity_type: str
    key: str
    label: str
    type: str
    options: list[str]
    is_required: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
