"""Database table models."""

import uuid
from datetime import UTC, date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint, and_, text
from sqlalchemy.orm import Mapped, foreign, mapped_column, relationship

from recruit_crm.db.base import Base
from recruit_crm.db.enums import EntityType


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class Company(TimestampMixin, Base):
    """An employer or prospect organisation."""

    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255))
    legal_name: Mapped[str | None] = mapped_column(String(255), default=None)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    email_domains: Mapped[list] = mapped_column(JSON, default=list)
    specialties: Mapped[list] = mapped_column(JSON, default=list)
    company_type: Mapped[str | None] = mapped_column(String(32), default=None)
    employee_count_range: Mapped[str | None] = mapped_column(String(16), default=None)
    industry: Mapped[str | None] = mapped_column(String(32), default=None)
    founded_year: Mapped[int | None] = mapped_column(Integer, default=None)
    website_url: Mapped[str | None] = mapped_column(Text, default=None)
    linkedin_url: Mapped[str | None] = mapped_column(Text, default=None)
    logo_url: Mapped[str | None] = mapped_column(Text, default=None)
    banner_url: Mapped[str | None] = mapped_column(Text, default=None)
    lifecycle_stage: Mapped[str] = mapped_column(String(32), default="lead")
    record_status: Mapped[str] = mapped_column(String(16), default="active")
    owner_id: Mapped[str | None] = mapped_column(String(36), default=None)
    tags: Mapped[list] = mapped_column(JSON, default=list)
    custom_fields: Mapped[dict] = mapped_column(JSON, default=dict)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    contacts: Mapped[list["Contact"]] = relationship(
        primaryjoin=lambda: and_(Company.id == Contact.company_id, Contact.is_deleted.is_(False)),
        order_by=lambda: [Contact.last_name, Contact.first_name],
        viewonly=True,
    )
    addresses: Mapped[list["Address"]] = relationship(
        primaryjoin=lambda: and_(
            Company.id == foreign(Address.entity_id), Address.entity_type == EntityType.COMPANY.value
        ),
        order_by=lambda: [Address.is_primary.desc(), Address.created_at],
        viewonly=True,
    )
    emails: Mapped[list["Email"]] = relationship(
        primaryjoin=lambda: and_(Company.id == foreign(Email.entity_id), Email.entity_type == EntityType.COMPANY.value),
        order_by=lambda: [Email.is_primary.desc(), Email.created_at],
        viewonly=True,
    )
    phones: Mapped[list["Phone"]] = relationship(
        primaryjoin=lambda: and_(Company.id == foreign(Phone.entity_id), Phone.entity_type == EntityType.COMPANY.value),
        order_by=lambda: [Phone.is_primary.desc(), Phone.created_at],
        viewonly=True,
    )


class Contact(TimestampMixin, Base):
    """A person, optionally employed by a company."""

    __tablename__ = "contacts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    prefix: Mapped[str | None] = mapped_column(String(32), default=None)
    first_name: Mapped[str] = mapped_column(String(100))
    middle_name: Mapped[str | None] = mapped_column(String(100), default=None)
    last_name: Mapped[str] = mapped_column(String(100))
    suffix: Mapped[str | None] = mapped_column(String(32), default=None)
    preferred_name: Mapped[str | None] = mapped_column(String(100), default=None)
    pronouns: Mapped[str | None] = mapped_column(String(32), default=None)
    headline: Mapped[str | None] = mapped_column(Text, default=None)
    title: Mapped[str | None] = mapped_column(String(255), default=None)
    department: Mapped[str | None] = mapped_column(String(255), default=None)
    seniority: Mapped[str | None] = mapped_column(String(16), default=None)
    company_id: Mapped[str | None] = mapped_column(ForeignKey("companies.id"), default=None, index=True)
    # Company name at the time of association, kept even if the company is renamed
    company_name_snapshot: Mapped[str | None] = mapped_column(String(255), default=None)
    linkedin_url: Mapped[str | None] = mapped_column(Text, default=None)
    location_label: Mapped[str | None] = mapped_column(String(255), default=None)
    time_zone: Mapped[str | None] = mapped_column(String(64), default=None)
    employment_start_date: Mapped[date | None] = mapped_column(Date, default=None)
    employment_end_date: Mapped[date | None] = mapped_column(Date, default=None)
    is_current_employee: Mapped[bool] = mapped_column(Boolean, default=True)
    employment_history: Mapped[list] = mapped_column(JSON, default=list)
    lifecycle_stage: Mapped[str] = mapped_column(String(32), default="lead")
    record_status: Mapped[str] = mapped_column(String(16), default="active")
    owner_id: Mapped[str | None] = mapped_column(String(36), default=None)
    tags: Mapped[list] = mapped_column(JSON, default=list)
    notes: Mapped[str | None] = mapped_column(Text, default=None)
    custom_fields: Mapped[dict] = mapped_column(JSON, default=dict)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    company: Mapped["Company | None"] = relationship(foreign_keys=[company_id])
    addresses: Mapped[list["Address"]] = relationship(
        primaryjoin=lambda: and_(
            Contact.id == foreign(Address.entity_id), Address.entity_type == EntityType.CONTACT.value
        ),
        order_by=lambda: [Address.is_primary.desc(), Address.created_at],
        viewonly=True,
    )
    emails: Mapped[list["Email"]] = relationship(
        primaryjoin=lambda: and_(Contact.id == foreign(Email.entity_id), Email.entity_type == EntityType.CONTACT.value),
        order_by=lambda: [Email.is_primary.desc(), Email.created_at],
        viewonly=True,
    )
    phones: Mapped[list["Phone"]] = relationship(
        primaryjoin=lambda: and_(Contact.id == foreign(Phone.entity_id), Phone.entity_type == EntityType.CONTACT.value),
        order_by=lambda: [Phone.is_primary.desc(), Phone.created_at],
        viewonly=True,
    )


class SubEntityMixin(TimestampMixin):
    """Columns shared by contact methods attached to a company or a contact."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    entity_type: Mapped[str] = mapped_column(String(16))  # company, contact
    entity_id: Mapped[str] = mapped_column(String(36))
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)


def _sub_entity_indexes(table: str) -> tuple:
    """Lookup index plus the storage-level "one primary per parent" guarantee."""
    return (
        Index(f"ix_{table}_entity", "entity_type", "entity_id"),
        Index(
            f"uq_{table}_one_primary",
            "entity_type",
            "entity_id",
            unique=True,
            sqlite_where=text("is_primary"),
            postgresql_where=text("is_primary"),
        ),
    )


class Address(SubEntityMixin, Base):
    """A postal address."""

    __tablename__ = "addresses"
    __table_args__ = _sub_entity_indexes("addresses")

    type: Mapped[str] = mapped_column(String(16), default="other")
    label: Mapped[str | None] = mapped_column(String(100), default=None)
    street1: Mapped[str | None] = mapped_column(String(255), default=None)
    street2: Mapped[str | None] = mapped_column(String(255), default=None)
    city: Mapped[str | None] = mapped_column(String(100), default=None)
    state: Mapped[str | None] = mapped_column(String(100), default=None)
    postal_code: Mapped[str | None] = mapped_column(String(32), default=None)
    country_code: Mapped[str | None] = mapped_column(String(8), default=None)
    latitude: Mapped[str | None] = mapped_column(String(32), default=None)
    longitude: Mapped[str | None] = mapped_column(String(32), default=None)


class Email(SubEntityMixin, Base):
    """An e-mail address."""

    __tablename__ = "emails"
    __table_args__ = _sub_entity_indexes("emails")

    type: Mapped[str] = mapped_column(String(16), default="other")
    email: Mapped[str] = mapped_column(String(320))
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)


class Phone(SubEntityMixin, Base):
    """A phone number."""

    __tablename__ = "phones"
    __table_args__ = _sub_entity_indexes("phones")

    type: Mapped[str] = mapped_column(String(16), default="other")
    phone: Mapped[str] = mapped_column(String(64))
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)


class FieldDefinition(TimestampMixin, Base):
    """Metadata for a custom field; values live in the parent's custom_fields."""

    __tablename__ = "field_definitions"
    __table_args__ = (UniqueConstraint("entity_type", "key", name="uq_field_definitions_entity_key"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    entity_type: Mapped[str] = mapped_column(String(16))
    key: Mapped[str] = mapped_column(String(100))
    label: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(16))
    options: Mapped[list] = mapped_column(JSON, default=list)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
