"""initial_schema

Revision ID: 5f2a9c1d7e43
Revises:
Create Date: 2026-10-19 11:40:12.418305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f2a9c1d7e43'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SUB_ENTITY_TABLES = ('addresses', 'emails', 'phones')


def _sub_entity_columns():
    return [
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('entity_type', sa.String(16), nullable=False),
        sa.Column('entity_id', sa.String(36), nullable=False),
        sa.Column('is_primary', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    ]


def upgrade() -> None:
    """Create all application tables."""
    op.create_table(
        'companies',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('legal_name', sa.String(255), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('email_domains', sa.JSON, nullable=False),
        sa.Column('specialties', sa.JSON, nullable=False),
        sa.Column('company_type', sa.String(32), nullable=True),
        sa.Column('employee_count_range', sa.String(16), nullable=True),
        sa.Column('industry', sa.String(32), nullable=True),
        sa.Column('founded_year', sa.Integer, nullable=True),
        sa.Column('website_url', sa.Text, nullable=True),
        sa.Column('linkedin_url', sa.Text, nullable=True),
        sa.Column('logo_url', sa.Text, nullable=True),
        sa.Column('banner_url', sa.Text, nullable=True),
        sa.Column('lifecycle_stage', sa.String(32), nullable=False, server_default='lead'),
        sa.Column('record_status', sa.String(16), nullable=False, server_default='active'),
        sa.Column('owner_id', sa.String(36), nullable=True),
        sa.Column('tags', sa.JSON, nullable=False),
        sa.Column('custom_fields', sa.JSON, nullable=False),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_companies_is_deleted', 'companies', ['is_deleted'])

    op.create_table(
        'contacts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('prefix', sa.String(32), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('middle_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('suffix', sa.String(32), nullable=True),
        sa.Column('preferred_name', sa.String(100), nullable=True),
        sa.Column('pronouns', sa.String(32), nullable=True),
        sa.Column('headline', sa.Text, nullable=True),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('department', sa.String(255), nullable=True),
        sa.Column('seniority', sa.String(16), nullable=True),
        sa.Column('company_id', sa.String(36), sa.ForeignKey('companies.id'), nullable=True),
        sa.Column('company_name_snapshot', sa.String(255), nullable=True),
        sa.Column('linkedin_url', sa.Text, nullable=True),
        sa.Column('location_label', sa.String(255), nullable=True),
        sa.Column('time_zone', sa.String(64), nullable=True),
        sa.Column('employment_start_date', sa.Date, nullable=True),
        sa.Column('employment_end_date', sa.Date, nullable=True),
        sa.Column('is_current_employee', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('employment_history', sa.JSON, nullable=False),
        sa.Column('lifecycle_stage', sa.String(32), nullable=False, server_default='lead'),
        sa.Column('record_status', sa.String(16), nullable=False, server_default='active'),
        sa.Column('owner_id', sa.String(36), nullable=True),
        sa.Column('tags', sa.JSON, nullable=False),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('custom_fields', sa.JSON, nullable=False),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_contacts_company_id', 'contacts', ['company_id'])
    op.create_index('ix_contacts_is_deleted', 'contacts', ['is_deleted'])

    op.create_table(
        'addresses',
        *_sub_entity_columns(),
        sa.Column('type', sa.String(16), nullable=False, server_default='other'),
        sa.Column('label', sa.String(100), nullable=True),
        sa.Column('street1', sa.String(255), nullable=True),
        sa.Column('street2', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('postal_code', sa.String(32), nullable=True),
        sa.Column('country_code', sa.String(8), nullable=True),
        sa.Column('latitude', sa.String(32), nullable=True),
        sa.Column('longitude', sa.String(32), nullable=True),
    )

    op.create_table(
        'emails',
        *_sub_entity_columns(),
        sa.Column('type', sa.String(16), nullable=False, server_default='other'),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('is_verified', sa.Boolean, nullable=False, server_default=sa.false()),
    )

    op.create_table(
        'phones',
        *_sub_entity_columns(),
        sa.Column('type', sa.String(16), nullable=False, server_default='other'),
        sa.Column('phone', sa.String(64), nullable=False),
        sa.Column('is_verified', sa.Boolean, nullable=False, server_default=sa.false()),
    )

    for table in SUB_ENTITY_TABLES:
        op.create_index(f'ix_{table}_entity', table, ['entity_type', 'entity_id'])
        # At most one primary per parent and kind
        op.create_index(
            f'uq_{table}_one_primary',
            table,
            ['entity_type', 'entity_id'],
            unique=True,
            sqlite_where=sa.text('is_primary'),
            postgresql_where=sa.text('is_primary'),
        )

    op.create_table(
        'field_definitions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('entity_type', sa.String(16), nullable=False),
        sa.Column('key', sa.String(100), nullable=False),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('type', sa.String(16), nullable=False),
        sa.Column('options', sa.JSON, nullable=False),
        sa.Column('is_required', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
        sa.UniqueConstraint('entity_type', 'key', name='uq_field_definitions_entity_key'),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('field_definitions')
    for table in reversed(SUB_ENTITY_TABLES):
        op.drop_index(f'uq_{table}_one_primary', table_name=table)
        op.drop_index(f'ix_{table}_entity', table_name=table)
        op.drop_table(table)
    op.drop_index('ix_contacts_is_deleted', table_name='contacts')
    op.drop_index('ix_contacts_company_id', table_name='contacts')
    op.drop_table('contacts')
    op.drop_index('ix_companies_is_deleted', table_name='companies')
    op.drop_table('companies')
