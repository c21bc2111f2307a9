"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'company',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('description', sa.Text()),
        sa.Column('is_active', sa.Integer(), nullable=False, server_default=sa.text('1')),
        sa.Column('created_at', sa.Text(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_table(
        'opening_rules',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id', ondelete='CASCADE'), nullable=False),
        sa.Column('weekday', sa.Integer(), nullable=False),
        sa.Column('opens_at', sa.Text(), nullable=False, server_default=sa.text("'09:00'")),
        sa.Column('closes_at', sa.Text(), nullable=False, server_default=sa.text("'18:00'")),
        sa.Column('is_closed', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.UniqueConstraint('company_id', 'weekday'),
        sa.CheckConstraint('weekday BETWEEN 0 AND 6'),
    )
    op.create_table(
        'services',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('duration_min', sa.Integer(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False, server_default=sa.text('0')),
        sa.Column('is_active', sa.Integer(), nullable=False, server_default=sa.text('1')),
        sa.CheckConstraint('duration_min > 0'),
    )
    op.create_table(
        'specialists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id', ondelete='CASCADE'), nullable=False),
        sa.Column('display_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text()),
        sa.Column('phone', sa.Text()),
        sa.Column('specialty', sa.Text()),
        sa.Column('is_active', sa.Integer(), nullable=False, server_default=sa.text('1')),
    )
    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer(), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('specialist_id', sa.Integer(), sa.ForeignKey('specialists.id')),
        sa.Column('date', sa.Text(), nullable=False),
        sa.Column('start_time', sa.Text(), nullable=False),
        sa.Column('end_time', sa.Text(), nullable=False),
        sa.Column('client_name', sa.Text(), nullable=False),
        sa.Column('client_email', sa.Text(), nullable=False),
        sa.Column('client_phone', sa.Text(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False, server_default=sa.text('0')),
        sa.Column('status', sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.Text(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.Text(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_appointments_company_date', 'appointments', ['company_id', 'date'])


def downgrade() -> None:
    op.drop_index('ix_appointments_company_date', table_name='appointments')
    op.drop_table('appointments')
    op.drop_table('specialists')
    op.drop_table('services')
    op.drop_table('opening_rules')
    op.drop_table('company')
