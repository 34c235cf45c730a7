"""initial schema: addresses, restaurants, user_queries

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _table_exists(conn, table_name: str) -> bool:
    insp = inspect(conn)
    return table_name in set(insp.get_table_names())


def upgrade():
    conn = op.get_bind()

    if not _table_exists(conn, 'addresses'):
        op.create_table(
            'addresses',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('street', sa.String(255), nullable=False, server_default=''),
            sa.Column('neighborhood', sa.String(255), nullable=False, server_default=''),
            sa.Column('city', sa.String(255), nullable=False, server_default=''),
            sa.Column('state', sa.String(255), nullable=False, server_default=''),
            sa.Column('postal_code', sa.String(32), nullable=False, server_default=''),
            sa.Column('country', sa.String(128), nullable=False, server_default=''),
            sa.Column('latitude', sa.Float(), nullable=True),
            sa.Column('longitude', sa.Float(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.UniqueConstraint('street', 'city', 'postal_code', name='uq_addresses_natural_key'),
        )
        op.create_index('ix_addresses_city_state', 'addresses', ['city', 'state'])
        op.create_index('ix_addresses_lat_lon', 'addresses', ['latitude', 'longitude'])

    if not _table_exists(conn, 'restaurants'):
        op.create_table(
            'restaurants',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(255), nullable=False, server_default=''),
            sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
            sa.Column('address_id', sa.Integer(), sa.ForeignKey('addresses.id'), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.UniqueConstraint('name', 'address_id', name='uq_restaurants_name_address'),
        )
        op.create_index('ix_restaurants_address_id', 'restaurants', ['address_id'])
        op.create_index('ix_restaurants_rating', 'restaurants', ['rating'])

    if not _table_exists(conn, 'user_queries'):
        op.create_table(
            'user_queries',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('address_id', sa.Integer(), sa.ForeignKey('addresses.id'), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_user_queries_address_id', 'user_queries', ['address_id'])
        op.create_index('ix_user_queries_created_at', 'user_queries', ['created_at'])


def downgrade():
    conn = op.get_bind()
    for table in ('user_queries', 'restaurants', 'addresses'):
        if _table_exists(conn, table):
            op.drop_table(table)
