"""module scoped orders and products

Revision ID: 0001_module_scoped
Revises: 
Create Date: 2026-10-19
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

revision = '0001_module_scoped'
down_revision = None
branch_labels = None
depends_on = None

# Scoping columns shared by every tenant-owned table
def _scope_columns():
    return [
        sa.Column('module_type', sa.String(length=16), nullable=True),
        sa.Column('hub_id', sa.String(length=64), nullable=True),
        sa.Column('store_id', sa.String(length=64), nullable=True),
    ]


def _scope_indexes(table):
    for col in ('module_type', 'hub_id', 'store_id'):
        op.create_index(f'ix_{table}_{col}', table, [col])


def upgrade():
    op.create_table('orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        *_scope_columns(),
        sa.Column('customer_name', sa.String(length=128), nullable=False),
        sa.Column('total_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='NEW'),
        sa.Column('created_by', sa.String(length=64), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'))
    )
    _scope_indexes('orders')
    op.create_index('ix_orders_customer_name', 'orders', ['customer_name'])

    op.create_table('products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('sku', sa.String(length=64), nullable=False),
        *_scope_columns(),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'))
    )
    _scope_indexes('products')
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_sku', 'products', ['sku'], unique=True)


def downgrade():
    op.drop_table('products')
    op.drop_table('orders')
