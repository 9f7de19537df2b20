"""initial back office schema

Revision ID: 7c2e91a4d0b3
Revises:
Create Date: 2026-10-19 10:12:41.208133

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '7c2e91a4d0b3'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    ]


def upgrade():
    op.create_table('admin_users',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('username', sa.String(length=150), nullable=False),
    sa.Column('password_hash', sa.String(length=255), nullable=False),
    sa.Column('role', sa.String(length=50), nullable=False),
    sa.Column('is_active', sa.Boolean(), nullable=True),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('username')
    )
    op.create_table('leads',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('phone', sa.String(length=20), nullable=False),
    sa.Column('city', sa.String(length=100), nullable=False),
    sa.Column('vehicle', sa.String(length=50), nullable=False),
    sa.Column('issue', sa.String(length=100), nullable=False),
    sa.Column('date', sa.String(length=10), nullable=True),
    sa.Column('time', sa.String(length=50), nullable=True),
    sa.Column('source', sa.String(length=50), nullable=False),
    sa.Column('remark', sa.Text(), nullable=True),
    sa.Column('status', sa.String(length=20), nullable=False),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_leads_status', 'leads', ['status'])
    op.create_table('stores',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('type', sa.String(length=10), nullable=False),
    sa.Column('city', sa.String(length=100), nullable=True),
    sa.Column('address', sa.Text(), nullable=True),
    sa.Column('lat', sa.Float(), nullable=True),
    sa.Column('lng', sa.Float(), nullable=True),
    sa.Column('manager_name', sa.String(length=255), nullable=True),
    sa.Column('manager_number', sa.String(length=20), nullable=True),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('task_types',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('slot_type', sa.String(length=20), nullable=False),
    sa.Column('count', sa.Integer(), nullable=False),
    sa.Column('allowed_in_hub', sa.Boolean(), nullable=False),
    sa.Column('allowed_in_garage', sa.Boolean(), nullable=False),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('carwash',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('phone', sa.String(length=20), nullable=False),
    sa.Column('vehicle_type', sa.String(length=50), nullable=False),
    sa.Column('package', sa.String(length=50), nullable=False),
    sa.Column('express', sa.Boolean(), nullable=False),
    sa.Column('date', sa.String(length=10), nullable=False),
    sa.Column('time', sa.String(length=20), nullable=False),
    sa.Column('price', sa.Integer(), nullable=False),
    sa.Column('store_id', sa.String(length=36), nullable=True),
    sa.Column('status', sa.String(length=20), nullable=True),
    sa.Column('lead_source', sa.String(length=50), nullable=True),
    *_timestamps(),
    sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('customers',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('phone', sa.String(length=20), nullable=False),
    sa.Column('whatsapp', sa.String(length=20), nullable=True),
    sa.Column('address_street', sa.String(length=255), nullable=True),
    sa.Column('address_city', sa.String(length=100), nullable=True),
    sa.Column('address_state', sa.String(length=100), nullable=True),
    sa.Column('address_pincode', sa.String(length=20), nullable=True),
    sa.Column('address_lat', sa.String(length=30), nullable=True),
    sa.Column('address_lng', sa.String(length=30), nullable=True),
    sa.Column('opening_balance', sa.Float(), nullable=False),
    sa.Column('balance_type', sa.String(length=2), nullable=False),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('phone')
    )
    op.create_table('customer_vehicles',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('customer_id', sa.String(length=36), nullable=False),
    sa.Column('vehicle_type', sa.String(length=50), nullable=False),
    sa.Column('vehicle_subtype', sa.String(length=50), nullable=False),
    sa.Column('vehicle_name', sa.String(length=255), nullable=True),
    sa.Column('vehicle_number', sa.String(length=50), nullable=True),
    sa.Column('odo_reading', sa.Integer(), nullable=True),
    sa.Column('last_service_date', sa.String(length=10), nullable=True),
    sa.Column('basic_issues', sa.Text(), nullable=True),
    *_timestamps(),
    sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_customer_vehicles_customer_id', 'customer_vehicles', ['customer_id'])
    op.create_table('store_task_capacities',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('store_id', sa.String(length=36), nullable=False),
    sa.Column('task_type_id', sa.String(length=36), nullable=False),
    sa.Column('capacity', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ),
    sa.ForeignKeyConstraint(['task_type_id'], ['task_types.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_store_task_capacities_store_id', 'store_task_capacities', ['store_id'])
    op.create_table('garage_hub_tags',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('garage_id', sa.String(length=36), nullable=False),
    sa.Column('hub_id', sa.String(length=36), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
    sa.ForeignKeyConstraint(['garage_id'], ['stores.id'], ),
    sa.ForeignKeyConstraint(['hub_id'], ['stores.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('garage_id', 'hub_id', name='uq_garage_hub')
    )
    op.create_index('ix_garage_hub_tags_garage_id', 'garage_hub_tags', ['garage_id'])
    op.create_index('ix_garage_hub_tags_hub_id', 'garage_hub_tags', ['hub_id'])


def downgrade():
    op.drop_index('ix_garage_hub_tags_hub_id', table_name='garage_hub_tags')
    op.drop_index('ix_garage_hub_tags_garage_id', table_name='garage_hub_tags')
    op.drop_table('garage_hub_tags')
    op.drop_index('ix_store_task_capacities_store_id', table_name='store_task_capacities')
    op.drop_table('store_task_capacities')
    op.drop_index('ix_customer_vehicles_customer_id', table_name='customer_vehicles')
    op.drop_table('customer_vehicles')
    op.drop_table('customers')
    op.drop_table('carwash')
    op.drop_table('task_types')
    op.drop_table('stores')
    op.drop_index('ix_leads_status', table_name='leads')
    op.drop_table('leads')
    op.drop_table('admin_users')
