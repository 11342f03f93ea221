"""Create storefront tables

Revision ID: 3f2a9c1d7e40
Revises: 
Create Date: 2026-10-19 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f2a9c1d7e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ORDER_STATUSES = ('Pending', 'Processing', 'Shipped', 'Delivered', 'Cancelled', 'Returned')
PAYMENT_STATUSES = ('Pending', 'Paid', 'Failed', 'Refunded')
PAYMENT_METHODS = ('Card', 'PayPal', 'GooglePay', 'Wallet', 'COD')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('price', sa.Float(), sa.CheckConstraint('price >= 0'), nullable=False),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_products_id', 'products', ['id'])
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_category', 'products', ['category'])

    op.create_table(
        'product_sizes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('size', sa.String(), nullable=False),
        sa.Column('stock', sa.Integer(), sa.CheckConstraint('stock >= 0'), nullable=False),
        sa.UniqueConstraint('product_id', 'size', name='uq_productsize_product_size'),
    )
    op.create_index('ix_product_sizes_id', 'product_sizes', ['id'])
    op.create_index('ix_product_sizes_product_id', 'product_sizes', ['product_id'])

    op.create_table(
        'carts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_carts_user_id', 'carts', ['user_id'], unique=True)

    op.create_table(
        'cart_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('cart_id', sa.Integer(), sa.ForeignKey('carts.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), nullable=False),
        sa.UniqueConstraint('cart_id', 'product_id', name='uq_cartitem_cart_product'),
    )
    op.create_index('ix_cart_items_id', 'cart_items', ['id'])
    op.create_index('ix_cart_items_cart_id', 'cart_items', ['cart_id'])
    op.create_index('ix_cart_items_product_id', 'cart_items', ['product_id'])

    op.create_table(
        'cart_variants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('cart_items.id'), nullable=False),
        sa.Column('size', sa.String(), nullable=False),
        sa.Column('quantity', sa.Integer(), sa.CheckConstraint('quantity >= 1'), nullable=False),
        sa.UniqueConstraint('item_id', 'size', name='uq_cartvariant_item_size'),
    )
    op.create_index('ix_cart_variants_id', 'cart_variants', ['id'])
    op.create_index('ix_cart_variants_item_id', 'cart_variants', ['item_id'])

    op.create_table(
        'counters',
        sa.Column('name', sa.String(), primary_key=True),
        sa.Column('seq', sa.Integer(), nullable=False),
    )

    op.create_table(
        'orders',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('seq', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', sa.Enum(*ORDER_STATUSES, name='orderstatus', native_enum=False), nullable=False),
        sa.Column('payment_method', sa.Enum(*PAYMENT_METHODS, name='paymentmethod', native_enum=False), nullable=False),
        sa.Column('payment_status', sa.Enum(*PAYMENT_STATUSES, name='paymentstatus', native_enum=False), nullable=False),
        sa.Column('payment_transaction_id', sa.String(), nullable=True),
        sa.Column('subtotal', sa.Float(), nullable=False),
        sa.Column('shipping_fee', sa.Float(), nullable=False),
        sa.Column('total', sa.Float(), nullable=False),
        sa.Column('shipping_full_name', sa.String(), nullable=False),
        sa.Column('shipping_phone_number', sa.String(), nullable=False),
        sa.Column('shipping_email', sa.String(), nullable=False),
        sa.Column('shipping_street', sa.String(), nullable=False),
        sa.Column('shipping_city', sa.String(), nullable=False),
        sa.Column('shipping_province', sa.String(), nullable=False),
        sa.Column('shipping_postal_code', sa.String(), nullable=False),
        sa.Column('shipping_country', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_orders_seq', 'orders', ['seq'], unique=True)
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.String(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('size', sa.String(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
    )
    op.create_index('ix_order_items_id', 'order_items', ['id'])
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])
    op.create_index('ix_order_items_product_id', 'order_items', ['product_id'])

    op.create_table(
        'wishlists',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_wishlists_user_id', 'wishlists', ['user_id'], unique=True)

    op.create_table(
        'wishlist_products',
        sa.Column('wishlist_id', sa.String(), sa.ForeignKey('wishlists.id'), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), primary_key=True),
    )

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('action', sa.String(50), nullable=True),
        sa.Column('resource', sa.String(50), nullable=True),
        sa.Column('status', sa.String(20), nullable=True),
        sa.Column('ip', sa.String(64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
    )
    op.create_index('ix_logs_id', 'logs', ['id'])
    op.create_index('ix_logs_ts', 'logs', ['ts'])
    op.create_index('ix_logs_user_id', 'logs', ['user_id'])
    op.create_index('ix_logs_action', 'logs', ['action'])
    op.create_index('ix_logs_resource', 'logs', ['resource'])
    op.create_index('ix_logs_status', 'logs', ['status'])
    op.create_index('ix_logs_resource_ts', 'logs', ['resource', 'ts'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('logs')
    op.drop_table('wishlist_products')
    op.drop_table('wishlists')
    op.drop_table('order_items')
    op.drop_table('orders')
    op.drop_table('counters')
    op.drop_table('cart_variants')
    op.drop_table('cart_items')
    op.drop_table('carts')
    op.drop_table('product_sizes')
    op.drop_table('products')
    op.drop_table('users')
