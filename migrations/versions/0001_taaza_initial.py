"""order counters, orders, order lines, categories

Revision ID: 0001_taaza_initial
Revises:
Create Date: 2024-03-01 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_taaza_initial"
down_revision = None
branch_labels = None
depends_on = None


class GUID(sa.TypeDecorator):
    impl = sa.CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import UUID

            return dialect.type_descriptor(UUID(as_uuid=True))
        return dialect.type_descriptor(sa.CHAR(36))


def upgrade() -> None:
    op.create_table(
        "order_counters",
        sa.Column("channel", sa.String(length=50), primary_key=True),
        sa.Column("current", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "orders",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("order_id", sa.String(length=64), nullable=False, unique=True),
        sa.Column("channel", sa.String(length=20), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("payment_method", sa.String(length=20), nullable=False),
        sa.Column("total", sa.Float(), nullable=False, server_default="0"),
        sa.Column("item_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_weight", sa.Float(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=True),
        sa.Column("customer_name", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("with_receipt", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_orders_created_at", "orders", ["created_at"], unique=False)
    op.create_index("ix_orders_channel_sequence", "orders", ["channel", "sequence"], unique=False)
    op.create_table(
        "order_lines",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("order_pk", GUID(), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("qty", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("price_per_kg", sa.Float(), nullable=True),
        sa.Column("total", sa.Float(), nullable=False, server_default="0"),
    )
    op.create_index("ix_order_lines_order_pk", "order_lines", ["order_pk"], unique=False)
    op.create_table(
        "categories",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("key", sa.String(length=100), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("whole_quantity", sa.Float(), nullable=False, server_default="0"),
        sa.Column("quantity_left", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("categories")
    op.drop_index("ix_order_lines_order_pk", table_name="order_lines")
    op.drop_table("order_lines")
    op.drop_index("ix_orders_channel_sequence", table_name="orders")
    op.drop_index("ix_orders_created_at", table_name="orders")
    op.drop_table("orders")
    op.drop_table("order_counters")
