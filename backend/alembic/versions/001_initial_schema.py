"""Initial schema — sellers, customers, catalog, orders, staff, finance, investments, audit.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "sellers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone", sa.String(40), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        _created_at(),
    )

    op.create_table(
        "customers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone", sa.String(40), nullable=True),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("cpf_cnpj", sa.String(20), nullable=True),
        sa.Column("customer_type", sa.String(20), nullable=False, server_default="WHOLESALE"),
        sa.Column("seller_id", UUID(as_uuid=True), sa.ForeignKey("sellers.id"), nullable=True),
        sa.Column("credit_limit", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("available_credit", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("payment_terms_days", sa.Integer, nullable=True),
        sa.Column("allows_boleto", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        _created_at(),
    )
    op.create_index("ix_customers_seller_id", "customers", ["seller_id"])

    op.create_table(
        "products",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(40), nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        sa.Column("price_wholesale", sa.Numeric(12, 2), nullable=False),
        sa.Column("price_retail", sa.Numeric(12, 2), nullable=False),
        sa.Column("promotional_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("is_on_promotion", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("current_stock", sa.Numeric(12, 3), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        _created_at(),
    )

    op.create_table(
        "employees",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("employee_number", sa.String(20), nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("position", sa.String(120), nullable=True),
        sa.Column("department", sa.String(120), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("supervisor_id", UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=True),
        sa.Column("seller_id", UUID(as_uuid=True), sa.ForeignKey("sellers.id"), nullable=True),
        sa.Column("hired_at", sa.Date, nullable=True),
        _created_at(),
    )
    op.create_index("ix_employees_supervisor_id", "employees", ["supervisor_id"])

    op.create_table(
        "employee_documents",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "employee_id", UUID(as_uuid=True),
            sa.ForeignKey("employees.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("document_type", sa.String(30), nullable=False),
        sa.Column("file_key", sa.String(1024), nullable=False),
        sa.Column("acknowledged_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index("ix_employee_documents_employee_id", "employee_documents", ["employee_id"])
    op.create_index("ix_employee_documents_file_key", "employee_documents", ["file_key"])

    op.create_table(
        "orders",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("order_number", sa.Integer, nullable=False),
        sa.Column("customer_id", UUID(as_uuid=True), sa.ForeignKey("customers.id"), nullable=True),
        sa.Column("seller_id", UUID(as_uuid=True), sa.ForeignKey("sellers.id"), nullable=True),
        sa.Column("employee_id", UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=True),
        sa.Column("order_type", sa.String(20), nullable=False, server_default="WHOLESALE"),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default="UNPAID"),
        sa.Column("payment_method", sa.String(30), nullable=True),
        sa.Column("delivery_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False),
        sa.Column("discount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        _created_at(),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"])
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])
    op.create_index("ix_orders_seller_id", "orders", ["seller_id"])
    op.create_index("ix_orders_employee_id", "orders", ["employee_id"])

    op.create_table(
        "order_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "order_id", UUID(as_uuid=True),
            sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("product_id", UUID(as_uuid=True), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    op.create_table(
        "receivables",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("customer_id", UUID(as_uuid=True), sa.ForeignKey("customers.id"), nullable=True),
        sa.Column("employee_id", UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=True),
        sa.Column("order_id", UUID(as_uuid=True), sa.ForeignKey("orders.id"), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("due_date", sa.Date, nullable=False),
        _created_at(),
    )
    op.create_index("ix_receivables_customer_id", "receivables", ["customer_id"])
    op.create_index("ix_receivables_employee_id", "receivables", ["employee_id"])

    op.create_table(
        "expenses",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("description", sa.String(300), nullable=False),
        sa.Column("category", sa.String(120), nullable=True),
        sa.Column("expense_type", sa.String(20), nullable=False, server_default="OPERATIONAL"),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("fee_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("competence_date", sa.Date, nullable=True),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column("payment_date", sa.Date, nullable=True),
        _created_at(),
    )
    op.create_index("ix_expenses_expense_type", "expenses", ["expense_type"])
    op.create_index("ix_expenses_due_date", "expenses", ["due_date"])

    op.create_table(
        "investment_companies",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("ticker", sa.String(12), nullable=True),
        sa.Column("current_price", sa.Numeric(18, 6), nullable=False),
        sa.Column("total_shares", sa.BigInteger, nullable=False),
    )

    op.create_table(
        "investor_profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "customer_id", UUID(as_uuid=True), sa.ForeignKey("customers.id"),
            nullable=False, unique=True,
        ),
        sa.Column("balance", sa.Numeric(14, 2), nullable=False, server_default="0"),
        _created_at(),
    )

    op.create_table(
        "investor_portfolios",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "investor_id", UUID(as_uuid=True),
            sa.ForeignKey("investor_profiles.id"), nullable=False,
        ),
        sa.Column(
            "company_id", UUID(as_uuid=True),
            sa.ForeignKey("investment_companies.id"), nullable=False,
        ),
        sa.Column("shares", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("avg_price", sa.Numeric(18, 6), nullable=False, server_default="0"),
        sa.UniqueConstraint("investor_id", "company_id"),
    )
    op.create_index("ix_investor_portfolios_investor_id", "investor_portfolios", ["investor_id"])

    op.create_table(
        "investor_gifted_shares",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "investor_id", UUID(as_uuid=True),
            sa.ForeignKey("investor_profiles.id"), nullable=False,
        ),
        sa.Column(
            "company_id", UUID(as_uuid=True),
            sa.ForeignKey("investment_companies.id"), nullable=False,
        ),
        sa.Column("shares", sa.BigInteger, nullable=False),
        sa.Column("vesting_date", sa.Date, nullable=False),
        sa.Column("grant_date", sa.Date, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
    )
    op.create_index(
        "ix_investor_gifted_shares_investor_id", "investor_gifted_shares", ["investor_id"],
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("entity_id", sa.String(64), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("actor_id", sa.String(64), nullable=False),
        sa.Column("actor_type", sa.String(20), nullable=False),
        sa.Column("before", sa.JSON, nullable=False),
        sa.Column("after", sa.JSON, nullable=False),
        sa.Column("reason", sa.Text, nullable=True),
        _created_at(),
    )
    op.create_index("ix_audit_logs_entity_id", "audit_logs", ["entity_id"])


def downgrade() -> None:
    for table in (
        "audit_logs", "investor_gifted_shares", "investor_portfolios",
        "investor_profiles", "investment_companies", "expenses", "receivables",
        "order_items", "orders", "employee_documents", "employees",
        "products", "customers", "sellers",
    ):
        op.drop_table(table)
