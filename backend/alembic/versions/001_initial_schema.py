"""Initial schema with reference data

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

What:  Creates every table and seeds the ISO currency and country tables.
How:   Rows come from storefront.data so the migration and the runtime seed
       helper insert identical reference data.

Rollback: downgrade() drops all tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from storefront.data.countries import country_rows
from storefront.data.currencies import currency_rows

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # ── Reference data ────────────────────────────────────────────────────
    currencies = op.create_table(
        "currencies",
        sa.Column("code", sa.String(3), primary_key=True),
        sa.Column("symbol", sa.String(16), nullable=False),
        sa.Column("symbol_native", sa.String(16), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
    )

    op.create_table(
        "regions",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("currency_code", sa.String(3), sa.ForeignKey("currencies.code"), nullable=False),
        sa.Column("tax_rate", sa.Float(), nullable=False),
        sa.Column("tax_code", sa.String(255), nullable=True),
        sa.Column("includes_tax", sa.Boolean(), nullable=False),
        sa.Column("gift_cards_taxable", sa.Boolean(), nullable=False),
        sa.Column("automatic_taxes", sa.Boolean(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )

    countries = op.create_table(
        "countries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("iso_2", sa.String(2), nullable=False),
        sa.Column("iso_3", sa.String(3), nullable=False),
        sa.Column("num_code", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column(
            "region_id",
            sa.String(64),
            sa.ForeignKey("regions.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("ix_countries_iso_2", "countries", ["iso_2"], unique=True)
    op.create_index("ix_countries_region_id", "countries", ["region_id"])

    # ── Stock locations ───────────────────────────────────────────────────
    op.create_table(
        "stock_location_addresses",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("address_1", sa.String(255), nullable=False),
        sa.Column("address_2", sa.String(255), nullable=True),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("city", sa.String(255), nullable=True),
        sa.Column("country_code", sa.String(2), nullable=False),
        sa.Column("phone", sa.String(64), nullable=True),
        sa.Column("province", sa.String(255), nullable=True),
        sa.Column("postal_code", sa.String(32), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "stock_locations",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "address_id",
            sa.String(64),
            sa.ForeignKey("stock_location_addresses.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )

    # ── Store ─────────────────────────────────────────────────────────────
    op.create_table(
        "stores",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "default_currency_code",
            sa.String(3),
            sa.ForeignKey("currencies.code"),
            nullable=False,
        ),
        sa.Column("swap_link_template", sa.String(1024), nullable=True),
        sa.Column("payment_link_template", sa.String(1024), nullable=True),
        sa.Column("invite_link_template", sa.String(1024), nullable=True),
        sa.Column(
            "default_location_id",
            sa.String(64),
            sa.ForeignKey("stock_locations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "store_currencies",
        sa.Column(
            "store_id",
            sa.String(64),
            sa.ForeignKey("stores.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "currency_code",
            sa.String(3),
            sa.ForeignKey("currencies.code", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    # ── Accounts ──────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column(
            "role",
            sa.Enum("admin", "member", "developer", name="user_role"),
            nullable=False,
        ),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("api_token", sa.String(255), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "uq_users_api_token_live",
        "users",
        ["api_token"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
        sqlite_where=sa.text("deleted_at IS NULL"),
    )
    op.create_index(
        "uq_users_email_live",
        "users",
        ["email"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
        sqlite_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(64), nullable=True),
        sa.Column("has_account", sa.Boolean(), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_customers_email", "customers", ["email"])
    op.create_index(
        "uq_customers_email_account_live",
        "customers",
        ["email", "has_account"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
        sqlite_where=sa.text("deleted_at IS NULL"),
    )

    # ── Seed reference data ───────────────────────────────────────────────
    op.bulk_insert(currencies, currency_rows())
    op.bulk_insert(countries, country_rows())


def downgrade() -> None:
    op.drop_table("customers")
    op.drop_table("users")
    op.drop_table("store_currencies")
    op.drop_table("stores")
    op.drop_table("stock_locations")
    op.drop_table("stock_location_addresses")
    op.drop_table("countries")
    op.drop_table("regions")
    op.drop_table("currencies")
    sa.Enum(name="user_role").drop(op.get_bind(), checkfirst=True)
