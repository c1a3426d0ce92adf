"""create products and product_nutrition

Revision ID: 4f2c9a1d7e30
Revises:
Create Date: 2026-01-12

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2c9a1d7e30"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CATEGORIES = ("Fridge", "Pantry", "Freezer")
STATUSES = ("active", "consumed", "expired")


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("expiryDate", sa.Date(), nullable=False, index=True),
        sa.Column(
            "category",
            sa.Enum(*CATEGORIES, name="category", native_enum=False, create_constraint=True),
            nullable=False,
        ),
        sa.Column("quantity", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "createdAt",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column("consumedAt", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "status",
            sa.Enum(*STATUSES, name="itemstatus", native_enum=False, create_constraint=True),
            nullable=False,
            server_default="active",
            index=True,
        ),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "product_nutrition",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("calories", sa.Float(), nullable=True),
        sa.Column("protein", sa.Float(), nullable=True),
        sa.Column("carbs", sa.Float(), nullable=True),
        sa.Column("fat", sa.Float(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("product_nutrition")
    op.drop_table("products")
