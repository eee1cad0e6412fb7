"""Baseline schema: users and auctions.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-09-14

Databases created by ``init_database`` are stamped at this revision
without running it.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("username", sa.Text, nullable=False, unique=True),
        sa.Column("password_digest", sa.Text, nullable=False),
        sa.Column("created_at", sa.Text, nullable=False),
    )

    op.create_table(
        "auctions",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("item_name", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("starting_bid", sa.REAL, nullable=False),
        sa.Column("current_bid", sa.REAL, nullable=False),
        sa.Column("highest_bidder", sa.Text),
        sa.Column("closing_time", sa.Text, nullable=False),
        sa.Column("is_closed", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.CheckConstraint("starting_bid >= 0", name="ck_auctions_starting_bid"),
        sa.CheckConstraint("current_bid >= starting_bid", name="ck_auctions_current_bid"),
    )
    op.create_index("ix_auctions_is_closed", "auctions", ["is_closed"])
    op.create_index("ix_auctions_created_at", "auctions", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_auctions_created_at", table_name="auctions")
    op.drop_index("ix_auctions_is_closed", table_name="auctions")
    op.drop_table("auctions")
    op.drop_table("users")
