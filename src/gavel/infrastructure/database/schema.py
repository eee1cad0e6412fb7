"""SQLAlchemy Core table definitions for the gavel database.

Each table is a flat document collection keyed by a 24-hex record ID.
Timestamps are stored as fixed-width UTC ISO text (see
:mod:`gavel.domain.instants`), so ``ORDER BY`` on them is chronological.
"""

from __future__ import annotations

from sqlalchemy import (
    REAL,
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Text, primary_key=True),
    Column("username", Text, nullable=False, unique=True),
    Column("password_digest", Text, nullable=False),
    Column("created_at", Text, nullable=False),
)

auctions = Table(
    "auctions",
    metadata,
    Column("id", Text, primary_key=True),
    Column("item_name", Text, nullable=False),
    Column("description", Text, nullable=False),
    Column("starting_bid", REAL, nullable=False),
    Column("current_bid", REAL, nullable=False),
    Column("highest_bidder", Text),  # username, NULL until first accepted bid
    Column("closing_time", Text, nullable=False),
    Column("is_closed", Integer, nullable=False, default=0, server_default="0"),
    Column("created_at", Text, nullable=False),
    CheckConstraint("starting_bid >= 0", name="ck_auctions_starting_bid"),
    CheckConstraint("current_bid >= starting_bid", name="ck_auctions_current_bid"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_auctions_is_closed", auctions.c.is_closed)
Index("ix_auctions_created_at", auctions.c.created_at)
