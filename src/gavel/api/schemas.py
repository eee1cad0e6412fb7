"""Request bodies.

Fields are deliberately loose (``Any``, all optional): presence and type
rules live in the domain validators so the HTTP API and the CLI reject
the same inputs with the same messages.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CredentialsBody(BaseModel):
    username: Any = None
    password: Any = None


class AuctionBody(BaseModel):
    itemName: Any = None  # noqa: N815
    description: Any = None
    startingBid: Any = None  # noqa: N815
    closingTime: Any = None  # noqa: N815


class BidBody(BaseModel):
    bid: Any = None
