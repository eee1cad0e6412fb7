"""HTTP routes.

Each handler builds a fresh service over the shared Store, calls one
operation, and either returns the success payload or raises
:class:`ApiError`, which the app's handler renders as ``{message, code,
...detail}`` with the status from :data:`STATUS_BY_CODE`.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from gavel import __version__
from gavel.api.deps import auction_body, bid_body, get_store, require_identity
from gavel.api.errors import raise_for_failure
from gavel.api.schemas import AuctionBody, BidBody, CredentialsBody
from gavel.domain.users import Identity
from gavel.infrastructure.store import Store
from gavel.services.account import AccountService
from gavel.services.auction import AuctionService

router = APIRouter()


# --- Accounts ---


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(body: CredentialsBody, store: Store = Depends(get_store)) -> dict[str, Any]:
    result = raise_for_failure(AccountService(store).signup(body.username, body.password))
    return {"message": "User registered successfully", "user": result.data["user"]}


@router.post("/signin")
def signin(body: CredentialsBody, store: Store = Depends(get_store)) -> dict[str, Any]:
    result = raise_for_failure(AccountService(store).signin(body.username, body.password))
    return {
        "message": "Signin successful",
        "token": result.data["token"],
        "expiresIn": result.data["expires_in"],
    }


# --- Auctions ---


@router.post("/auction", status_code=status.HTTP_201_CREATED)
def create_auction(
    identity: Identity = Depends(require_identity),
    body: AuctionBody = Depends(auction_body),
    store: Store = Depends(get_store),
) -> dict[str, Any]:
    result = raise_for_failure(
        AuctionService(store).create_auction(
            body.itemName, body.description, body.startingBid, body.closingTime
        )
    )
    return {"message": "Auction created", "auction": result.data["auction"]}


@router.get("/auctions")
def list_auctions(store: Store = Depends(get_store)) -> list[dict[str, Any]]:
    result = raise_for_failure(AuctionService(store).list_auctions())
    items: list[dict[str, Any]] = result.data["items"]
    return items


@router.get("/auctions/{auction_id}")
def view_auction(auction_id: str, store: Store = Depends(get_store)) -> dict[str, Any]:
    """Fetch one auction. Closes it as a side effect if its time has passed."""
    result = raise_for_failure(AuctionService(store).view_auction(auction_id))
    auction: dict[str, Any] = result.data["auction"]
    return auction


@router.post("/bid/{auction_id}")
def place_bid(
    auction_id: str,
    identity: Identity = Depends(require_identity),
    body: BidBody = Depends(bid_body),
    store: Store = Depends(get_store),
) -> dict[str, Any]:
    result = raise_for_failure(
        AuctionService(store).place_bid(auction_id, bidder=identity.username, amount=body.bid)
    )
    return {"message": "Bid successful", "item": result.data["item"]}


# --- Ops ---


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
