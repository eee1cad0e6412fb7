"""Shared pytest fixtures and test helpers for gavel tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from gavel.api.app import create_app
from gavel.config.settings import GavelSettings
from gavel.infrastructure.store import Store
from gavel.services.telemetry import disable_telemetry

TEST_SECRET = "test-secret-key"

# bcrypt's minimum cost keeps signup/signin fast in tests.
FAST_AUTH: dict[str, Any] = {"secret_key": TEST_SECRET, "bcrypt_rounds": 4}


class FrozenClock:
    """Injectable clock for services: returns ``now`` until advanced."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's GAVEL_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("GAVEL_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """``-v`` enables telemetry on a ContextVar; don't let it leak across tests."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> GavelSettings:
    """Settings rooted at a temp directory with a fast bcrypt cost."""
    return GavelSettings.from_cli(data_root=tmp_path, auth=FAST_AUTH)


@pytest.fixture
def store(settings: GavelSettings) -> Iterator[Store]:
    """Fully initialized store on a temp database."""
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2030, 6, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def client(store: Store) -> Iterator[TestClient]:
    """HTTP client over an app sharing the ``store`` fixture."""
    with TestClient(create_app(store=store)) as c:
        yield c


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp dir so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes. Tests that need the path can also request ``tmp_path``
    directly (pytest deduplicates: it's the same directory).
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GAVEL_AUTH__SECRET_KEY", TEST_SECRET)
    monkeypatch.setenv("GAVEL_AUTH__BCRYPT_ROUNDS", "4")


# ---------------------------------------------------------------------------
# Shared test helpers (used across service and API test modules)
# ---------------------------------------------------------------------------


def register(store: Store, username: str = "alice", password: str = "pw-alice") -> dict[str, Any]:
    """Sign up a user via AccountService, asserting success."""
    from gavel.services.account import AccountService

    result = AccountService(store).signup(username, password)
    assert result.ok, result.error
    return result.data["user"]


def open_auction(
    store: Store,
    *,
    clock: FrozenClock | None = None,
    starting_bid: float = 100,
    closes_in: timedelta = timedelta(hours=1),
    item_name: str = "Brass lamp",
) -> dict[str, Any]:
    """Create an auction via AuctionService, asserting success."""
    from gavel.services.auction import AuctionService

    now = clock() if clock is not None else datetime.now(UTC)
    result = AuctionService(store, clock=clock).create_auction(
        item_name,
        "Desk lamp, works",
        starting_bid,
        (now + closes_in).isoformat(),
    )
    assert result.ok, result.error
    return result.data["auction"]


def bearer(store: Store, username: str = "alice", password: str = "pw-alice") -> str:
    """Register (if needed) and sign in, returning an ``Authorization`` value."""
    from gavel.services.account import AccountService

    svc = AccountService(store)
    svc.signup(username, password)
    result = svc.signin(username, password)
    assert result.ok, result.error
    return f"Bearer {result.data['token']}"
