"""
Pytest configuration and shared fixtures for swgohhelp tests.

Fixtures build a client wired to a fake HTTP backend: a real
``requests.Session`` whose ``send`` is replaced by a router that answers
prepared requests by URL path and records them.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
import requests

from swgohhelp.config.models import Settings
from swgohhelp.services.cache_store import CacheStore
from swgohhelp.services.stat_calc import StatCalcClient
from swgohhelp.services.swgoh_client import SwgohHelpClient
from swgohhelp.shared.constants import CacheConfig
from tests.helpers import (
    DATA_PATH,
    SIGNIN_PATH,
    STAT_CALC_PATH,
    TITLE_CATALOG_PAYLOAD,
    FakeApi,
    FakeClock,
    make_response,
    recalculated,
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SWGOHHELP_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("SWGOHHELP_"):
            monkeypatch.delenv(name)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def session(mocker, fake_api: FakeApi) -> requests.Session:
    """A real session whose transport is the fake API."""
    http = requests.Session()
    mocker.patch.object(http, "send", side_effect=fake_api)
    return http


@pytest.fixture
def settings() -> Settings:
    return Settings(api={"swgoh": {"username": "rey", "password": "jakku"}})


@pytest.fixture
def game_data_cache(temp_dir: Path, clock: FakeClock) -> CacheStore:
    return CacheStore(
        temp_dir / CacheConfig.GAME_DATA_FILE,
        CacheConfig.GAME_DATA_TTL,
        name=CacheConfig.GAME_DATA_NAME,
        clock=clock,
    )


@pytest.fixture
def player_cache(temp_dir: Path, clock: FakeClock) -> CacheStore:
    return CacheStore(
        temp_dir / CacheConfig.PLAYER_FILE,
        CacheConfig.PLAYER_TTL,
        name=CacheConfig.PLAYER_NAME,
        clock=clock,
    )


@pytest.fixture
def stat_calculator(settings: Settings, session: requests.Session) -> StatCalcClient:
    return StatCalcClient(settings.api.stat_calc, session=session)


@pytest.fixture
def client(
    settings: Settings,
    session: requests.Session,
    game_data_cache: CacheStore,
    player_cache: CacheStore,
    stat_calculator: StatCalcClient,
) -> SwgohHelpClient:
    return SwgohHelpClient(
        settings=settings,
        session=session,
        game_data_cache=game_data_cache,
        player_cache=player_cache,
        stat_calculator=stat_calculator,
    )


@pytest.fixture
def default_routes(fake_api: FakeApi) -> FakeApi:
    """Routes for a successful sign-in, title catalog and stat calculation."""
    fake_api.route(SIGNIN_PATH, make_response(200, {"access_token": "tok-123", "expires_in": 3600}))
    fake_api.route(DATA_PATH, make_response(200, TITLE_CATALOG_PAYLOAD))
    fake_api.route(STAT_CALC_PATH, recalculated)
    return fake_api
