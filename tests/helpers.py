"""Test helpers: a fake HTTP backend, canned payloads and a fake clock."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

import orjson
import requests

from swgohhelp.shared.constants import StatCalcConfig, SwgohHelpConfig

SIGNIN_PATH = SwgohHelpConfig.SIGNIN_ENDPOINT
PLAYER_PATH = SwgohHelpConfig.PLAYER_ENDPOINT
DATA_PATH = SwgohHelpConfig.DATA_ENDPOINT
STAT_CALC_PATH = urlsplit(StatCalcConfig.BASE_URL).path

Handler = Callable[[requests.PreparedRequest], requests.Response]


def make_response(
    status_code: int = 200,
    payload: Any = None,
    *,
    body: bytes | None = None,
    reason: str = "OK",
) -> requests.Response:
    """Build a ``requests.Response`` carrying a JSON payload or raw body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = body if body is not None else orjson.dumps(payload)
    response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


class FakeApi:
    """Answers prepared requests by URL path and records every request."""

    def __init__(self) -> None:
        self.requests: list[requests.PreparedRequest] = []
        self._handlers: dict[str, Handler] = {}

    def route(self, path: str, answer: requests.Response | Exception | Handler) -> None:
        if isinstance(answer, requests.Response):
            self._handlers[path] = lambda _request: answer
        elif isinstance(answer, Exception):
            self._handlers[path] = _raiser(answer)
        else:
            self._handlers[path] = answer

    def calls(self, path: str) -> list[requests.PreparedRequest]:
        return [r for r in self.requests if urlsplit(r.url).path == path]

    def __call__(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.requests.append(request)
        path = urlsplit(request.url).path
        if path not in self._handlers:
            msg = f"No fake route for {request.method} {path}"
            raise AssertionError(msg)
        return self._handlers[path](request)


def _raiser(error: Exception) -> Handler:
    def handler(_request: requests.PreparedRequest) -> requests.Response:
        raise error

    return handler


def unit_payload(def_id: str, **overrides: Any) -> dict[str, Any]:
    unit = {
        "id": f"{def_id}-id",
        "defId": def_id,
        "nameKey": f"UNIT_{def_id}_NAME",
        "rarity": 7,
        "level": 85,
        "gear": 13,
        "gp": 30000,
        "combatType": 1,
    }
    unit.update(overrides)
    return unit


def player_payload(ally_code: int, name: str, **overrides: Any) -> dict[str, Any]:
    player = {
        "allyCode": ally_code,
        "id": f"player-{ally_code}",
        "name": name,
        "level": 85,
        "guildName": "Rebel Scum",
        "guildRefId": "G1",
        "titles": {
            "selected": "PLAYERTITLE_HERO",
            "unlocked": ["PLAYERTITLE_HERO", "PLAYERTITLE_GONE"],
        },
        "roster": [unit_payload("REYJEDITRAINING"), unit_payload("BB8")],
        "updated": 1570000000000,
    }
    player.update(overrides)
    return player


TITLE_CATALOG_PAYLOAD = [
    {"id": "PLAYERTITLE_HERO", "nameKey": "Hero of the Resistance", "descKey": "Awarded for valor"},
    {"id": "PLAYERTITLE_VETERAN", "nameKey": "Veteran", "descKey": "Played a long time"},
]


def json_body(request: requests.PreparedRequest) -> Any:
    return orjson.loads(request.body)


def recalculated(request: requests.PreparedRequest) -> requests.Response:
    """Stat calculation handler: echoes the roster with a stats block added."""
    roster = json_body(request)
    for unit in roster:
        unit["stats"] = {"final": {"Speed": 200}}
    return make_response(200, roster)


def players_from(known: dict[int, dict[str, Any]]) -> Handler:
    """Player endpoint handler answering from ``known`` in request order."""

    def handler(request: requests.PreparedRequest) -> requests.Response:
        codes = json_body(request)["allycodes"]
        return make_response(200, [known[code] for code in codes if code in known])

    return handler


class FakeClock:
    """Controllable epoch clock for cache expiry tests."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
