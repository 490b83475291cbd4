"""Tests for request/response trace files."""

from __future__ import annotations

from pathlib import Path

import requests

from swgohhelp.services.debug_trace import dump_request, dump_response, write_trace
from tests.helpers import make_response


def test_write_trace_names_file_after_request(temp_dir: Path) -> None:
    path = write_trace(b"payload", "req", "post", "/swgoh/player", directory=temp_dir)
    assert path is not None
    assert path.parent == temp_dir
    assert path.name.startswith("swgohhelp_swgoh_player-POST-req-")
    assert path.suffix == ".log"
    assert path.read_bytes() == b"payload"


def test_write_trace_unique_names(temp_dir: Path) -> None:
    first = write_trace(b"1", "resp", "GET", "/x", directory=temp_dir)
    second = write_trace(b"2", "resp", "GET", "/x", directory=temp_dir)
    assert first != second


def test_write_trace_failure_is_not_raised(temp_dir: Path) -> None:
    """Test an unwritable directory yields None instead of an exception."""
    assert write_trace(b"x", "req", "GET", "/x", directory=temp_dir / "missing") is None


def test_dump_request_masks_authorization() -> None:
    request = requests.Request(
        "POST",
        "https://api.swgoh.help/swgoh/player",
        headers={"Authorization": "Bearer secret-token"},
        json={"allycodes": [1]},
    ).prepare()
    dump = dump_request(request)
    assert b"secret-token" not in dump
    assert b"Authorization: ****" in dump
    assert dump.startswith(b"POST https://api.swgoh.help/swgoh/player")
    assert dump.endswith(b'{"allycodes": [1]}')


def test_dump_response() -> None:
    dump = dump_response(make_response(404, {"error": "nope"}, reason="Not Found"))
    assert dump.startswith(b"HTTP 404 Not Found")
    assert dump.endswith(b'{"error":"nope"}')


def test_dump_request_masks_form_secrets() -> None:
    request = requests.Request(
        "POST",
        "https://api.swgoh.help/auth/signin",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        data={"username": "rey", "password": "jakku", "client_secret": "abc", "grant_type": "password"},
    ).prepare()
    dump = dump_request(request)
    assert b"jakku" not in dump
    assert b"client_secret=abc" not in dump
    assert dump.endswith(b"username=rey&password=****&client_secret=****&grant_type=password")
