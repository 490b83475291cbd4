"""Request/response trace files for debugging API calls.

Traces are best-effort: a failure to write one is logged and otherwise
ignored.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from urllib.parse import parse_qsl, urlencode

import requests

from swgohhelp.shared.constants import ContentTypes, HTTPHeaders
from swgohhelp.shared.errors import SAFE_DICT_MASK_KEYS

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def _trace_prefix(direction: str, method: str, path: str) -> str:
    safe_path = _UNSAFE_CHARS.sub("_", path)
    return f"swgohhelp{safe_path}-{method.upper()}-{direction}-"


def write_trace(
    payload: bytes,
    direction: str,
    method: str,
    path: str,
    directory: Path | str | None = None,
) -> Path | None:
    """Write ``payload`` to a uniquely named file in the temp directory.

    Args:
        payload: Raw bytes to write
        direction: "req" or "resp"
        method: HTTP method
        path: Request path, used in the file name
        directory: Target directory (defaults to the system temp directory)

    Returns:
        The file written, or None if writing failed
    """
    try:
        fd, name = tempfile.mkstemp(
            prefix=_trace_prefix(direction, method, path),
            suffix=".log",
            dir=directory,
        )
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
    except OSError as e:
        logger.warning("Failed to write debug trace for %s %s: %s", method, path, e)
        return None

    logger.info("Wrote debug trace %s", name)
    return Path(name)


def _as_bytes(body: bytes | str | None) -> bytes:
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    return str(body).encode("utf-8")


def _mask_form(body: bytes) -> bytes:
    pairs = parse_qsl(body.decode("utf-8"), keep_blank_values=True)
    masked = [
        (name, HTTPHeaders.MASKED_VALUE if name in SAFE_DICT_MASK_KEYS else value)
        for name, value in pairs
    ]
    return urlencode(masked, safe=HTTPHeaders.MASKED_VALUE).encode("utf-8")


def dump_request(request: requests.PreparedRequest) -> bytes:
    """Render a prepared request.

    The Authorization header and secret fields of form bodies are masked.
    """
    lines = [f"{request.method} {request.url}"]
    for name, value in request.headers.items():
        if name.lower() == HTTPHeaders.AUTHORIZATION.lower():
            value = HTTPHeaders.MASKED_VALUE
        lines.append(f"{name}: {value}")
    head = "\r\n".join(lines).encode("utf-8")

    body = _as_bytes(request.body)
    content_type = request.headers.get(HTTPHeaders.CONTENT_TYPE, "")
    if body and content_type.startswith(ContentTypes.FORM):
        body = _mask_form(body)
    return head + b"\r\n\r\n" + body


def dump_response(response: requests.Response) -> bytes:
    """Render a response status line, headers and body."""
    lines = [f"HTTP {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    head = "\r\n".join(lines).encode("utf-8")
    return head + b"\r\n\r\n" + (response.content or b"")
