"""Blocking HTTP helper shared by the API clients.

Sends one request through a ``requests.Session``, logs it, optionally
writes debug traces, and maps failures onto the package error types:
transport failures become TransportError and non-2xx responses become
ProtocolError.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from swgohhelp.services.debug_trace import dump_request, dump_response, write_trace
from swgohhelp.shared.errors import (
    ErrorCode,
    ErrorContext,
    TransportError,
    create_protocol_error,
    create_transport_error,
)
from swgohhelp.shared.logging import log_api_call

logger = logging.getLogger(__name__)


def send_request(
    session: requests.Session,
    method: str,
    url: str,
    *,
    trace_path: str,
    operation: str,
    timeout: float | None = None,
    debug: bool = False,
    **kwargs: Any,
) -> requests.Response:
    """Send a request and return the successful response.

    Args:
        session: Session used to send the request
        method: HTTP method
        url: Absolute URL
        trace_path: Short path used in logs and trace file names
        operation: Operation name recorded in error context
        timeout: Request timeout in seconds, None waits indefinitely
        debug: Write request and response traces
        **kwargs: Passed to ``requests.Request`` (headers, json, data, params)

    Raises:
        TransportError: On connection failures and timeouts
        ProtocolError: On a non-2xx status
    """
    request = session.prepare_request(requests.Request(method, url, **kwargs))
    if debug:
        write_trace(dump_request(request), "req", method, trace_path)

    # Proxy and CA bundle settings from the environment
    env = session.merge_environment_settings(request.url, {}, None, None, None)

    start = time.perf_counter()
    try:
        response = session.send(request, timeout=timeout, **env)
    except requests.Timeout as e:
        raise TransportError(
            ErrorCode.API_TIMEOUT,
            f"Request to {url} timed out",
            ErrorContext(operation=operation, additional_data={"url": url}),
            original_error=e,
        ) from e
    except requests.RequestException as e:
        raise create_transport_error(
            f"Request to {url} failed: {e}",
            url,
            operation=operation,
            original_error=e,
        ) from e
    duration_ms = (time.perf_counter() - start) * 1000

    log_api_call(
        logger,
        trace_path,
        method=method,
        status_code=response.status_code,
        duration_ms=duration_ms,
    )

    if debug:
        write_trace(dump_response(response), "resp", method, trace_path)

    if not 200 <= response.status_code <= 299:
        raise create_protocol_error(
            f"Unexpected status code calling {url}: {response.status_code} {response.reason or ''}".rstrip(),
            url,
            status_code=response.status_code,
            operation=operation,
        )

    return response


def decode_json(response: requests.Response, url: str, operation: str) -> Any:
    """Decode a JSON body.

    Raises:
        ProtocolError: If the body is not valid JSON
    """
    try:
        return response.json()
    except ValueError as e:
        # requests.JSONDecodeError is a ValueError
        raise create_protocol_error(
            f"Invalid JSON in response from {url}: {e}",
            url,
            operation=operation,
            original_error=e,
        ) from e
