"""Client for the roster stat calculation service.

The service takes a roster as returned by the profile API and answers with
the same roster carrying recalculated stats (mods and game-style
adjustments applied according to the requested flags). Each call covers
exactly one player's roster.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from urllib.parse import urlsplit

import requests
from pydantic import TypeAdapter, ValidationError

from swgohhelp.config.models.api_settings import StatCalcSettings
from swgohhelp.services.http import decode_json, send_request
from swgohhelp.services.swgoh_models import Unit
from swgohhelp.shared.constants import ContentTypes, HTTPHeaders
from swgohhelp.shared.errors import ErrorCode, ErrorContext, ProtocolError

logger = logging.getLogger(__name__)

_ROSTER_ADAPTER: TypeAdapter[list[Unit]] = TypeAdapter(list[Unit])


class StatCalcClient:
    """Recalculates roster stats through the stat calculation service.

    Args:
        settings: Service URL, flags and enablement
        session: HTTP session, a new one is created when omitted
        timeout: Request timeout in seconds
        debug: Write request/response traces
    """

    def __init__(
        self,
        settings: StatCalcSettings | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        *,
        debug: bool = False,
    ) -> None:
        self.settings = settings or StatCalcSettings()
        self.session = session or requests.Session()
        self.timeout = timeout
        self.debug = debug
        self._trace_path = urlsplit(self.settings.url).path.rstrip("/") or "/statcalc"

    @property
    def enabled(self) -> bool:
        return self.settings.enabled

    def calculate(self, roster: Sequence[Unit]) -> list[Unit]:
        """Return ``roster`` with stats recalculated by the service.

        Raises:
            TransportError: If the service cannot be reached
            ProtocolError: On a non-2xx status or a body that is not a roster
        """
        url = self.settings.url
        params = {"flags": ",".join(self.settings.flags)} if self.settings.flags else None
        response = send_request(
            self.session,
            "POST",
            url,
            trace_path=self._trace_path,
            operation="stat_calc",
            timeout=self.timeout,
            debug=self.debug,
            params=params,
            json=[unit.to_api_dict() for unit in roster],
            headers={HTTPHeaders.CONTENT_TYPE: ContentTypes.JSON},
        )
        payload = decode_json(response, url, "stat_calc")

        try:
            return _ROSTER_ADAPTER.validate_python(payload)
        except ValidationError as e:
            raise ProtocolError(
                ErrorCode.STAT_CALC_FAILED,
                f"Stat calculation returned an invalid roster: {e.error_count()} errors",
                ErrorContext(operation="stat_calc", additional_data={"url": url}),
                original_error=e,
            ) from e
