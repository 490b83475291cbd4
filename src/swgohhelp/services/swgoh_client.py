"""swgoh.help API client.

This module provides an authenticated client for the swgoh.help profile
API. Player profiles are fetched in batches, enriched with title names and
recalculated roster stats, and cached on disk so repeated lookups within
the cache TTL never reach the network.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

import requests
from pydantic import TypeAdapter, ValidationError

from swgohhelp.config.models.settings import Settings
from swgohhelp.services.ally_codes import parse_ally_codes
from swgohhelp.services.cache_store import CacheStore, resolve_cache_directory
from swgohhelp.services.enricher import PlayerEnricher
from swgohhelp.services.http import decode_json, send_request
from swgohhelp.services.stat_calc import StatCalcClient
from swgohhelp.services.swgoh_models import Player, PlayerTitle
from swgohhelp.shared.constants import (
    CacheConfig,
    ContentTypes,
    HTTPHeaders,
    SwgohHelpConfig,
)
from swgohhelp.shared.errors import (
    AuthError,
    CacheError,
    ErrorCode,
    ErrorContext,
    ProtocolError,
    create_protocol_error,
)
from swgohhelp.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)

logger = logging.getLogger(__name__)

_PLAYERS_ADAPTER: TypeAdapter[list[Player]] = TypeAdapter(list[Player])
_TITLE_LIST_ADAPTER: TypeAdapter[list[PlayerTitle]] = TypeAdapter(list[PlayerTitle])
_TITLE_CATALOG_TYPE = dict[str, PlayerTitle]


def _open_cache(
    directory: Path | None,
    file_name: str,
    ttl: int,
    name: str,
) -> CacheStore:
    if directory is None:
        return CacheStore.ephemeral(ttl, name=name)
    return CacheStore(directory / file_name, ttl, name=name)


class SwgohHelpClient:
    """Authenticated client for the swgoh.help API.

    All collaborators are injected; ``from_settings`` builds the defaults.
    The client holds the bearer token obtained by ``sign_in`` and sends it
    on every call for its whole lifetime.

    Args:
        settings: Client configuration
        session: HTTP session for API calls
        game_data_cache: Cache for game data catalogs
        player_cache: Cache for enriched player profiles
        stat_calculator: Stat calculation client, None disables the overlay
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: requests.Session | None = None,
        game_data_cache: CacheStore | None = None,
        player_cache: CacheStore | None = None,
        stat_calculator: StatCalcClient | None = None,
    ) -> None:
        self.settings = settings or Settings()
        api = self.settings.api.swgoh
        self.endpoint = api.endpoint
        self.language = api.language
        self.timeout = api.timeout
        self.debug = api.debug
        self.session = session or requests.Session()
        # CacheStore defines __len__, so compare with None explicitly
        if game_data_cache is None:
            game_data_cache = CacheStore.ephemeral(
                self.settings.cache.game_data_ttl,
                name=CacheConfig.GAME_DATA_NAME,
            )
        if player_cache is None:
            player_cache = CacheStore.ephemeral(
                self.settings.cache.player_ttl,
                name=CacheConfig.PLAYER_NAME,
            )
        self.game_data_cache = game_data_cache
        self.player_cache = player_cache
        self.stat_calculator = stat_calculator
        self.enricher = PlayerEnricher(
            title_catalog=self.player_titles,
            stat_calculator=stat_calculator,
            max_workers=self.settings.api.stat_calc.max_workers,
        )
        self._token = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> SwgohHelpClient:
        """Build a client with disk-backed caches and the stat calculator.

        When the cache directory cannot be determined, or caching is
        disabled, the caches are ephemeral.
        """
        directory: Path | None = None
        if settings.cache.enabled:
            try:
                directory = resolve_cache_directory(settings.cache.directory)
            except CacheError as e:
                log_operation_error(logger, e, level=logging.WARNING)

        session = requests.Session()
        stat_calculator = StatCalcClient(
            settings.api.stat_calc,
            session=session,
            timeout=settings.api.swgoh.timeout,
            debug=settings.api.swgoh.debug,
        )
        return cls(
            settings=settings,
            session=session,
            game_data_cache=_open_cache(
                directory,
                settings.cache.game_data_file,
                settings.cache.game_data_ttl,
                CacheConfig.GAME_DATA_NAME,
            ),
            player_cache=_open_cache(
                directory,
                settings.cache.player_file,
                settings.cache.player_ttl,
                CacheConfig.PLAYER_NAME,
            ),
            stat_calculator=stat_calculator,
        )

    def __enter__(self) -> SwgohHelpClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP session."""
        self.session.close()

    @property
    def token(self) -> str:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def set_debug(self, debug: bool) -> SwgohHelpClient:
        """Enable or disable request/response trace files."""
        self.debug = debug
        if self.stat_calculator is not None:
            self.stat_calculator.debug = debug
        return self

    def _call(
        self,
        method: str,
        path: str,
        operation: str,
        content_type: str = ContentTypes.JSON,
        **kwargs: Any,
    ) -> requests.Response:
        headers = {HTTPHeaders.CONTENT_TYPE: content_type}
        if self._token:
            headers[HTTPHeaders.AUTHORIZATION] = HTTPHeaders.BEARER_PREFIX + self._token
        return send_request(
            self.session,
            method,
            self.endpoint + path,
            trace_path=path,
            operation=operation,
            timeout=self.timeout,
            debug=self.debug,
            headers=headers,
            **kwargs,
        )

    def sign_in(self, username: str | None = None, password: str | None = None) -> str:
        """Exchange credentials for an access token.

        Credentials default to the configured ones. The token is kept for
        every following call.

        Raises:
            AuthError: If the exchange fails or returns no token
            TransportError: If the API cannot be reached
        """
        api = self.settings.api.swgoh
        form = {
            "username": username if username is not None else api.username,
            "password": password if password is not None else api.password,
            "grant_type": SwgohHelpConfig.GRANT_TYPE,
            "client_id": api.client_id,
            "client_secret": api.client_secret,
        }
        url = self.endpoint + SwgohHelpConfig.SIGNIN_ENDPOINT
        context = ErrorContext(operation="sign_in", additional_data={"username": form["username"]})

        try:
            response = self._call(
                "POST",
                SwgohHelpConfig.SIGNIN_ENDPOINT,
                "sign_in",
                content_type=ContentTypes.FORM,
                data=form,
            )
            payload = decode_json(response, url, "sign_in")
        except ProtocolError as e:
            raise AuthError(
                ErrorCode.API_AUTHENTICATION_FAILED,
                f"Sign-in failed: {e.message}",
                context,
                original_error=e,
            ) from e

        token = None
        if isinstance(payload, dict):
            token = payload.get("accessToken") or payload.get("access_token")
        if not token or not isinstance(token, str):
            raise AuthError(
                ErrorCode.API_AUTHENTICATION_FAILED,
                "Sign-in response did not contain an access token",
                context,
            )

        self._token = token
        logger.info("Signed in to %s as %s", self.endpoint, form["username"])
        return token

    def players(self, *ally_codes: str | int) -> list[Player]:
        """Fetch enriched player profiles.

        Cached profiles are returned as stored. The remaining ally codes are
        fetched in a single batch request, enriched, written to the player
        cache and appended after the cached ones.

        Returns:
            Cached players in input order followed by fetched players in
            response order

        Raises:
            ParseError: If any ally code is malformed; nothing is fetched
            TransportError: If an API cannot be reached
            ProtocolError: On a non-2xx status or an undecodable body
        """
        codes = parse_ally_codes(*ally_codes)
        log_operation_start(logger, "fetch_players", {"ally_code_count": len(codes)})
        start = time.perf_counter()

        cached: list[Player] = []
        missing: list[int] = []
        for code in codes:
            player = self.player_cache.get(str(code), Player)
            if player is not None:
                cached.append(player)
            else:
                missing.append(code)

        if not missing:
            log_operation_success(
                logger,
                operation="fetch_players",
                duration_ms=(time.perf_counter() - start) * 1000,
                result_info={"cached": len(cached), "fetched": 0},
            )
            return cached

        fetched = self._fetch_players(missing)
        self.enricher.enrich(fetched)

        for player in fetched:
            if self.player_cache.put(player.cache_key, player):
                logger.info("Saved player %s in cache", player.ally_code)

        log_operation_success(
            logger,
            operation="fetch_players",
            duration_ms=(time.perf_counter() - start) * 1000,
            result_info={"cached": len(cached), "fetched": len(fetched)},
        )
        return cached + fetched

    def _fetch_players(self, ally_codes: list[int]) -> list[Player]:
        path = SwgohHelpConfig.PLAYER_ENDPOINT
        url = self.endpoint + path
        response = self._call(
            "POST",
            path,
            "fetch_players",
            json={
                "allycodes": ally_codes,
                "language": self.language,
                "enums": False,
                "project": SwgohHelpConfig.PLAYER_PROJECTION,
            },
        )
        payload = decode_json(response, url, "fetch_players")

        try:
            return _PLAYERS_ADAPTER.validate_python(payload)
        except ValidationError as e:
            raise create_protocol_error(
                f"Invalid player payload from {url}: {e.error_count()} errors",
                url,
                operation="fetch_players",
                original_error=e,
            ) from e

    def player_titles(self) -> dict[str, PlayerTitle]:
        """Return the title catalog keyed by title id.

        The catalog is fetched as a whole and cached in the game data cache.

        Raises:
            TransportError: If the API cannot be reached
            ProtocolError: On a non-2xx status or an undecodable body
        """
        titles = self.game_data_cache.get(CacheConfig.TITLES_KEY, _TITLE_CATALOG_TYPE)
        if titles is not None:
            return titles

        path = SwgohHelpConfig.DATA_ENDPOINT
        url = self.endpoint + path
        response = self._call(
            "POST",
            path,
            "fetch_player_titles",
            json={
                "collection": SwgohHelpConfig.TITLE_COLLECTION,
                "language": self.language,
                "enums": False,
                "project": SwgohHelpConfig.TITLE_PROJECTION,
            },
        )
        payload = decode_json(response, url, "fetch_player_titles")

        try:
            title_list = _TITLE_LIST_ADAPTER.validate_python(payload)
        except ValidationError as e:
            raise create_protocol_error(
                f"Invalid title catalog from {url}: {e.error_count()} errors",
                url,
                operation="fetch_player_titles",
                original_error=e,
            ) from e

        titles = {title.id: title for title in title_list}
        self.game_data_cache.put(CacheConfig.TITLES_KEY, titles)
        logger.info("Cached %d player titles", len(titles))
        return titles


__all__ = ["SwgohHelpClient"]
