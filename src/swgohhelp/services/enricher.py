"""Player enrichment.

Freshly fetched profiles carry opaque title keys and the raw roster.
Enrichment runs two independent stages over them:

- title resolution rewrites title keys to display names from the title
  catalog; keys missing from the catalog become empty names
- stat overlay replaces each roster with the one recalculated by the
  stat calculation service, one call per player

The stages touch disjoint fields, so their order does not matter.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable

from swgohhelp.services.stat_calc import StatCalcClient
from swgohhelp.services.swgoh_models import Player, PlayerTitle, Unit
from swgohhelp.shared.errors import SwgohHelpError
from swgohhelp.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)

TitleCatalogProvider = Callable[[], Mapping[str, PlayerTitle]]


def _title_name(names: Mapping[str, str], display_names: set[str], value: str | None) -> str:
    if not value:
        return ""
    if value in names:
        return names[value]
    # Already resolved on an earlier pass
    if value in display_names:
        return value
    return ""


class PlayerEnricher:
    """Applies title resolution and stat overlay to player records.

    Args:
        title_catalog: Returns the title catalog keyed by title id
        stat_calculator: Stat calculation client, None skips the overlay
        max_workers: Overlay calls in flight at once; 1 runs them in order
    """

    def __init__(
        self,
        title_catalog: TitleCatalogProvider,
        stat_calculator: StatCalcClient | None = None,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            msg = f"max_workers must be at least 1, got {max_workers}"
            raise ValueError(msg)
        self.title_catalog = title_catalog
        self.stat_calculator = stat_calculator
        self.max_workers = max_workers

    def enrich(self, players: Sequence[Player]) -> None:
        """Enrich ``players`` in place.

        Raises:
            SwgohHelpError: From the catalog fetch or any overlay call. When
                raised, no roster has been replaced.
        """
        if not players:
            return

        start = time.perf_counter()
        try:
            self.resolve_titles(players, self.title_catalog())
            if self.stat_calculator is not None and self.stat_calculator.enabled:
                self.apply_stat_overlay(players)
        except SwgohHelpError as e:
            log_operation_error(logger, e, operation="enrich_players")
            raise

        log_operation_success(
            logger,
            operation="enrich_players",
            duration_ms=(time.perf_counter() - start) * 1000,
            result_info={"player_count": len(players)},
        )

    @staticmethod
    def resolve_titles(
        players: Sequence[Player],
        catalog: Mapping[str, PlayerTitle],
    ) -> None:
        """Rewrite selected and unlocked title keys to display names.

        Values that are already display names are kept, so running this
        twice gives the same result as running it once.
        """
        names = {key: title.name for key, title in catalog.items()}
        display_names = set(names.values())
        for player in players:
            titles = player.titles
            titles.selected = _title_name(names, display_names, titles.selected)
            titles.unlocked = [_title_name(names, display_names, value) for value in titles.unlocked]

    def apply_stat_overlay(self, players: Sequence[Player]) -> None:
        """Replace every roster with its recalculated version.

        All rosters are computed before any is assigned, so a failed call
        leaves every player untouched.
        """
        if self.stat_calculator is None:
            return

        if self.max_workers == 1 or len(players) == 1:
            rosters = [self.stat_calculator.calculate(player.roster) for player in players]
        else:
            rosters = self._calculate_parallel(players)

        for player, roster in zip(players, rosters):
            player.roster = roster

    def _calculate_parallel(self, players: Sequence[Player]) -> list[list[Unit]]:
        assert self.stat_calculator is not None
        calculate = self.stat_calculator.calculate

        with ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(players)),
            thread_name_prefix="stat-overlay",
        ) as executor:
            futures = [executor.submit(calculate, player.roster) for player in players]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()
            # Report the first failure in input order
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()  # type: ignore[misc]

        return [future.result() for future in futures]
