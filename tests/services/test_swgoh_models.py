"""Tests for the API payload models."""

from __future__ import annotations

from swgohhelp.services.swgoh_models import Player, PlayerTitle, Unit
from tests.helpers import player_payload


def test_player_from_camel_case() -> None:
    player = Player.model_validate(player_payload(265924989, "Rey"))
    assert player.ally_code == 265924989
    assert player.guild_name == "Rebel Scum"
    assert player.roster[0].def_id == "REYJEDITRAINING"
    assert player.cache_key == "265924989"


def test_unknown_fields_are_kept() -> None:
    player = Player.model_validate(player_payload(1, "Finn", poUTCOffsetMinutes=60))
    assert player.to_api_dict()["poUTCOffsetMinutes"] == 60


def test_api_dict_uses_aliases() -> None:
    data = Unit(def_id="BB8", combat_type=1).to_api_dict()
    assert data["defId"] == "BB8"
    assert data["combatType"] == 1


def test_title_aliases() -> None:
    title = PlayerTitle.model_validate({"id": "T", "nameKey": "Hero", "descKey": "Brave"})
    assert title.name == "Hero"
    assert title.desc == "Brave"
    assert title.to_api_dict()["nameKey"] == "Hero"
