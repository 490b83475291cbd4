"""Tests for ally code parsing."""

from __future__ import annotations

import pytest

from swgohhelp.services.ally_codes import format_ally_code, parse_ally_code, parse_ally_codes
from swgohhelp.shared.errors import ErrorCode, ParseError


class TestParseAllyCodes:
    """Test ally code cleanup and parsing."""

    @pytest.mark.parametrize(
        "raw",
        ["265-924-989", "265924989", "265 924 989", "#265924989", " 265.924.989 "],
    )
    def test_separators_are_dropped(self, raw: str) -> None:
        assert parse_ally_code(raw) == 265924989

    def test_integer_input(self) -> None:
        assert parse_ally_code(265924989) == 265924989

    def test_preserves_order(self) -> None:
        assert parse_ally_codes("123-456-789", "987654321") == [123456789, 987654321]

    def test_empty_batch(self) -> None:
        assert parse_ally_codes() == []

    @pytest.mark.parametrize("raw", ["", "abc", "---"])
    def test_no_digits_raises(self, raw: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_ally_code(raw)
        assert exc_info.value.raw_input == raw
        assert exc_info.value.code == ErrorCode.ALLY_CODE_PARSE_FAILED

    def test_batch_fails_on_first_bad_code(self) -> None:
        """Test the error names the offending input and nothing is returned."""
        with pytest.raises(ParseError) as exc_info:
            parse_ally_codes("123-456-789", "abc", "xyz")
        assert exc_info.value.raw_input == "abc"
        assert "abc" in str(exc_info.value)


def test_format_ally_code() -> None:
    assert format_ally_code(265924989) == "265-924-989"
    assert format_ally_code(1) == "000-000-001"
