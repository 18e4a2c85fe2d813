"""Tests for player-name validation and member id normalization."""

import pytest

from whitelink.domain.identities import directory_key, is_valid_remote_identity


class TestRemoteIdentity:
    @pytest.mark.parametrize("name", ["abc", "Notch", "jeb_", "A1_b2_C3_d4_E5_f", "123"])
    def test_valid(self, name: str) -> None:
        assert is_valid_remote_identity(name)

    @pytest.mark.parametrize(
        "name",
        ["ab", "has space", "toolongtoolongtoolong", "", None, "dash-name", "Notch\n", "nötch"],
    )
    def test_invalid(self, name: str | None) -> None:
        assert not is_valid_remote_identity(name)

    def test_length_bounds(self) -> None:
        assert is_valid_remote_identity("a" * 16)
        assert not is_valid_remote_identity("a" * 17)


class TestDirectoryKey:
    def test_int_snowflake(self) -> None:
        assert directory_key(123456789012345678) == "123456789012345678"

    def test_strips_whitespace(self) -> None:
        assert directory_key(" 42 ") == "42"
