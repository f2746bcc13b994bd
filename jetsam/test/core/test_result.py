"""Tests for jetsam.core.result module."""

import pytest

from jetsam.core.result import Err, Ok, Result


def _parse_int(text: str) -> Result[int, str]:
    try:
        return Ok(int(text))
    except ValueError:
        return Err(f"not a number: {text}")


class TestOk:
    def test_ok_map(self) -> None:
        assert Ok(" x ").map(str.strip) == Ok("x")

    def test_ok_repr(self) -> None:
        assert repr(Ok("v1.2.3")) == "Ok('v1.2.3')"

    def test_frozen(self) -> None:
        result = Ok(1)
        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]


class TestErr:
    def test_err_map_is_noop(self) -> None:
        assert Err("boom").map(lambda x: x * 2) == Err("boom")

    def test_err_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


def test_pattern_matching() -> None:
    match _parse_int("5"):
        case Ok(value):
            assert value == 5
        case Err(_):
            pytest.fail("expected Ok")

    match _parse_int("five"):
        case Ok(_):
            pytest.fail("expected Err")
        case Err(error):
            assert error == "not a number: five"
