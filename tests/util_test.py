"""Tests for utility functions."""

from __future__ import annotations

import pytest

from jwtcheck.util import (
    add_padding,
    base64_to_number,
    base64url_decode,
)


def test_add_padding() -> None:
    assert add_padding("") == ""
    assert add_padding("Zg") == "Zg=="
    assert add_padding("Zm8") == "Zm8="
    assert add_padding("Zm9v") == "Zm9v"


def test_base64url_decode() -> None:
    assert base64url_decode("") == b""
    assert base64url_decode("Zm9v") == b"foo"
    assert base64url_decode("Zm8") == b"fo"
    assert base64url_decode("Zm8=") == b"fo"
    assert base64url_decode("Zg==") == b"f"
    assert base64url_decode("_-8") == b"\xff\xef"


@pytest.mark.parametrize(
    "data", ["Zm9v!", "Zm+v", "Zm/v", "Zm 9v", "Zm8==", "Z=m8", "Zm9vZ"]
)
def test_base64url_decode_invalid(data: str) -> None:
    with pytest.raises(ValueError, match="base64url"):
        base64url_decode(data)


def test_base64_to_number() -> None:
    assert base64_to_number("AQAB") == 65537
    assert base64_to_number("AA") == 0
    assert base64_to_number("AQ") == 1

