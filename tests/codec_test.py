"""Tests for decoding tokens without verification."""

from __future__ import annotations

import json

import pytest

from jwtcheck.codec import (
    decode_segment,
    decode_token,
    format_json,
    parse_json_object,
    split_token,
)
from jwtcheck.exceptions import (
    MalformedEncodingError,
    MalformedJsonError,
    MalformedTokenError,
    TokenFormatError,
)
from jwtcheck.models.enums import ErrorKind

from .support.tokens import build_token, encode_segment


def test_decode_token() -> None:
    header = {"alg": "HS256", "typ": "JWT", "kid": "some-kid"}
    payload = {
        "sub": "someuser",
        "iss": "https://issuer.example.com",
        "exp": 1700000000,
        "jti": "some-id",
        "scope": ["read", "write"],
        "nested": {"a": None, "b": 1.5, "c": True},
    }
    token = build_token(header, payload, b"\x00\x01\xfe\xff")

    decoded = decode_token(token)
    assert decoded.header == header
    assert decoded.payload == payload
    assert decoded.signature == b"\x00\x01\xfe\xff"
    assert decoded.encoded == token
    assert decoded.signing_input == token.rsplit(".", 1)[0].encode()
    assert decoded.signature_segment == token.rsplit(".", 1)[1]
    assert decoded.algorithm == "HS256"
    assert decoded.key_id == "some-kid"
    assert decoded.issuer == "https://issuer.example.com"
    assert decoded.jti == "some-id"
    assert decoded.expires
    assert int(decoded.expires.timestamp()) == 1700000000


def test_decode_surrounding_whitespace() -> None:
    token = build_token({"alg": "HS256"}, {"sub": "someuser"})
    decoded = decode_token(f"  {token}\n")
    assert decoded.encoded == token
    assert decoded.payload == {"sub": "someuser"}


def test_signing_input_is_not_reencoded() -> None:
    header_segment = encode_segment(b'{ "alg" : "HS256" }')
    payload_segment = encode_segment(b'{"b": 2,  "a": 1}')
    signature_segment = encode_segment(b"sig")
    token = f"{header_segment}.{payload_segment}.{signature_segment}"

    decoded = decode_token(token)
    expected = f"{header_segment}.{payload_segment}".encode()
    assert decoded.signing_input == expected
    assert list(decoded.payload) == ["b", "a"]


def test_claim_accessors_ignore_wrong_types() -> None:
    header = {"alg": 256, "kid": ["a"]}
    payload = {"iss": 7, "exp": True, "jti": None}
    decoded = decode_token(build_token(header, payload))
    assert decoded.algorithm is None
    assert decoded.key_id is None
    assert decoded.issuer is None
    assert decoded.jti is None
    assert decoded.expires is None


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        "",
        "a.b",
        "a.b.c.d",
        "a..c",
        ".b.c",
        "a.b.",
    ],
)
def test_split_invalid(token: str) -> None:
    with pytest.raises(MalformedTokenError) as excinfo:
        split_token(token)
    assert excinfo.value.kind == ErrorKind.malformed_token
    assert str(excinfo.value) == (
        "Invalid JWT format. Expected three parts separated by dots."
    )


def test_decode_not_a_jwt() -> None:
    with pytest.raises(MalformedTokenError):
        decode_token("not-a-jwt")


def test_decode_invalid_encoding() -> None:
    payload = encode_segment({"sub": "someuser"})
    signature = encode_segment(b"sig")

    with pytest.raises(MalformedEncodingError) as excinfo:
        decode_token(f"eyJ!bGci.{payload}.{signature}")
    assert str(excinfo.value).startswith("Token header: Invalid base64url")
    assert excinfo.value.kind == ErrorKind.malformed_encoding

    header = encode_segment({"alg": "HS256"})
    with pytest.raises(MalformedEncodingError) as excinfo:
        decode_token(f"{header}.{payload}.c2l+Zw")
    assert str(excinfo.value).startswith("Token signature:")

    with pytest.raises(MalformedEncodingError) as excinfo:
        decode_token(f"{header}.abcde.{signature}")
    assert str(excinfo.value).startswith("Token payload:")


def test_decode_invalid_json() -> None:
    signature = encode_segment(b"sig")
    header = encode_segment({"alg": "HS256"})

    token = f"{encode_segment(b'not json')}.{header}.{signature}"
    with pytest.raises(MalformedJsonError) as excinfo:
        decode_token(token)
    assert str(excinfo.value).startswith("Token header: Invalid JSON")
    assert excinfo.value.kind == ErrorKind.malformed_json

    token = f"{header}.{encode_segment(b'[1, 2]')}.{signature}"
    with pytest.raises(MalformedJsonError) as excinfo:
        decode_token(token)
    assert str(excinfo.value) == (
        "Token payload: Expected a JSON object, not list"
    )

    invalid_utf8 = encode_segment(b"\xff\xfe")
    token = f"{header}.{invalid_utf8}.{signature}"
    with pytest.raises(MalformedJsonError):
        decode_token(token)

    long_integer = encode_segment(b'{"n": ' + b"1" * 5000 + b"}")
    token = f"{header}.{long_integer}.{signature}"
    with pytest.raises(MalformedJsonError) as excinfo:
        decode_token(token)
    assert str(excinfo.value).startswith("Token payload: Invalid JSON")

    nested = encode_segment(b'{"a": ' + b"[" * 100000 + b"]" * 100000 + b"}")
    payload = encode_segment({"sub": "someuser"})
    token = f"{nested}.{payload}.{signature}"
    with pytest.raises(MalformedJsonError) as excinfo:
        decode_token(token)
    assert str(excinfo.value).startswith("Token header: Invalid JSON")


def test_errors_are_token_format_errors() -> None:
    for token in ("x", "eyJ!.eyJ.c2ln", f"{encode_segment(b'1')}.e30.c2ln"):
        with pytest.raises(TokenFormatError):
            decode_token(token)


def test_decode_segment() -> None:
    assert decode_segment("Zm9v") == b"foo"
    with pytest.raises(MalformedEncodingError):
        decode_segment("Zm9v*")


def test_parse_json_object() -> None:
    assert parse_json_object(b'{"a": [1, null]}') == {"a": [1, None]}
    with pytest.raises(MalformedJsonError):
        parse_json_object(b'"string"')


def test_format_json() -> None:
    data = {"sub": "someuser", "exp": 1700000000}
    output = format_json(data)
    assert json.loads(output) == data
    assert output.startswith('{\n  "sub"')
