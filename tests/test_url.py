import base64

import pyotp

from twofa.base32 import base32_encode
from twofa.otp_core import generate_url


def test_base32_rfc_secret() -> None:
    assert base32_encode(b"12345678901234567890") == "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
    assert base32_encode("12345678901234567890") == "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_base32_strips_padding() -> None:
    # RFC 4648 section 10
    assert base32_encode(b"f") == "MY"
    assert base32_encode(b"foob") == "MZXW6YQ"
    assert base32_encode(b"foobar") == "MZXW6YTBOI"
    assert base32_encode(b"") == ""


def test_base32_is_decodable_once_repadded() -> None:
    encoded = base32_encode(b"\x00\xff\x10secret")
    padded = encoded + "=" * (-len(encoded) % 8)
    assert base64.b32decode(padded) == b"\x00\xff\x10secret"


def test_url_format() -> None:
    key = "abcdefghij0123456789"
    assert generate_url("Service", "user@example.com", key) == (
        "otpauth://totp/user%40example.com?issuer=Service&secret=" + base32_encode(key)
    )


def test_url_percent_encodes_like_encode_uri_component() -> None:
    url = generate_url("My Service/Co", "a b&c=d", "k")
    assert url.startswith("otpauth://totp/a%20b%26c%3Dd?issuer=My%20Service%2FCo&secret=")
    assert generate_url("(x)!*~'", "u.-_", "k").startswith("otpauth://totp/u.-_?issuer=(x)!*~'&")


def test_url_is_understood_by_pyotp() -> None:
    key = "interop-key-0001"
    parsed = pyotp.parse_uri(generate_url("Service", "user@example.com", key))
    assert parsed.issuer == "Service"
    assert parsed.name == "user@example.com"
    assert parsed.secret == base32_encode(key)
