"""base32.py — RFC 4648 base32 without padding, the form authenticator apps expect."""

import base64
from typing import Union


def base32_encode(data: Union[bytes, str]) -> str:
    """
    Encode `data` sang Base32 (chữ hoa) và bỏ padding '='.

    `str` được encode UTF-8 trước, giống cách key dạng chuỗi được dùng làm
    HMAC key.

    Ví dụ: base32_encode(b"12345678901234567890") -> "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b32encode(data).decode("ascii").rstrip("=")
