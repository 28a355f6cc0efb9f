"""
twofa package
=============

Công cụ sinh và xác minh OTP (HOTP/TOTP) theo chuẩn RFC 4226 & RFC 6238,
kèm tiện ích sinh key base-36, backup codes và otpauth:// URL.

──────────────────────────────────────────────
Giải thuật cốt lõi
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC-SHA1(key, counter)), giữ `length` chữ số cuối
  → Counter do caller quản lý (token event-based).

- TOTP (Time-based One-Time Password):
  HOTP với counter = floor((timestamp - T0) / step)
  → Mặc định step = 30 giây, 6 chữ số.

- Drift window:
  verify_hotp thử các counter từ counter - before đến counter + after.
  `drift` tổng được chia đôi (làm tròn xuống) nếu không có before/after riêng.

──────────────────────────────────────────────
Ví dụ sử dụng nhanh
──────────────────────────────────────────────
>>> from twofa import generate_key, generate_code, verify_hotp, generate_url
>>> key = generate_key()
>>> code = generate_code(key, 42)
>>> verify_hotp(key, code, 41, after_drift=1)
True
>>> url = generate_url("MyService", "alice@example.com", key)
"""

from twofa.base32 import base32_encode
from twofa.config import VerifyOptions
from twofa.exceptions import EntropyError, InvalidLengthError, InvalidPatternError, TwoFAError
from twofa.generators import generate_backup_code, generate_backup_codes, generate_key
from twofa.otp_core import (
    generate_code,
    generate_url,
    match_hotp,
    totp,
    totp_counter,
    verify_hotp,
    verify_totp,
)

__version__ = "1.0.0"

__all__ = [
    "base32_encode",
    "generate_backup_code",
    "generate_backup_codes",
    "generate_code",
    "generate_key",
    "generate_url",
    "match_hotp",
    "totp",
    "totp_counter",
    "verify_hotp",
    "verify_totp",
    "VerifyOptions",
    "TwoFAError",
    "EntropyError",
    "InvalidPatternError",
    "InvalidLengthError",
]
