"""
otp_core.py — Core library cho HOTP / TOTP: sinh code, xác minh, otpauth URL.

Mục tiêu:
- Chỉ chứa pure functions, không đọc/ghi file, không lưu secret.
- Tương thích byte-for-byte với Google Authenticator / Authy (HMAC-SHA1,
  RFC 4226 dynamic truncation, RFC 6238 time counter).

Lưu ý bảo mật:
- Key là bí mật duy nhất bảo vệ chuỗi OTP; module này không log key hay code.
"""

import dataclasses
import hashlib
import hmac
import logging
import struct
import time
from typing import Optional, Tuple, Union
from urllib.parse import quote

from twofa.base32 import base32_encode
from twofa.config import (
    DEFAULT_DIGITS,
    DEFAULT_T0,
    DEFAULT_TIME_STEP,
    VerifyOptions,
    resolve_drift,
)

log = logging.getLogger(__name__)

Key = Union[bytes, str]

COUNTER_MASK = 0xFFFFFFFFFFFFFFFF  # counter được cắt về 64 bit

# encodeURIComponent giữ nguyên các ký tự này
_URI_COMPONENT_SAFE = "!~*'()"


def _key_bytes(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


def _resolve_options(options: Optional[VerifyOptions], overrides: dict) -> VerifyOptions:
    if options is None:
        options = VerifyOptions()
    if overrides:
        options = dataclasses.replace(options, **overrides)
    return options


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Chuyển integer (counter) sang 8-byte big-endian như RFC4226 yêu cầu.

    Counter lớn hơn 64 bit bị cắt, chỉ giữ 64 bit thấp.

    Ví dụ: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    return struct.pack(">Q", i & COUNTER_MASK)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Áp dụng dynamic truncation theo RFC4226.

    - Lấy offset = last_byte & 0x0F
    - Lấy 4 bytes từ offset, clear MSB (0x7F) cho byte đầu
    - Trả về integer 31-bit (unsigned)
    """
    offset = hmac_digest[-1] & 0x0F
    return (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )


def generate_code(key: Key, counter: int, length: int = DEFAULT_DIGITS) -> str:
    """
    Sinh mã HOTP theo RFC4226.

    Steps:
    1. Message = 8-byte counter (big-endian)
    2. HMAC-SHA1(key, message)
    3. Dynamic truncate -> dbc
    4. Giữ `length` chữ số cuối của dbc, zero-pad cho đủ `length`

    Arguments:
        key: secret dùng làm HMAC key (str được encode UTF-8)
        counter: integer counter (non-negative)
        length: số chữ số OTP (mặc định 6)

    Trả về:
        str: mã HOTP dạng zero-padded

    Raises:
        ValueError: nếu counter âm hoặc length < 1
    """
    if counter < 0:
        raise ValueError(f"counter must be non-negative, got {counter}")
    if length < 1:
        raise ValueError(f"length must be positive, got {length}")

    digest = hmac.new(_key_bytes(key), int_to_bytes(counter), hashlib.sha1).digest()
    dbc = dynamic_truncate(digest)
    return str(dbc)[-length:].zfill(length)


def totp_counter(
    timestamp: Optional[float] = None,
    step: int = DEFAULT_TIME_STEP,
    t0: int = DEFAULT_T0,
) -> int:
    """Counter TOTP = floor((timestamp - t0) / step); timestamp mặc định là time.time()."""
    if step < 1:
        raise ValueError(f"step must be positive, got {step}")
    if timestamp is None:
        timestamp = time.time()
    return int((timestamp - t0) // step)


def totp(
    key: Key,
    timestamp: Optional[float] = None,
    step: int = DEFAULT_TIME_STEP,
    t0: int = DEFAULT_T0,
    length: int = DEFAULT_DIGITS,
) -> Tuple[str, int]:
    """
    Sinh mã TOTP theo RFC6238, dùng HOTP(counter = floor((now - T0)/step)).

    Trả về:
        (code, remaining_seconds)
        - code: OTP string
        - remaining_seconds: số giây còn lại cho mã hiện tại
    """
    if timestamp is None:
        timestamp = time.time()
    counter = totp_counter(timestamp, step, t0)
    code = generate_code(key, counter, length)
    remaining = int(step - ((timestamp - t0) % step))
    log.debug("TOTP: counter=%d, remaining=%ds", counter, remaining)
    return code, remaining


# --- OTP verification helpers ---------------------------------------------
def match_hotp(
    key: Key,
    code: str,
    counter: int,
    options: Optional[VerifyOptions] = None,
    **overrides,
) -> Optional[int]:
    """
    Tìm counter khớp với `code` trong cửa sổ [counter - before, counter + after].

    Duyệt tăng dần, counter âm bị bỏ qua, match đầu tiên thắng. So sánh dùng
    hmac.compare_digest.

    Trả về:
        int | None: counter đã khớp, hoặc None nếu không có
    """
    options = _resolve_options(options, overrides)
    before, after = resolve_drift(options)
    received = code.encode("utf-8")

    low, high = max(counter - before, 0), counter + after
    for candidate in range(low, high + 1):
        expected = generate_code(key, candidate, options.length)
        if hmac.compare_digest(expected.encode("ascii"), received):
            log.debug("HOTP match at counter=%d (window %d..%d)", candidate, low, high)
            return candidate

    log.debug("HOTP no match in window %d..%d", low, high)
    return None


def verify_hotp(
    key: Key,
    code: str,
    counter: int,
    options: Optional[VerifyOptions] = None,
    **overrides,
) -> bool:
    """
    Xác minh mã HOTP do user nhập.

    Ví dụ:
        verify_hotp(key, code, 10, after_drift=1)  # chấp nhận counter 10 hoặc 11
    """
    return match_hotp(key, code, counter, options, **overrides) is not None


def verify_totp(
    key: Key,
    code: str,
    options: Optional[VerifyOptions] = None,
    timestamp: Optional[float] = None,
    **overrides,
) -> bool:
    """
    Xác minh mã TOTP (RFC6238): tính counter từ thời gian rồi ủy quyền cho verify_hotp.

    Arguments:
        key: secret
        code: mã user nhập
        options: VerifyOptions (step, drift, length, ...)
        timestamp: epoch seconds để tính (nếu None -> dùng time.time())
    """
    options = _resolve_options(options, overrides)
    counter = totp_counter(timestamp, options.step, options.t0)
    return verify_hotp(key, code, counter, options)


# --- Provisioning URL -------------------------------------------------------
def generate_url(service_name: str, account: str, key: Key) -> str:
    """
    Tạo otpauth:// URL để import vào Google Authenticator / Authy.

    Format: otpauth://totp/{account}?issuer={service_name}&secret={base32(key)}
    account và service_name được percent-encode như encodeURIComponent.
    """
    return (
        "otpauth://totp/" + quote(account, safe=_URI_COMPONENT_SAFE)
        + "?issuer=" + quote(service_name, safe=_URI_COMPONENT_SAFE)
        + "&secret=" + base32_encode(key)
    )
