"""
generators.py — Sinh key base-36 và backup codes từ CSPRNG.

Mọi entropy đều đi qua secure_random.random_bytes; lỗi entropy được propagate
ngay, không trả về key/code dở dang.
"""

import logging
import math
from typing import List

from twofa.config import DEFAULT_KEY_LENGTH, DEFAULT_PATTERN, KEY_CHUNK_BYTES, PLACEHOLDER
from twofa.exceptions import InvalidLengthError, InvalidPatternError
from twofa.secure_random import random_bytes

log = logging.getLogger(__name__)

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Integer không âm -> chuỗi base-36 chữ thường (0 -> "0")."""
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_BASE36_DIGITS[rem])
    return "".join(reversed(out))


def generate_key(length: int = DEFAULT_KEY_LENGTH) -> str:
    """
    Sinh key ngẫu nhiên gồm đúng `length` ký tự base-36.

    - Mỗi vòng rút KEY_CHUNK_BYTES bytes, đọc big-endian, đổi sang base-36.
    - Nối vào accumulator đến khi đủ `length`, rồi cắt đúng `length`.

    Raises:
        InvalidLengthError: nếu length < 1
        EntropyError: nếu nguồn random của OS lỗi
    """
    if length < 1:
        raise InvalidLengthError(f"Key length must be positive, got {length}")

    key = ""
    while len(key) < length:
        chunk = random_bytes(KEY_CHUNK_BYTES)
        key += to_base36(int.from_bytes(chunk, "big"))
    log.debug("Generated %d-character key", length)
    return key[:length]


def _count_placeholders(pattern: str, placeholder: str) -> int:
    if len(placeholder) != 1:
        raise ValueError(f"placeholder must be a single character, got {placeholder!r}")
    count = pattern.count(placeholder)
    if count == 0:
        raise InvalidPatternError(pattern, placeholder)
    return count


def _fill_pattern(pattern: str, placeholder: str, hex_chars: str) -> str:
    chars = iter(hex_chars)
    return "".join(next(chars) if c == placeholder else c for c in pattern)


def generate_backup_code(pattern: str = DEFAULT_PATTERN, placeholder: str = PLACEHOLDER) -> str:
    """
    Sinh một backup code theo pattern, ví dụ "xxxx-xxxx" -> "3f9a-c04e".

    Mỗi placeholder được thay (trái sang phải) bằng một chữ số hex; ký tự khác
    giữ nguyên. Số bytes cần rút là ceil(placeholders / 2) vì mỗi byte cho 2
    chữ số hex.

    Raises:
        InvalidPatternError: nếu pattern không có placeholder nào
        EntropyError: nếu nguồn random của OS lỗi
    """
    placeholders = _count_placeholders(pattern, placeholder)
    hex_chars = random_bytes(math.ceil(placeholders / 2)).hex()
    return _fill_pattern(pattern, placeholder, hex_chars)


def generate_backup_codes(
    count: int,
    pattern: str = DEFAULT_PATTERN,
    placeholder: str = PLACEHOLDER,
) -> List[str]:
    """
    Sinh `count` backup codes độc lập. Không đảm bảo unique trong cùng batch.

    Pattern được kiểm tra trước khi rút bất kỳ entropy nào.

    Raises:
        InvalidLengthError: nếu count âm
        InvalidPatternError: nếu pattern không có placeholder nào
        EntropyError: nếu nguồn random của OS lỗi
    """
    if count < 0:
        raise InvalidLengthError(f"Backup code count must be non-negative, got {count}")
    _count_placeholders(pattern, placeholder)
    codes = [generate_backup_code(pattern, placeholder) for _ in range(count)]
    log.debug("Generated %d backup codes", len(codes))
    return codes
