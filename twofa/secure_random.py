"""
secure_random.py — Nguồn bytes ngẫu nhiên an toàn (CSPRNG).

Dùng os.urandom như generate_base32_secret cũ. Nếu OS không cung cấp được
entropy thì raise EntropyError; không fallback sang module `random`.
"""

import logging
import os

from twofa.exceptions import EntropyError, InvalidLengthError

log = logging.getLogger(__name__)


def random_bytes(n: int) -> bytes:
    """
    Sinh `n` bytes ngẫu nhiên từ os.urandom.

    Raises:
        InvalidLengthError: nếu n âm
        EntropyError: nếu nguồn entropy của OS lỗi (lỗi gốc được chain)
    """
    if n < 0:
        raise InvalidLengthError(f"Cannot draw a negative number of bytes ({n})")
    try:
        return os.urandom(n)
    except (OSError, NotImplementedError) as e:
        log.error("Secure random source unavailable: %s", e)
        raise EntropyError("Secure random source unavailable") from e
