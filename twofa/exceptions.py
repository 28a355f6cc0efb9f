"""
exceptions.py — Error taxonomy cho twofa.

- TwoFAError: base class, caller có thể bắt một lần cho mọi lỗi của thư viện.
- EntropyError: nguồn random của OS lỗi / không khả dụng. Không bao giờ fallback
  sang PRNG yếu hơn (random module).
- InvalidPatternError: pattern backup code không có placeholder nào.
- InvalidLengthError: độ dài / số lượng yêu cầu âm hoặc bằng 0.
"""


class TwoFAError(Exception):
    """Base class for every error raised by twofa."""


class EntropyError(TwoFAError):
    """The secure random source failed; the original OS error is chained."""


class InvalidPatternError(TwoFAError, ValueError):
    """Backup code pattern contains no placeholder character."""

    def __init__(self, pattern: str, placeholder: str):
        self.pattern = pattern
        self.placeholder = placeholder
        super().__init__(f"Pattern {pattern!r} contains no {placeholder!r} placeholder")


class InvalidLengthError(TwoFAError, ValueError):
    """A requested length or count is out of range."""
