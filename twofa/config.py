"""
config.py — Defaults và options cho sinh / xác minh OTP.

Không có global state: mọi giá trị mặc định là hằng số, mọi tùy chỉnh đi qua
VerifyOptions do caller truyền vào.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # chuẩn: 6 chữ số
DEFAULT_TIME_STEP = 30      # TOTP step (giây)
DEFAULT_T0 = 0              # TOTP epoch offset
DEFAULT_KEY_LENGTH = 20     # số ký tự base-36 của key
KEY_CHUNK_BYTES = 6         # bytes random mỗi lần rút khi sinh key
DEFAULT_PATTERN = "xxxx-xxxx"
PLACEHOLDER = "x"


@dataclass(frozen=True)
class VerifyOptions:
    """
    Options cho verify_hotp / verify_totp.

    - drift: tổng số bước cho phép lệch, chia đôi cho before/after.
    - before_drift / after_drift: ghi đè từng phía; None -> drift // 2.
    - length: số chữ số của code.
    - step: TOTP time step (giây), chỉ dùng cho TOTP.
    - t0: TOTP start time offset, chỉ dùng cho TOTP.
    """

    drift: int = 0
    before_drift: Optional[int] = None
    after_drift: Optional[int] = None
    length: int = DEFAULT_DIGITS
    step: int = DEFAULT_TIME_STEP
    t0: int = DEFAULT_T0

    def __post_init__(self):
        for name in ("drift", "before_drift", "after_drift"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.length < 1:
            raise ValueError(f"length must be positive, got {self.length}")
        if self.step < 1:
            raise ValueError(f"step must be positive, got {self.step}")


def resolve_drift(options: VerifyOptions) -> Tuple[int, int]:
    """
    Trả về (before, after) cho cửa sổ tìm kiếm counter.

    Khi chỉ có `drift`, mỗi phía nhận drift // 2 (làm tròn xuống), nên tổng
    cửa sổ không bao giờ vượt quá drift + 1 counter.
    """
    half = options.drift // 2
    before = half if options.before_drift is None else options.before_drift
    after = half if options.after_drift is None else options.after_drift
    return before, after
