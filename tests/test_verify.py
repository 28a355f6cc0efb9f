import pytest

from twofa import otp_core
from twofa.config import VerifyOptions, resolve_drift
from twofa.otp_core import generate_code, match_hotp, verify_hotp, verify_totp

COUNTER = 5


def test_exact_counter_verifies(rfc_key: str) -> None:
    for counter in (0, 1, 7, 1000, 2**33):
        assert verify_hotp(rfc_key, generate_code(rfc_key, counter), counter)


def test_wrong_code_fails(rfc_key: str) -> None:
    assert not verify_hotp(rfc_key, "000000", COUNTER)
    assert not verify_hotp(rfc_key, generate_code(rfc_key, COUNTER + 1), COUNTER)


def test_after_drift_window(rfc_key: str) -> None:
    assert verify_hotp(rfc_key, generate_code(rfc_key, COUNTER + 1), COUNTER, after_drift=1)
    assert not verify_hotp(rfc_key, generate_code(rfc_key, COUNTER + 2), COUNTER, after_drift=1)
    assert not verify_hotp(rfc_key, generate_code(rfc_key, COUNTER - 1), COUNTER, after_drift=1)


def test_before_drift_window(rfc_key: str) -> None:
    assert verify_hotp(rfc_key, generate_code(rfc_key, COUNTER - 2), COUNTER, before_drift=2)
    assert not verify_hotp(rfc_key, generate_code(rfc_key, COUNTER - 3), COUNTER, before_drift=2)


def test_drift_is_split_between_both_sides(rfc_key: str) -> None:
    options = VerifyOptions(drift=2)
    assert verify_hotp(rfc_key, generate_code(rfc_key, COUNTER - 1), COUNTER, options)
    assert verify_hotp(rfc_key, generate_code(rfc_key, COUNTER + 1), COUNTER, options)
    assert not verify_hotp(rfc_key, generate_code(rfc_key, COUNTER + 2), COUNTER, options)


def test_odd_drift_rounds_down(rfc_key: str) -> None:
    assert resolve_drift(VerifyOptions(drift=3)) == (1, 1)
    assert resolve_drift(VerifyOptions(drift=1)) == (0, 0)
    assert not verify_hotp(rfc_key, generate_code(rfc_key, COUNTER + 1), COUNTER, drift=1)


def test_explicit_zero_overrides_drift() -> None:
    assert resolve_drift(VerifyOptions(drift=4, before_drift=0)) == (0, 2)
    assert resolve_drift(VerifyOptions(drift=4, after_drift=0)) == (2, 0)


def test_window_below_zero_is_clipped(rfc_key: str) -> None:
    assert verify_hotp(rfc_key, generate_code(rfc_key, 0), 1, drift=10)
    assert match_hotp(rfc_key, generate_code(rfc_key, 0), 0, before_drift=3) == 0


def test_match_returns_first_matching_counter(rfc_key: str) -> None:
    code = generate_code(rfc_key, COUNTER + 2)
    assert match_hotp(rfc_key, code, COUNTER, after_drift=5) == COUNTER + 2
    assert match_hotp(rfc_key, code, COUNTER) is None


def test_length_option_is_used(rfc_key: str) -> None:
    code = generate_code(rfc_key, COUNTER, 8)
    assert verify_hotp(rfc_key, code, COUNTER, VerifyOptions(length=8))
    assert not verify_hotp(rfc_key, code, COUNTER)


def test_overrides_apply_on_top_of_options(rfc_key: str) -> None:
    options = VerifyOptions(length=8)
    code = generate_code(rfc_key, COUNTER + 1, 8)
    assert verify_hotp(rfc_key, code, COUNTER, options, after_drift=1)


def test_negative_drift_is_rejected() -> None:
    with pytest.raises(ValueError):
        VerifyOptions(drift=-1)
    with pytest.raises(ValueError):
        VerifyOptions(step=0)


def test_totp_at_fixed_time(rfc_key: str) -> None:
    assert verify_totp(rfc_key, "287082", timestamp=59)
    assert verify_totp(rfc_key, "94287082", VerifyOptions(length=8), timestamp=59)
    assert not verify_totp(rfc_key, "287082", timestamp=89)
    assert verify_totp(rfc_key, "287082", timestamp=89, before_drift=1)


def test_totp_custom_step(rfc_key: str) -> None:
    # counter 1 with a 60 second step
    assert verify_totp(rfc_key, "287082", VerifyOptions(step=60), timestamp=119)
    assert not verify_totp(rfc_key, "287082", VerifyOptions(step=60), timestamp=59)


def test_totp_uses_current_time(rfc_key: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(otp_core.time, "time", lambda: 1111111109.0)
    assert verify_totp(rfc_key, "081804")
    assert not verify_totp(rfc_key, "287082")


def test_window_log_uses_clipped_lower_bound(rfc_key: str, caplog) -> None:
    caplog.set_level("DEBUG", logger="twofa.otp_core")
    assert match_hotp(rfc_key, "000000", 1, before_drift=5) is None
    assert "window 0..1" in caplog.text
    assert "-4" not in caplog.text
