#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper cho twofa.

Cung cấp các subcommand:
- key    : sinh key base-36 ngẫu nhiên
- code   : sinh mã HOTP cho một counter
- totp   : sinh mã TOTP hiện tại (hoặc tại --timestamp)
- verify : xác minh mã OTP (HOTP/TOTP) trong cửa sổ drift
- url    : in otpauth:// URL để import vào authenticator app
- backup : sinh backup codes theo pattern

Ví dụ:
    python -m twofa key --length 32
    python -m twofa code --key mysecret --counter 42 --digits 8
    python -m twofa verify totp --key mysecret --code 123456 --drift 2
    python -m twofa url --issuer MyService --account alice@example.com --key mysecret
    python -m twofa backup --count 8 --pattern xxxx-xxxx-xxxx
"""

import argparse
import sys

from twofa import config
from twofa.exceptions import TwoFAError
from twofa.generators import generate_backup_codes, generate_key
from twofa.otp_core import generate_code, generate_url, match_hotp, totp, totp_counter, verify_totp


def log(msg: str, verbose: bool):
    if verbose:
        print(f"[+] {msg}")


def _verify_options(args) -> config.VerifyOptions:
    return config.VerifyOptions(
        drift=args.drift,
        before_drift=args.before_drift,
        after_drift=args.after_drift,
        length=args.digits,
        step=getattr(args, "period", config.DEFAULT_TIME_STEP),
    )


# --- CLI command handlers ---
def cmd_key(args) -> int:
    key = generate_key(args.length)
    log(f"Generated {args.length}-character base-36 key", args.verbose)
    print(key)
    return 0


def cmd_code(args) -> int:
    code = generate_code(args.key, args.counter, args.digits)
    log(f"HOTP({args.digits}d, counter={args.counter})", args.verbose)
    print(code)
    return 0


def cmd_totp(args) -> int:
    code, remaining = totp(args.key, args.timestamp, args.period, length=args.digits)
    log(f"TOTP: counter={totp_counter(args.timestamp, args.period)}", args.verbose)
    print(f"{code}  (valid ~{remaining:2d}s)")
    return 0


def cmd_verify_hotp(args) -> int:
    options = _verify_options(args)
    matched = match_hotp(args.key, args.code, args.counter, options)
    if matched is None:
        print("[-] HOTP code is INVALID")
        return 1
    print(f"[+] HOTP code is VALID (next counter = {matched + 1})")
    return 0


def cmd_verify_totp(args) -> int:
    options = _verify_options(args)
    log(f"TOTP: counter={totp_counter(args.timestamp, options.step)}", args.verbose)
    if verify_totp(args.key, args.code, options, timestamp=args.timestamp):
        print("[+] TOTP code is VALID")
        return 0
    print("[-] TOTP code is INVALID")
    return 1


def cmd_url(args) -> int:
    print(generate_url(args.issuer, args.account, args.key))
    return 0


def cmd_backup(args) -> int:
    codes = generate_backup_codes(args.count, args.pattern)
    log(f"Generated {len(codes)} backup codes with pattern {args.pattern!r}", args.verbose)
    for code in codes:
        print(code)
    return 0


def cmd_help(args) -> int:
    print("'python -m twofa -h' for help.")
    return 0


# --- Argparse builder ---
def _add_verbose(p: argparse.ArgumentParser):
    # SUPPRESS: không ghi đè --verbose đã đặt ở parser gốc
    p.add_argument("--verbose", action="store_true", default=argparse.SUPPRESS, help="Verbose output")


def _add_verify_args(p: argparse.ArgumentParser):
    _add_verbose(p)
    p.add_argument("--key", required=True, help="Shared secret")
    p.add_argument("--code", required=True, help="OTP code to verify")
    p.add_argument("--digits", type=int, default=config.DEFAULT_DIGITS, help="Number of OTP digits")
    p.add_argument("--drift", type=int, default=0, help="Total drift, split between before/after")
    p.add_argument("--before-drift", type=int, help="Allowed steps before the expected counter")
    p.add_argument("--after-drift", type=int, help="Allowed steps after the expected counter")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="twofa", description="HOTP/TOTP (HMAC-SHA1) codes, keys and backup codes")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # key
    pk = sub.add_parser("key", help="Generate a random base-36 key")
    _add_verbose(pk)
    pk.add_argument("--length", type=int, default=config.DEFAULT_KEY_LENGTH, help="Key length in characters")
    pk.set_defaults(func=cmd_key)

    # code
    pc = sub.add_parser("code", help="Generate HOTP code for a specific counter")
    _add_verbose(pc)
    pc.add_argument("--key", required=True, help="Shared secret")
    pc.add_argument("--counter", type=int, required=True)
    pc.add_argument("--digits", type=int, default=config.DEFAULT_DIGITS)
    pc.set_defaults(func=cmd_code)

    # totp
    pt = sub.add_parser("totp", help="Generate the current TOTP code")
    _add_verbose(pt)
    pt.add_argument("--key", required=True, help="Shared secret")
    pt.add_argument("--digits", type=int, default=config.DEFAULT_DIGITS)
    pt.add_argument("--period", type=int, default=config.DEFAULT_TIME_STEP, help="TOTP time step (seconds)")
    pt.add_argument("--timestamp", type=int, help="Unix time to use instead of now")
    pt.set_defaults(func=cmd_totp)

    # verify
    pv = sub.add_parser("verify", help="Verify an OTP code (TOTP or HOTP)")
    sub_v = pv.add_subparsers(dest="verify_type")
    pv.set_defaults(func=cmd_help)

    pvh = sub_v.add_parser("hotp", help="Verify a HOTP code")
    _add_verify_args(pvh)
    pvh.add_argument("--counter", type=int, required=True, help="Current HOTP counter")
    pvh.set_defaults(func=cmd_verify_hotp)

    pvt = sub_v.add_parser("totp", help="Verify a TOTP code")
    _add_verify_args(pvt)
    pvt.add_argument("--period", type=int, default=config.DEFAULT_TIME_STEP, help="TOTP time step (seconds)")
    pvt.add_argument("--timestamp", type=int, help="Unix time to use instead of now")
    pvt.set_defaults(func=cmd_verify_totp)

    # url
    pu = sub.add_parser("url", help="Print otpauth:// URL for authenticator apps")
    _add_verbose(pu)
    pu.add_argument("--issuer", required=True, help="Service name")
    pu.add_argument("--account", required=True, help="Account label, e.g. alice@example.com")
    pu.add_argument("--key", required=True, help="Shared secret")
    pu.set_defaults(func=cmd_url)

    # backup
    pb = sub.add_parser("backup", help="Generate backup codes")
    _add_verbose(pb)
    pb.add_argument("--count", type=int, default=8)
    pb.add_argument("--pattern", default=config.DEFAULT_PATTERN, help="'x' marks a random hex digit; use --pattern=-xx- for patterns starting with '-'")
    pb.set_defaults(func=cmd_backup)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except (TwoFAError, ValueError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
