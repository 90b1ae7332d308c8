#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper around totp_core

Subcommands:
- now      : print the current TOTP code once
- watch    : print a new line every time the TOTP code changes (Ctrl+C to quit)
- hotp     : print the HOTP code for a given counter
- validate : check secret / digits / period without generating anything

Secrets are passed on the command line each time; nothing is stored.

eg..:
    totp-cli now --secret JBSWY3DPEHPK3PXP
    totp-cli watch --secret JBSWY3DPEHPK3PXP --digits 8 --period 60
    totp-cli hotp --secret JBSWY3DPEHPK3PXP --counter 42
"""

import argparse
import sys

from .exceptions import OtpComputationError
from .logging_config import configure_logging
from .otp_core import DEFAULT_DIGITS, DEFAULT_TIME_STEP
from .service import default_service


def _check(args) -> bool:
    result = default_service.validate_params(args.secret, args.digits, args.period)
    if result.has_error:
        print(f"[!] {result.error}", file=sys.stderr)
        return False
    return True


# --- CLI command handlers ---
def cmd_now(args) -> int:
    if not _check(args):
        return 1
    record = default_service.generate_snapshot(args.secret, args.digits, args.period)
    print(f"TOTP ({args.digits}d): {record.code}  "
          f"(valid ~{record.remaining_time:2d}s, {record.progress_percent:.2f}%)")
    return 0


def cmd_watch(args) -> int:
    if not _check(args):
        return 1
    print(f"Press Ctrl+C to quit. Generating {args.digits}-digit TOTP every {args.period}s...\n")
    stream = default_service.open_stream(args.secret, args.digits, args.period)
    try:
        for record in stream:
            print(f"TOTP ({args.digits}d): {record.code}  (valid ~{record.remaining_time:2d}s)")
    except KeyboardInterrupt:
        print("\nBye.")
    finally:
        stream.close()
    return 0


def cmd_hotp(args) -> int:
    if not _check(args):
        return 1
    generator = default_service.generator_for(args.secret, args.digits, args.period)
    print(f"HOTP({args.digits}d, counter={args.counter}): {generator.hotp(args.counter)}")
    return 0


def cmd_validate(args) -> int:
    if not _check(args):
        return 1
    print("[+] Parameters are valid")
    return 0


def cmd_help(args) -> int:
    print("'totp-cli -h' for help.")
    return 0


# --- Argparse builder ---
def _add_common(p: argparse.ArgumentParser, period: bool = True) -> None:
    p.add_argument("--secret", required=True, help="Base32 shared secret")
    p.add_argument("--digits", type=int, default=DEFAULT_DIGITS, help="Number of OTP digits")
    if period:
        p.add_argument("--period", type=int, default=DEFAULT_TIME_STEP, help="TOTP time step (seconds)")
    else:
        p.set_defaults(period=DEFAULT_TIME_STEP)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="TOTP/HOTP (HMAC-SHA1) code generator")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    pn = sub.add_parser("now", help="Print the current TOTP code")
    _add_common(pn)
    pn.set_defaults(func=cmd_now)

    pw = sub.add_parser("watch", help="Show TOTP code in real time")
    _add_common(pw)
    pw.set_defaults(func=cmd_watch)

    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    _add_common(ph, period=False)
    ph.add_argument("--counter", type=int, required=True)
    ph.set_defaults(func=cmd_hotp)

    pv = sub.add_parser("validate", help="Validate secret, digits and period")
    _add_common(pv)
    pv.set_defaults(func=cmd_validate)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "ERROR")
    try:
        return args.func(args)
    except OtpComputationError as e:
        print(f"[!] Failed to generate OTP: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
