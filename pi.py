#!/usr/bin/env python3
"""Print N digits of pi and how long they took to compute."""

import argparse
import sys
import time

from pitime import compute_digits, state_length, verify
from pitime.config import get_config
from pitime.digits import SLACK, format_pi


def _log(*args):
    print(*args, file=sys.stderr)


def build_parser(config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print N digits of pi")
    parser.add_argument(
        "n",
        type=int,
        nargs="?",
        default=config.digits,
        help=(
            f"Number of digits to print (default: {config.digits}). "
            "Run time grows with the square of N: a few seconds for 3000 digits, "
            "a minute or more for 10000"
        ),
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        default=config.verify,
        help="Check the digits against mpmath",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=config.timeout,
        help="Give up after this many seconds (default: no limit)",
    )
    parser.add_argument(
        "--slack",
        type=int,
        default=config.slack,
        help=f"Extra state terms beyond 10n/3 (default: {config.slack})",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Print only the digits",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=config.verbose,
        help="Print progress to stderr",
    )
    return parser


def main(argv=None) -> int:
    try:
        config = get_config()
    except ValueError as e:
        _log(f"Configuration error: {e}")
        return 2

    parser = build_parser(config)
    args = parser.parse_args(argv)

    if args.n < 0:
        parser.error("N must be at least 0")
    if args.n > config.max_digits:
        parser.error(f"N must be at most {config.max_digits} (PITIME_MAX_DIGITS)")
    if args.slack < SLACK:
        parser.error(f"--slack must be at least {SLACK}")
    if args.timeout < 0:
        parser.error("--timeout must be at least 0")

    log = _log if args.verbose else None
    if log:
        log(f"Computing {args.n} digits with {state_length(args.n, args.slack)} terms")

    start_time = time.perf_counter()
    deadline = time.monotonic() + args.timeout if args.timeout else None
    try:
        digits = compute_digits(args.n, args.slack, log=log, deadline=deadline)
    except TimeoutError as e:
        _log(f"Timed out after {args.timeout:g} seconds ({e})")
        return 1
    elapsed = time.perf_counter() - start_time

    pi_digits = format_pi(digits)
    print(pi_digits)
    if not args.quiet:
        print(f"Calculation took {int(elapsed * 1000)} milliseconds.")

    if args.verify:
        if mismatch := verify(pi_digits):
            _log(f"Verification failed at {mismatch.describe()}")
            return 1
        _log("Verified against mpmath.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
