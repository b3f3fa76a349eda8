"""
Command-line interface for the constrained password generator.
"""

from __future__ import annotations

import argparse
import sys

from .config import DEFAULT_SPECIAL_CHARS, ConfigError, build_configuration
from .generator import GenerationError, generate_password_with_meta
from .logging_config import setup_logging

BANNER = "[Constrained Password Generator]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpgen",
        description="Generate passwords that meet character-class minimums.",
    )
    parser.add_argument("--length", "-l", type=int, default=8, help="Password length (default: 8)")
    parser.add_argument("--min-upper", type=int, default=0, help="Minimum upper case letters")
    parser.add_argument("--min-lower", type=int, default=0, help="Minimum lower case letters")
    parser.add_argument("--min-alphabetic", type=int, default=0, help="Minimum letters of either case")
    parser.add_argument("--min-digits", type=int, default=0, help="Minimum digits")
    parser.add_argument("--min-special", type=int, default=0, help="Minimum special characters")
    parser.add_argument("--min-distinct", type=int, default=0, help="Minimum distinct characters")
    parser.add_argument(
        "--special-chars",
        default=DEFAULT_SPECIAL_CHARS,
        help="Allowed special characters (default: ASCII punctuation)",
    )
    parser.add_argument(
        "--exclude",
        "-e",
        action="append",
        default=[],
        metavar="WORD",
        help="Substring the password must not contain (repeatable)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    parser.add_argument("--count", "-c", type=int, default=1, help="Number of passwords to generate")
    parser.add_argument("--show-meta", action="store_true", help="Show attempts and entropy estimate")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for `cpgen`, `python -m cpgen.cli` or `run_cpgen.py`.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.count < 1:
        parser.error("--count must be at least 1")

    try:
        config = build_configuration(
            length=args.length,
            min_upper=args.min_upper,
            min_lower=args.min_lower,
            min_alphabetic=args.min_alphabetic,
            min_digits=args.min_digits,
            min_special=args.min_special,
            min_distinct=args.min_distinct,
            special_chars=args.special_chars,
            exclude_words=args.exclude,
            seed=args.seed,
        )
    except ConfigError as exc:
        parser.error(str(exc))

    print(f"\n{BANNER}")
    for _ in range(args.count):
        try:
            meta = generate_password_with_meta(config)
        except GenerationError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        print(f"Generated password: {meta.password}")
        if args.show_meta:
            print(f"  attempts: {meta.attempts}")
            print(f"  exclusions satisfied: {meta.exclusions_satisfied}")
            print(f"  entropy estimate: {meta.entropy_bits:.1f} bits")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
