#!/usr/bin/env python3
"""Print the toolchain configuration with credentials masked.

Exits non-zero when required variables are missing or, with ``--validate``,
when the assembled profiles have problems.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from toolchain.loader import try_load


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--env-file", metavar="PATH", help="Extra dotenv file to load first")
    parser.add_argument("--partial", action="store_true", help="Allow missing variables")
    parser.add_argument("--validate", action="store_true", help="Also check endpoint and key format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    strict = False if args.partial else None
    try:
        result = try_load(strict=strict, dotenv_path=args.env_file)
    except ValueError as exc:
        print(f"Invalid network configuration: {exc}", file=sys.stderr)
        return 1
    if result.config is None:
        for error in result.errors:
            print(error, file=sys.stderr)
        return 1

    print(json.dumps(result.config.to_toolchain_dict(), indent=2))

    if args.validate:
        problems = result.config.validate_profiles()
        for problem in problems:
            print(problem, file=sys.stderr)
        if problems or result.errors:
            return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    raise SystemExit(main())
