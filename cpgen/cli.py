"""
Command-line interface for the constrained password generator.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Sequence

from .config import DEFAULT_REQUEST, MAX_RETRIES, MIN_PASSWORD_LENGTH, GenerationRequest
from .entropy import SOURCES, RandomSourceError, source_factory
from .generator import (
    ConstrainedPasswordGenerator,
    ConstraintError,
    GenerationExhaustedError,
    GenerationMeta,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

EXIT_OK = 0
EXIT_CONSTRAINT = 2
EXIT_EXHAUSTED = 3
EXIT_SOURCE = 4


def setup_logging(level: str = "WARNING") -> None:
    """
    Configure logging to stderr so stdout only carries passwords.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)

    cpgen_logger = logging.getLogger("cpgen")
    cpgen_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.DEBUG)
    stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(stderr_handler)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpgen",
        description="Generate passwords with guaranteed minimum counts per character class.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--length",
        type=int,
        default=DEFAULT_REQUEST.length,
        help=f"Password length (at least {MIN_PASSWORD_LENGTH})",
    )
    parser.add_argument(
        "--upper-min", type=int, default=DEFAULT_REQUEST.upper_min, help="Minimum uppercase letters"
    )
    parser.add_argument(
        "--lower-min", type=int, default=DEFAULT_REQUEST.lower_min, help="Minimum lowercase letters"
    )
    parser.add_argument(
        "--numeric-min", type=int, default=DEFAULT_REQUEST.numeric_min, help="Minimum digits"
    )
    parser.add_argument(
        "--special-min", type=int, default=DEFAULT_REQUEST.special_min, help="Minimum special characters"
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=DEFAULT_REQUEST.max_retries,
        help=f"Generation attempts before giving up (1..{MAX_RETRIES})",
    )
    parser.add_argument("--count", type=positive_int, default=1, help="Number of passwords to generate")
    parser.add_argument(
        "--source",
        choices=sorted(SOURCES),
        default="system",
        help="Random byte source",
    )
    parser.add_argument("--meta", action="store_true", help="Show attempts and entropy estimate")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging verbosity",
    )
    return parser


def _meta_to_dict(meta: GenerationMeta) -> dict:
    return {
        "password": meta.password,
        "attempts": meta.attempts,
        "entropy_bits": round(meta.entropy_bits, 2),
        "class_counts": meta.class_counts,
        "request": asdict(meta.request),
    }


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for the `cpgen` console script and `python -m cpgen`.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    request = GenerationRequest(
        length=args.length,
        upper_min=args.upper_min,
        lower_min=args.lower_min,
        numeric_min=args.numeric_min,
        special_min=args.special_min,
        max_retries=args.max_retries,
    )
    generator = ConstrainedPasswordGenerator(source_factory(args.source))

    try:
        results = [generator.generate_with_meta(request) for _ in range(args.count)]
    except ConstraintError as exc:
        logger.error(str(exc))
        return EXIT_CONSTRAINT
    except GenerationExhaustedError as exc:
        logger.error("%s; raise --max-retries or relax the minimums", exc)
        return EXIT_EXHAUSTED
    except RandomSourceError as exc:
        logger.error("Random source failed: %s", exc)
        return EXIT_SOURCE
    except ValueError as exc:
        logger.error("Invalid random source configuration: %s", exc)
        return EXIT_SOURCE

    if args.json:
        if args.meta:
            print(json.dumps([_meta_to_dict(m) for m in results], indent=2))
        else:
            print(json.dumps([m.password for m in results]))
        return EXIT_OK

    for meta in results:
        if args.meta:
            print(
                f"{meta.password}\tattempts={meta.attempts}\t"
                f"entropy≈{meta.entropy_bits:.1f} bits"
            )
        else:
            print(meta.password)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
