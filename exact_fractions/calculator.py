"""Apply one arithmetic operation to two fractions from the command line."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, Sequence

from .errors import FractionError
from .fraction import Fraction

logger = logging.getLogger(__name__)

OPERATIONS: Dict[str, Callable[[Fraction, Fraction], Fraction]] = {
    "+": Fraction.add,
    "-": Fraction.subtract,
    "*": Fraction.multiply,
    "/": Fraction.divide,
}


def build_operand(values: Sequence[int]) -> Fraction:
    """Build a fraction from ``[numerator, denominator]`` or ``[integer]``."""
    if len(values) == 1:
        return Fraction.from_integer(values[0])
    if len(values) == 2:
        return Fraction(values[0], values[1])
    raise ValueError(f"expected one or two integers, got {len(values)}")


def calculate(left: Fraction, operation: str, right: Fraction) -> Fraction:
    try:
        func = OPERATIONS[operation]
    except KeyError:
        raise ValueError(f"Unknown operation {operation!r}; use +, -, * or /") from None
    result = func(left, right)
    logger.debug("%s %s %s = %s", left, operation, right, result)
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exact-fractions",
        description="Apply an arithmetic operation to two fractions.",
    )
    parser.add_argument("operation", choices=list(OPERATIONS), help="Operation to apply")
    parser.add_argument(
        "--left",
        nargs="+",
        type=int,
        required=True,
        metavar="N",
        help="First operand: numerator and optional denominator",
    )
    parser.add_argument(
        "--right",
        nargs="+",
        type=int,
        required=True,
        metavar="N",
        help="Second operand: numerator and optional denominator",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for name in ("left", "right"):
        if len(getattr(args, name)) > 2:
            parser.error(f"--{name} takes a numerator and an optional denominator")

    try:
        left = build_operand(args.left)
        right = build_operand(args.right)
        result = calculate(left, args.operation, right)
    except FractionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Result: {result} = {result.to_float():.4f}")
    return 0
