"""Parsing of delimited numeric pairs such as ``1000x750`` or ``-1.20,0.35``."""

from __future__ import annotations

import math
from typing import Callable, Optional, Tuple, TypeVar

__all__ = [
    "PairParseError",
    "parse_complex",
    "parse_pair",
    "split_complex",
    "split_pair",
]

T = TypeVar("T")

MISSING_SEPARATOR = "missing separator"
EMPTY_OPERAND = "empty operand"
INVALID_OPERAND = "invalid operand"
NON_FINITE_OPERAND = "non-finite operand"


class PairParseError(ValueError):
    """Raised by the ``split_*`` parsers when text is not a valid pair."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"cannot parse {text!r}: {reason}")
        self.text = text
        self.reason = reason


def _convert(text: str, operand: str, kind: Callable[[str], T]) -> T:
    if not operand:
        raise PairParseError(text, EMPTY_OPERAND)
    # Python converters accept padding and "_" digit groups; whole operands only.
    if "_" in operand or any(ch.isspace() for ch in operand):
        raise PairParseError(text, INVALID_OPERAND)
    try:
        return kind(operand)
    except (ValueError, ArithmeticError) as exc:
        raise PairParseError(text, INVALID_OPERAND) from exc


def split_pair(text: str, separator: str, kind: Callable[[str], T] = float) -> Tuple[T, T]:
    """Split ``text`` at the first ``separator`` and convert both sides with ``kind``.

    Only the first occurrence of the separator is a split point; any later
    occurrence stays in the right-hand operand, which must then convert as a
    whole.

    Raises:
        PairParseError: The separator is missing or an operand does not convert.
        ValueError: ``separator`` is not a single character.
    """
    if len(separator) != 1:
        raise ValueError(f"separator must be a single character, got {separator!r}")

    index = text.find(separator)
    if index < 0:
        raise PairParseError(text, MISSING_SEPARATOR)

    left = _convert(text, text[:index], kind)
    right = _convert(text, text[index + 1 :], kind)
    return left, right


def parse_pair(text: str, separator: str, kind: Callable[[str], T] = float) -> Optional[Tuple[T, T]]:
    """Parse ``text`` as a pair of ``kind`` values, or return ``None``.

    >>> parse_pair("10,20", ",", int)
    (10, 20)
    >>> parse_pair("10,20xy", ",", int) is None
    True
    """
    try:
        return split_pair(text, separator, kind)
    except PairParseError:
        return None


def split_complex(text: str) -> complex:
    """Parse ``"re,im"`` into a finite complex number, raising on failure."""
    re, im = split_pair(text, ",", float)
    if not (math.isfinite(re) and math.isfinite(im)):
        raise PairParseError(text, NON_FINITE_OPERAND)
    return complex(re, im)


def parse_complex(text: str) -> Optional[complex]:
    """Parse ``"re,im"`` into a complex number, or return ``None``."""
    try:
        return split_complex(text)
    except PairParseError:
        return None
