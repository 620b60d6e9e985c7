"""
Grammar selection.

An expression is either a percentile tabletop test (`[N]dS[!!]wT[+/-M]`, or just `wT`)
or a generic arithmetic expression. The decision is made once, on the
whitespace-stripped text, and returned as a tagged ParsedExpression.
"""

from __future__ import annotations

import logging
import re

from rollbox.dice.errors import ArithmeticOverflow, InvalidDiceSpec, MalformedExpression
from rollbox.dice.models import (
    INT_MAX,
    ArithmeticExpression,
    ParsedExpression,
    TabletopTest,
)

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

# The dice part may be left off entirely: `w50` is `1d100w50`
TABLETOP_PATTERN = re.compile(
    r"(?:(?P<count>\d*)d(?P<sides>\d+)(?P<bang>!!)?)?w(?P<target>\d+)(?P<tmod>[+-]\d+)?",
    re.IGNORECASE | re.ASCII,
)
DEFAULT_TEST_SIDES = 100

# Targets and modifiers are clamped, so their digit runs never overflow
SATURATE_DIGITS = 4000


def compact(expression) -> str:
    """Strip all whitespace. Raises MalformedExpression if nothing is left."""
    if not isinstance(expression, str):
        raise MalformedExpression(f"Expression must be text, got {type(expression).__name__}.")
    text = _WHITESPACE.sub("", expression)
    if not text:
        raise MalformedExpression("Empty expression.")
    return text


def parse_int(digits: str, fragment: str) -> int:
    """Parse a run of digits (optionally signed), rejecting anything past 32 bits."""
    if len(digits.lstrip("+-").lstrip("0")) > len(str(INT_MAX)):
        raise ArithmeticOverflow(f"Number too large: {digits[:16]}...", fragment)
    value = int(digits)
    if abs(value) > INT_MAX:
        raise ArithmeticOverflow(f"Number too large: {digits}", fragment)
    return value


def parse_clamped(digits: str) -> int:
    """
    Parse a signed digit run whose value only matters after clamping.

    Never raises: runs longer than int() accepts saturate at 10**SATURATE_DIGITS.
    """
    sign = -1 if digits.startswith("-") else 1
    body = digits.lstrip("+-").lstrip("0") or "0"
    if len(body) > SATURATE_DIGITS:
        return sign * 10 ** SATURATE_DIGITS
    return sign * int(body)


def classify(expression: str) -> ParsedExpression:
    """
    Decide which grammar the expression belongs to.

    Only the tabletop grammar is checked here; anything else goes to the
    arithmetic path, which rejects what it cannot tokenize.
    """
    text = compact(expression)
    m = TABLETOP_PATTERN.fullmatch(text)
    if m is None:
        logger.debug("classify: '%s' -> arithmetic", text)
        return ArithmeticExpression(canonical=text)

    count = parse_int(m.group("count"), text) if m.group("count") else 1
    sides = parse_int(m.group("sides"), text) if m.group("sides") else DEFAULT_TEST_SIDES
    if count < 1 or sides < 1:
        raise InvalidDiceSpec("Dice count and sides must be >= 1.", text)

    test = TabletopTest(
        canonical=text,
        count=count,
        sides=sides,
        base_target=parse_clamped(m.group("target")),
        modifier=parse_clamped(m.group("tmod")) if m.group("tmod") else 0,
        exploding=m.group("bang") is not None,
    )
    logger.debug("classify: '%s' -> tabletop (%dd%d vs %d)", text, count, sides, test.target)
    return test
