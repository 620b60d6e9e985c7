"""
Two-pass arithmetic over a token stream.

Pass 1 folds `*` and `/` into the pending term as soon as they are seen.
`+` and `-` close the pending term and defer the operator. Pass 2 folds
the completed terms left to right. Every step is range-checked against
32-bit signed integers; nothing wraps.
"""

from __future__ import annotations

import logging

from rollbox.dice.errors import ArithmeticOverflow, DivisionByZero, MalformedExpression
from rollbox.dice.models import INT_MAX, INT_MIN, ArithmeticResult, Token


logger = logging.getLogger(__name__)


def _checked(value: int, fragment: str) -> int:
    if value < INT_MIN or value > INT_MAX:
        raise ArithmeticOverflow(f"Result out of range in '{fragment}'.", fragment)
    return value


def _divide(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def apply_operator(op: str, a: int, b: int) -> int:
    fragment = f"{a} {op} {b}"
    if op == "+":
        return _checked(a + b, fragment)
    if op == "-":
        return _checked(a - b, fragment)
    if op == "*":
        return _checked(a * b, fragment)
    if op == "/":
        if b == 0:
            raise DivisionByZero("Division by zero.", fragment)
        return _checked(_divide(a, b), fragment)
    raise MalformedExpression(f"Unknown operator '{op}'.", op)


def _validate(tokens: list[Token], canonical: str):
    """Values and operators must alternate, starting and ending on a value."""
    if not tokens:
        raise MalformedExpression("Invalid expression.", canonical)
    for i, tok in enumerate(tokens):
        if tok.is_operator != (i % 2 == 1):
            raise MalformedExpression("Malformed arithmetic expression.", canonical)
    if tokens[-1].is_operator:
        raise MalformedExpression("Expression ends with an operator.", canonical)


def build_breakdown(tokens: list[Token]) -> str:
    return " ".join(tok.text for tok in tokens)


def evaluate_tokens(tokens: list[Token], canonical: str = "") -> ArithmeticResult:
    _validate(tokens, canonical)

    # Pass 1: multiplicative terms. `terms` holds (deferred op, value) pairs.
    pending = tokens[0].value
    deferred = "+"
    terms: list[tuple[str, int]] = []
    for i in range(1, len(tokens), 2):
        op = tokens[i].op
        value = tokens[i + 1].value
        if op in ("*", "/"):
            pending = apply_operator(op, pending, value)
        else:
            terms.append((deferred, pending))
            deferred = op
            pending = value
    terms.append((deferred, pending))

    # Pass 2: additive fold
    total = terms[0][1]
    for op, value in terms[1:]:
        total = apply_operator(op, total, value)

    breakdown = build_breakdown(tokens)
    logger.debug("arithmetic '%s' = %d", canonical, total)
    return ArithmeticResult(
        canonical=canonical,
        total=total,
        breakdown=breakdown,
        tokens=tuple(tokens),
    )
