"""
Dice engine entry point.

    evaluate("3d6+2")      -> ArithmeticResult(total=..., breakdown="3d6 → [..] = .. + 2")
    evaluate("3d100w50")   -> TabletopResult(target=50, outcomes=(...))

The engine keeps no state between calls. The only shared resource is the
RandomSource, which defaults to the process-wide SecureRandom.
"""

from __future__ import annotations

import logging

from rollbox.dice.arithmetic import evaluate_tokens
from rollbox.dice.classifier import classify
from rollbox.dice.models import DEFAULT_MAX_DICE, RollKind, RollResult
from rollbox.dice.rng import RandomSource, default_source
from rollbox.dice.tabletop import evaluate_test
from rollbox.dice.tokenizer import tokenize

logger = logging.getLogger(__name__)


def evaluate(
    expression: str,
    rng: RandomSource | None = None,
    max_dice: int = DEFAULT_MAX_DICE,
) -> RollResult:
    """
    Evaluate a dice expression, rolling at most `max_dice` dice.

    Raises a DiceError subclass (MalformedExpression, InvalidDiceSpec,
    DivisionByZero, ArithmeticOverflow) on any failure.
    """
    rng = rng or default_source()
    parsed = classify(expression)

    if parsed.kind is RollKind.TABLETOP:
        return evaluate_test(parsed, rng, max_dice)

    tokens = tokenize(parsed.canonical, rng, max_dice)
    return evaluate_tokens(tokens, parsed.canonical)


class DiceEngine:
    """Holds a RandomSource so callers can pass the engine around."""

    def __init__(self, rng: RandomSource | None = None, max_dice: int = DEFAULT_MAX_DICE):
        self.rng = rng or default_source()
        self.max_dice = max_dice
        logger.info(
            "DiceEngine initialized (rng=%s, max_dice=%d)", type(self.rng).__name__, max_dice
        )

    def evaluate(self, expression: str) -> RollResult:
        return evaluate(expression, self.rng, self.max_dice)
