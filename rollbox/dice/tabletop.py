"""
Percentile skill tests (`d100w50`, `3d100w45+10`).

Each die is scored independently against the effective target:

  * success when raw <= target
  * SL = tens(target) - tens(raw), never positive on a failure
  * on a d100, 1-5 is always a critical success and 96-100 always a
    critical failure, whatever the target
  * otherwise doubles (11, 22, ... 99) turn a success into a critical
    success and a failure into a critical failure

The `!!` flag is accepted in this grammar but tests never explode.
"""

from __future__ import annotations

import logging

from rollbox.dice.errors import InvalidDiceSpec
from rollbox.dice.models import DEFAULT_MAX_DICE, RollOutcome, TabletopResult, TabletopTest
from rollbox.dice.rng import RandomSource

logger = logging.getLogger(__name__)

AUTO_CRIT_SIDES = 100
AUTO_SUCCESS = range(1, 6)
AUTO_FAILURE = range(96, 101)


def is_doubles(raw: int) -> bool:
    if raw < 11 or raw > 99:
        return False
    return raw // 10 == raw % 10


def score_roll(raw: int, target: int, sides: int) -> RollOutcome:
    """Score a single percentile die against `target`."""
    succeeded = raw <= target

    # SL is fixed from the base comparison, before any critical override
    sl = target // 10 - raw // 10
    if not succeeded:
        sl = -abs(sl)

    crit_success = crit_failure = False
    if sides == AUTO_CRIT_SIDES:
        if raw in AUTO_SUCCESS:
            succeeded, crit_success = True, True
        elif raw in AUTO_FAILURE:
            succeeded, crit_failure = False, True

    if not (crit_success or crit_failure) and is_doubles(raw):
        if succeeded:
            crit_success = True
        else:
            crit_failure = True

    return RollOutcome(
        raw=raw,
        success_level=sl,
        succeeded=succeeded,
        critical_success=crit_success,
        critical_failure=crit_failure,
    )


def evaluate_test(
    test: TabletopTest, rng: RandomSource, max_dice: int = DEFAULT_MAX_DICE
) -> TabletopResult:
    if test.count > max_dice:
        raise InvalidDiceSpec(
            f"Too many dice: {test.count}d{test.sides} (limit {max_dice}).", test.canonical
        )
    target = test.target
    outcomes = tuple(
        score_roll(rng.uniform_int(1, test.sides), target, test.sides)
        for _ in range(test.count)
    )
    logger.debug(
        "tabletop %s: target=%d raws=%s",
        test.canonical, target, [o.raw for o in outcomes],
    )
    return TabletopResult(canonical=test.canonical, target=target, outcomes=outcomes)
