"""
Value types for the dice engine.

All of these are frozen: a result is built once per evaluate() call and
handed to the caller, which owns it from then on.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Union


# Percentile tests clamp the effective target into this range
TARGET_MIN = 1
TARGET_MAX = 100


class RollKind(str, enum.Enum):
    ARITHMETIC = "arithmetic"
    TABLETOP = "tabletop"


# ---------------------------------------------------------------------------
# Parsed expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiceGroup:
    """`count` dice with `sides` faces; exploding dice re-roll on the max face."""
    count: int
    sides: int
    exploding: bool = False

    @property
    def notation(self) -> str:
        return f"{self.count}d{self.sides}{'!!' if self.exploding else ''}"


@dataclass(frozen=True)
class TabletopTest:
    """
    A percentile skill test such as `3d100w50+10`.

    `exploding` is accepted by the grammar and kept here so the expression
    round-trips, but it never changes how a test is rolled.
    """
    kind: ClassVar[RollKind] = RollKind.TABLETOP

    canonical: str
    count: int
    sides: int
    base_target: int
    modifier: int = 0
    exploding: bool = False

    @property
    def target(self) -> int:
        """Target after the inline modifier, clamped to 1..100."""
        return max(TARGET_MIN, min(TARGET_MAX, self.base_target + self.modifier))


@dataclass(frozen=True)
class ArithmeticExpression:
    """A generic dice/integer expression such as `3d6*2-1`."""
    kind: ClassVar[RollKind] = RollKind.ARITHMETIC

    canonical: str


ParsedExpression = Union[TabletopTest, ArithmeticExpression]


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValueToken:
    """A literal integer or a rolled dice group."""
    is_operator: ClassVar[bool] = False

    value: int
    text: str
    rolls: tuple = ()  # per-die roll chains, empty for literals


@dataclass(frozen=True)
class OperatorToken:
    is_operator: ClassVar[bool] = True

    op: str

    @property
    def text(self) -> str:
        return self.op


Token = Union[ValueToken, OperatorToken]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RollOutcome:
    """One percentile die from a tabletop test."""
    raw: int
    success_level: int
    succeeded: bool
    critical_success: bool = False
    critical_failure: bool = False

    @property
    def tag(self) -> str:
        if self.succeeded:
            return "CRIT SUCCESS" if self.critical_success else "Success"
        return "CRIT FAIL" if self.critical_failure else "Fail"

    @property
    def signed_sl(self) -> str:
        return f"+{self.success_level}" if self.success_level >= 0 else str(self.success_level)

    def render(self) -> str:
        return f"{self.raw} → SL {self.signed_sl} ({self.tag})"

    def to_dict(self) -> dict:
        return {
            "raw": self.raw,
            "success_level": self.success_level,
            "succeeded": self.succeeded,
            "critical_success": self.critical_success,
            "critical_failure": self.critical_failure,
            "tag": self.tag,
            "line": self.render(),
        }


@dataclass(frozen=True)
class ArithmeticResult:
    kind: ClassVar[RollKind] = RollKind.ARITHMETIC

    canonical: str
    total: int
    breakdown: str
    tokens: tuple = field(default=(), repr=False)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "canonical": self.canonical,
            "total": self.total,
            "breakdown": self.breakdown,
        }


@dataclass(frozen=True)
class TabletopResult:
    kind: ClassVar[RollKind] = RollKind.TABLETOP

    canonical: str
    target: int
    outcomes: tuple[RollOutcome, ...]

    @property
    def roll_lines(self) -> list[str]:
        return [o.render() for o in self.outcomes]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "canonical": self.canonical,
            "target": self.target,
            "rolls": [o.to_dict() for o in self.outcomes],
        }


RollResult = Union[ArithmeticResult, TabletopResult]


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

# Dice rolled by one evaluation, across all groups
DEFAULT_MAX_DICE = 1000
