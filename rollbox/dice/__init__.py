from rollbox.dice.engine import DiceEngine, evaluate
from rollbox.dice.errors import (
    ArithmeticOverflow,
    DiceError,
    DivisionByZero,
    ErrorKind,
    InvalidDiceSpec,
    MalformedExpression,
)
from rollbox.dice.models import (
    DEFAULT_MAX_DICE,
    ArithmeticResult,
    RollKind,
    RollOutcome,
    RollResult,
    TabletopResult,
)
from rollbox.dice.rng import RandomSource, SecureRandom

__all__ = [
    "DEFAULT_MAX_DICE",
    "ArithmeticOverflow",
    "ArithmeticResult",
    "DiceEngine",
    "DiceError",
    "DivisionByZero",
    "ErrorKind",
    "InvalidDiceSpec",
    "MalformedExpression",
    "RandomSource",
    "RollKind",
    "RollOutcome",
    "RollResult",
    "SecureRandom",
    "TabletopResult",
    "evaluate",
]
