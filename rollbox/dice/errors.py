"""
Dice engine errors.

Every failure inside the engine is one of four kinds. Callers catch
DiceError and turn it into a message; nothing else escapes evaluate().
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    MALFORMED_EXPRESSION = "MalformedExpression"
    INVALID_DICE_SPEC = "InvalidDiceSpec"
    DIVISION_BY_ZERO = "DivisionByZero"
    ARITHMETIC_OVERFLOW = "ArithmeticOverflow"


class DiceError(Exception):
    """Base for all engine failures."""

    kind: ErrorKind

    def __init__(self, message: str, fragment: str = ""):
        super().__init__(message)
        self.message = message
        self.fragment = fragment

    def to_dict(self) -> dict:
        return {
            "error": self.kind.value,
            "message": self.message,
            "fragment": self.fragment,
        }


class MalformedExpression(DiceError):
    kind = ErrorKind.MALFORMED_EXPRESSION


class InvalidDiceSpec(DiceError):
    kind = ErrorKind.INVALID_DICE_SPEC


class DivisionByZero(DiceError):
    kind = ErrorKind.DIVISION_BY_ZERO


class ArithmeticOverflow(DiceError):
    kind = ErrorKind.ARITHMETIC_OVERFLOW
