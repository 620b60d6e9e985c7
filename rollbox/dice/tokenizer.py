"""
Arithmetic tokenizer.

Scans a compacted expression left to right. At every position the next
token must be a dice group (`[N]dS[!!]`), a non-negative integer, or one
of `+ - * /`. Dice groups are rolled as they are read, so the token
stream already carries each group's total and its display text.

Anything else at a position is a MalformedExpression naming the offending
character; unknown input is never skipped.
"""

from __future__ import annotations

import logging
import re

from rollbox.dice.classifier import parse_int
from rollbox.dice.errors import ArithmeticOverflow, InvalidDiceSpec, MalformedExpression
from rollbox.dice.models import DEFAULT_MAX_DICE, INT_MAX, DiceGroup, OperatorToken, Token, ValueToken
from rollbox.dice.rng import RandomSource

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(
    r"(?P<dice>(?P<count>\d*)d(?P<sides>\d+)(?P<bang>!!)?)"
    r"|(?P<num>\d+)"
    r"|(?P<op>[+\-*/])",
    re.IGNORECASE | re.ASCII,
)


def roll_die(sides: int, exploding: bool, rng: RandomSource) -> list[int]:
    """
    Roll one die and return its chain of faces.

    A non-exploding die yields a single face. An exploding die keeps
    rolling while the latest face is the maximum; the chain has no cap.
    """
    chain = [rng.uniform_int(1, sides)]
    if exploding:
        while chain[-1] == sides:
            chain.append(rng.uniform_int(1, sides))
    return chain


def _chain_text(chain: list[int], sides: int, exploding: bool) -> str:
    if not exploding:
        return str(chain[0])
    faces = " + ".join(f"{x}!" if x == sides else str(x) for x in chain)
    return f"[{faces}]"


def roll_group(group: DiceGroup, rng: RandomSource) -> ValueToken:
    """Roll every die in `group` and build its value token."""
    if group.count < 1 or group.sides < 1:
        raise InvalidDiceSpec("Dice count and sides must be >= 1.", group.notation)
    if group.exploding and group.sides == 1:
        raise InvalidDiceSpec("A one-sided die cannot explode.", group.notation)

    chains = []
    total = 0
    for _ in range(group.count):
        chain = roll_die(group.sides, group.exploding, rng)
        total += sum(chain)
        if total > INT_MAX:
            raise ArithmeticOverflow(f"Dice total overflows: {group.notation}", group.notation)
        chains.append(tuple(chain))

    detail = ", ".join(_chain_text(list(c), group.sides, group.exploding) for c in chains)
    text = f"{group.notation} → [{detail}] = {total}"
    return ValueToken(value=total, text=text, rolls=tuple(chains))


def tokenize(text: str, rng: RandomSource, max_dice: int = DEFAULT_MAX_DICE) -> list[Token]:
    """
    Split a compacted arithmetic expression into tokens, rolling dice on the way.

    At most `max_dice` dice are rolled across all groups (explosions not counted).
    """
    tokens: list[Token] = []
    dice_count = 0
    pos = 0
    while pos < len(text):
        m = TOKEN_PATTERN.match(text, pos)
        if m is None:
            raise MalformedExpression(
                f"Unexpected character '{text[pos]}' at position {pos + 1}.", text[pos:]
            )
        fragment = m.group(0)

        if m.group("dice"):
            group = DiceGroup(
                count=parse_int(m.group("count"), fragment) if m.group("count") else 1,
                sides=parse_int(m.group("sides"), fragment),
                exploding=m.group("bang") is not None,
            )
            dice_count += group.count
            if dice_count > max_dice:
                raise InvalidDiceSpec(
                    f"Too many dice: {group.notation} (limit {max_dice} per roll).", fragment
                )
            tokens.append(roll_group(group, rng))
        elif m.group("num"):
            value = parse_int(m.group("num"), fragment)
            tokens.append(ValueToken(value=value, text=str(value)))
        else:
            tokens.append(OperatorToken(op=m.group("op")))

        pos = m.end()

    logger.debug("tokenize '%s': %d tokens", text, len(tokens))
    return tokens
