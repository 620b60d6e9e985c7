"""
Roll service — what a chat command or HTTP call actually runs.

roll()    evaluates an expression, remembers it under a fresh roll id and
          announces it to the notifier
reroll()  re-executes a remembered expression; anyone may reroll, and the
          new roll is tracked in turn
forget()  drops a remembered expression (the posted message went away)
"""

import logging
import time
import uuid
from dataclasses import dataclass

from rollbox.dice import DEFAULT_MAX_DICE, DiceEngine, DiceError, MalformedExpression, RollResult
from rollbox.notifier import RollNotifier
from rollbox.render import render_text
from rollbox.roll_memory import RollMemory, StoredRoll

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RollRecord:
    roll_id: str
    user: str
    result: RollResult
    rerolled_from: str | None = None

    @property
    def text(self) -> str:
        return render_text(self.result, self.user)

    def to_dict(self) -> dict:
        data = {"roll_id": self.roll_id, "user": self.user, "rerolled_from": self.rerolled_from}
        data.update(self.result.to_dict())
        data["text"] = self.text
        return data


class RollService:
    def __init__(
        self,
        engine: DiceEngine | None = None,
        memory: RollMemory | None = None,
        notifier: RollNotifier | None = None,
        max_expression_length: int = 200,
    ):
        self.engine = engine or DiceEngine()
        self.memory = memory if memory is not None else RollMemory()
        self.notifier = notifier or RollNotifier()
        self.max_expression_length = max_expression_length

    @classmethod
    def from_config(cls, cfg: dict) -> "RollService":
        dice_cfg = cfg.get("dice", {})
        return cls(
            engine=DiceEngine(max_dice=dice_cfg.get("max_dice", DEFAULT_MAX_DICE)),
            memory=RollMemory(cfg.get("memory", {}).get("max_entries", 1000)),
            notifier=RollNotifier(cfg.get("notifier", {}).get("webhook_url", "") or ""),
            max_expression_length=dice_cfg.get("max_expression_length", 200),
        )

    def _evaluate(self, expression: str, user: str) -> RollResult:
        if isinstance(expression, str) and len(expression) > self.max_expression_length:
            raise MalformedExpression(
                f"Expression longer than {self.max_expression_length} characters.",
                expression[:32],
            )
        start = time.monotonic()
        try:
            result = self.engine.evaluate(expression)
        except DiceError as e:
            logger.warning("[Dice] eval failed by:%s expr:'%s' (%s: %s)", user, expression, e.kind.value, e)
            raise
        logger.debug("[Dice] evaluated '%s' in %.2fms", expression, (time.monotonic() - start) * 1000)
        return result

    def _track(self, result: RollResult, user: str, rerolled_from: str | None = None) -> RollRecord:
        record = RollRecord(
            roll_id=uuid.uuid4().hex,
            user=user,
            result=result,
            rerolled_from=rerolled_from,
        )
        self.memory.store(record.roll_id, StoredRoll(expression=result.canonical, user=user))
        self.notifier.notify(record)
        return record

    def roll(self, expression: str, user: str = "") -> RollRecord:
        """Evaluate and track a roll. DiceError propagates to the caller."""
        logger.info("[Dice] roll by:%s expr:'%s'", user or "-", expression)
        result = self._evaluate(expression, user)
        return self._track(result, user)

    def reroll(self, roll_id: str, user: str = "") -> RollRecord | None:
        """Re-run a remembered roll. Returns None if the id is unknown."""
        stored = self.memory.get(roll_id)
        if stored is None:
            logger.debug("[Dice] reroll of unknown roll %s", roll_id)
            return None
        logger.info("[Dice] reroll by:%s of:%s expr:'%s'", user or "-", roll_id, stored.expression)
        result = self._evaluate(stored.expression, user)
        return self._track(result, user, rerolled_from=roll_id)

    def forget(self, roll_id: str) -> bool:
        return self.memory.remove(roll_id)
