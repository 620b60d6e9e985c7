"""Tests for percentile skill-test scoring."""

import pytest

from rollbox.dice.classifier import classify
from rollbox.dice.errors import InvalidDiceSpec
from rollbox.dice.tabletop import evaluate_test, is_doubles, score_roll


class TestDoubles:
    @pytest.mark.parametrize("raw", [11, 22, 55, 99])
    def test_doubles(self, raw):
        assert is_doubles(raw)

    @pytest.mark.parametrize("raw", [1, 5, 10, 12, 90, 100])
    def test_not_doubles(self, raw):
        assert not is_doubles(raw)


class TestScoreRoll:
    def test_roll_equal_to_target_succeeds(self):
        out = score_roll(50, 50, 100)
        assert out.succeeded
        assert out.success_level == 0
        assert out.tag == "Success"
        assert out.render() == "50 → SL +0 (Success)"

    def test_plain_success_level(self):
        out = score_roll(23, 57, 100)
        assert out.succeeded
        assert out.success_level == 3
        assert not out.critical_success
        assert out.render() == "23 → SL +3 (Success)"

    def test_plain_failure(self):
        out = score_roll(68, 45, 100)
        assert not out.succeeded
        assert out.success_level == -2
        assert out.render() == "68 → SL -2 (Fail)"

    def test_failure_never_has_positive_sl(self):
        # same tens digit: tens arithmetic alone gives 0, and 0 stays 0
        out = score_roll(57, 52, 100)
        assert not out.succeeded
        assert out.success_level == 0
        assert out.render() == "57 → SL +0 (Fail)"

    def test_failure_sl_is_negated(self):
        # tens(8) - tens(40) = -4
        out = score_roll(40, 8, 100)
        assert out.success_level == -4

    def test_auto_critical_success_ignores_target(self):
        out = score_roll(3, 1, 100)
        assert out.succeeded
        assert out.critical_success
        assert out.tag == "CRIT SUCCESS"

    def test_auto_critical_success_keeps_base_sl(self):
        out = score_roll(3, 50, 100)
        assert out.render() == "3 → SL +5 (CRIT SUCCESS)"

    def test_auto_critical_failure_ignores_target(self):
        out = score_roll(98, 100, 100)
        assert not out.succeeded
        assert out.critical_failure
        assert out.tag == "CRIT FAIL"
        # SL comes from the base comparison, which succeeded
        assert out.success_level == 1

    def test_hundred_is_critical_failure(self):
        out = score_roll(100, 100, 100)
        assert out.critical_failure
        assert out.render() == "100 → SL +0 (CRIT FAIL)"

    def test_doubles_under_target_is_critical_success(self):
        out = score_roll(33, 50, 100)
        assert out.critical_success
        assert out.render() == "33 → SL +2 (CRIT SUCCESS)"

    def test_doubles_over_target_is_critical_failure(self):
        out = score_roll(77, 50, 100)
        assert out.critical_failure
        assert out.render() == "77 → SL -2 (CRIT FAIL)"

    def test_auto_and_doubles_are_exclusive(self):
        out = score_roll(99, 100, 100)
        assert out.critical_failure
        assert not out.critical_success

    def test_no_auto_critical_off_d100(self):
        out = score_roll(3, 2, 20)
        assert not out.succeeded
        assert not out.critical_success
        assert out.tag == "Fail"

    def test_doubles_apply_off_d100(self):
        out = score_roll(11, 15, 20)
        assert out.critical_success


class TestEvaluateTest:
    def test_one_outcome_per_die_in_order(self, rolls):
        rng = rolls(3, 50, 77)
        result = evaluate_test(classify("3d100w50"), rng)
        assert result.target == 50
        assert [o.raw for o in result.outcomes] == [3, 50, 77]
        assert result.roll_lines == [
            "3 → SL +5 (CRIT SUCCESS)",
            "50 → SL +0 (Success)",
            "77 → SL -2 (CRIT FAIL)",
        ]
        assert rng.calls == [(1, 100)] * 3

    def test_modified_target_is_reported(self, rolls):
        result = evaluate_test(classify("d100w50+10"), rolls(58))
        assert result.target == 60
        assert result.outcomes[0].succeeded

    def test_exploding_flag_has_no_effect(self, rolls):
        rng = rolls(100)
        result = evaluate_test(classify("d100!!w50"), rng)
        assert len(result.outcomes) == 1
        assert len(rng.calls) == 1
        assert result.outcomes[0].critical_failure

    def test_uses_declared_sides(self, rolls):
        rng = rolls(7, 12)
        evaluate_test(classify("2d20w10"), rng)
        assert rng.calls == [(1, 20), (1, 20)]

    def test_too_many_dice_rejected_before_rolling(self, rolls):
        rng = rolls()
        with pytest.raises(InvalidDiceSpec) as exc:
            evaluate_test(classify("2147483647d100w50"), rng, max_dice=1000)
        assert exc.value.fragment == "2147483647d100w50"
        assert rng.calls == []

    def test_dice_at_limit_allowed(self, rolls):
        result = evaluate_test(classify("3d100w50"), rolls(10, 20, 30), max_dice=3)
        assert len(result.outcomes) == 3
