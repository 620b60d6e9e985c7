"""Tests for text and embed rendering."""

from rollbox.dice import MalformedExpression, evaluate
from rollbox.render import EMBED_COLOUR, render_embed, render_error, render_text


class TestRenderText:
    def test_arithmetic(self, rolls):
        text = render_text(evaluate("2d6+1", rolls(3, 4)), "ann")
        assert text.splitlines() == [
            "🎲 Roll by ann",
            "Total: 8",
            "Details: 2d6 → [3, 4] = 7 + 1",
            "Expr: 2d6+1",
        ]

    def test_tabletop(self, rolls):
        text = render_text(evaluate("2d100w50", rolls(22, 61)))
        assert text.splitlines() == [
            "🎲 Roll",
            "Target: 50",
            "Rolls:",
            "  22 → SL +3 (CRIT SUCCESS)",
            "  61 → SL -1 (Fail)",
            "Expr: 2d100w50",
        ]

    def test_single_tabletop_roll_stays_inline(self, rolls):
        text = render_text(evaluate("d100w40", rolls(12)))
        assert "Rolls: 12 → SL +3 (Success)" in text


class TestRenderEmbed:
    def test_embed_fields(self, rolls):
        embed = render_embed(evaluate("3d100w45+10", rolls(1, 50, 99)), "bob")
        assert embed["title"] == "🎲 Roll by bob"
        assert embed["color"] == EMBED_COLOUR
        assert embed["footer"]["text"] == "Expr: 3d100w45+10"
        names = [f["name"] for f in embed["fields"]]
        assert names == ["Target", "Rolls"]
        assert embed["fields"][0]["value"] == "55"
        assert embed["fields"][1]["value"].count("\n") == 2
        assert "timestamp" in embed

    def test_arithmetic_embed(self):
        embed = render_embed(evaluate("4*5"))
        assert embed["fields"][0] == {"name": "Total", "value": "20", "inline": True}


def test_render_error():
    msg = render_error(MalformedExpression("Empty expression."))
    assert "Invalid dice expression" in msg
    assert "Empty expression." in msg
