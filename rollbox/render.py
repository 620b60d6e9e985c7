"""
Rendering of roll results for chat surfaces.

render_text():  plain text block for the CLI and the HTTP `text` field
render_embed(): Discord-style embed dict used by the webhook notifier
"""

from datetime import datetime, timezone

from rollbox.dice import DiceError, RollKind, RollResult

EMBED_COLOUR = 0x5865F2


def _title(user: str | None) -> str:
    return f"🎲 Roll by {user}" if user else "🎲 Roll"


def _fields(result: RollResult) -> list[tuple[str, str, bool]]:
    """(name, value, inline) triples shared by the text and embed renderers."""
    if result.kind is RollKind.TABLETOP:
        return [
            ("Target", str(result.target), True),
            ("Rolls", "\n".join(result.roll_lines), False),
        ]
    return [
        ("Total", str(result.total), True),
        ("Details", result.breakdown if result.breakdown.strip() else "-", False),
    ]


def render_text(result: RollResult, user: str | None = None) -> str:
    lines = [_title(user)]
    for name, value, inline in _fields(result):
        if inline or "\n" not in value:
            lines.append(f"{name}: {value}")
        else:
            lines.append(f"{name}:")
            lines.extend(f"  {line}" for line in value.splitlines())
    lines.append(f"Expr: {result.canonical}")
    return "\n".join(lines)


def render_embed(result: RollResult, user: str | None = None) -> dict:
    return {
        "title": _title(user),
        "color": EMBED_COLOUR,
        "fields": [
            {"name": name, "value": value, "inline": inline}
            for name, value, inline in _fields(result)
        ],
        "footer": {"text": f"Expr: {result.canonical}"},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def render_error(error: DiceError) -> str:
    return f":warning: Invalid dice expression.\n`{error.message}`"
