#!/usr/bin/env python3
"""
RollBox CLI — roll dice from the shell or run the roll service.

Every command has a short name and standard aliases:

    NAME            ALIASES             WHAT IT DOES
    ----            -------             ----------------------------------
    roll            r                   Evaluate a dice expression locally
    serve           dial, start, up     Start the RollBox HTTP service
    ring            status, ping        Ping a running instance
    flash           info, config        Show the effective configuration
    tone            banner              Print the RollBox banner

Examples:
    rollbox roll 3d6+2
    rollbox r "2d100w45+10" --user ann
    rollbox roll "1d8!! - 1" --json
"""

import argparse
import json
import sys

from rollbox import __version__

BANNER = r"""
    ╔══════════════════════════════════════════════╗
    ║                                              ║
    ║   ┌─────┐  ┌─────┐                           ║
    ║   │ ●   │  │ ● ● │    R O L L B O X          ║
    ║   │  ●  │  │     │                           ║
    ║   │   ● │  │ ● ● │    Roll it. Read it.      ║
    ║   └─────┘  └─────┘    Roll it again.         ║
    ║                                              ║
    ║   v""" + __version__.ljust(42) + r"""║
    ╚══════════════════════════════════════════════╝
"""


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_roll(args) -> int:
    """Evaluate an expression with the secure RNG and print the result."""
    from rollbox.config import get_config
    from rollbox.dice import DEFAULT_MAX_DICE, DiceError, evaluate
    from rollbox.render import render_error, render_text

    expression = " ".join(args.expression)
    max_dice = get_config()["dice"].get("max_dice", DEFAULT_MAX_DICE)
    try:
        result = evaluate(expression, max_dice=max_dice)
    except DiceError as e:
        if args.json:
            print(json.dumps(e.to_dict(), ensure_ascii=False))
        else:
            print(render_error(e), file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(render_text(result, args.user))
    return 0


def cmd_serve(args) -> int:
    """Start the RollBox HTTP service."""
    import uvicorn
    from rollbox.config import get_config

    cfg = get_config()
    host = args.host or cfg["server"]["host"]
    port = args.port or cfg["server"]["port"]

    print(BANNER)
    print(f"  Listening on {host}:{port}")
    print(f"  Webhook: {cfg['notifier'].get('webhook_url') or 'disabled'}")
    print()

    uvicorn.run(
        "rollbox.main:app",
        host=host,
        port=port,
        reload=args.reload,
        log_level="info",
    )
    return 0


def cmd_ring(args) -> int:
    """Ping a running RollBox instance."""
    import httpx
    from rollbox.config import get_config

    cfg = get_config()
    url = args.url or f"http://{cfg['server']['host']}:{cfg['server']['port']}"
    try:
        resp = httpx.get(f"{url}/health", timeout=5)
    except httpx.ConnectError:
        print(f"  ✗  Nothing at {url}")
        return 1
    except httpx.HTTPError as e:
        print(f"  ✗  Error: {e}")
        return 1

    if resp.status_code != 200:
        print(f"  ✗  No answer — got HTTP {resp.status_code}")
        return 1
    data = resp.json()
    print(f"  🎲 {url} is UP (v{data.get('version', '?')})")
    return 0


def cmd_flash(args) -> int:
    """Show the effective configuration."""
    from rollbox.config import get_config

    cfg = get_config()
    print(BANNER)
    print("  Configuration")
    print(f"  ├─ Server:     {cfg['server']['host']}:{cfg['server']['port']}")
    print(f"  ├─ Max expr:   {cfg['dice']['max_expression_length']} chars")
    print(f"  ├─ Max dice:   {cfg['dice'].get('max_dice', '-')} per roll")
    print(f"  ├─ Memory:     {cfg['memory']['max_entries']} rolls")
    print(f"  ├─ Webhook:    {cfg['notifier'].get('webhook_url') or 'disabled'}")
    print(f"  └─ Logging:    {cfg['logging'].get('level', 'INFO')}"
          f"{' → ' + cfg['logging']['file'] if cfg['logging'].get('file') else ''}")
    return 0


def cmd_tone(args) -> int:
    """Print the banner."""
    print(BANNER)
    return 0


# ---------------------------------------------------------------------------
# Parser with aliases
# ---------------------------------------------------------------------------

def _add_command(subparsers, names, help_text, func, setup_fn=None):
    """Register a command under multiple names."""
    p = subparsers.add_parser(names[0], help=help_text, aliases=names[1:])
    p.set_defaults(func=func)
    if setup_fn:
        setup_fn(p)
    return p


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rollbox",
        description="RollBox — dice notation engine and roll service.",
        epilog=(
            "Arithmetic: 3d6+2, 1d8!!-1, 2d6*3-4 (no parentheses).\n"
            "Percentile tests: d100w50, 3d100w45+10.\n"
            "Run 'rollbox <command> --help' for command-specific options."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V", action="version",
        version=f"rollbox {__version__}",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    # roll / r
    def setup_roll(p):
        p.add_argument("expression", nargs="+", help="Dice expression (spaces allowed)")
        p.add_argument("--user", "-u", default=None, help="Name shown in the result header")
        p.add_argument("--json", action="store_true", help="Print the result as JSON")

    _add_command(sub, ["roll", "r"], "Evaluate a dice expression", cmd_roll, setup_roll)

    # serve / dial / start / up
    def setup_serve(p):
        p.add_argument("--host", default=None, help="Override listen host")
        p.add_argument("--port", "-p", type=int, default=None, help="Override listen port")
        p.add_argument("--reload", action="store_true", help="Auto-reload on code changes (dev)")

    _add_command(sub, ["serve", "dial", "start", "up"],
                 "Start the RollBox HTTP service", cmd_serve, setup_serve)

    # ring / status / ping
    def setup_ring(p):
        p.add_argument("--url", default=None, help="RollBox URL (default: from config)")

    _add_command(sub, ["ring", "status", "ping"],
                 "Ping a running RollBox instance", cmd_ring, setup_ring)

    # flash / info / config
    _add_command(sub, ["flash", "info", "config"],
                 "Show the effective configuration", cmd_flash)

    # tone / banner
    _add_command(sub, ["tone", "banner"], "Print the RollBox banner", cmd_tone)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        cmd_tone(args)
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
