"""
FastAPI application — the RollBox HTTP surface.

A chat bot (or anything else) posts expressions here and renders what
comes back. Rolls are remembered so they can be rerolled by id.

    POST   /api/v1/roll                      {"expression": "3d6+2", "user": "ann"}
    POST   /api/v1/rolls/{roll_id}/reroll    {"user": "bob"}
    GET    /api/v1/rolls/{roll_id}
    DELETE /api/v1/rolls/{roll_id}
    GET    /api/v1/config
    GET    /health
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from rollbox import __version__
from rollbox.config import get_config
from rollbox.dice import DiceError
from rollbox.service import RollService


# ---------------------------------------------------------------------------
# Globals — initialized at startup
# ---------------------------------------------------------------------------
roll_service: RollService | None = None


def _setup_logging(cfg: dict):
    log_cfg = cfg.get("logging", {})
    level = getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO)
    log_file = log_cfg.get("file")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        from pathlib import Path
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    global roll_service

    cfg = get_config()
    _setup_logging(cfg)
    logger = logging.getLogger(__name__)

    roll_service = RollService.from_config(cfg)

    logger.info(
        "RollBox started — listening on %s:%s",
        cfg["server"]["host"],
        cfg["server"]["port"],
    )
    logger.info("Roll memory: %d entries max", roll_service.memory.max_entries)
    logger.info("Notifier: %s", roll_service.notifier.webhook_url or "disabled")

    yield

    logger.info("RollBox shutting down")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="RollBox",
    description="Dice notation engine and roll service.",
    version=__version__,
    lifespan=lifespan,
)


async def _json_body(request: Request) -> dict | None:
    try:
        body = await request.json()
    except Exception:
        return None
    return body if isinstance(body, dict) else None


def _dice_error(e: DiceError) -> JSONResponse:
    return JSONResponse(e.to_dict(), status_code=400)


@app.get("/health")
async def health():
    return JSONResponse({"status": "ok", "version": __version__})


@app.get("/api/v1/config")
async def api_config():
    cfg = get_config()
    return JSONResponse({
        "server": cfg.get("server", {}),
        "dice": cfg.get("dice", {}),
        "memory": cfg.get("memory", {}),
        "notifier": {"enabled": bool(roll_service and roll_service.notifier.enabled)},
    })


@app.post("/api/v1/roll")
async def api_roll(request: Request):
    body = await _json_body(request)
    if body is None:
        return JSONResponse({"error": "invalid JSON"}, status_code=400)

    expression = body.get("expression")
    if not isinstance(expression, str):
        return JSONResponse({"error": "expression must be a string"}, status_code=400)
    user = str(body.get("user") or "")

    try:
        record = await run_in_threadpool(roll_service.roll, expression, user)
    except DiceError as e:
        return _dice_error(e)
    return JSONResponse(record.to_dict())


@app.post("/api/v1/rolls/{roll_id}/reroll")
async def api_reroll(roll_id: str, request: Request):
    body = await _json_body(request) or {}
    user = str(body.get("user") or "")

    try:
        record = await run_in_threadpool(roll_service.reroll, roll_id, user)
    except DiceError as e:
        return _dice_error(e)
    if record is None:
        return JSONResponse({"error": "unknown roll", "roll_id": roll_id}, status_code=404)
    return JSONResponse(record.to_dict())


@app.get("/api/v1/rolls/{roll_id}")
async def api_get_roll(roll_id: str):
    stored = roll_service.memory.get(roll_id)
    if stored is None:
        return JSONResponse({"error": "unknown roll", "roll_id": roll_id}, status_code=404)
    return JSONResponse({
        "roll_id": roll_id,
        "expression": stored.expression,
        "user": stored.user,
        "created_at": datetime.fromtimestamp(stored.created_at, timezone.utc).isoformat(),
    })


@app.delete("/api/v1/rolls/{roll_id}")
async def api_forget_roll(roll_id: str):
    return JSONResponse({"removed": roll_service.forget(roll_id)})
