"""
Webhook notifier — posts every roll to an external listener.

Point this at a Discord webhook, any HTTP endpoint, or a netcat listener:

    # Terminal 1: start a listener
    nc -lk 9999

    # config.yaml:
    notifier:
      webhook_url: "tcp://localhost:9999"

HTTP endpoints receive a JSON body with an `embeds` list, which is what
Discord webhooks expect.

Delivery runs inline on the rolling thread, so a slow listener delays the
roll. Each network step is bounded (HTTP_TIMEOUT per httpx phase,
TCP_TIMEOUT per socket operation). If the endpoint is down, the
notification is logged and skipped; the roll still succeeds.
"""

import json
import logging
import socket
from datetime import datetime, timezone

import httpx

from rollbox.render import render_embed

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 2.0
TCP_TIMEOUT = 1.0


class RollNotifier:
    """Sends roll events to a webhook/netcat listener."""

    def __init__(self, webhook_url: str = ""):
        self.webhook_url = webhook_url.rstrip("/")
        self.enabled = bool(webhook_url)
        if self.enabled:
            logger.info("RollNotifier enabled: %s", self.webhook_url)

    def build_payload(self, record) -> dict:
        return {
            "ts": datetime.now(timezone.utc).isoformat(),
            "roll_id": record.roll_id,
            "expression": record.result.canonical,
            "rerolled_from": record.rerolled_from,
            "embeds": [render_embed(record.result, record.user)],
        }

    def notify(self, record):
        """Send the notification, logging and dropping any delivery failure."""
        if not self.enabled:
            return

        payload = self.build_payload(record)
        try:
            if self.webhook_url.startswith("http"):
                self._send_http(payload)
            else:
                self._send_tcp(payload)
        except Exception as e:
            logger.debug("Webhook notify failed (non-fatal): %s", e)

    def _send_http(self, payload: dict):
        """Send via HTTP POST."""
        resp = httpx.post(self.webhook_url, json=payload, timeout=HTTP_TIMEOUT)
        if resp.status_code >= 400:
            logger.debug("Webhook returned HTTP %d", resp.status_code)

    def _send_tcp(self, payload: dict):
        """Send raw JSON line via TCP (for netcat listeners)."""
        # Parse host:port from URL like "tcp://localhost:9999"
        addr = self.webhook_url.replace("tcp://", "")
        if ":" in addr:
            host, port = addr.rsplit(":", 1)
            port = int(port)
        else:
            host = addr
            port = 9999

        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.settimeout(TCP_TIMEOUT)
            sock.connect((host, port))
            sock.sendall((json.dumps(payload, ensure_ascii=False) + "\n").encode())
