# trigger.py
from __future__ import annotations

import logging
from typing import Any

import requests

log = logging.getLogger(__name__)

TRIGGER_PATH = "/api/trigger-ai"


class TriggerError(RuntimeError):
    pass


class TriggerClient:
    """Calls the local proxy that fires the assignment workflow webhook."""

    def __init__(self, backend_url: str, *, timeout: float | None = None) -> None:
        self.backend_url = backend_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.backend_url}{TRIGGER_PATH}"

    def trigger(self) -> dict[str, Any]:
        """Return the proxy's success body or raise ``TriggerError``."""
        try:
            response = requests.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            log.error("Trigger proxy unreachable (%s): %s", self.url, exc)
            raise TriggerError(str(exc)) from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if not response.ok:
            message = body.get("message") or "Server error"
            if body.get("error"):
                message = f"{message}: {body['error']}"
            log.error("Trigger proxy returned %s: %s", response.status_code, body)
            raise TriggerError(str(message))
        return body
