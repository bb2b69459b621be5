"""
Trigger proxy for the assignment workflow.

One route, ``GET /api/trigger-ai``, forwards a bodiless GET to the workflow
webhook so the browser never talks to the workflow host directly.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from utils.config import Settings, load_settings

log = logging.getLogger(__name__)

SUCCESS_MESSAGE = "AI Agent triggered successfully"
FAILURE_MESSAGE = "Failed to trigger AI Agent"


class TriggerResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    webhook: str


def _upstream_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def call_webhook(url: str, timeout: float) -> Any:
    """Single GET to the webhook; raises ``requests.RequestException`` on any failure."""
    response = requests.get(url, timeout=timeout)
    log.info("Webhook response status: %s", response.status_code)
    response.raise_for_status()
    body = _upstream_body(response)
    log.info("Webhook response data: %s", body)
    return body


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="AI TaskForce trigger proxy")
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/trigger-ai", responses={500: {"model": TriggerResponse}})
    def trigger_ai():
        cfg: Settings = app.state.settings
        log.info("--- TRIGGERING AI AGENT --- target=%s", cfg.webhook_url)
        try:
            data = call_webhook(cfg.webhook_url, cfg.trigger_timeout)
        except requests.RequestException as exc:
            log.error("Error calling webhook: %s", exc)
            body = TriggerResponse(success=False, message=FAILURE_MESSAGE, error=str(exc))
            return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
        body = TriggerResponse(success=True, message=SUCCESS_MESSAGE, data=data)
        return JSONResponse(status_code=200, content=body.model_dump(exclude={"error"}))

    @app.get("/api/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", webhook=app.state.settings.webhook_url)

    return app
