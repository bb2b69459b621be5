# config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

log = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "http://localhost:3001"
DEFAULT_WEBHOOK_URL = "https://n8n.nhathung.fun/webhook-test/task-assignment"
DEFAULT_BACKEND_HOST = "127.0.0.1"
DEFAULT_BACKEND_PORT = 3001
DEFAULT_TRIGGER_TIMEOUT = 120.0
DEFAULT_REFRESH_DELAY = 3.0


class ConfigurationError(RuntimeError):
    pass


def _coerce_secrets_dict(obj: Any) -> dict[str, Any]:
    if obj is None:
        return {}
    if isinstance(obj, dict):
        return dict(obj)
    try:
        return dict(obj)
    except (TypeError, ValueError):
        return {}


def _as_float(value: Any, default: float, name: str) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        log.warning("Ignoring invalid %s=%r; using %s", name, value, default)
        return default


def _as_int(value: Any, default: int, name: str) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        log.warning("Ignoring invalid %s=%r; using %s", name, value, default)
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    supabase_url: str | None
    supabase_key: str | None
    backend_url: str = DEFAULT_BACKEND_URL
    webhook_url: str = DEFAULT_WEBHOOK_URL
    backend_host: str = DEFAULT_BACKEND_HOST
    backend_port: int = DEFAULT_BACKEND_PORT
    trigger_timeout: float = DEFAULT_TRIGGER_TIMEOUT
    refresh_delay: float = DEFAULT_REFRESH_DELAY

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def require_store(self) -> tuple[str, str]:
        if not (self.supabase_url and self.supabase_key):
            raise ConfigurationError("Supabase configuration requires url+key")
        return self.supabase_url, self.supabase_key

    def diagnostics(self) -> dict[str, Any]:
        return {
            "supabase_url": self.supabase_url,
            "supabase_key": "***" if self.supabase_key else None,
            "backend_url": self.backend_url,
            "webhook_url": self.webhook_url,
            "trigger_timeout": self.trigger_timeout,
            "refresh_delay": self.refresh_delay,
        }


def load_settings(
    secrets: Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Settings:
    """Resolve settings from overrides, then env, then Streamlit secrets.

    ``secrets`` is the ``st.secrets`` mapping (or any dict shaped like it)
    with optional ``[supabase]`` and ``[backend]`` tables.
    """
    root = _coerce_secrets_dict(secrets)
    sb = _coerce_secrets_dict(root.get("supabase"))
    be = _coerce_secrets_dict(root.get("backend"))

    def pick(name: str, env: str, table: dict[str, Any], key: str) -> Any:
        value = overrides.get(name)
        if value is not None:
            return value
        env_value = os.getenv(env)
        if env_value:
            return env_value
        return table.get(key)

    url = pick("supabase_url", "SUPABASE_URL", sb, "url")
    key = pick("supabase_key", "SUPABASE_KEY", sb, "key")
    backend_url = pick("backend_url", "BACKEND_URL", be, "url") or DEFAULT_BACKEND_URL
    webhook_url = pick("webhook_url", "N8N_WEBHOOK", be, "webhook") or DEFAULT_WEBHOOK_URL
    host = pick("backend_host", "BACKEND_HOST", be, "host") or DEFAULT_BACKEND_HOST

    return Settings(
        supabase_url=url or None,
        supabase_key=key or None,
        backend_url=str(backend_url).rstrip("/"),
        webhook_url=str(webhook_url),
        backend_host=str(host),
        backend_port=_as_int(
            pick("backend_port", "BACKEND_PORT", be, "port"), DEFAULT_BACKEND_PORT, "BACKEND_PORT"
        ),
        trigger_timeout=_as_float(
            pick("trigger_timeout", "TRIGGER_TIMEOUT", be, "timeout"),
            DEFAULT_TRIGGER_TIMEOUT,
            "TRIGGER_TIMEOUT",
        ),
        refresh_delay=_as_float(
            pick("refresh_delay", "REFRESH_DELAY", be, "refresh_delay"),
            DEFAULT_REFRESH_DELAY,
            "REFRESH_DELAY",
        ),
    )


__all__ = ["ConfigurationError", "Settings", "load_settings"]
