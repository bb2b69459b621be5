# client.py
from __future__ import annotations

import logging
from typing import Any

from supabase import Client, create_client

from utils.config import ConfigurationError, Settings

from .schemas import MEMBERS_TABLE

log = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """A Supabase call failed; ``str(exc)`` is the store's own message."""


def _error_message(exc: BaseException) -> str:
    # postgrest APIError carries .message; everything else falls back to str()
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or type(exc).__name__


def _rows(response: Any) -> list[dict[str, Any]]:
    data = getattr(response, "data", response)
    if isinstance(data, dict) and "data" in data:
        data = data["data"]
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    return [dict(row) for row in data]


class TableStore:
    """Table-scoped list/insert/delete against the hosted Postgres (Supabase).

    Every call goes straight to the remote store: no retry, no transaction,
    no local cache.
    """

    def __init__(
        self,
        supabase_url: str | None = None,
        supabase_key: str | None = None,
        supabase_client: Client | None = None,
    ) -> None:
        self.supabase_url = supabase_url
        self.supabase_client: Client | Any = supabase_client
        if self.supabase_client is None:
            if not (supabase_url and supabase_key):
                raise ConfigurationError("Supabase configuration requires url+key")
            self.supabase_client = create_client(supabase_url, supabase_key)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TableStore":
        url, key = settings.require_store()
        return cls(url, key)

    def info(self) -> str:
        return f"TableStore(url={self.supabase_url or '<injected>'})"

    def _table(self, table: str):  # type: ignore[no-untyped-def]
        return self.supabase_client.table(table)

    def list(
        self,
        table: str,
        *,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> list[dict[str, Any]]:
        try:
            response = self._table(table).select("*").order(order_by, desc=descending).execute()
        except Exception as exc:
            log.error("Supabase select failed (table=%s)", table, exc_info=True)
            raise StoreError(_error_message(exc)) from exc
        return _rows(response)

    def insert(self, table: str, row: dict[str, Any]) -> list[dict[str, Any]]:
        try:
            response = self._table(table).insert(row).execute()
        except Exception as exc:
            log.error("Supabase insert failed (table=%s)", table, exc_info=True)
            raise StoreError(_error_message(exc)) from exc
        return _rows(response)

    def delete(self, table: str, row_id: int) -> None:
        try:
            self._table(table).delete().eq("id", row_id).execute()
        except Exception as exc:
            log.error("Supabase delete failed (table=%s, id=%s)", table, row_id, exc_info=True)
            raise StoreError(_error_message(exc)) from exc

    def count(self, table: str) -> int:
        try:
            response = self._table(table).select("*", count="exact", head=True).execute()
        except Exception as exc:
            log.error("Supabase count failed (table=%s)", table, exc_info=True)
            raise StoreError(_error_message(exc)) from exc
        count = getattr(response, "count", None)
        return int(count) if count is not None else len(_rows(response))

    def check_connection(self, table: str = MEMBERS_TABLE) -> bool:
        """True when a head/count query against ``table`` succeeds."""
        try:
            self.count(table)
        except StoreError as exc:
            log.error("Database connection error: %s", exc)
            return False
        return True
