from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

import pandas as pd

from datastore import TASKS_TABLE, StoreError, TableStore, TaskRow
from datastore.schemas import DEFAULT_TASK_STATUS, TASK_STATUSES
from utils.formatting import fmt_datetime, or_dash

from .state import OperationTracker, OpResult

log = logging.getLogger(__name__)

# (column label, row key)
DISPLAY_COLUMNS: list[tuple[str, str]] = [
    ("ID", "id"),
    ("Task Name", "task_name"),
    ("Assignee", "assignee"),
    ("Email", "email"),
    ("Status", "status"),
    ("Start", "start"),
    ("End", "end"),
    ("Deadline", "deadline"),
    ("Reasoning", "reasoning"),
]
DATE_KEYS = {"start", "end", "deadline"}
SEARCH_KEYS = ("task_name", "assignee", "email")


def task_status(row: TaskRow) -> str:
    return str(row.get("status") or DEFAULT_TASK_STATUS)


class TaskStatusBoard:
    """Read-only view over the ``tasks`` table written by the workflow."""

    def __init__(self, store: TableStore) -> None:
        self.store = store
        self.tasks: list[TaskRow] = []
        self.ops = OperationTracker("list")

    def list_tasks(self) -> OpResult:
        self.ops.start("list")
        try:
            rows = self.store.list(TASKS_TABLE)
        except StoreError as exc:
            log.error("Error fetching tasks: %s", exc)
            return self.ops.finish("list", OpResult.failure(f"Error fetching tasks: {exc}"))
        self.tasks = rows  # type: ignore[assignment]
        return self.ops.finish("list", OpResult.success())

    def filter_tasks(self, status: str | None = None, query: str | None = None) -> list[TaskRow]:
        needle = (query or "").strip().lower()
        out: list[TaskRow] = []
        for row in self.tasks:
            if status and task_status(row) != status:
                continue
            if needle and not any(needle in str(row.get(k) or "").lower() for k in SEARCH_KEYS):
                continue
            out.append(row)
        return out

    def status_counts(self) -> dict[str, int]:
        counts = Counter(task_status(row) for row in self.tasks)
        out = {status: counts.pop(status, 0) for status in TASK_STATUSES}
        # free-text statuses the workflow may invent
        out.update(sorted(counts.items()))
        return out

    @staticmethod
    def to_frame(rows: Iterable[TaskRow]) -> pd.DataFrame:
        records = []
        for row in rows:
            rec = {}
            for label, key in DISPLAY_COLUMNS:
                if key in DATE_KEYS:
                    rec[label] = fmt_datetime(row.get(key), seconds=True)
                elif key == "status":
                    rec[label] = task_status(row)
                elif key in ("assignee", "email"):
                    rec[label] = or_dash(row.get(key))
                else:
                    rec[label] = row.get(key)
            records.append(rec)
        return pd.DataFrame(records, columns=[label for label, _ in DISPLAY_COLUMNS])
