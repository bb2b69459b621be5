from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from datastore import EXPECTED_TASKS_TABLE, ExpectedTaskRow, StoreError, TableStore
from utils.config import DEFAULT_REFRESH_DELAY

from .state import OperationTracker, OpResult, OpState
from .trigger import TriggerClient, TriggerError

log = logging.getLogger(__name__)

TRIGGER_OK_MESSAGE = "Request sent to the assignment workflow successfully!"


def _blank_to_none(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


@dataclass(slots=True)
class TaskDraft:
    description: str = ""
    deadline: Any = ""  # "" / None / ISO string / datetime
    note: str = ""

    def to_row(self) -> dict[str, Any]:
        deadline = _blank_to_none(self.deadline)
        if hasattr(deadline, "isoformat"):
            deadline = deadline.isoformat()
        return {
            "description": self.description.strip(),
            "deadline": deadline,
            "note": _blank_to_none(self.note),
        }


class TaskBacklog:
    """Controller for the ``expected_tasks`` backlog and the assignment trigger.

    Selection is local to the session. The trigger always covers the whole
    backlog: selected ids are never sent to the workflow.
    """

    def __init__(
        self,
        store: TableStore,
        trigger_client: TriggerClient,
        *,
        refresh_delay: float = DEFAULT_REFRESH_DELAY,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.store = store
        self.trigger_client = trigger_client
        self.refresh_delay = refresh_delay
        self._clock = clock
        self._sleep = sleep

        self.tasks: list[ExpectedTaskRow] = []
        self.selected: set[int] = set()
        self.draft = TaskDraft()
        self.draft_version = 0
        self.refresh_due_at: float | None = None
        self._trigger_requested = False
        self.ops = OperationTracker("list", "add", "remove", "trigger")

    # ---------------- Fetch / mutations ----------------
    def list_backlog(self) -> OpResult:
        self.ops.start("list")
        try:
            rows = self.store.list(EXPECTED_TASKS_TABLE)
        except StoreError as exc:
            log.warning("Error fetching backlog: %s", exc)
            return self.ops.finish("list", OpResult.failure(f"Error fetching backlog: {exc}"))
        self.tasks = rows  # type: ignore[assignment]
        return self.ops.finish("list", OpResult.success())

    def add_task(self, draft: TaskDraft | None = None) -> OpResult:
        if draft is not None:
            self.draft = draft
        if not self.draft.description.strip():
            return OpResult.idle()

        self.ops.start("add")
        try:
            self.store.insert(EXPECTED_TASKS_TABLE, self.draft.to_row())
        except StoreError as exc:
            return self.ops.finish("add", OpResult.failure(f"Error adding task: {exc}"))

        self.draft = TaskDraft()
        self.draft_version += 1
        self.list_backlog()
        return self.ops.finish("add", OpResult.success("Task added to backlog."))

    def remove_task(self, task_id: int, *, confirmed: bool = False) -> OpResult:
        if not confirmed:
            return OpResult.idle()
        self.ops.start("remove")
        try:
            self.store.delete(EXPECTED_TASKS_TABLE, task_id)
        except StoreError as exc:
            return self.ops.finish("remove", OpResult.failure(f"Error deleting task: {exc}"))
        self.list_backlog()
        self.selected.discard(task_id)
        return self.ops.finish("remove", OpResult.success("Task removed."))

    # ---------------- Selection ----------------
    def toggle_select(self, task_id: int) -> None:
        if task_id in self.selected:
            self.selected.discard(task_id)
        else:
            self.selected.add(task_id)

    def all_selected(self) -> bool:
        ids = self.task_ids()
        return bool(ids) and ids <= self.selected

    def toggle_select_all(self) -> None:
        if self.all_selected():
            self.selected = set()
        else:
            self.selected = self.task_ids()

    def task_ids(self) -> set[int]:
        return {int(t["id"]) for t in self.tasks if t.get("id") is not None}

    def selected_tasks(self) -> list[ExpectedTaskRow]:
        return [t for t in self.tasks if t.get("id") in self.selected]

    # ---------------- Assignment trigger ----------------
    @property
    def trigger_requested(self) -> bool:
        return self._trigger_requested

    def request_trigger(self) -> bool:
        """Mark the trigger in flight ahead of the call.

        Meant for a button callback: the rerun that performs the call already
        sees ``IN_FLIGHT`` and renders the button disabled.
        """
        if self.ops.in_flight("trigger"):
            return False
        self.ops.start("trigger")
        self._trigger_requested = True
        return True

    def trigger_assignment(self) -> OpResult:
        if self._trigger_requested:
            self._trigger_requested = False
        elif self.ops.in_flight("trigger"):
            return OpResult(OpState.IN_FLIGHT, "Assignment request already in progress.")
        else:
            self.ops.start("trigger")

        result = OpResult.failure("Failed to trigger: request did not complete")
        try:
            self.trigger_client.trigger()
            self.refresh_due_at = self._clock() + self.refresh_delay
            result = OpResult.success(TRIGGER_OK_MESSAGE)
        except TriggerError as exc:
            result = OpResult.failure(f"Failed to trigger: {exc}")
        finally:
            self.ops.finish("trigger", result)
        return result

    @property
    def refresh_pending(self) -> bool:
        return self.refresh_due_at is not None

    def complete_pending_refresh(self) -> OpResult:
        """Wait out the post-trigger delay, then refetch and clear selection."""
        if self.refresh_due_at is None:
            return OpResult.idle()
        remaining = self.refresh_due_at - self._clock()
        if remaining > 0:
            self._sleep(remaining)
        self.refresh_due_at = None
        result = self.list_backlog()
        self.selected = set()
        return result
