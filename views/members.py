from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass

from datastore import MEMBERS_TABLE, MemberRow, StoreError, TableStore
from datastore.schemas import MEMBER_STATUSES, MemberStatus

from .state import OperationTracker, OpResult

log = logging.getLogger(__name__)


@dataclass(slots=True)
class MemberDraft:
    full_name: str = ""
    email: str = ""
    skills: str = ""
    status: MemberStatus = "Active"

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.full_name.strip():
            missing.append("full_name")
        if not self.email.strip():
            missing.append("email")
        return missing

    def to_row(self) -> dict:
        row = asdict(self)
        row["full_name"] = self.full_name.strip()
        row["email"] = self.email.strip()
        row["skills"] = self.skills.strip()
        return row


class MemberRoster:
    """Controller for the ``members`` table view."""

    def __init__(self, store: TableStore) -> None:
        self.store = store
        self.members: list[MemberRow] = []
        self.draft = MemberDraft()
        self.draft_version = 0
        self.ops = OperationTracker("list", "add", "remove")

    def list_members(self) -> OpResult:
        self.ops.start("list")
        try:
            rows = self.store.list(MEMBERS_TABLE)
        except StoreError as exc:
            # keep whatever we showed last
            log.warning("Error fetching members: %s", exc)
            return self.ops.finish("list", OpResult.failure(f"Error fetching members: {exc}"))
        self.members = rows  # type: ignore[assignment]
        return self.ops.finish("list", OpResult.success())

    def add_member(self, draft: MemberDraft | None = None) -> OpResult:
        if draft is not None:
            self.draft = draft
        missing = self.draft.missing_fields()
        if missing:
            return self.ops.finish(
                "add", OpResult.failure(f"Missing required field(s): {', '.join(missing)}")
            )
        if self.draft.status not in MEMBER_STATUSES:
            return self.ops.finish("add", OpResult.failure(f"Unknown status: {self.draft.status}"))

        self.ops.start("add")
        try:
            self.store.insert(MEMBERS_TABLE, self.draft.to_row())
        except StoreError as exc:
            return self.ops.finish("add", OpResult.failure(f"Error adding member: {exc}"))

        self.clear_draft()
        self.list_members()
        return self.ops.finish("add", OpResult.success("Member added."))

    def remove_member(self, member_id: int, *, confirmed: bool = False) -> OpResult:
        if not confirmed:
            return OpResult.idle()
        self.ops.start("remove")
        try:
            self.store.delete(MEMBERS_TABLE, member_id)
        except StoreError as exc:
            return self.ops.finish("remove", OpResult.failure(f"Error deleting member: {exc}"))
        self.list_members()
        return self.ops.finish("remove", OpResult.success("Member removed."))

    def clear_draft(self) -> None:
        self.draft = MemberDraft()
        self.draft_version += 1

    def status_counts(self) -> dict[str, int]:
        counts = Counter(str(m.get("status") or "Active") for m in self.members)
        return {status: counts.get(status, 0) for status in MEMBER_STATUSES}
