"""Row shapes for the three dashboard tables."""

from typing import Literal, Optional, TypedDict

MemberStatus = Literal["Active", "Inactive"]

MEMBERS_TABLE = "members"
EXPECTED_TASKS_TABLE = "expected_tasks"
TASKS_TABLE = "tasks"

MEMBER_STATUSES: tuple[MemberStatus, ...] = ("Active", "Inactive")
TASK_STATUSES = ("To Do", "In Progress", "Done")
DEFAULT_TASK_STATUS = "To Do"


class MemberRow(TypedDict, total=False):
    id: int
    full_name: str
    email: str
    skills: Optional[str]
    status: MemberStatus
    created_at: str


class ExpectedTaskRow(TypedDict, total=False):
    id: int
    description: str
    deadline: Optional[str]  # ISO timestamp or None
    note: Optional[str]
    created_at: str


class TaskRow(TypedDict, total=False):
    # written by the assignment workflow only
    id: int
    task_id: Optional[str]
    task_name: Optional[str]
    assignee: Optional[str]
    email: Optional[str]
    status: Optional[str]
    start: Optional[str]
    end: Optional[str]
    deadline: Optional[str]
    reasoning: Optional[str]
    reminder: Optional[str]
    time_h: Optional[str]
    created_at: str
    updated_at: Optional[str]
