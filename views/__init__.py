"""Session-side controllers for the three dashboard views.

Controllers hold fetched rows, drafts, selection and per-operation state;
``ui/`` binds them to Streamlit widgets.
"""

from .backlog import TaskBacklog, TaskDraft
from .members import MemberDraft, MemberRoster
from .state import OperationTracker, OpResult, OpState
from .status import TaskStatusBoard
from .trigger import TriggerClient, TriggerError

__all__ = [
    "MemberRoster",
    "MemberDraft",
    "TaskBacklog",
    "TaskDraft",
    "TaskStatusBoard",
    "TriggerClient",
    "TriggerError",
    "OpState",
    "OpResult",
    "OperationTracker",
]
