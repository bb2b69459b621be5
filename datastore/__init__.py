"""Supabase-backed storage for the roster, backlog and task tables.

The dashboard never keeps rows locally beyond a view's last fetch; every
operation here is a direct call to the hosted store.
"""

from .client import StoreError, TableStore
from .schemas import (
    EXPECTED_TASKS_TABLE,
    MEMBERS_TABLE,
    TASKS_TABLE,
    ExpectedTaskRow,
    MemberRow,
    TaskRow,
)

__all__ = [
    "TableStore",
    "StoreError",
    "MemberRow",
    "ExpectedTaskRow",
    "TaskRow",
    "MEMBERS_TABLE",
    "EXPECTED_TASKS_TABLE",
    "TASKS_TABLE",
]
