# ui/nav.py
from __future__ import annotations

import logging
from typing import Callable, Optional

RenderFn = Callable[[], None]

log = logging.getLogger(__name__)

# Optional imports that may fail; keep the app resilient
try:
    from ui.members import render_members_tab
except Exception:
    log.exception("Members tab failed to import")
    render_members_tab = None  # type: ignore

try:
    from ui.backlog import render_backlog_tab
except Exception:
    log.exception("Backlog tab failed to import")
    render_backlog_tab = None  # type: ignore

try:
    from ui.status import render_status_tab
except Exception:
    log.exception("Status tab failed to import")
    render_status_tab = None  # type: ignore

# Single source of truth for tabs: (label, route, render_fn)
TABS: list[tuple[str, str, Optional[RenderFn]]] = [
    ("👥 Members", "members", render_members_tab),
    ("🗂️ Assign Tasks", "tasks", render_backlog_tab),
    ("📊 Task Status", "status", render_status_tab),
]

__all__ = ["TABS"]
