from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

import streamlit as st

from datastore import TableStore
from utils.config import ConfigurationError, Settings, load_settings
from views import MemberRoster, TaskBacklog, TaskStatusBoard, TriggerClient

log = logging.getLogger(__name__)

T = TypeVar("T")

# extra seconds on top of the proxy's own webhook timeout
PROXY_TIMEOUT_SLACK = 10.0

# seconds a sidebar connection check result is reused
CONNECTION_CHECK_TTL = 60


def _secrets() -> dict:
    try:
        return dict(st.secrets)
    except Exception as exc:  # no secrets.toml on this host
        log.debug("Streamlit secrets unavailable: %s", exc)
        return {}


def get_settings() -> Settings:
    return load_settings(_secrets())


@st.cache_resource(show_spinner=False)
def get_store() -> TableStore:
    """One store client per process, shared by every session and view."""
    return TableStore.from_settings(get_settings())


def _controller(key: str, factory: Callable[[], T], on_mount: Callable[[T], object]) -> T:
    ctrl = st.session_state.get(key)
    if ctrl is None:
        ctrl = factory()
        st.session_state[key] = ctrl
        on_mount(ctrl)
    return ctrl


def _store_or_error() -> Optional[TableStore]:
    try:
        return get_store()
    except ConfigurationError as exc:
        st.error(
            f"{exc}. Set SUPABASE_URL and SUPABASE_KEY (or [supabase] url/key in secrets.toml)."
        )
        return None


def get_roster() -> Optional[MemberRoster]:
    store = _store_or_error()
    if store is None:
        return None
    return _controller("roster", lambda: MemberRoster(store), MemberRoster.list_members)


def get_backlog() -> Optional[TaskBacklog]:
    store = _store_or_error()
    if store is None:
        return None
    settings = get_settings()

    def build() -> TaskBacklog:
        client = TriggerClient(
            settings.backend_url, timeout=settings.trigger_timeout + PROXY_TIMEOUT_SLACK
        )
        return TaskBacklog(store, client, refresh_delay=settings.refresh_delay)

    return _controller("backlog", build, TaskBacklog.list_backlog)


def get_status_board() -> Optional[TaskStatusBoard]:
    store = _store_or_error()
    if store is None:
        return None
    return _controller("status_board", lambda: TaskStatusBoard(store), TaskStatusBoard.list_tasks)


def flash(key: str, message: str, kind: str = "success") -> None:
    """Queue a message to show after the next rerun."""
    st.session_state[f"flash_{key}"] = (kind, message)


def show_flash(key: str) -> None:
    item = st.session_state.pop(f"flash_{key}", None)
    if not item:
        return
    kind, message = item
    getattr(st, kind, st.info)(message)


@st.cache_data(ttl=CONNECTION_CHECK_TTL, show_spinner=False)
def connection_ok(_store: TableStore) -> bool:
    """Live connection check, cached so widget reruns do not re-query it."""
    return _store.check_connection()


def render_connection_status() -> None:
    settings = get_settings()
    st.markdown("### Connection")
    if not settings.store_configured:
        st.error("Supabase not configured")
        return
    if st.button("Check again", key="connection_recheck"):
        connection_ok.clear()
    store = _store_or_error()
    if store is not None and connection_ok(store):
        st.success("Database connected")
    else:
        st.error("Database connection error (see logs)")
    st.caption(f"Backend proxy: {settings.backend_url}")
    with st.expander("Diagnostics"):
        st.json(settings.diagnostics())
