from __future__ import annotations

from datetime import date, datetime, time

import streamlit as st

from views import OpState, TaskBacklog, TaskDraft
from utils.formatting import fmt_deadline, or_dash

from .session import flash, get_backlog, show_flash

PENDING_DELETE_KEY = "backlog_pending_delete"
SELECTION_EPOCH_KEY = "backlog_selection_epoch"


def _bump_selection_epoch() -> None:
    # checkbox keys carry the epoch so bulk selection changes re-seed their values
    epoch = st.session_state.get(SELECTION_EPOCH_KEY, 0)
    st.session_state[SELECTION_EPOCH_KEY] = epoch + 1


def combine_deadline(day: date | None, at: time | None) -> datetime | None:
    if day is None:
        return None
    return datetime.combine(day, at or time(0, 0))


def _render_add_form(backlog: TaskBacklog) -> None:
    v = backlog.draft_version
    draft = backlog.draft
    st.markdown("#### ➕ Create New Task")
    with st.form(f"task_form_{v}"):
        description = st.text_input(
            "Task Description",
            value=draft.description,
            placeholder="What needs to be done? (e.g., Design homepage UI)",
            key=f"task_desc_{v}",
        )
        c1, c2, c3 = st.columns([2, 1, 1])
        note = c1.text_input(
            "Note (Optional)", value=draft.note, placeholder="Extra details, context...", key=f"task_note_{v}"
        )
        day = c2.date_input("Deadline date", value=None, format="DD/MM/YYYY", key=f"task_day_{v}")
        at = c3.time_input("Deadline time", value=None, key=f"task_time_{v}")
        submitted = st.form_submit_button("Add to Backlog", type="primary")

    if not submitted:
        return
    if not description.strip():
        st.warning("Task description is required.")
        return
    with st.spinner("Saving..."):
        result = backlog.add_task(
            TaskDraft(description=description, deadline=combine_deadline(day, at) or "", note=note)
        )
    if result.ok:
        flash("backlog", result.message)
        st.rerun()
    else:
        st.error(result.message)


def _render_confirm(backlog: TaskBacklog) -> None:
    pending = st.session_state.get(PENDING_DELETE_KEY)
    if pending is None:
        return
    st.warning("Delete this expected task?")
    c1, c2, _ = st.columns([1, 1, 6])
    if c1.button("Confirm delete", key="backlog_confirm_delete", type="primary"):
        st.session_state.pop(PENDING_DELETE_KEY, None)
        result = backlog.remove_task(int(pending), confirmed=True)
        if result.ok:
            _bump_selection_epoch()
            flash("backlog", result.message)
            st.rerun()
        st.error(result.message)
    if c2.button("Cancel", key="backlog_cancel_delete"):
        st.session_state.pop(PENDING_DELETE_KEY, None)
        st.rerun()


def _render_backlog_table(backlog: TaskBacklog) -> None:
    head, select_all, refresh = st.columns([5, 1, 1])
    head.markdown("#### Task Backlog")
    head.caption(
        f"{len(backlog.tasks)} tasks waiting for assignment · {len(backlog.selected)} selected"
    )
    label = "☑ Clear all" if backlog.all_selected() else "☐ Select all"
    if select_all.button(label, key="backlog_select_all", disabled=not backlog.tasks):
        backlog.toggle_select_all()
        _bump_selection_epoch()
        st.rerun()
    if refresh.button("🔄 Refresh", key="backlog_refresh"):
        backlog.list_backlog()

    last = backlog.ops.last("list")
    if last.state is OpState.FAILED:
        st.warning(last.message)

    if not backlog.tasks:
        st.info("No tasks in backlog.")
        return

    epoch = st.session_state.get(SELECTION_EPOCH_KEY, 0)
    widths = [0.5, 4, 3, 2, 0.7]
    cols = st.columns(widths)
    for col, text in zip(cols, ["", "Description", "Note", "Deadline", ""]):
        col.markdown(f"**{text}**")

    for task in backlog.tasks:
        task_id = task.get("id")
        if task_id is None:
            continue
        cols = st.columns(widths)
        cols[0].checkbox(
            "select",
            value=task_id in backlog.selected,
            key=f"backlog_sel_{task_id}_{epoch}",
            on_change=backlog.toggle_select,
            args=(task_id,),
            label_visibility="collapsed",
        )
        cols[1].write(task.get("description", ""))
        cols[2].caption(or_dash(task.get("note")))
        cols[3].write(f"📅 {fmt_deadline(task.get('deadline'))}")
        if cols[4].button("🗑️", key=f"backlog_del_{task_id}", help="Delete task"):
            st.session_state[PENDING_DELETE_KEY] = task_id
            st.rerun()


def _finish_pending_refresh(backlog: TaskBacklog) -> None:
    with st.spinner("Waiting for the workflow before refreshing the backlog..."):
        backlog.complete_pending_refresh()
    _bump_selection_epoch()


def _render_trigger(backlog: TaskBacklog) -> None:
    left, right = st.columns([4, 1])
    left.caption("System will assign all tasks in backlog (selection is not sent to the workflow).")
    right.button(
        "🧠 Auto-Assign All",
        key="backlog_trigger",
        type="primary",
        on_click=backlog.request_trigger,
        disabled=backlog.ops.in_flight("trigger"),
    )
    if not backlog.trigger_requested:
        return

    with st.spinner("Starting..."):
        result = backlog.trigger_assignment()
    if not result.ok:
        st.error(result.message)
        return

    st.success(result.message)
    _finish_pending_refresh(backlog)
    flash("backlog", result.message)
    st.rerun()


def render_backlog_tab() -> None:
    st.subheader("AI Task Assignment")
    st.caption('Draft tasks and click "Auto-Assign All" to let the AI Agent distribute the work.')
    backlog = get_backlog()
    if backlog is None:
        return

    # a rerun can cut the trigger run short before its refresh
    if backlog.refresh_pending:
        _finish_pending_refresh(backlog)
    show_flash("backlog")
    _render_add_form(backlog)
    st.divider()
    _render_confirm(backlog)
    _render_backlog_table(backlog)
    st.divider()
    _render_trigger(backlog)
