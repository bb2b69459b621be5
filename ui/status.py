import streamlit as st

from views import OpState

from .components.tables import show_df
from .session import get_status_board

ALL_STATUSES = "All"


def render_status_tab() -> None:
    st.subheader("Project Overview")
    st.caption("Track the status, timeline, and assignees of all tasks.")
    board = get_status_board()
    if board is None:
        return

    head, refresh = st.columns([6, 1])
    head.markdown("#### Task Status Board")
    if refresh.button("🔄 Refresh", key="status_refresh"):
        with st.spinner("Loading data..."):
            board.list_tasks()

    last = board.ops.last("list")
    if last.state is OpState.FAILED:
        st.warning(last.message)

    counts = board.status_counts()
    for col, (status, n) in zip(st.columns(len(counts)), counts.items()):
        col.metric(status, n)

    f1, f2 = st.columns([1, 3])
    status = f1.selectbox("Status", [ALL_STATUSES, *counts.keys()], key="status_filter")
    query = f2.text_input("Search", placeholder="Task name, assignee or email", key="status_query")

    rows = board.filter_tasks(None if status == ALL_STATUSES else status, query)
    show_df(
        "",
        board.to_frame(rows),
        key="tasks",
        csv_name="tasks.csv",
        empty_text="No tasks found in database.",
    )
