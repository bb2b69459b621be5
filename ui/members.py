from __future__ import annotations

import html

import streamlit as st

from datastore.schemas import MEMBER_STATUSES
from views import MemberDraft, MemberRoster, OpState

from .layout import badge
from .session import flash, get_roster, show_flash

PENDING_DELETE_KEY = "members_pending_delete"


def _render_add_form(roster: MemberRoster) -> None:
    v = roster.draft_version
    draft = roster.draft
    st.markdown("#### ➕ Add New Member")
    with st.form(f"member_form_{v}"):
        c1, c2, c3, c4 = st.columns(4)
        full_name = c1.text_input("Full Name", value=draft.full_name, key=f"member_name_{v}")
        email = c2.text_input("Email", value=draft.email, key=f"member_email_{v}")
        skills = c3.text_input(
            "Skills", value=draft.skills, placeholder="e.g. React, Node", key=f"member_skills_{v}"
        )
        status = c4.selectbox(
            "Status",
            MEMBER_STATUSES,
            index=MEMBER_STATUSES.index(draft.status),
            key=f"member_status_{v}",
        )
        submitted = st.form_submit_button("Add Member", type="primary")

    if not submitted:
        return
    result = roster.add_member(
        MemberDraft(full_name=full_name, email=email, skills=skills, status=status)
    )
    if result.ok:
        flash("members", result.message)
        st.rerun()
    else:
        st.error(result.message)


def _render_confirm(roster: MemberRoster) -> None:
    pending = st.session_state.get(PENDING_DELETE_KEY)
    if pending is None:
        return
    name = next((m.get("full_name") for m in roster.members if m.get("id") == pending), pending)
    st.warning(f"Are you sure you want to delete {name}?")
    c1, c2, _ = st.columns([1, 1, 6])
    if c1.button("Confirm delete", key="members_confirm_delete", type="primary"):
        st.session_state.pop(PENDING_DELETE_KEY, None)
        result = roster.remove_member(int(pending), confirmed=True)
        if result.ok:
            flash("members", result.message)
            st.rerun()
        st.error(result.message)
    if c2.button("Cancel", key="members_cancel_delete"):
        st.session_state.pop(PENDING_DELETE_KEY, None)
        st.rerun()


def _render_member_table(roster: MemberRoster) -> None:
    head, refresh = st.columns([6, 1])
    counts = roster.status_counts()
    head.markdown("#### Team Members")
    head.caption(f"{counts['Active']} active · {counts['Inactive']} inactive")
    if refresh.button("🔄 Refresh", key="members_refresh"):
        roster.list_members()

    last = roster.ops.last("list")
    if last.state is OpState.FAILED:
        st.warning(last.message)

    if not roster.members:
        st.info("No members found. Add one above.")
        return

    widths = [3, 3, 2, 1, 1]
    cols = st.columns(widths)
    for col, label in zip(cols, ["Name", "Email", "Skills", "Status", ""]):
        col.markdown(f"**{label}**")

    for member in roster.members:
        member_id = member.get("id")
        status = member.get("status") or "Active"
        cols = st.columns(widths)
        cols[0].write(member.get("full_name", ""))
        cols[1].write(member.get("email", ""))
        cols[2].markdown(
            badge(html.escape(member.get("skills") or "General"), "skill"), unsafe_allow_html=True
        )
        cols[3].markdown(
            badge(status, "active" if status == "Active" else "inactive"), unsafe_allow_html=True
        )
        if member_id is not None and cols[4].button("🗑️", key=f"member_del_{member_id}", help="Delete Member"):
            st.session_state[PENDING_DELETE_KEY] = member_id
            st.rerun()


def render_members_tab() -> None:
    st.subheader("Member Management")
    st.caption("Add or remove team members. These members will be available for AI assignment.")
    roster = get_roster()
    if roster is None:
        return

    show_flash("members")
    _render_add_form(roster)
    st.divider()
    _render_confirm(roster)
    _render_member_table(roster)
