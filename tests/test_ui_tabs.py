from datetime import date, time

import pytest

import ui.backlog as backlog_ui
import ui.members as members_ui
import ui.session as session
import ui.status as status_ui
from ui.components import tables
from datastore import TASKS_TABLE, TableStore
from views import MemberDraft, MemberRoster, TaskBacklog, TaskDraft, TaskStatusBoard

from tests.fakes import FakeClock, FakeStreamlit, FakeSupabaseClient, FakeTriggerClient, RerunRequested


def _patch_st(monkeypatch, fake, *modules):
    for mod in (session, *modules):
        monkeypatch.setattr(mod, "st", fake)


def test_members_add_form_inserts_and_reruns(monkeypatch, store):
    roster = MemberRoster(store)
    fake = FakeStreamlit(
        pressed={"Add Member"},
        inputs={"member_name_0": "Ada Lovelace", "member_email_0": "ada@example.com"},
    )
    _patch_st(monkeypatch, fake, members_ui)
    monkeypatch.setattr(members_ui, "get_roster", lambda: roster)

    with pytest.raises(RerunRequested):
        members_ui.render_members_tab()

    assert roster.members[0]["full_name"] == "Ada Lovelace"
    assert fake.session_state["flash_members"] == ("success", "Member added.")


def test_members_add_failure_shows_error(monkeypatch, store, fake_client):
    fake_client.fail["insert"] = "duplicate key"
    roster = MemberRoster(store)
    fake = FakeStreamlit(
        pressed={"Add Member"},
        inputs={"member_name_0": "Ada", "member_email_0": "ada@example.com"},
    )
    _patch_st(monkeypatch, fake, members_ui)
    monkeypatch.setattr(members_ui, "get_roster", lambda: roster)

    members_ui.render_members_tab()

    assert "Error adding member: duplicate key" in fake.messages("error")
    assert roster.draft.full_name == "Ada"


def test_members_delete_goes_through_confirmation(monkeypatch, store):
    roster = MemberRoster(store)
    roster.add_member(MemberDraft(full_name="Ada", email="ada@example.com"))
    member_id = roster.members[0]["id"]

    fake = FakeStreamlit(pressed={f"member_del_{member_id}"})
    _patch_st(monkeypatch, fake, members_ui)
    monkeypatch.setattr(members_ui, "get_roster", lambda: roster)
    with pytest.raises(RerunRequested):
        members_ui.render_members_tab()
    assert fake.session_state[members_ui.PENDING_DELETE_KEY] == member_id
    assert roster.members  # nothing deleted yet

    fake.pressed = {"members_confirm_delete"}
    with pytest.raises(RerunRequested):
        members_ui.render_members_tab()
    assert roster.members == []


def test_backlog_trigger_failure_keeps_selection(monkeypatch, store):
    backlog = TaskBacklog(store, FakeTriggerClient(error="Server error"))
    backlog.add_task(TaskDraft(description="A"))
    backlog.toggle_select_all()

    fake = FakeStreamlit(pressed={"backlog_trigger"})
    _patch_st(monkeypatch, fake, backlog_ui)
    monkeypatch.setattr(backlog_ui, "get_backlog", lambda: backlog)

    backlog_ui.render_backlog_tab()

    assert "Failed to trigger: Server error" in fake.messages("error")
    assert backlog.selected == {1}


def test_backlog_trigger_success_refreshes_and_clears(monkeypatch, store):
    clock = FakeClock()
    trigger = FakeTriggerClient()
    backlog = TaskBacklog(store, trigger, refresh_delay=3, clock=clock, sleep=clock.sleep)
    backlog.add_task(TaskDraft(description="A"))
    backlog.toggle_select_all()

    fake = FakeStreamlit(pressed={"backlog_trigger"})
    _patch_st(monkeypatch, fake, backlog_ui)
    monkeypatch.setattr(backlog_ui, "get_backlog", lambda: backlog)

    with pytest.raises(RerunRequested):
        backlog_ui.render_backlog_tab()

    assert trigger.calls == 1
    assert clock.slept == [3]
    assert backlog.selected == set()
    assert fake.session_state[backlog_ui.SELECTION_EPOCH_KEY] == 1


def test_backlog_form_sends_combined_deadline(monkeypatch, store, fake_client):
    backlog = TaskBacklog(store, FakeTriggerClient())
    fake = FakeStreamlit(
        pressed={"Add to Backlog"},
        inputs={
            "task_desc_0": "Design homepage",
            "task_day_0": date(2024, 6, 1),
            "task_time_0": time(14, 0),
        },
    )
    _patch_st(monkeypatch, fake, backlog_ui)
    monkeypatch.setattr(backlog_ui, "get_backlog", lambda: backlog)

    with pytest.raises(RerunRequested):
        backlog_ui.render_backlog_tab()

    assert fake_client.inserts("expected_tasks") == [
        {"description": "Design homepage", "deadline": "2024-06-01T14:00:00", "note": None}
    ]


def test_backlog_form_requires_description(monkeypatch, store, fake_client):
    backlog = TaskBacklog(store, FakeTriggerClient())
    fake = FakeStreamlit(pressed={"Add to Backlog"})
    _patch_st(monkeypatch, fake, backlog_ui)
    monkeypatch.setattr(backlog_ui, "get_backlog", lambda: backlog)

    backlog_ui.render_backlog_tab()

    assert "Task description is required." in fake.messages("warning")
    assert fake_client.inserts("expected_tasks") == []


def test_combine_deadline():
    assert backlog_ui.combine_deadline(None, time(9, 0)) is None
    assert backlog_ui.combine_deadline(date(2024, 1, 2), None).isoformat() == "2024-01-02T00:00:00"


def test_status_tab_applies_filters(monkeypatch):
    client = FakeSupabaseClient(
        {TASKS_TABLE: [
            {"id": 1, "task_name": "A", "status": "Done", "created_at": "2024-01-01"},
            {"id": 2, "task_name": "B", "status": "In Progress", "created_at": "2024-01-02"},
        ]}
    )
    board = TaskStatusBoard(TableStore(supabase_client=client))
    board.list_tasks()

    fake = FakeStreamlit(inputs={"status_filter": "Done"})
    _patch_st(monkeypatch, fake, status_ui, tables)
    monkeypatch.setattr(status_ui, "get_status_board", lambda: board)

    status_ui.render_status_tab()

    frames = [args[0] for name, args, _ in fake.calls if name == "dataframe"]
    assert len(frames) == 1
    assert list(frames[0]["ID"]) == [1]


def test_tabs_stop_when_store_missing(monkeypatch):
    fake = FakeStreamlit()
    _patch_st(monkeypatch, fake, status_ui)
    monkeypatch.setattr(status_ui, "get_status_board", lambda: None)
    status_ui.render_status_tab()
    assert not any(name == "dataframe" for name, *_ in fake.calls)


class _InFlightSpy(FakeTriggerClient):
    def __init__(self) -> None:
        super().__init__()
        self.backlog = None
        self.seen_in_flight: list[bool] = []

    def trigger(self) -> dict:
        self.seen_in_flight.append(self.backlog.ops.in_flight("trigger"))
        return super().trigger()


def test_backlog_trigger_button_disabled_while_request_runs(monkeypatch, store):
    spy = _InFlightSpy()
    backlog = TaskBacklog(store, spy, refresh_delay=0)
    spy.backlog = backlog
    backlog.add_task(TaskDraft(description="A"))
    # the button callback ran before this rerun
    backlog.request_trigger()

    # a second click lands on the disabled button
    fake = FakeStreamlit(pressed={"backlog_trigger"})
    _patch_st(monkeypatch, fake, backlog_ui)
    monkeypatch.setattr(backlog_ui, "get_backlog", lambda: backlog)

    with pytest.raises(RerunRequested):
        backlog_ui.render_backlog_tab()

    button = [kw for name, _, kw in fake.calls if name == "button" and kw["key"] == "backlog_trigger"]
    assert button[0]["disabled"] is True
    assert spy.calls == 1
    assert spy.seen_in_flight == [True]
    assert not backlog.ops.in_flight("trigger")


def test_backlog_rerun_finishes_interrupted_refresh(monkeypatch, store, fake_client):
    clock = FakeClock()
    backlog = TaskBacklog(store, FakeTriggerClient(), refresh_delay=3, clock=clock, sleep=clock.sleep)
    backlog.add_task(TaskDraft(description="A"))
    backlog.toggle_select_all()
    assert backlog.trigger_assignment().ok
    selects_before = sum(1 for op, *_ in fake_client.calls if op == "select")
    clock.now += 10

    fake = FakeStreamlit()
    _patch_st(monkeypatch, fake, backlog_ui)
    monkeypatch.setattr(backlog_ui, "get_backlog", lambda: backlog)

    backlog_ui.render_backlog_tab()

    assert not backlog.refresh_pending
    assert backlog.selected == set()
    assert clock.slept == []
    assert sum(1 for op, *_ in fake_client.calls if op == "select") == selects_before + 1
    assert fake.session_state[backlog_ui.SELECTION_EPOCH_KEY] == 1


def test_backlog_row_without_deadline_says_so(monkeypatch, store):
    backlog = TaskBacklog(store, FakeTriggerClient())
    backlog.add_task(TaskDraft(description="A"))

    fake = FakeStreamlit()
    _patch_st(monkeypatch, fake, backlog_ui)
    monkeypatch.setattr(backlog_ui, "get_backlog", lambda: backlog)

    backlog_ui.render_backlog_tab()

    assert "📅 No Deadline" in fake.messages("write")
