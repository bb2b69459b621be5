from __future__ import annotations

import pytest

from datastore import TableStore

from .fakes import FakeClock, FakeSupabaseClient, FakeTriggerClient


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "SUPABASE_URL",
        "SUPABASE_KEY",
        "BACKEND_URL",
        "N8N_WEBHOOK",
        "BACKEND_HOST",
        "BACKEND_PORT",
        "TRIGGER_TIMEOUT",
        "REFRESH_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def store(fake_client) -> TableStore:
    return TableStore(supabase_client=fake_client)


@pytest.fixture
def trigger_client() -> FakeTriggerClient:
    return FakeTriggerClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
