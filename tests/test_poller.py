"""
Tests for the background saved search poller.
"""

from __future__ import annotations

import asyncio
import logging

import pytest

from app.modules.saved_searches import poller
from app.modules.saved_searches.matcher import SavedSearchChecker


class StopLoop(Exception):
    """Raised by the fake sleep to end the endless loop"""


class TestCheckAllSavedSearches:
    def test_runs_checker_with_service_client(self, supabase, monkeypatch) -> None:
        clients = []

        def check_all_users(checker) -> int:
            clients.append(checker.supabase)
            return 2

        monkeypatch.setattr(poller, "get_service_supabase", lambda: supabase)
        monkeypatch.setattr(SavedSearchChecker, "check_all_users", check_all_users)
        asyncio.run(poller.check_all_saved_searches())
        assert clients == [supabase]

    def test_checker_errors_are_logged(self, supabase, monkeypatch, caplog) -> None:
        def check_all_users(checker) -> int:
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(poller, "get_service_supabase", lambda: supabase)
        monkeypatch.setattr(SavedSearchChecker, "check_all_users", check_all_users)
        with caplog.at_level(logging.ERROR):
            asyncio.run(poller.check_all_saved_searches())
        assert "database unavailable" in caplog.text


class TestPollerLoop:
    def test_loop_continues_after_a_failed_pass(self, monkeypatch, caplog) -> None:
        sleeps = []
        passes = []

        async def fake_sleep(seconds) -> None:
            sleeps.append(seconds)
            if len(sleeps) > 2:
                raise StopLoop()

        async def flaky_pass() -> None:
            passes.append(len(passes) + 1)
            if len(passes) == 1:
                raise RuntimeError("first pass failed")

        monkeypatch.setattr(poller.settings, "saved_search_poll_minutes", 5)
        monkeypatch.setattr(poller.asyncio, "sleep", fake_sleep)
        monkeypatch.setattr(poller, "check_all_saved_searches", flaky_pass)

        with caplog.at_level(logging.ERROR), pytest.raises(StopLoop):
            asyncio.run(poller.saved_search_poller_loop())

        assert passes == [1, 2]
        assert sleeps == [300, 300, 300]
        assert "first pass failed" in caplog.text
