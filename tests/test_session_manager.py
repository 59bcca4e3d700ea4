"""Tests for per-session calculators."""

import threading

import pytest

from session_manager import SessionManager


@pytest.fixture
def manager():
    return SessionManager(max_sessions=3)


def test_sessions_have_separate_calculators(manager):
    manager.deliver_keys("a", "7+")
    manager.deliver_keys("b", "9")
    assert manager.get_display("a") == "7"
    assert manager.get_display("b") == "9"
    assert manager.deliver_keys("a", "1=")["display"] == "8"


def test_deliver_reports_change(manager):
    result = manager.deliver("s", "5")
    assert result == {'display': "5", 'changed': True, 'rendered': ["5"], 'error': False}
    result = manager.deliver("s", "+")
    assert result['changed'] is False
    assert result['display'] == "5"


def test_deliver_keys_collects_renders(manager):
    result = manager.deliver_keys("s", "5 / 0 =")
    assert result['rendered'] == ["5", "0", "Error: Div by 0"]
    assert result['error'] is True


def test_deliver_accepts_token_lists(manager):
    result = manager.deliver_keys("s", ["1", "2", "multiply", "2", "calculate"])
    assert result['display'] == "24"


def test_unknown_token_rejected_before_delivery(manager):
    manager.deliver_keys("s", "12")
    with pytest.raises(ValueError):
        manager.deliver_keys("s", "3%")
    assert manager.get_display("s") == "12"


def test_callback_detached_after_delivery(manager):
    manager.deliver("s", "1")
    assert manager.get_calculator("s").on_display_changed is None


def test_least_recently_used_session_is_evicted(manager):
    for session_id in "abc":
        manager.deliver(session_id, "1")
    manager.get_calculator("a")
    manager.deliver("d", "4")
    assert len(manager) == 3
    assert "b" not in manager
    assert "a" in manager and "c" in manager and "d" in manager


def test_history_per_session(manager):
    manager.deliver_keys("a", "1+1=")
    history = manager.get_history("a")
    assert [(expr, result) for expr, result, _ in history] == [("1 + 1", "2")]
    assert manager.get_history("b") == []
    manager.clear_history("a")
    assert manager.get_history("a") == []


def test_new_session_ids_are_unique():
    ids = {SessionManager.new_session_id() for _ in range(50)}
    assert len(ids) == 50


def test_concurrent_deliveries_are_serialised(manager):
    def worker():
        for _ in range(50):
            manager.deliver_keys("shared", "+1")

    manager.deliver("shared", "0")
    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert manager.deliver("shared", "=")['display'] == "200"
