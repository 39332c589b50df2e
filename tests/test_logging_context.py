"""Tests for logging context propagation."""

from nagios_notify.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


def setup_function():
    clear_log_context()


def test_push_and_pop():
    token = push_log_context(target_host="web01")
    assert get_log_context() == {"target_host": "web01"}

    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context_managers_merge_and_restore():
    with log_context(target_host="web01"):
        with log_context(target_service="nginx"):
            assert get_log_context() == {"target_host": "web01", "target_service": "nginx"}
        assert get_log_context() == {"target_host": "web01"}
    assert get_log_context() == {}


def test_context_restored_after_exception():
    try:
        with log_context(target_host="web01"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert get_log_context() == {}


def test_get_log_context_returns_copy():
    with log_context(target_host="web01"):
        snapshot = get_log_context()
        snapshot["target_host"] = "changed"
        assert get_log_context()["target_host"] == "web01"
