import pytest
from unittest.mock import MagicMock
from modelcontainer.core.events import Signal

def test_signal_event():
    """Verify Signal behavior."""
    sig = Signal("test_signal")
    mock_handler = MagicMock()

    sig.connect(mock_handler)
    sig.emit("data", 123)

    mock_handler.assert_called_once_with("data", 123)

    sig.disconnect(mock_handler)
    sig.emit("data2")
    assert mock_handler.call_count == 1

def test_connect_is_idempotent():
    sig = Signal("dup")
    handler = MagicMock()

    sig.connect(handler)
    sig.connect(handler)
    sig.emit()

    assert handler.call_count == 1
    assert len(sig) == 1
    assert sig.is_connected(handler)

def test_disconnect_unknown_callback_is_noop():
    sig = Signal("noop")
    sig.disconnect(MagicMock())
    assert len(sig) == 0

def test_subscriber_error_does_not_block_others(log_messages):
    """Ensure error in one subscriber doesnt block others"""
    sig = Signal("err_evt")
    results = []

    def buggy_callback():
        raise ValueError("Bug")

    def worker_callback():
        results.append("ok")

    sig.connect(buggy_callback)
    sig.connect(worker_callback)

    sig.emit()

    assert results == ["ok"]
    assert any(level == "ERROR" and "Bug" in msg for level, msg in log_messages)

def test_subscriber_may_disconnect_during_emit():
    sig = Signal("self_removing")
    calls = []

    def once():
        calls.append("once")
        sig.disconnect(once)

    def always():
        calls.append("always")

    sig.connect(once)
    sig.connect(always)

    sig.emit()
    sig.emit()

    assert calls == ["once", "always", "always"]
