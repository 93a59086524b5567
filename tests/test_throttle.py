"""Tests for DiagnosticThrottle."""

import threading

import pytest

from overlay_opcodes.resolver.throttle import DiagnosticThrottle, DEFAULT_CEILING


def test_default_ceiling_is_three():
    assert DEFAULT_CEILING == 3
    assert DiagnosticThrottle().ceiling == 3


def test_emits_up_to_ceiling_then_silent(list_logger):
    logger, handler = list_logger
    throttle = DiagnosticThrottle(logger, ceiling=3)
    results = [throttle.try_emit(f"failure {i}") for i in range(10)]
    assert results == [True] * 3 + [False] * 7
    assert handler.messages == ["failure 0", "failure 1", "failure 2"]
    assert all(r.levelname == "ERROR" for r in handler.records)


def test_remaining_floors_at_zero(list_logger):
    logger, _ = list_logger
    throttle = DiagnosticThrottle(logger, ceiling=2)
    for _ in range(5):
        throttle.try_emit("x")
    assert throttle.remaining == 0
    assert throttle.emitted == 2


def test_zero_ceiling_never_emits(list_logger):
    logger, handler = list_logger
    throttle = DiagnosticThrottle(logger, ceiling=0)
    assert throttle.try_emit("x") is False
    assert handler.records == []


def test_negative_ceiling_rejected():
    with pytest.raises(ValueError):
        DiagnosticThrottle(ceiling=-1)


def test_fresh_instance_has_fresh_budget(list_logger):
    logger, handler = list_logger
    first = DiagnosticThrottle(logger, ceiling=1)
    first.try_emit("a")
    first.try_emit("b")
    second = DiagnosticThrottle(logger, ceiling=1)
    assert second.try_emit("c") is True
    assert handler.messages == ["a", "c"]


def test_concurrent_emits_respect_ceiling(list_logger):
    logger, handler = list_logger
    throttle = DiagnosticThrottle(logger, ceiling=3)
    start = threading.Barrier(16)
    accepted = []
    accepted_lock = threading.Lock()

    def worker(n):
        start.wait()
        for i in range(50):
            if throttle.try_emit(f"t{n}-{i}"):
                with accepted_lock:
                    accepted.append(n)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(accepted) == 3
    assert len(handler.records) == 3
    assert throttle.remaining == 0
