"""
STG Gate Concurrency Tests.

A close() racing an in-flight task must wait for the task and its audit
entries; no task may start after the window is logically closed.
"""
import threading

import pytest

from alive_stg.body.errors import GateViolation
from alive_stg.body.gate_runtime import GateRuntime
from alive_stg.core.gate_types import AuditEventType


def _open(runtime, clock):
    runtime.open(
        now=clock.now,
        expires_at=clock.now + 60_000,
        scope="exec",
        window_id="STG-CONC",
        cooldown_until=0,
    )


class TestCloseRace:

    def test_close_waits_for_in_flight_task(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        _open(runtime, fake_clock)
        task_started = threading.Event()
        release_task = threading.Event()

        def slow_task():
            task_started.set()
            release_task.wait(timeout=5)
            return "done"

        results = []
        worker = threading.Thread(target=lambda: results.append(runtime.run_gated(slow_task, "exec")))
        worker.start()
        assert task_started.wait(timeout=5)

        closer = threading.Thread(target=lambda: runtime.close(fake_clock.now))
        closer.start()
        closer.join(timeout=0.2)
        # close() is blocked behind the running task
        assert closer.is_alive()
        assert runtime.audit_log.last().type == AuditEventType.ACTION_START

        release_task.set()
        worker.join(timeout=5)
        closer.join(timeout=5)

        assert results == ["done"]
        types = [e.type for e in runtime.audit_log.read_all()]
        assert types == [
            AuditEventType.WINDOW_OPEN,
            AuditEventType.ACTION_START,
            AuditEventType.ACTION_END,
            AuditEventType.WINDOW_CLOSE,
        ]
        assert not runtime.get_state().is_open

    def test_no_execution_after_close(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        _open(runtime, fake_clock)
        runtime.close(fake_clock.now)
        executed = []
        errors = []

        def attempt():
            try:
                runtime.run_gated(lambda: executed.append(1), "exec")
            except GateViolation as e:
                errors.append(e)

        threads = [threading.Thread(target=attempt) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert executed == []
        assert len(errors) == 20
        assert runtime.audit_log.count(AuditEventType.VIOLATION) == 20


class TestParallelCallers:

    def test_start_end_pairs_never_interleave(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        _open(runtime, fake_clock)

        def worker():
            for _ in range(25):
                runtime.run_gated(lambda: None, "exec.worker")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        actions = [
            e.type for e in runtime.audit_log.read_all()
            if e.type in (AuditEventType.ACTION_START, AuditEventType.ACTION_END)
        ]
        assert len(actions) == 8 * 25 * 2
        assert actions == [AuditEventType.ACTION_START, AuditEventType.ACTION_END] * (8 * 25)

    def test_other_thread_is_not_reentrant(self, fake_clock):
        runtime = GateRuntime(clock=fake_clock)
        _open(runtime, fake_clock)
        results = []

        def task():
            # A different thread queues behind the lock instead of being refused
            t = threading.Thread(target=lambda: results.append(runtime.run_gated(lambda: "b", "exec")))
            t.start()
            return t

        thread = runtime.run_gated(task, "exec")
        thread.join(timeout=5)
        assert results == ["b"]
        assert runtime.audit_log.count(AuditEventType.VIOLATION) == 0


@pytest.mark.parametrize("n", [50])
def test_open_close_storm_keeps_invariant(fake_clock, n):
    runtime = GateRuntime(clock=fake_clock)
    violations = []

    def toggler():
        for i in range(n):
            _open(runtime, fake_clock)
            runtime.close(fake_clock.now)

    def checker():
        for _ in range(n * 4):
            state = runtime.get_state()
            if not state.is_open and (state.scope or state.window_id or state.expires_at):
                violations.append(state)

    threads = [threading.Thread(target=toggler), threading.Thread(target=checker)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert violations == []
