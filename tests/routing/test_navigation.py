"""Tests for the navigation cursor and auto advance."""

import pytest

from indoornav.routing.models import Instruction, InstructionKind
from indoornav.routing.navigation import AutoAdvance, NavigationSession


def _instructions(count):
    kinds = [InstructionKind.START] + [InstructionKind.TRAVERSE] * (count - 2) + [
        InstructionKind.ARRIVE
    ]
    return [Instruction(kind=k, node_id=f"n{i}", floor=1) for i, k in enumerate(kinds)]


class FakeHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Records timers; ``fire`` runs the newest pending one."""

    def __init__(self):
        self.handles = []
        self.delays = []

    def call_later(self, delay, callback):
        handle = FakeHandle(callback)
        self.handles.append(handle)
        self.delays.append(delay)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def fire(self):
        handle = self.pending[-1]
        handle.cancelled = True
        handle.callback()


class TestNavigationSession:
    def test_cursor_bounds(self):
        session = NavigationSession(_instructions(3))

        assert session.position == 1
        assert session.next()
        assert session.next()
        assert session.position == 3
        assert not session.next()
        assert session.finished
        assert session.index == 2

    def test_previous_clamps_at_start(self):
        session = NavigationSession(_instructions(3))

        assert not session.previous()
        session.next()
        assert session.previous()
        assert session.index == 0

    def test_empty_session(self):
        session = NavigationSession([])

        assert session.finished
        assert session.current is None
        assert session.position == 0
        assert not session.next()

    def test_reset(self):
        session = NavigationSession(_instructions(2))
        session.next()
        session.next()

        session.reset()

        assert session.index == 0
        assert not session.finished


class TestAutoAdvance:
    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            AutoAdvance(FakeScheduler(), lambda i, s: None, delay=-1)

    def test_emits_every_instruction_then_finishes(self):
        scheduler = FakeScheduler()
        seen = []
        finished = []
        auto = AutoAdvance(
            scheduler,
            lambda instr, session: seen.append(instr.node_id),
            finished.append,
            delay=2.0,
        )
        session = NavigationSession(_instructions(3))

        auto.start(session)
        assert seen == ["n0"]
        assert auto.running

        scheduler.fire()
        scheduler.fire()
        assert seen == ["n0", "n1", "n2"]
        assert finished == []

        scheduler.fire()
        assert finished == [session]
        assert session.finished
        assert not auto.running
        assert scheduler.pending == []
        assert set(scheduler.delays) == {2.0}

    def test_at_most_one_timer_pending(self):
        scheduler = FakeScheduler()
        auto = AutoAdvance(scheduler, lambda i, s: None)

        auto.start(NavigationSession(_instructions(4)))
        scheduler.fire()

        assert len(scheduler.pending) == 1

    def test_restart_cancels_previous_timer(self):
        scheduler = FakeScheduler()
        seen = []
        auto = AutoAdvance(scheduler, lambda instr, session: seen.append(instr.node_id))

        auto.start(NavigationSession(_instructions(3)))
        first = scheduler.pending[0]
        auto.start(NavigationSession(_instructions(2)))

        assert first.cancelled
        assert len(scheduler.pending) == 1
        assert seen == ["n0", "n0"]

    def test_stop_is_idempotent(self):
        scheduler = FakeScheduler()
        finished = []
        auto = AutoAdvance(scheduler, lambda i, s: None, finished.append)
        auto.start(NavigationSession(_instructions(3)))

        auto.stop()
        auto.stop()

        assert scheduler.pending == []
        assert not auto.running
        assert finished == []

    def test_stale_tick_after_stop_is_ignored(self):
        scheduler = FakeScheduler()
        seen = []
        auto = AutoAdvance(scheduler, lambda instr, session: seen.append(instr.node_id))
        auto.start(NavigationSession(_instructions(3)))
        auto.stop()

        auto.tick()

        assert seen == ["n0"]

    def test_empty_session_finishes_immediately(self):
        scheduler = FakeScheduler()
        finished = []
        auto = AutoAdvance(scheduler, lambda i, s: None, finished.append)

        auto.start(NavigationSession([]))

        assert len(finished) == 1
        assert scheduler.handles == []

    def test_manual_step_during_auto_advance(self):
        scheduler = FakeScheduler()
        seen = []
        auto = AutoAdvance(scheduler, lambda instr, session: seen.append(instr.node_id))
        session = NavigationSession(_instructions(4))
        auto.start(session)

        session.next()
        scheduler.fire()

        assert seen == ["n0", "n2"]

    def test_restart_from_inside_callback_keeps_one_timer(self):
        scheduler = FakeScheduler()
        seen = []
        auto = None

        def on_instruction(instr, session):
            seen.append(instr.node_id)
            if instr.node_id == "n1" and len(seen) == 2:
                auto.start(NavigationSession(_instructions(3)))

        auto = AutoAdvance(scheduler, on_instruction)
        auto.start(NavigationSession(_instructions(3)))
        scheduler.fire()

        assert seen == ["n0", "n1", "n0"]
        assert len(scheduler.pending) == 1

    def test_stop_from_inside_callback_leaves_no_timer(self):
        scheduler = FakeScheduler()
        auto = None

        def on_instruction(instr, session):
            if instr.node_id == "n1":
                auto.stop()

        auto = AutoAdvance(scheduler, on_instruction)
        auto.start(NavigationSession(_instructions(3)))
        scheduler.fire()

        assert scheduler.pending == []
        assert not auto.running

    def test_stop_from_first_instruction(self):
        scheduler = FakeScheduler()
        auto = None

        def on_instruction(instr, session):
            auto.stop()

        auto = AutoAdvance(scheduler, on_instruction)
        auto.start(NavigationSession(_instructions(3)))

        assert scheduler.handles == []
        assert not auto.running
