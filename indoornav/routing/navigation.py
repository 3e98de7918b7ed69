"""Narration cursor and timer-driven auto advance.

The core never owns a timer. ``AutoAdvance`` asks an external scheduler
for one (anything with ``call_later(delay, callback)`` returning a handle
with ``cancel()``, such as an asyncio event loop) and keeps at most one
pending at a time.
"""

import logging
from typing import Callable, Protocol, Sequence

from .models import Instruction

logger = logging.getLogger(__name__)

DEFAULT_ADVANCE_DELAY = 2.0  # seconds


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class NavigationSession:
    """An instruction list with a bounds-checked cursor."""

    def __init__(self, instructions: Sequence[Instruction]):
        self.instructions = list(instructions)
        self.index = 0
        self.finished = not self.instructions

    @property
    def total(self) -> int:
        return len(self.instructions)

    @property
    def position(self) -> int:
        """1-based position of the cursor, 0 when empty."""
        return self.index + 1 if self.instructions else 0

    @property
    def current(self) -> Instruction | None:
        if not self.instructions:
            return None
        return self.instructions[self.index]

    def next(self) -> bool:
        """Move forward one step.

        Returns:
            True if the cursor moved. Stepping past the last instruction
            marks the session finished and returns False.
        """
        if self.finished:
            return False
        if self.index < self.total - 1:
            self.index += 1
            return True
        self.finished = True
        return False

    def previous(self) -> bool:
        """Move back one step; the cursor stays at 0 at the start."""
        if self.index > 0:
            self.index -= 1
            return True
        return False

    def reset(self) -> None:
        self.index = 0
        self.finished = not self.instructions


class AutoAdvance:
    """Advances a navigation session on a fixed delay."""

    def __init__(
        self,
        scheduler: Scheduler,
        on_instruction: Callable[[Instruction, NavigationSession], None],
        on_finished: Callable[[NavigationSession], None] | None = None,
        delay: float = DEFAULT_ADVANCE_DELAY,
    ):
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.scheduler = scheduler
        self.on_instruction = on_instruction
        self.on_finished = on_finished
        self.delay = delay
        self.session: NavigationSession | None = None
        self._handle: TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self.session is not None

    def start(self, session: NavigationSession) -> None:
        """Start narrating a session from its first instruction.

        Any timer left from a previous session is cancelled first.
        """
        self._cancel()
        self.session = session
        session.reset()
        if session.current is None:
            self._finish()
            return
        self._emit(session)

    def tick(self) -> None:
        """Advance one step and forward the new instruction."""
        self._handle = None
        session = self.session
        if session is None:
            return
        if session.next():
            self._emit(session)
        else:
            self._finish()

    def stop(self) -> None:
        """Cancel narration immediately; safe to call repeatedly."""
        self._cancel()
        self.session = None

    def _finish(self) -> None:
        session = self.session
        self.stop()
        logger.debug("Navigation finished")
        if self.on_finished is not None and session is not None:
            self.on_finished(session)

    def _emit(self, session: NavigationSession) -> None:
        self.on_instruction(session.current, session)
        # the callback may have restarted or stopped narration
        if self.session is session:
            self._schedule()

    def _schedule(self) -> None:
        self._cancel()
        self._handle = self.scheduler.call_later(self.delay, self.tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
