"""Edit-mode autosave: save-status state machine and trailing-edge debouncer."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Optional

from clergy_roster.store.models import ClergyRecord


logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 1.5


class SaveStatus(str, Enum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class SaveEvent(str, Enum):
    EDIT_STARTED = "edit_started"
    CHANGED = "changed"
    WRITE_SUCCEEDED = "write_succeeded"
    WRITE_FAILED = "write_failed"
    RESET = "reset"


class InvalidTransition(Exception):
    """Event not accepted in the current save status."""


_ANY = tuple(SaveStatus)

# event -> (allowed source states, target state)
TRANSITIONS = {
    SaveEvent.EDIT_STARTED: (_ANY, SaveStatus.SAVED),
    SaveEvent.CHANGED: (_ANY, SaveStatus.SAVING),
    SaveEvent.WRITE_SUCCEEDED: ((SaveStatus.SAVING,), SaveStatus.SAVED),
    SaveEvent.WRITE_FAILED: ((SaveStatus.SAVING,), SaveStatus.ERROR),
    SaveEvent.RESET: (_ANY, SaveStatus.IDLE),
}


def transition(status: SaveStatus, event: SaveEvent) -> SaveStatus:
    sources, target = TRANSITIONS[event]
    if status not in sources:
        raise InvalidTransition(f"{event.value} not allowed from {status.value}")
    return target


class Debouncer:
    """Cancellable deferred task; only the last scheduled action runs.

    Cancelling stops a pending timer. An action that has already started
    runs to completion.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._fired = False
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done() and not self._fired

    def schedule(self, action: Callable[[], Awaitable[None]]):
        """Cancel any pending timer and start a new one. Needs a running loop."""
        self.cancel()
        self._fired = False
        self._task = asyncio.get_running_loop().create_task(self._run(action))
        self._running.add(self._task)
        self._task.add_done_callback(self._running.discard)

    def cancel(self):
        if self.pending:
            self._task.cancel()
        self._task = None

    async def _run(self, action: Callable[[], Awaitable[None]]):
        await asyncio.sleep(self.delay)
        self._fired = True
        await action()


class AutosaveSession:
    """Debounced background save for one record being edited.

    Writes run one at a time in edit order. Only the write of the latest
    edit moves the status out of SAVING.
    """

    def __init__(
        self,
        save: Callable[[ClergyRecord], Awaitable[None]],
        delay: float = DEFAULT_DELAY_SECONDS,
    ):
        self._save = save
        self._debouncer = Debouncer(delay)
        self._write_lock = asyncio.Lock()
        self._generation = 0
        self._skip_next = False
        self.status = SaveStatus.IDLE
        self._listeners: list[Callable[[SaveStatus], None]] = []

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def on_status(self, callback: Callable[[SaveStatus], None]):
        self._listeners.append(callback)

    def _fire(self, event: SaveEvent):
        self.status = transition(self.status, event)
        for callback in list(self._listeners):
            callback(self.status)

    def begin(self):
        """Enter edit mode; the next tracked snapshot is the initial load."""
        self._fire(SaveEvent.EDIT_STARTED)
        self._skip_next = True

    def track(self, snapshot: ClergyRecord) -> bool:
        """Record a form snapshot. Returns True when a save was scheduled."""
        if self._skip_next:
            self._skip_next = False
            return False
        self._generation += 1
        generation = self._generation
        self._fire(SaveEvent.CHANGED)
        self._debouncer.schedule(lambda: self._write(snapshot, generation))
        return True

    async def _write(self, snapshot: ClergyRecord, generation: int):
        async with self._write_lock:
            try:
                await self._save(snapshot)
            except Exception:
                logger.exception("Auto-save failed for %s", snapshot.id or "<unsaved>")
                outcome = SaveEvent.WRITE_FAILED
            else:
                outcome = SaveEvent.WRITE_SUCCEEDED
        # a newer edit exists; its write decides the status
        if generation != self._generation:
            return
        if self.status is SaveStatus.SAVING:
            self._fire(outcome)

    def close(self):
        """Teardown: cancel any pending timer."""
        self._debouncer.cancel()
        self._skip_next = False
