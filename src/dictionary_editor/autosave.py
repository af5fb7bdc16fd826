"""Debounced autosave of the entry being edited.

Mutations rearm a quiet-period timer; when it fires the snapshot current at
that moment is sent to the persistence collaborator under the lemma of the
last successful save. The outcome drives a :class:`SaveStatus` indicator that
falls back to ``idle`` after a short display period.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from dictionary_editor.models import EntrySnapshot, SaveStatus
from dictionary_editor.store import StoreChange

logger = logging.getLogger(__name__)

SaveFunction = Callable[[str, EntrySnapshot], Awaitable[bool]]
SnapshotProvider = Callable[[], EntrySnapshot]
StatusListener = Callable[[SaveStatus], None]


@dataclass(slots=True)
class AutoSaveConfig:
    """Timing of the autosave cycle, in seconds."""

    quiet_period: float = 2.0
    saved_display: float = 2.0
    error_display: float = 3.0


class ScheduledTask:
    """A cancellable single-shot callback on the event loop."""

    def __init__(
        self,
        delay: float,
        callback: Callable[[], None],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._callback = callback
        self._fired = False
        self._cancelled = False
        event_loop = loop or asyncio.get_running_loop()
        self._handle = event_loop.call_later(max(0.0, delay), self._run)

    def _run(self) -> None:
        self._fired = True
        self._callback()

    @property
    def pending(self) -> bool:
        return not (self._fired or self._cancelled)

    def cancel(self) -> None:
        if self.pending:
            self._cancelled = True
            self._handle.cancel()


class AutoSaveScheduler:
    """Coalesces mutations into one save call per quiet period."""

    def __init__(
        self,
        *,
        snapshot_provider: SnapshotProvider,
        save: SaveFunction,
        last_saved_lemma: str,
        enabled: bool = False,
        config: AutoSaveConfig | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._snapshot_provider = snapshot_provider
        self._save_fn = save
        self._last_saved_lemma = last_saved_lemma
        self._enabled = enabled
        self._config = config or AutoSaveConfig()
        self._loop = loop
        self._status = SaveStatus.IDLE
        self._timer: ScheduledTask | None = None
        self._reset_timer: ScheduledTask | None = None
        self._listeners: list[StatusListener] = []
        self._in_flight: set[asyncio.Task[bool]] = set()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def last_saved_lemma(self) -> str:
        return self._last_saved_lemma

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def pending(self) -> bool:
        """Whether a debounced save is armed and has not fired yet."""
        return self._timer is not None and self._timer.pending

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def add_status_listener(self, listener: StatusListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _set_status(self, status: SaveStatus) -> None:
        if status is self._status:
            return
        self._status = status
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception:
                logger.exception("Save status listener failed")

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def set_enabled(self, enabled: bool) -> None:
        """Turn autosave on or off; turning it off drops the armed timer."""
        self._enabled = enabled
        if not enabled:
            self._cancel_timer()

    def notify_mutation(self) -> None:
        """Restart the quiet period after a tracked mutation."""
        if not self._enabled:
            return
        self._cancel_timer()
        self._timer = ScheduledTask(self._config.quiet_period, self._fire, loop=self._loop)
        logger.debug("Autosave armed for %.2fs", self._config.quiet_period)

    def handle_store_change(self, change: StoreChange) -> None:
        """Store subscriber: every accepted mutation restarts the timer."""
        self.notify_mutation()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._save())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def flush(self) -> bool:
        """Save right away instead of waiting for the quiet period."""
        self._cancel_timer()
        return await self._save()

    async def wait_for_saves(self) -> None:
        """Wait until every save already in flight has completed."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def close(self) -> None:
        self._cancel_timer()
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    async def _save(self) -> bool:
        if not self._enabled:
            return False
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None

        self._set_status(SaveStatus.SAVING)
        key = self._last_saved_lemma
        try:
            snapshot = self._snapshot_provider()
            ok = bool(await self._save_fn(key, snapshot))
        except Exception:
            logger.exception("Saving %r failed", key)
            ok = False
        else:
            if not ok:
                logger.warning("Save of %r was rejected; keeping local edits", key)

        if ok:
            self._last_saved_lemma = snapshot.word.lemma
            logger.info("Saved %r (key %r)", snapshot.word.lemma, key)
            self._set_status(SaveStatus.SAVED)
            self._schedule_reset(self._config.saved_display)
        else:
            self._set_status(SaveStatus.ERROR)
            self._schedule_reset(self._config.error_display)
        return ok

    def _schedule_reset(self, delay: float) -> None:
        if self._reset_timer is not None:
            self._reset_timer.cancel()
        self._reset_timer = ScheduledTask(
            delay, lambda: self._set_status(SaveStatus.IDLE), loop=self._loop
        )
