"""Debounced autosave scheduler that coalesces rapid edits into periodic saves."""

import asyncio
import copy
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from types import TracebackType
from typing import Any, Generic, TypeVar

from backend.domain.constants import AUTOSAVE_INTERVAL_SECONDS
from backend.domain.models import AutosaveState, SaveOutcome
from backend.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class AutosaveScheduler(Generic[T]):
    """Persist the latest value after a quiet period, one save at a time.

    `update(value)` replaces the pending value and (re)starts a timer of
    `interval` seconds. When the timer fires, or when `flush()` is awaited,
    the pending value is handed to `save` unless a save is already running.
    Intermediate values are never persisted individually.

    Save failures are logged and recorded in `last_error`; they never
    propagate out of the scheduler and are not retried automatically. The
    pending value is kept, so the next update, timer or flush tries again.

    With `skip_unchanged=True`, a flush whose pending value equals the last
    successfully saved one is skipped. A deep copy of each saved value is kept
    for the comparison, so payloads mutated in place are still detected.

    A timer that fires while a save is running is dropped. If newer edits
    arrived during that save, a fresh full-length timer starts when it
    completes, so those edits can wait up to one extra interval.

    Must be driven from a running asyncio event loop. Owners call `dispose()`
    (or `await aclose()`, or use `async with`) when the editing session ends;
    disposal starts one final best-effort save of the pending value.
    """

    def __init__(
        self,
        save: Callable[[T], Awaitable[Any]],
        interval: float = AUTOSAVE_INTERVAL_SECONDS,
        *,
        skip_unchanged: bool = False,
        name: str = "autosave",
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Autosave interval must be positive, got {interval}")

        self._save = save
        self._interval = interval
        self._skip_unchanged = skip_unchanged
        self._name = name

        self._pending: T | None = None
        self._version = 0  # Bumped on every accepted update
        self._saved_version = 0  # Version of the last successful save
        self._inflight_version: int | None = None
        self._last_saved: T | None = None

        self._timer: asyncio.TimerHandle | None = None
        self._saving = False
        self._idle = asyncio.Event()
        self._idle.set()
        self._tasks: set[asyncio.Task[SaveOutcome]] = set()
        self._disposed = False

        self._last_saved_at: datetime | None = None
        self._last_error: str | None = None
        self._save_count = 0

    async def __aenter__(self) -> "AutosaveScheduler[T]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # --- Operations ---

    def update(self, value: T | None) -> None:
        """Replace the pending value and restart the debounce timer."""
        if value is None:
            return
        if self._disposed:
            logger.warning("Update ignored, %s is disposed", self._name)
            return

        self._pending = value
        self._version += 1
        if self._timer is not None:
            logger.debug("Autosave timer reset for: %s", self._name)
        self._arm()

    async def flush(self) -> SaveOutcome:
        """Save the pending value now, unless nothing is pending or a save is running."""
        if self._saving or self._pending is None:
            return SaveOutcome.SKIPPED
        if self._skip_unchanged and self._pending == self._last_saved:
            self._cancel_timer()
            self._saved_version = self._version
            logger.debug("Autosave skipped, value unchanged: %s", self._name)
            return SaveOutcome.SKIPPED

        self._cancel_timer()
        value = self._pending
        version = self._version
        self._saving = True
        self._inflight_version = version
        self._idle.clear()

        try:
            await self._save(value)
        except Exception as exc:
            self._last_error = str(exc) or type(exc).__name__
            logger.exception("Autosave failed for: %s", self._name)
            return SaveOutcome.FAILED
        else:
            self._saved_version = version
            self._last_saved = copy.deepcopy(value) if self._skip_unchanged else None
            self._last_saved_at = datetime.now(tz=timezone.utc)
            self._last_error = None
            self._save_count += 1
            logger.info("Autosaved %s (save #%d)", self._name, self._save_count)
            return SaveOutcome.SAVED
        finally:
            self._saving = False
            self._inflight_version = None
            self._idle.set()
            if self._version != version:
                self._resume_after_save()

    def dispose(self) -> asyncio.Task[SaveOutcome] | None:
        """Cancel the timer and start one final save of the pending value.

        The returned task is not awaited here. Calling dispose again is a no-op.
        """
        if self._disposed:
            return None
        self._disposed = True
        self._cancel_timer()

        if self._saving:
            # The running save schedules the final flush if newer edits arrived.
            logger.info("Disposed %s while saving", self._name)
            return None
        if self._pending is None:
            logger.info("Disposed %s with nothing pending", self._name)
            return None

        logger.info("Disposed %s, flushing pending value", self._name)
        return self._spawn_flush()

    async def aclose(self) -> None:
        """Dispose and wait for the final save and any running save to finish."""
        self.dispose()
        while self._tasks or self._saving:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
            else:
                await self._idle.wait()

    # --- Status ---

    @property
    def is_saving(self) -> bool:
        """Return whether a save operation is currently in flight."""
        return self._saving

    @property
    def has_unsaved_changes(self) -> bool:
        """Return whether a value arrived since the last successful save."""
        return self._pending is not None and self._version != self._saved_version

    @property
    def state(self) -> AutosaveState:
        if self._saving:
            if self._version != self._inflight_version:
                return AutosaveState.ARMED_WHILE_SAVING
            return AutosaveState.SAVING
        if self._disposed:
            return AutosaveState.DISPOSED
        if self._timer is not None:
            return AutosaveState.ARMED
        return AutosaveState.IDLE

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def last_saved_at(self) -> datetime | None:
        return self._last_saved_at

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def save_count(self) -> int:
        return self._save_count

    # --- Internals ---

    def _arm(self) -> None:
        """Start a fresh timer, cancelling the live one."""
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._interval, self._on_timer)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        if self._saving:
            # Picked up by _resume_after_save once the running save completes.
            logger.debug("Autosave deferred, save in flight: %s", self._name)
            return
        self._spawn_flush()

    def _resume_after_save(self) -> None:
        """Handle a newer value that arrived while the previous save was running."""
        if self._disposed:
            self._spawn_flush()
        elif self._timer is None:
            self._arm()

    def _spawn_flush(self) -> asyncio.Task[SaveOutcome]:
        task = asyncio.get_running_loop().create_task(self.flush())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
