"""Macro playback: executing actions, the single-slot macro queue and event dispatch."""

from __future__ import annotations

import asyncio
import contextlib
import copy
import logging
from typing import AsyncIterable, Callable, Iterable, Optional, Protocol

from fightmacros.config import ConfigStore, Delay, KeyDown, KeyUp, Macro, MacroAction
from fightmacros.keys import EventKind, KeyEvent, str_to_key
from fightmacros.triggers import ComboTriggered, HotkeyEvent, ProfileSwitch

log = logging.getLogger(__name__)


class Executor:
    """Plays macro actions through an event-sending function."""

    def __init__(self, send_event: Callable[[KeyEvent], None]) -> None:
        self.send_event = send_event

    async def execute(self, action: MacroAction) -> None:
        """Perform one action."""
        if isinstance(action, KeyDown):
            log.info("Pressing [%s]", action.key)
            self.send_event(KeyEvent(EventKind.PRESS, str_to_key(action.key)))
        elif isinstance(action, KeyUp):
            log.info("Releasing [%s]", action.key)
            self.send_event(KeyEvent(EventKind.RELEASE, str_to_key(action.key)))
        elif isinstance(action, Delay):
            if action.ms < 0:
                raise ValueError(f"delay must not be negative: {action.ms}")
            log.info("Pausing [%s] ms", action.ms)
            await asyncio.sleep(action.ms / 1000.0)
        else:
            raise TypeError(f"not a macro action: {action!r}")

    async def run_sequence(self, actions: Iterable[MacroAction]) -> None:
        """Perform actions in order, stopping at the first error."""
        for action in actions:
            await self.execute(action)


class MacroQueue:
    """Runs pushed macros one at a time; a new macro cancels the one playing."""

    def __init__(self, executor: Executor) -> None:
        self.executor = executor
        self._queue: asyncio.Queue[Optional[Macro]] = asyncio.Queue()
        self._current: Optional[asyncio.Task] = None

    def push(self, macro: Macro) -> None:
        """Queue a macro for playback."""
        self._queue.put_nowait(macro)

    def close(self) -> None:
        """Ask the run loop to finish after the macros already queued."""
        self._queue.put_nowait(None)

    async def run(self) -> None:
        """Process pushed macros until closed, then wait for the last one."""
        try:
            while True:
                macro = await self._queue.get()
                if macro is None:
                    break
                self._cancel_current()
                log.info("Running macro: %s", macro.name)
                self._current = asyncio.create_task(self._play(macro))
        except asyncio.CancelledError:
            self._cancel_current()
            raise
        if self._current is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await self._current

    async def _play(self, macro: Macro) -> None:
        try:
            await self.executor.run_sequence(macro.sequence)
        except Exception as exc:
            log.error("Error running macro %s: %s", macro.name, exc)

    def _cancel_current(self) -> None:
        if self._current is not None:
            task, self._current = self._current, None
            if not task.done():
                task.cancel()
                log.info("Previous macro cancelled")


class _MacroSink(Protocol):
    def push(self, macro: Macro) -> None: ...


class EventProcessor:
    """Applies hotkey events to the shared configuration and the macro queue."""

    def __init__(self, store: ConfigStore, queue: _MacroSink) -> None:
        self.store = store
        self.queue = queue

    def handle_event(self, event: HotkeyEvent) -> None:
        """Start the named macro or switch to the named profile."""
        if isinstance(event, ComboTriggered):
            with self.store.update() as cfg:
                macro = cfg.find_macro(event.name)
                if macro is not None:
                    macro = copy.deepcopy(macro)
            if macro is not None:
                self.queue.push(macro)
        elif isinstance(event, ProfileSwitch):
            with self.store.update() as cfg:
                cfg.active_profile = next(
                    (i for i, p in enumerate(cfg.profiles) if p.name == event.name), None
                )
            log.info("Switching profile to: %s", event.name)
        else:
            raise TypeError(f"not a hotkey event: {event!r}")

    async def process_events(self, events: AsyncIterable[HotkeyEvent]) -> None:
        """Handle every event from an asynchronous stream until it ends."""
        async for event in events:
            self.handle_event(event)