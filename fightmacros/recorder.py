"""Record key presses and releases, with the pauses between them, as a macro sequence."""

from __future__ import annotations

import time
from typing import Optional

from fightmacros.config import Delay, KeyDown, KeyUp, MacroAction
from fightmacros.keys import EventKind, Key, KeyEvent


class Recorder:
    """Builds an action sequence from fed input events.

    Recording ends when stop() is called or the stop key is pressed twice
    within the double-press window (in seconds).
    """

    def __init__(self, stop_key: Optional[Key] = None, double_press_window: float = 0.5) -> None:
        self.stop_key = stop_key if stop_key is not None else Key.Escape
        self.double_press_window = double_press_window
        self._recording = True
        self._sequence: list[MacroAction] = []
        self._pressed: set[Key] = set()
        self._last_time: Optional[float] = None
        self._last_stop_press: Optional[float] = None

    def feed(self, event: KeyEvent, now: Optional[float] = None) -> bool:
        """Record one event at time `now` (seconds); return whether still recording."""
        if not self._recording:
            return False
        if now is None:
            now = time.monotonic()

        if self._last_time is not None and self._sequence:
            delta_ms = (now - self._last_time) * 1000.0
            if delta_ms > 0.0:
                self._sequence.append(Delay(delta_ms))
        self._last_time = now

        if event.key is None:
            return True
        key = event.key
        if event.kind is EventKind.PRESS:
            if key == self.stop_key:
                previous = self._last_stop_press
                if previous is not None and now - previous < self.double_press_window:
                    self._recording = False
                    return False
                self._last_stop_press = now
            if key not in self._pressed:
                self._pressed.add(key)
                self._sequence.append(KeyDown(key.name))
        elif event.kind is EventKind.RELEASE:
            self._pressed.discard(key)
            self._sequence.append(KeyUp(key.name))
        return True

    def stop(self) -> None:
        """End the recording; later events are ignored."""
        self._recording = False

    def is_recording(self) -> bool:
        return self._recording

    def sequence(self) -> list[MacroAction]:
        """A copy of the actions recorded so far."""
        return list(self._sequence)