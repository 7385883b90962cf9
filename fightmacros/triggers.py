"""Turn keyboard events into hotkey events: profile switches and macro triggers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from fightmacros.config import Config, ConfigStore
from fightmacros.keys import EventKind, KeyEvent, KeyState, is_combo_completed, key_matches, str_to_key

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComboTriggered:
    """The trigger of the named macro was completed."""

    name: str


@dataclass(frozen=True)
class ProfileSwitch:
    """The switch key of the named profile was pressed."""

    name: str


HotkeyEvent = Union[ComboTriggered, ProfileSwitch]


def check_triggers(config: Config, state: KeyState, event: KeyEvent) -> Optional[HotkeyEvent]:
    """The hotkey event a key press causes, if any.

    Profile switch keys win over macro triggers; among macros, those with more
    modifiers are tried first.
    """
    if event.kind is not EventKind.PRESS or event.key is None:
        return None
    key = event.key

    for profile in config.profiles:
        if str_to_key(profile.switch_key) == key:
            return ProfileSwitch(profile.name)

    active = config.active()
    if active is None:
        return None

    by_modifiers = sorted(active.macros, key=lambda m: -len(m.trigger.modifiers))
    for macro in by_modifiers:
        if key_matches(macro.trigger.key, key) and is_combo_completed(macro.trigger, state):
            return ComboTriggered(macro.name)
    return None


class KeyboardHandler:
    """Tracks held keys and forwards hotkey events to a sink."""

    def __init__(self, store: ConfigStore, sink: Callable[[HotkeyEvent], None]) -> None:
        self.store = store
        self.sink = sink
        self.state = KeyState()

    def handle(self, event: KeyEvent) -> Optional[HotkeyEvent]:
        """Process one input event; return the hotkey event sent, if any."""
        self.state.update(event)
        result = check_triggers(self.store.snapshot(), self.state, event)
        if result is not None:
            try:
                self.sink(result)
            except Exception:
                log.warning("Could not deliver hotkey event %r", result, exc_info=True)
        return result