"""Configuration model, JSON persistence and the shared configuration store."""

from __future__ import annotations

import copy
import json
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, Optional, Union

log = logging.getLogger(__name__)

DEFAULT_NAME = "Sin titulo"
CONFIG_PATH = "config.json"


class ModifierKey(Enum):
    """A modifier that can take part in a trigger combination."""

    ALT = "alt"
    CONTROL = "control"
    CTRL = "ctrl"
    SHIFT = "shift"
    META = "meta"

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass
class KeyDown:
    """Press a key."""

    key: str = "A"


@dataclass
class KeyUp:
    """Release a key."""

    key: str = "A"


@dataclass
class Delay:
    """Wait for a number of milliseconds."""

    ms: float = 100.0


MacroAction = Union[KeyDown, KeyUp, Delay]

_VARIANTS: dict[str, type] = {"KeyDown": KeyDown, "KeyUp": KeyUp, "Delay": Delay}
_DISCRIMINANTS: dict[type, str] = {cls: name for name, cls in _VARIANTS.items()}
_TAGS: dict[type, str] = {cls: name.lower() for name, cls in _VARIANTS.items()}
_TAG_TO_CLASS: dict[str, type] = {tag: cls for cls, tag in _TAGS.items()}


def _mapping(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _field(data: dict, name: str, what: str) -> Any:
    try:
        return data[name]
    except KeyError:
        raise ValueError(f"{what} is missing field '{name}'") from None


def _string(data: dict, name: str, what: str) -> str:
    value = _field(data, name, what)
    if not isinstance(value, str):
        raise ValueError(f"{what}.{name} must be a string")
    return value


def _list(data: dict, name: str, what: str) -> list:
    value = _field(data, name, what)
    if not isinstance(value, list):
        raise ValueError(f"{what}.{name} must be a list")
    return value


def action_discriminant(action: MacroAction) -> str:
    """Return the variant name of an action: KeyDown, KeyUp or Delay."""
    try:
        return _DISCRIMINANTS[type(action)]
    except KeyError:
        raise TypeError(f"not a macro action: {action!r}") from None


def variant_to_action(variant: str) -> MacroAction:
    """Build the default action for a variant name."""
    try:
        return _VARIANTS[variant]()
    except KeyError:
        raise ValueError(f"unknown action variant: {variant!r}") from None


def action_to_dict(action: MacroAction) -> dict:
    """Serialise an action as a tagged object."""
    tag = _TAGS.get(type(action))
    if tag is None:
        raise TypeError(f"not a macro action: {action!r}")
    if isinstance(action, Delay):
        return {"type": tag, "ms": float(action.ms)}
    return {"type": tag, "key": action.key}


def action_from_dict(data: Any) -> MacroAction:
    """Parse a tagged action object."""
    data = _mapping(data, "action")
    tag = _field(data, "type", "action")
    cls = _TAG_TO_CLASS.get(tag) if isinstance(tag, str) else None
    if cls is None:
        raise ValueError(f"unknown action type: {tag!r}")
    if cls is Delay:
        ms = _field(data, "ms", "action")
        if isinstance(ms, bool) or not isinstance(ms, (int, float)):
            raise ValueError("action.ms must be a number")
        return Delay(float(ms))
    return cls(_string(data, "key", "action"))


@dataclass
class KeyCombination:
    """A key plus the modifiers that must be held with it."""

    modifiers: list[ModifierKey] = field(default_factory=list)
    key: str = ""

    def __str__(self) -> str:
        mods = "+".join(str(m) for m in self.modifiers)
        return f"{mods}+{self.key}" if mods else self.key

    def to_dict(self) -> dict:
        return {"modifiers": [m.value for m in self.modifiers], "key": self.key}

    @classmethod
    def from_dict(cls, data: Any) -> KeyCombination:
        data = _mapping(data, "trigger")
        modifiers = []
        for raw in _list(data, "modifiers", "trigger"):
            if not isinstance(raw, str):
                raise ValueError(f"invalid modifier: {raw!r}")
            modifiers.append(ModifierKey(raw))
        return cls(modifiers, _string(data, "key", "trigger"))


@dataclass
class Macro:
    """A named action sequence started by a trigger."""

    name: str = DEFAULT_NAME
    trigger: KeyCombination = field(default_factory=KeyCombination)
    sequence: list[MacroAction] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "trigger": self.trigger.to_dict(),
            "sequence": [action_to_dict(a) for a in self.sequence],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Macro:
        data = _mapping(data, "macro")
        return cls(
            name=_string(data, "name", "macro"),
            trigger=KeyCombination.from_dict(_field(data, "trigger", "macro")),
            sequence=[action_from_dict(a) for a in _list(data, "sequence", "macro")],
        )


@dataclass
class Profile:
    """A set of macros, switched to by a single key."""

    name: str = DEFAULT_NAME
    switch_key: str = ""
    macros: list[Macro] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "switch_key": self.switch_key,
            "macros": [m.to_dict() for m in self.macros],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Profile:
        data = _mapping(data, "profile")
        return cls(
            name=_string(data, "name", "profile"),
            switch_key=_string(data, "switch_key", "profile"),
            macros=[Macro.from_dict(m) for m in _list(data, "macros", "profile")],
        )


@dataclass
class Config:
    """All profiles and the index of the one in use."""

    profiles: list[Profile] = field(default_factory=list)
    active_profile: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "profiles": [p.to_dict() for p in self.profiles],
            "active_profile": self.active_profile,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        data = _mapping(data, "config")
        active = _field(data, "active_profile", "config")
        if active is not None and (
            isinstance(active, bool) or not isinstance(active, int) or active < 0
        ):
            raise ValueError("config.active_profile must be a non-negative integer or null")
        profiles = [Profile.from_dict(p) for p in _list(data, "profiles", "config")]
        return cls(profiles, active)

    def active(self) -> Optional[Profile]:
        """The profile in use, or None if none is set or the index is out of range."""
        if self.active_profile is None or self.active_profile >= len(self.profiles):
            return None
        return self.profiles[self.active_profile]

    def find_macro(self, name: str) -> Optional[Macro]:
        """The first macro of the active profile with the given name."""
        profile = self.active()
        if profile is None:
            return None
        return next((m for m in profile.macros if m.name == name), None)


class ConfigStore:
    """A configuration file and the thread-safe in-memory copy shared by the app."""

    def __init__(self, path: Union[str, Path] = CONFIG_PATH) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()
        self._config = Config()

    def load(self) -> Config:
        """Read the file, creating it with defaults first if it is missing."""
        if not self.path.exists():
            log.warning("Configuration not found, creating default at %s", self.path)
            self.save(Config())
        text = self.path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"could not parse configuration file {self.path}: {exc}") from exc
        return Config.from_dict(data)

    def save(self, config: Config) -> None:
        """Write a configuration to the file as indented JSON."""
        content = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
        self.path.write_text(content, encoding="utf-8")
        log.info("Configuration saved")

    def initialize(self) -> None:
        """Load the file into the shared configuration."""
        config = self.load()
        with self._lock:
            self._config = config

    def snapshot(self) -> Config:
        """An independent copy of the shared configuration."""
        with self._lock:
            return copy.deepcopy(self._config)

    @contextmanager
    def update(self) -> Iterator[Config]:
        """Hold the lock and yield the shared configuration for changing in place."""
        with self._lock:
            yield self._config

    def profiles(self) -> list[Profile]:
        """A copy of the shared profiles."""
        with self._lock:
            return copy.deepcopy(self._config.profiles)

    def active_profile_index(self) -> Optional[int]:
        """The index of the profile in use, if any."""
        with self._lock:
            return self._config.active_profile