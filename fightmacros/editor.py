"""Editing state for profiles, macros and actions, and the commands that change it."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Iterable, Optional

from fightmacros.config import ConfigStore, KeyDown, Macro, ModifierKey, Profile


@dataclass(frozen=True)
class Modal:
    """The modal dialog that is open: none, or the trigger editor of a macro."""

    trigger_editor: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.trigger_editor is not None


@dataclass
class UIState:
    """The profiles being edited and what is selected among them."""

    profiles: list[Profile] = field(default_factory=list)
    active_profile: Optional[int] = None
    current_profile: Optional[int] = None
    current_macro: Optional[int] = None
    modal: Modal = field(default_factory=Modal)
    modal_open: bool = False
    picking_switch_key: Optional[int] = None

    def _current_macro(self) -> Optional[Macro]:
        if self.current_profile is None or self.current_macro is None:
            return None
        return self.profiles[self.current_profile].macros[self.current_macro]

    def sync_config(self, store: ConfigStore) -> None:
        """Copy the edited profiles and the active index into the shared configuration."""
        with store.update() as cfg:
            cfg.profiles = copy.deepcopy(self.profiles)
            cfg.active_profile = self.active_profile

    def add_profile(self) -> None:
        """Append a default profile and select it."""
        self.profiles.append(Profile())
        self.current_profile = len(self.profiles) - 1
        self.current_macro = None

    def remove_profile(self) -> None:
        """Remove the selected profile; this also deactivates any active profile."""
        idx = self.current_profile
        if idx is None:
            return
        if not 0 <= idx < len(self.profiles):
            raise IndexError(f"profile index out of range: {idx}")
        self.active_profile = None
        self.current_profile = None
        self.current_macro = None
        del self.profiles[idx]

    def duplicate_profile(self) -> None:
        """Insert a copy of the selected profile right after it."""
        idx = self.current_profile
        if idx is None:
            return
        clone = copy.deepcopy(self.profiles[idx])
        clone.name += " (copia)"
        self.profiles.insert(idx + 1, clone)

    def select_profile(self, idx: int) -> None:
        """Select a profile for editing and clear the macro selection."""
        self.current_profile = idx
        self.current_macro = None

    def add_macro(self) -> None:
        """Append a default macro to the selected profile."""
        if self.current_profile is None:
            return
        self.profiles[self.current_profile].macros.append(Macro())

    def remove_macro(self, idx: int) -> None:
        """Remove a macro of the selected profile, keeping the macro selection valid."""
        if self.current_profile is None:
            return
        del self.profiles[self.current_profile].macros[idx]
        if self.current_macro == idx:
            self.current_macro = None
        elif self.current_macro is not None and self.current_macro > idx:
            self.current_macro -= 1

    def select_macro(self, idx: int) -> None:
        self.current_macro = idx

    def add_action(self) -> None:
        """Append a default action to the selected macro."""
        macro = self._current_macro()
        if macro is not None:
            macro.sequence.append(KeyDown())

    def remove_action(self, idx: int) -> None:
        """Remove an action from the selected macro."""
        macro = self._current_macro()
        if macro is not None:
            del macro.sequence[idx]


def save_changes(store: ConfigStore) -> None:
    """Write the shared configuration to the store's file."""
    store.save(store.snapshot())


def toggle_modifier(
    modifiers: Iterable[ModifierKey], item: ModifierKey, checked: bool
) -> list[ModifierKey]:
    """The modifier list after a checkbox for `item` is set to `checked`."""
    result = list(modifiers)
    if checked:
        if item not in result:
            result.append(item)
        return result
    return [m for m in result if m != item]