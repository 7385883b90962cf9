"""Key names, key-name parsing and tracking of which keys are held."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fightmacros.config import KeyCombination, ModifierKey


class Key(Enum):
    """A physical key."""

    KeyA = "KeyA"
    KeyB = "KeyB"
    KeyC = "KeyC"
    KeyD = "KeyD"
    KeyE = "KeyE"
    KeyF = "KeyF"
    KeyG = "KeyG"
    KeyH = "KeyH"
    KeyI = "KeyI"
    KeyJ = "KeyJ"
    KeyK = "KeyK"
    KeyL = "KeyL"
    KeyM = "KeyM"
    KeyN = "KeyN"
    KeyO = "KeyO"
    KeyP = "KeyP"
    KeyQ = "KeyQ"
    KeyR = "KeyR"
    KeyS = "KeyS"
    KeyT = "KeyT"
    KeyU = "KeyU"
    KeyV = "KeyV"
    KeyW = "KeyW"
    KeyX = "KeyX"
    KeyY = "KeyY"
    KeyZ = "KeyZ"
    Num0 = "Num0"
    Num1 = "Num1"
    Num2 = "Num2"
    Num3 = "Num3"
    Num4 = "Num4"
    Num5 = "Num5"
    Num6 = "Num6"
    Num7 = "Num7"
    Num8 = "Num8"
    Num9 = "Num9"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"
    Return = "Return"
    Escape = "Escape"
    Backspace = "Backspace"
    Tab = "Tab"
    Space = "Space"
    CapsLock = "CapsLock"
    ShiftLeft = "ShiftLeft"
    ShiftRight = "ShiftRight"
    ControlLeft = "ControlLeft"
    ControlRight = "ControlRight"
    Alt = "Alt"
    AltGr = "AltGr"
    MetaLeft = "MetaLeft"
    MetaRight = "MetaRight"
    UpArrow = "UpArrow"
    DownArrow = "DownArrow"
    LeftArrow = "LeftArrow"
    RightArrow = "RightArrow"
    PageUp = "PageUp"
    PageDown = "PageDown"
    Home = "Home"
    End = "End"
    Insert = "Insert"
    Delete = "Delete"
    BackQuote = "BackQuote"
    Minus = "Minus"
    Equal = "Equal"
    LeftBracket = "LeftBracket"
    RightBracket = "RightBracket"
    BackSlash = "BackSlash"
    SemiColon = "SemiColon"
    Quote = "Quote"
    Comma = "Comma"
    Dot = "Dot"
    Slash = "Slash"
    NumLock = "NumLock"
    Kp0 = "Kp0"
    Kp1 = "Kp1"
    Kp2 = "Kp2"
    Kp3 = "Kp3"
    Kp4 = "Kp4"
    Kp5 = "Kp5"
    Kp6 = "Kp6"
    Kp7 = "Kp7"
    Kp8 = "Kp8"
    Kp9 = "Kp9"
    KpDivide = "KpDivide"
    KpMultiply = "KpMultiply"
    KpReturn = "KpReturn"
    PrintScreen = "PrintScreen"
    ScrollLock = "ScrollLock"
    Pause = "Pause"
    Unknown = "Unknown"


class EventKind(Enum):
    """What happened in an input event."""

    PRESS = "press"
    RELEASE = "release"
    OTHER = "other"


@dataclass(frozen=True)
class KeyEvent:
    """An input event; key is set for presses and releases."""

    kind: EventKind
    key: Optional[Key] = None


def _build_table() -> dict[str, Key]:
    table = {letter: Key[f"Key{letter}"] for letter in string.ascii_uppercase}
    for digit, shifted in zip("0123456789", ")!@#$%^&*("):
        table[digit] = table[shifted] = Key[f"Num{digit}"]
    table.update({f"F{n}": Key[f"F{n}"] for n in range(1, 13)})
    table.update({f"NUM_{n}": Key[f"Kp{n}"] for n in range(10)})
    aliases = {
        Key.Return: ("ENTER", "\n", "\r"),
        Key.Escape: ("ESC", "ESCAPE"),
        Key.Backspace: ("BACKSPACE",),
        Key.Tab: ("TAB",),
        Key.Space: ("SPACE", " "),
        Key.CapsLock: ("CAPSLOCK",),
        Key.ShiftLeft: ("SHIFT",),
        Key.ControlLeft: ("CTRL", "CONTROL"),
        Key.Alt: ("ALT",),
        Key.MetaLeft: ("GUI", "SUPER", "WIN", "WINDOWS", "COMMAND"),
        Key.UpArrow: ("UP", "UPARROW"),
        Key.DownArrow: ("DOWN", "DOWNARROW"),
        Key.LeftArrow: ("LEFT", "LEFTARROW"),
        Key.RightArrow: ("RIGHT", "RIGHTARROW"),
        Key.PageUp: ("PAGEUP",),
        Key.PageDown: ("PAGEDOWN",),
        Key.Home: ("HOME",),
        Key.End: ("END",),
        Key.Insert: ("INSERT",),
        Key.Delete: ("DELETE",),
        Key.BackQuote: ("`", "~"),
        Key.Minus: ("-", "_"),
        Key.Equal: ("=", "+"),
        Key.LeftBracket: ("[", "{"),
        Key.RightBracket: ("]", "}"),
        Key.BackSlash: ("\\", "|"),
        Key.SemiColon: (";", ":"),
        Key.Quote: ("'", '"'),
        Key.Comma: (",", "<"),
        Key.Dot: (".", ">"),
        Key.Slash: ("/", "?"),
        Key.NumLock: ("NUMLOCK",),
        Key.KpDivide: ("NUM_DIVIDE", "NUM/"),
        Key.KpMultiply: ("NUM_MULTIPLY", "NUM*"),
        Key.KpReturn: ("NUM_ENTER",),
        Key.PrintScreen: ("PRINTSCREEN",),
        Key.ScrollLock: ("SCROLLLOCK",),
        Key.Pause: ("PAUSE",),
    }
    for key, names in aliases.items():
        table.update(dict.fromkeys(names, key))
    return table


_KEY_NAMES = _build_table()

_MODIFIER_KEYS = {
    ModifierKey.ALT: Key.Alt,
    ModifierKey.CONTROL: Key.ControlLeft,
    ModifierKey.CTRL: Key.ControlLeft,
    ModifierKey.SHIFT: Key.ShiftLeft,
    ModifierKey.META: Key.MetaLeft,
}


def str_to_key(text: str) -> Key:
    """Parse a key name, case-insensitively; unrecognised names give Key.Unknown."""
    return _KEY_NAMES.get(text.upper(), Key.Unknown)


def mod_to_key(modifier: ModifierKey) -> Key:
    """The physical key a modifier stands for."""
    return _MODIFIER_KEYS[modifier]


def key_matches(expected: str, actual: Key) -> bool:
    """Whether a key name denotes the given key."""
    return str_to_key(expected) == actual


class KeyState:
    """The set of keys currently held down."""

    def __init__(self) -> None:
        self._pressed: set[Key] = set()

    def pressed(self) -> frozenset[Key]:
        return frozenset(self._pressed)

    def update(self, event: KeyEvent) -> None:
        """Record a press or release; other events are ignored."""
        if event.key is None:
            return
        if event.kind is EventKind.PRESS:
            self._pressed.add(event.key)
        elif event.kind is EventKind.RELEASE:
            self._pressed.discard(event.key)


def is_combo_completed(combo: KeyCombination, state: KeyState) -> bool:
    """Whether the combination's key and all its modifiers are held."""
    pressed = state.pressed()
    if str_to_key(combo.key) not in pressed:
        return False
    return {mod_to_key(m) for m in combo.modifiers} <= pressed