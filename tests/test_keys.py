import pytest

from fightmacros.config import KeyCombination, ModifierKey
from fightmacros.keys import (
    EventKind,
    Key,
    KeyEvent,
    KeyState,
    is_combo_completed,
    key_matches,
    mod_to_key,
    str_to_key,
)


def _state(*keys):
    state = KeyState()
    for key in keys:
        state.update(KeyEvent(EventKind.PRESS, key))
    return state


@pytest.mark.parametrize("name", ["a", "A"])
def test_letters_case_insensitive(name):
    assert str_to_key(name) == Key.KeyA


@pytest.mark.parametrize(
    "name, key",
    [
        ("1", Key.Num1),
        ("!", Key.Num1),
        ("0", Key.Num0),
        (")", Key.Num0),
        ("(", Key.Num9),
        ("f1", Key.F1),
        ("F12", Key.F12),
        ("esc", Key.Escape),
        ("Escape", Key.Escape),
        ("\n", Key.Return),
        ("enter", Key.Return),
        (" ", Key.Space),
        ("ctrl", Key.ControlLeft),
        ("control", Key.ControlLeft),
        ("windows", Key.MetaLeft),
        ("uparrow", Key.UpArrow),
        ("+", Key.Equal),
        ("|", Key.BackSlash),
        ('"', Key.Quote),
        ("?", Key.Slash),
        ("num_7", Key.Kp7),
        ("num*", Key.KpMultiply),
        ("num_enter", Key.KpReturn),
        ("printscreen", Key.PrintScreen),
    ],
)
def test_str_to_key_table(name, key):
    assert str_to_key(name) == key


@pytest.mark.parametrize("name", ["", "F13", "banana", "NUM_10"])
def test_unknown_names(name):
    assert str_to_key(name) == Key.Unknown


def test_mod_to_key():
    assert mod_to_key(ModifierKey.CONTROL) == Key.ControlLeft
    assert mod_to_key(ModifierKey.CTRL) == Key.ControlLeft
    assert mod_to_key(ModifierKey.ALT) == Key.Alt
    assert mod_to_key(ModifierKey.SHIFT) == Key.ShiftLeft
    assert mod_to_key(ModifierKey.META) == Key.MetaLeft


def test_key_matches():
    assert key_matches("q", Key.KeyQ) is True
    assert key_matches("q", Key.KeyW) is False


def test_key_state_press_and_release():
    state = _state(Key.KeyA, Key.ShiftLeft)
    assert state.pressed() == {Key.KeyA, Key.ShiftLeft}
    state.update(KeyEvent(EventKind.RELEASE, Key.KeyA))
    assert state.pressed() == {Key.ShiftLeft}


def test_key_state_release_of_unpressed_key_is_harmless():
    state = KeyState()
    state.update(KeyEvent(EventKind.RELEASE, Key.KeyZ))
    assert state.pressed() == frozenset()


def test_key_state_ignores_other_events():
    state = _state(Key.KeyB)
    state.update(KeyEvent(EventKind.OTHER))
    state.update(KeyEvent(EventKind.OTHER, Key.KeyC))
    assert state.pressed() == {Key.KeyB}


def test_pressed_is_a_snapshot():
    state = _state(Key.KeyA)
    before = state.pressed()
    state.update(KeyEvent(EventKind.PRESS, Key.KeyB))
    assert before == {Key.KeyA}


def test_combo_requires_base_key():
    combo = KeyCombination([ModifierKey.CTRL], "A")
    assert is_combo_completed(combo, _state(Key.ControlLeft)) is False


def test_combo_requires_modifiers():
    combo = KeyCombination([ModifierKey.CTRL, ModifierKey.SHIFT], "A")
    assert is_combo_completed(combo, _state(Key.KeyA, Key.ControlLeft)) is False


def test_combo_completed():
    combo = KeyCombination([ModifierKey.CTRL, ModifierKey.SHIFT], "A")
    state = _state(Key.ControlLeft, Key.ShiftLeft, Key.KeyA)
    assert is_combo_completed(combo, state) is True


def test_combo_completed_with_extra_keys_held():
    combo = KeyCombination([], "F1")
    assert is_combo_completed(combo, _state(Key.F1, Key.KeyX, Key.Alt)) is True


def test_combo_with_unknown_key_is_not_completed():
    combo = KeyCombination([], "nonsense")
    assert is_combo_completed(combo, _state(Key.KeyA)) is False