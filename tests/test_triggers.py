from fightmacros.config import Config, KeyCombination, Macro, ModifierKey, Profile
from fightmacros.keys import EventKind, Key, KeyEvent, KeyState
from fightmacros.triggers import ComboTriggered, KeyboardHandler, ProfileSwitch, check_triggers
from fightmacros.config import ConfigStore


def press(key):
    return KeyEvent(EventKind.PRESS, key)


def release(key):
    return KeyEvent(EventKind.RELEASE, key)


def held(*keys):
    state = KeyState()
    for key in keys:
        state.update(press(key))
    return state


def make_config():
    plain = Macro("plain", KeyCombination([], "a"))
    ctrl = Macro("ctrl", KeyCombination([ModifierKey.CTRL], "a"))
    return Config(
        [Profile("first", "F1", [plain, ctrl]), Profile("second", "F2", [])],
        active_profile=0,
    )


def test_switch_key_sends_profile_switch():
    result = check_triggers(make_config(), held(Key.F2), press(Key.F2))
    assert result == ProfileSwitch("second")


def test_release_is_ignored():
    assert check_triggers(make_config(), KeyState(), release(Key.F1)) is None


def test_other_events_are_ignored():
    assert check_triggers(make_config(), KeyState(), KeyEvent(EventKind.OTHER)) is None


def test_plain_trigger():
    result = check_triggers(make_config(), held(Key.KeyA), press(Key.KeyA))
    assert result == ComboTriggered("plain")


def test_trigger_with_more_modifiers_wins():
    state = held(Key.ControlLeft, Key.KeyA)
    assert check_triggers(make_config(), state, press(Key.KeyA)) == ComboTriggered("ctrl")


def test_no_active_profile_means_no_macro():
    config = make_config()
    config.active_profile = None
    assert check_triggers(config, held(Key.KeyA), press(Key.KeyA)) is None


def test_key_not_held_does_not_trigger():
    assert check_triggers(make_config(), KeyState(), press(Key.KeyA)) is None


def test_switch_key_has_priority_over_macros():
    config = make_config()
    config.profiles[0].macros.append(Macro("f1macro", KeyCombination([], "F1")))
    assert check_triggers(config, held(Key.F1), press(Key.F1)) == ProfileSwitch("first")


def test_handler_tracks_state_and_sends(tmp_path):
    store = ConfigStore(tmp_path / "config.json")
    with store.update() as cfg:
        cfg.profiles = make_config().profiles
        cfg.active_profile = 0
    sent = []
    handler = KeyboardHandler(store, sent.append)
    assert handler.handle(press(Key.ControlLeft)) is None
    assert handler.handle(press(Key.KeyA)) == ComboTriggered("ctrl")
    handler.handle(release(Key.KeyA))
    handler.handle(release(Key.ControlLeft))
    handler.handle(press(Key.KeyA))
    assert sent == [ComboTriggered("ctrl"), ComboTriggered("plain")]
    assert handler.state.pressed() == frozenset({Key.KeyA})