# fightmacros

A keyboard macro engine organised around profiles. Each profile holds a set
of macros; each macro has a trigger (a key plus optional modifiers) and a
sequence of actions: key presses, key releases and delays. A profile becomes
active when its switch key is pressed, and the macros of the active profile
fire when their trigger combination is completed.

The package holds the logic: configuration and its JSON file, key naming,
tracking of held keys, trigger matching, playback with cancellation, a
sequence recorder and the editing operations on profiles, macros and actions.
It has no dependencies outside the standard library.

## Installation

```
pip install fightmacros
```

To run the tests:

```
pip install "fightmacros[test]"
pytest
```

## Configuration file

Configuration lives in a JSON file, `config.json` in the working directory
unless another path is given to `ConfigStore`. If the file does not exist,
`ConfigStore.load` first writes a default one with no profiles and no active
profile. Every field shown below is required when the file is read; a missing
or malformed field raises `ValueError`.

```json
{
  "profiles": [
    {
      "name": "Fighter",
      "switch_key": "F1",
      "macros": [
        {
          "name": "Hadouken",
          "trigger": { "modifiers": ["ctrl"], "key": "Q" },
          "sequence": [
            { "type": "keydown", "key": "S" },
            { "type": "delay", "ms": 16.0 },
            { "type": "keyup", "key": "S" },
            { "type": "keydown", "key": "J" },
            { "type": "keyup", "key": "J" }
          ]
        }
      ]
    }
  ],
  "active_profile": 0
}
```

Modifiers are `alt`, `control`, `ctrl`, `shift` and `meta` (`control` and
`ctrl` both mean the left Control key). Key names are case-insensitive:
letters, digits and their shifted symbols, `F1`–`F12`, `ENTER`, `ESC`,
`SPACE`, `TAB`, `BACKSPACE`, arrow keys, `PAGEUP`, `HOME`, `NUM_0`–`NUM_9`,
punctuation and so on. Anything unrecognised maps to `Key.Unknown`.

## Modules

- `fightmacros.config` — `Config`, `Profile`, `Macro`, `KeyCombination`,
  `ModifierKey` and the actions `KeyDown`, `KeyUp` and `Delay`, each with
  `to_dict`/`from_dict` (`action_to_dict`/`action_from_dict` for actions).
  `Config.active()` gives the active profile and `Config.find_macro(name)`
  looks a macro up in it. `ConfigStore` loads and saves the file and holds a
  thread-safe shared copy: `initialize()`, `snapshot()`, the `update()`
  context manager, `profiles()` and `active_profile_index()`.
- `fightmacros.keys` — `Key`, `EventKind`, `KeyEvent`, `KeyState` (the set of
  held keys), `str_to_key`, `mod_to_key`, `key_matches` and
  `is_combo_completed`.
- `fightmacros.triggers` — `check_triggers(config, state, event)` turns a key
  press into a `ProfileSwitch` or `ComboTriggered` event. Switch keys of any
  profile win over macro triggers; among macros, those with more modifiers
  are tried first. `KeyboardHandler` keeps a `KeyState`, checks each event
  against the store's configuration and passes hotkey events to a sink.
- `fightmacros.engine` — `Executor` performs actions through a send-event
  function you supply (it receives `KeyEvent`s) and sleeps for delays;
  `MacroQueue` plays one macro at a time, cancelling the one playing when a
  new one is pushed, until `close()` is called; `EventProcessor` pushes
  triggered macros to a queue and switches the active profile.
- `fightmacros.recorder` — `Recorder` builds an action sequence, delays
  between events included, from the events passed to `feed()`. It stops on
  `stop()` or when its stop key (Escape by default) is pressed twice within
  the double-press window (0.5 seconds by default). Recorded actions carry
  `Key` member names, such as `"KeyA"`.
- `fightmacros.editor` — `UIState` with the editing operations on profiles,
  macros and actions (`add_profile`, `remove_profile`, `duplicate_profile`,
  `select_profile`, `add_macro`, `remove_macro`, `select_macro`,
  `add_action`, `remove_action`), `sync_config` to copy edits into a
  `ConfigStore`, `save_changes(store)` to write the store to its file, and
  `toggle_modifier` for modifier check boxes.

## Example

Wiring the pieces together, with `print` standing in for key injection and
hand-made events standing in for a keyboard hook:

```python
import asyncio

from fightmacros.config import ConfigStore
from fightmacros.engine import EventProcessor, Executor, MacroQueue
from fightmacros.keys import EventKind, Key, KeyEvent
from fightmacros.triggers import KeyboardHandler


async def main():
    store = ConfigStore("config.json")
    store.initialize()

    queue = MacroQueue(Executor(print))
    processor = EventProcessor(store, queue)
    handler = KeyboardHandler(store, processor.handle_event)

    runner = asyncio.create_task(queue.run())
    handler.handle(KeyEvent(EventKind.PRESS, Key.ControlLeft))
    handler.handle(KeyEvent(EventKind.PRESS, Key.KeyQ))  # completes Ctrl+Q
    queue.close()
    await runner


asyncio.run(main())
```

With the configuration above this prints the key events of the "Hadouken"
sequence, pausing 16 ms between the first two.

## What the package does not do

- It does not hook the keyboard. Input events must be turned into
  `KeyEvent`s and passed to `KeyboardHandler.handle` or `Recorder.feed` by
  the caller.
- It does not inject keys into the system. `Executor` only calls the
  send-event function it is given.
- It has no graphical editor and no command-line program. `UIState` holds
  the editing state and operations a front end would call.