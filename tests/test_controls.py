from termtris.controls import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_SPACE,
    KEY_UP,
    Action,
    EntryState,
    NameEntry,
    action_for_key,
)


def test_key_bindings():
    assert action_for_key(KEY_LEFT) is Action.LEFT
    assert action_for_key(KEY_DOWN) is Action.SOFT_DROP
    assert action_for_key(KEY_UP) is Action.ROTATE
    assert action_for_key(ord("z")) is Action.ROTATE
    assert action_for_key(KEY_SPACE) is Action.HARD_DROP
    assert action_for_key(ord("C")) is Action.HOLD
    assert action_for_key(ord("p")) is Action.PAUSE
    assert action_for_key(KEY_ESCAPE) is Action.QUIT
    assert action_for_key(ord("q")) is None
    assert action_for_key(None) is None


def type_keys(entry, text):
    for ch in text:
        entry.feed(ord(ch))


def test_name_entry_collects_printable_keys():
    entry = NameEntry()
    type_keys(entry, "Ann")
    assert entry.state is EntryState.AWAITING_CHAR
    assert entry.feed(KEY_ENTER) is EntryState.SUBMITTED
    assert entry.done
    assert entry.name == "Ann"


def test_name_entry_backspace():
    entry = NameEntry()
    type_keys(entry, "Bob")
    assert entry.feed(KEY_BACKSPACE) is EntryState.BACKSPACE
    entry.feed(KEY_DELETE)
    assert entry.text == "B"
    entry.feed(KEY_BACKSPACE)
    entry.feed(KEY_BACKSPACE)
    assert entry.text == ""


def test_name_entry_length_cap_and_ignored_keys():
    entry = NameEntry(max_length=10)
    type_keys(entry, "abcdefghijklmnop")
    entry.feed(KEY_LEFT)
    entry.feed(7)
    assert entry.text == "abcdefghij"


def test_empty_name_falls_back_to_default():
    entry = NameEntry()
    entry.feed(KEY_ENTER)
    assert entry.name == "Player"


def test_keys_after_submit_are_ignored():
    entry = NameEntry()
    type_keys(entry, "x")
    entry.feed(KEY_ENTER)
    entry.feed(ord("y"))
    assert entry.name == "x"
