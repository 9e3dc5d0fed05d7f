import string

import pytest

from horizon_engine.keycodes import Key, MouseButton


@pytest.mark.parametrize("letter", list(string.ascii_uppercase))
def test_letters_match_ascii(letter):
    assert Key[letter] == ord(letter)
    assert Key(ord(letter)) is Key[letter]


@pytest.mark.parametrize("digit", range(10))
def test_digits_match_ascii(digit):
    assert Key(ord(str(digit))) is Key[f"DIGIT_{digit}"]


def test_function_keys_are_contiguous():
    first = Key.F1.value
    looked_up = [Key(first + i) for i in range(25)]
    assert looked_up == [Key[f"F{i}"] for i in range(1, 26)]


def test_keypad_digits_are_contiguous():
    first = Key.KP_0.value
    looked_up = [Key(first + i) for i in range(10)]
    assert looked_up == [Key[f"KP_{i}"] for i in range(10)]


def test_key_values_unique():
    members = list(Key.__members__.values())
    assert [Key(member.value) for member in members] == members


def test_mouse_aliases():
    assert MouseButton(0) is MouseButton.LEFT
    assert MouseButton(1) is MouseButton.RIGHT
    assert MouseButton(2) is MouseButton.MIDDLE
    assert MouseButton(7) is MouseButton.LAST
    assert [MouseButton(i) for i in range(8)] == list(MouseButton)


def test_unknown_key_rejected():
    with pytest.raises(ValueError):
        Key(1000)