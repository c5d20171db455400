#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cc8.keypad import Keypad, KeypadError


class TestKeypad(unittest.TestCase):
    def setUp(self):
        self.keypad = Keypad()

    def test_keypad_init(self):
        self.assertEqual((False,) * 16, self.keypad.get_keys())

    def test_keypad_set_keys(self):
        keys = [False] * 16
        keys[0xA] = True
        self.keypad.set_keys(keys)
        self.assertTrue(self.keypad.is_key_down(0xA))
        self.assertFalse(self.keypad.is_key_down(0xB))

    def test_keypad_set_keys_wrong_length(self):
        self.assertRaises(KeypadError, self.keypad.set_keys, [False] * 15)
        self.assertRaises(KeypadError, self.keypad.set_keys, [False] * 17)

    def test_keypad_key_uses_low_nibble(self):
        self.keypad.press(0x3)
        self.assertTrue(self.keypad.is_key_down(0x13))

    def test_keypad_press_release_use_low_nibble(self):
        self.keypad.press(0x13)
        self.assertTrue(self.keypad.is_key_down(0x3))
        self.keypad.latch()
        self.keypad.release(0x13)
        self.assertFalse(self.keypad.is_key_down(0x3))
        self.assertEqual(set(), self.keypad.latched)

    def test_keypad_new_keypress(self):
        self.assertIsNone(self.keypad.get_new_keypress())
        self.keypad.press(0x9)
        self.keypad.press(0x4)
        self.assertEqual(0x4, self.keypad.get_new_keypress())

    def test_keypad_latched_keys_ignored(self):
        self.keypad.press(0x2)
        self.keypad.latch()
        self.assertIsNone(self.keypad.get_new_keypress())
        self.keypad.press(0x7)
        self.assertEqual(0x7, self.keypad.get_new_keypress())

    def test_keypad_latched_key_released_and_pressed(self):
        self.keypad.press(0x2)
        self.keypad.latch()
        keys = [False] * 16
        self.keypad.set_keys(keys)  # Release
        keys[0x2] = True
        self.keypad.set_keys(keys)  # Press again
        self.assertEqual(0x2, self.keypad.get_new_keypress())
