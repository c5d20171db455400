#!/usr/bin/env python3

"""
Keypad State

Sixteen hex keys, 0-F.  Input plugins write a complete snapshot of which keys
are held before each frame; the CPU only ever reads from here.

Waiting for a key needs a little more than the held state: a key that was
already held down when the wait started must not satisfy it, otherwise a
program would race straight through several waits on a single press.  Keys
held at that moment are latched, and only become eligible again once released.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

NUM_KEYS = 0x10


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.keys = [False] * NUM_KEYS
        self.latched = set()

    def set_keys(self, keys):
        if len(keys) != NUM_KEYS:
            raise KeypadError("Key state must contain exactly {} entries, got {}".format(NUM_KEYS, len(keys)))

        self.keys = [bool(key) for key in keys]
        self.latched = {key for key in self.latched if self.keys[key]}

    def press(self, key):
        self.keys[key & 0xF] = True

    def release(self, key):
        key &= 0xF
        self.keys[key] = False
        self.latched.discard(key)

    def is_key_down(self, key):
        # Only the low nibble selects a key, as there are only 16 of them
        return self.keys[key & 0xF]

    def latch(self):
        self.latched = {key for key in range(NUM_KEYS) if self.keys[key]}

    def get_new_keypress(self):
        # Lowest numbered key pressed since the last latch, or None
        for key in range(NUM_KEYS):
            if self.keys[key] and key not in self.latched:
                return key

        return None

    def get_keys(self):
        return tuple(self.keys)
