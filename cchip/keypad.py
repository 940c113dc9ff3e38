#!/usr/bin/env python3

"""
Keypad Emulator

Holds the up/down state of the 16 hexadecimal keys.  Only the host input
plugins write here, and only between CPU cycles.

As well as the current state, every key that goes from released to pressed is
appended to a transition log.  The CPU drains the log once per cycle, so a
program waiting for a keypress (Fx0A) only sees keys pressed since the previous
cycle, never a key that was already being held.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(ValueError):
    pass


class Keypad:
    def __init__(self):
        self.keys = [False] * NUM_KEYS
        self.presses = []

    def _check_key(self, key):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} does not exist on the keypad".format(key))

    def press(self, key):
        self._check_key(key)

        if not self.keys[key]:
            self.keys[key] = True
            self.presses.append(key)

    def release(self, key):
        self._check_key(key)
        self.keys[key] = False

    def is_key_down(self, key):
        return self.keys[key & 0xF]

    def take_presses(self):
        presses = self.presses
        self.presses = []
        return presses

    def clear(self):
        for key in range(NUM_KEYS):
            self.keys[key] = False

        self.presses = []
