#!/usr/bin/env python3

"""
Machine State

Everything the running program can see: RAM (with the system font), the V
registers, the index register, program counter, call stack, both timers, the
keypad and the framebuffer.  The CPU operates on this, and the driver owns it.

The host only gets to touch the machine between cycles, through the small
surface here: load a program, press and release keys, tick the timers, take a
copy of the framebuffer, and check whether the buzzer should be sounding.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import FONT_LOC, FONTSET, NUM_REGISTERS, PROGRAM_LOC, PROGRAM_MAX_SIZE
from .faults import LoadTooLarge
from .framebuffer import Framebuffer
from .keypad import Keypad
from .ram import RAM
from .stack import Stack


class Machine:
    def __init__(self):
        self.ram = RAM()
        self.stack = Stack()
        self.keypad = Keypad()
        self.framebuffer = Framebuffer()
        self.v = memoryview(bytearray(NUM_REGISTERS))
        self.reset()

    def reset(self):
        self.ram.clear()
        self.ram.write_block(FONT_LOC, FONTSET)
        self.stack.clear()
        self.keypad.clear()
        self.framebuffer.clear()
        self.v[:] = bytes(NUM_REGISTERS)
        self.i = 0                  # Index register
        self.pc = PROGRAM_LOC       # Program counter
        self.dt = 0                 # Delay timer
        self.st = 0                 # Sound timer
        self.waiting_for_key = None  # Register awaiting a keypress (Fx0A), if any

    @property
    def sp(self):
        return self.stack.sp

    def load_program(self, data):
        size = len(data)

        if size > PROGRAM_MAX_SIZE:
            raise LoadTooLarge(size, PROGRAM_MAX_SIZE)

        # Don't leave any of a previously loaded program behind
        self.ram.zero_block(PROGRAM_LOC, PROGRAM_MAX_SIZE)
        self.ram.write_block(PROGRAM_LOC, data)

    def press_key(self, key):
        self.keypad.press(key)

    def release_key(self, key):
        self.keypad.release(key)

    def tick_timers(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def audio_gate(self):
        return self.st > 0

    def framebuffer_view(self):
        return self.framebuffer.snapshot()
