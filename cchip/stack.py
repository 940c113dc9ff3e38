#!/usr/bin/env python3

"""
Stack Emulator

There is no specified location for the CPU call stack in system RAM, and no
program can address it directly, so it is kept out of RAM and wrapped in a
list.  The stack pointer (SP) is simply the number of return addresses held,
which is also the index of the next free slot.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_SIZE
from .faults import StackOverflow, StackUnderflow


class Stack:
    def __init__(self, size=STACK_SIZE):
        self.items = []
        self.size = size

    @property
    def sp(self):
        return len(self.items)

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackOverflow()

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflow() from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For diagnostics
        return list(self.items)
