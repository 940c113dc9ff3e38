#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, and fast
zeroing of memory blocks.

The address space is fixed.  Nothing wraps: any access reaching past the top of
memory is reported as a fault rather than silently masked, and the check is
made before anything is written so a failed write leaves RAM untouched.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE
from .faults import AddressOutOfRange


class RAM:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_range(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_range(location, size)
        return bytes(self.mem[location:location + size])

    def write(self, location, byte):
        self.check_range(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)

        if block_size == 0:
            return

        self.check_range(location, block_size)
        self.mem[location:location + block_size] = block

    def check_range(self, location, size=1):
        if location < 0:
            raise AddressOutOfRange(location)

        block_top = location + size - 1

        if block_top > self.mem_top:
            # Report the first address that doesn't exist
            raise AddressOutOfRange(max(location, self.mem_size))

    def zero_block(self, location, size):
        if size == 0:
            return

        self.check_range(location, size)
        self.mem[location:location + size] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)
