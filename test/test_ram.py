#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cchip.faults import AddressOutOfRange, RAMError
from cchip.ram import RAM


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM(5)

    def test_ram_default_size(self):
        ram = RAM()
        self.assertEqual(0x1000, ram.mem_size)
        self.assertEqual(0xFFF, ram.mem_top)

    def test_ram_init(self):
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())
        self.assertEqual(255, self.ram.read(1))

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())

    def test_ram_read_block(self):
        self.ram.write_block(2, b"\x01\x02\x03")
        self.assertEqual(b"\x01\x02\x03", self.ram.read_block(2, 3))

    def test_ram_read_block_is_a_copy(self):
        block = self.ram.read_block(0, 2)
        self.ram.write(0, 0x12)
        self.assertEqual(b"\x00\x00", block)

    def test_ram_byte_overflow(self):
        self.assertRaises(AddressOutOfRange, self.ram.write, 5, 255)
        self.assertRaises(AddressOutOfRange, self.ram.read, 5)
        self.assertRaises(AddressOutOfRange, self.ram.read, -1)

    def test_ram_block_overflow(self):
        self.assertRaises(RAMError, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))
        # Nothing should have been written
        self.assertEqual("0000000000", self.ram.mem.hex())
        self.assertRaises(AddressOutOfRange, self.ram.read_block, 3, 3)

    def test_ram_overflow_reports_first_missing_address(self):
        with self.assertRaises(AddressOutOfRange) as context:
            self.ram.read_block(4, 2)

        self.assertEqual(5, context.exception.address)

    def test_ram_empty_block(self):
        self.ram.write_block(5, b"")
        self.ram.zero_block(5, 0)
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_zero_block(self):
        self.ram.write_block(0, bytearray(b"\xFC\xFD\xFE\xFF"))
        self.assertEqual("fcfdfeff00", self.ram.mem.hex())
        self.ram.zero_block(1, 2)
        self.assertEqual("fc0000ff00", self.ram.mem.hex())

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.assertEqual("00fdfe0000", self.ram.mem.hex())
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())
