#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cchip.constants import FONTSET
from cchip.faults import LoadTooLarge
from cchip.machine import Machine


class TestMachine(unittest.TestCase):
    def setUp(self):
        self.machine = Machine()

    def test_machine_initial_state(self):
        machine = self.machine
        self.assertEqual(0x200, machine.pc)
        self.assertEqual(0, machine.i)
        self.assertEqual(0, machine.sp)
        self.assertEqual(0, machine.dt)
        self.assertEqual(0, machine.st)
        self.assertEqual(bytes(16), bytes(machine.v))
        self.assertIsNone(machine.waiting_for_key)
        self.assertEqual(bytes(2048), machine.framebuffer_view())

    def test_machine_fontset(self):
        self.assertEqual(80, len(FONTSET))
        self.assertEqual(FONTSET, self.machine.ram.read_block(0x050, 80))
        self.assertEqual(b"\xF0\x90\x90\x90\xF0", self.machine.ram.read_block(0x050, 5))
        self.assertEqual(b"\xF0\x80\xF0\x80\x80", self.machine.ram.read_block(0x09B, 5))
        self.assertEqual(0, self.machine.ram.read(0x04F))
        self.assertEqual(0, self.machine.ram.read(0x0A0))

    def test_machine_load_program(self):
        self.machine.load_program(b"\x12\x00")
        self.assertEqual(b"\x12\x00", self.machine.ram.read_block(0x200, 2))

    def test_machine_load_program_largest(self):
        self.machine.load_program(b"\xAA" * 0xE00)
        self.assertEqual(0xAA, self.machine.ram.read(0xFFF))

    def test_machine_load_program_too_large(self):
        with self.assertRaises(LoadTooLarge) as context:
            self.machine.load_program(b"\xAA" * 0xE01)

        self.assertEqual(0xE01, context.exception.size)
        self.assertEqual(0, self.machine.ram.read(0x200))

    def test_machine_reload_clears_previous_program(self):
        self.machine.load_program(b"\x01\x02\x03\x04")
        self.machine.load_program(b"\x05")
        self.assertEqual(b"\x05\x00\x00\x00", self.machine.ram.read_block(0x200, 4))

    def test_machine_keys(self):
        self.machine.press_key(0xC)
        self.assertTrue(self.machine.keypad.is_key_down(0xC))
        self.machine.release_key(0xC)
        self.assertFalse(self.machine.keypad.is_key_down(0xC))

    def test_machine_timers(self):
        self.machine.dt = 2
        self.machine.st = 1
        self.assertTrue(self.machine.audio_gate())
        self.machine.tick_timers()
        self.assertEqual(1, self.machine.dt)
        self.assertEqual(0, self.machine.st)
        self.assertFalse(self.machine.audio_gate())
        self.machine.tick_timers()
        self.machine.tick_timers()
        self.assertEqual(0, self.machine.dt)
        self.assertEqual(0, self.machine.st)

    def test_machine_reset(self):
        machine = self.machine
        machine.load_program(b"\x12\x00")
        machine.v[3] = 0x33
        machine.i = 0x123
        machine.pc = 0x456
        machine.dt = machine.st = 9
        machine.stack.push(0x202)
        machine.framebuffer.xor_pixel(0, 0)
        machine.press_key(1)
        machine.waiting_for_key = 2
        machine.ram.write(0x050, 0)
        machine.reset()
        self.assertEqual(0, machine.v[3])
        self.assertEqual(0, machine.i)
        self.assertEqual(0x200, machine.pc)
        self.assertEqual(0, machine.dt)
        self.assertEqual(0, machine.st)
        self.assertEqual(0, machine.sp)
        self.assertEqual(bytes(2048), machine.framebuffer_view())
        self.assertFalse(machine.keypad.is_key_down(1))
        self.assertIsNone(machine.waiting_for_key)
        self.assertEqual(0, machine.ram.read(0x200))
        self.assertEqual(0xF0, machine.ram.read(0x050))
