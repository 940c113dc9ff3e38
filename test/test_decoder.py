#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cchip.decoder import decode, describe, FORMS, INVALID, MNEMONICS


class TestDecoder(unittest.TestCase):
    def test_decoder_operand_fields(self):
        ins = decode(0xD12A)
        self.assertEqual("Dxyn", ins.form)
        self.assertEqual(0xD12A, ins.word)
        self.assertEqual(0x1, ins.x)
        self.assertEqual(0x2, ins.y)
        self.assertEqual(0xA, ins.n)
        self.assertEqual(0x2A, ins.kk)
        self.assertEqual(0x12A, ins.nnn)

    def test_decoder_forms(self):
        expected = {
            0x00E0: "00E0", 0x00EE: "00EE", 0x0123: "0nnn", 0x0000: "0nnn", 0x1234: "1nnn", 0x2FFF: "2nnn",
            0x3A12: "3xkk", 0x4B34: "4xkk", 0x5120: "5xy0", 0x6FFF: "6xkk", 0x7001: "7xkk",
            0x8120: "8xy0", 0x8121: "8xy1", 0x8122: "8xy2", 0x8123: "8xy3", 0x8124: "8xy4",
            0x8125: "8xy5", 0x8126: "8xy6", 0x8127: "8xy7", 0x812E: "8xyE", 0x9120: "9xy0",
            0xA123: "Annn", 0xB123: "Bnnn", 0xC1FF: "Cxkk", 0xD125: "Dxyn", 0xE19E: "Ex9E", 0xE1A1: "ExA1",
            0xF107: "Fx07", 0xF10A: "Fx0A", 0xF115: "Fx15", 0xF118: "Fx18", 0xF11E: "Fx1E", 0xF129: "Fx29",
            0xF133: "Fx33", 0xF155: "Fx55", 0xF165: "Fx65"
        }

        for word, form in expected.items():
            self.assertEqual(form, decode(word).form, "0x{:04x}".format(word))

        # Every form is covered above
        self.assertEqual(35, len(FORMS))
        self.assertEqual(set(FORMS), set(expected.values()))

    def test_decoder_invalid(self):
        for word in 0x5001, 0x500F, 0x8008, 0x800D, 0x800F, 0x9001, 0xE09F, 0xE0A2, 0xF000, 0xF075, 0xFFFF:
            self.assertEqual(INVALID, decode(word).form, "0x{:04x}".format(word))

    def test_decoder_is_total(self):
        for word in range(0x10000):
            self.assertIn(decode(word).form, MNEMONICS)

    def test_decoder_describe(self):
        self.assertEqual("DRW (Dxyn)", describe(decode(0xD015)))
        self.assertEqual("??? (INVALID)", describe(decode(0xFFFF)))
