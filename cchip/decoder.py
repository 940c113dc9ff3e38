#!/usr/bin/env python3

"""
Instruction Decoder

Turns a 16-bit word into an Instruction with every operand field already
extracted.  Decoding never fails: a word that matches none of the 35 CHIP-8
instruction forms decodes to an INVALID instruction, and it is up to the CPU to
refuse to execute it.

Lookup is by the first nibble.  Families that share a first nibble (0, 5, 8, 9,
E and F) are resolved by a second lookup against the word masked down to the
bits that identify the instruction.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

INVALID = "INVALID"

# Operand fields:
# x/y = register (0-15)
# n = nibble
# kk = byte
# nnn = address
Instruction = namedtuple("Instruction", ["form", "word", "x", "y", "n", "kk", "nnn"])

# Instructions identified by their first nibble alone
NIBBLE_FORMS = {
    0x1: "1nnn",
    0x2: "2nnn",
    0x3: "3xkk",
    0x4: "4xkk",
    0x6: "6xkk",
    0x7: "7xkk",
    0xA: "Annn",
    0xB: "Bnnn",
    0xC: "Cxkk",
    0xD: "Dxyn"
}

# Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
MASK_F00F_FORMS = {
    0x5000: "5xy0",
    0x8000: "8xy0",
    0x8001: "8xy1",
    0x8002: "8xy2",
    0x8003: "8xy3",
    0x8004: "8xy4",
    0x8005: "8xy5",
    0x8006: "8xy6",
    0x8007: "8xy7",
    0x800E: "8xyE",
    0x9000: "9xy0"
}

# Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
MASK_F0FF_FORMS = {
    0xE09E: "Ex9E",
    0xE0A1: "ExA1",
    0xF007: "Fx07",
    0xF00A: "Fx0A",
    0xF015: "Fx15",
    0xF018: "Fx18",
    0xF01E: "Fx1E",
    0xF029: "Fx29",
    0xF033: "Fx33",
    0xF055: "Fx55",
    0xF065: "Fx65"
}

# Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match).  Anything else is SYS.
EXACT_FORMS = {
    0x00E0: "00E0",
    0x00EE: "00EE"
}

MNEMONICS = {
    "00E0": "CLS",
    "00EE": "RET",
    "0nnn": "SYS",
    "1nnn": "JP",
    "2nnn": "CALL",
    "3xkk": "SE",
    "4xkk": "SNE",
    "5xy0": "SE",
    "6xkk": "LD",
    "7xkk": "ADD",
    "8xy0": "LD",
    "8xy1": "OR",
    "8xy2": "AND",
    "8xy3": "XOR",
    "8xy4": "ADD",
    "8xy5": "SUB",
    "8xy6": "SHR",
    "8xy7": "SUBN",
    "8xyE": "SHL",
    "9xy0": "SNE",
    "Annn": "LD",
    "Bnnn": "JP",
    "Cxkk": "RND",
    "Dxyn": "DRW",
    "Ex9E": "SKP",
    "ExA1": "SKNP",
    "Fx07": "LD",
    "Fx0A": "LD",
    "Fx15": "LD",
    "Fx18": "LD",
    "Fx1E": "ADD",
    "Fx29": "LD",
    "Fx33": "LD",
    "Fx55": "LD",
    "Fx65": "LD",
    INVALID: "???"
}

FORMS = [form for form in MNEMONICS if form != INVALID]


def _form_0(word):
    return EXACT_FORMS.get(word, "0nnn")


def _form_f00f(word):
    return MASK_F00F_FORMS.get(word & 0xF00F, INVALID)


def _form_f0ff(word):
    return MASK_F0FF_FORMS.get(word & 0xF0FF, INVALID)


FAMILY_DECODERS = {
    0x0: _form_0,
    0x5: _form_f00f,
    0x8: _form_f00f,
    0x9: _form_f00f,
    0xE: _form_f0ff,
    0xF: _form_f0ff
}


def decode(word):
    word &= 0xFFFF
    nibble = word >> 12
    form = NIBBLE_FORMS.get(nibble)

    if form is None:
        form = FAMILY_DECODERS[nibble](word)

    return Instruction(
        form,
        word,
        (word >> 8) & 0xF,
        (word >> 4) & 0xF,
        word & 0xF,
        word & 0xFF,
        word & 0xFFF
    )


def describe(instruction):
    # Short assembler-style name for fault reports
    return "{} ({})".format(MNEMONICS[instruction.form], instruction.form)
