#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "ChocChip-8 Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000
FONT_LOC = 0x050
PROGRAM_LOC = 0x200
PROGRAM_MAX_SIZE = MEM_SIZE - PROGRAM_LOC  # 0xE00 bytes
STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Timing
TIMER_FREQ = 60.0            # 60Hz delay and sound timers
DEFAULT_CLOCK_SPEED = 600    # Instructions per second
UNCAPPED_BATCH_SIZE = 1000   # Instructions run between timer checks when the clock is uncapped

# Standard hex digit sprites, five bytes each, stored at FONT_LOC
FONTSET = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_CHAR_SIZE = 5

# Default mappings for keys 0-F, later populated into a dictionary.  Note that the keyscans (on a UK QWERTY keyboard)
# and ASCII characters for these are the same code.  The physical layout is:
#   1 2 3 4      1 2 3 C
#   Q W E R  ->  4 5 6 D
#   A S D F      7 8 9 E
#   Z X C V      A 0 B F
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# CPU quirks and their COSMAC VIP defaults
CPU_QUIRKS = {
    "vf_reset": True,             # 8xy1/8xy2/8xy3 clear VF afterwards
    "shift_uses_vy": True,        # 8xy6/8xyE shift Vy into Vx
    "memory_increments_i": True,  # Fx55/Fx65 leave I pointing past the last register
    "clip_sprites": True,         # Dxyn clips at the screen edges instead of wrapping
    "jump_uses_vx": False,        # Bnnn adds Vx (x = high nibble of nnn) instead of V0
    "index_overflow": False       # Fx1E sets VF when I passes 0xFFF (Amiga interpreter behaviour)
}

# Driver fault handling
FAULT_POLICIES = ["halt", "log", "ignore"]
