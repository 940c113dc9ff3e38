#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to step() is one complete cycle: fetch the word at the program counter, move
the program counter on, decode the word and execute it.

Every instruction checks everything that could fault before changing any state,
so a fault never leaves a half-finished instruction behind.  The program counter
has already moved past the faulting instruction, which lets the driver skip it
and carry on if it wants to.

Waiting for a keypress (Fx0A) doesn't rewind the program counter.  Instead the
machine is flagged as waiting, and each following cycle just checks the keypad
until a key goes down.  The timers carry on ticking in the meantime.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import CPU_QUIRKS, FONT_CHAR_SIZE, FONT_LOC
from .decoder import decode, INVALID
from .faults import MachineFault, UnknownOpcode

CPU_ENDIAN = "big"  # CHIP-8 is big-endian


def seeded_random_source(seed=None):
    # The same seed always gives the same stream of bytes
    generator = Random(seed)

    def random_byte():
        return generator.randint(0, 0xFF)

    return random_byte


class CPU:
    def __init__(self, machine, random_source=None, vf_reset=None, shift_uses_vy=None, memory_increments_i=None,
                 clip_sprites=None, jump_uses_vx=None, index_overflow=None):

        self.machine = machine
        self.random_source = seeded_random_source() if random_source is None else random_source

        """
        Quirks
        ------

        - VF reset            : 8xy1/8xy2/8xy3 reset VF to 0, as on the COSMAC VIP.
        - Shift uses Vy       : 8xy6/8xyE shift Vy and put the result in Vx.  Otherwise Vx is shifted in place.
        - Memory increments I : Fx55/Fx65 leave I pointing after the last register stored or loaded.
        - Clip sprites        : Sprites are cut off at the screen edges.  Otherwise they wrap around.
        - Jump uses Vx        : Bnnn jumps to xnn + Vx rather than nnn + V0 (CHIP-48 and Super-CHIP).
        - Index overflow      : Fx1E sets VF when I goes past 0xFFF (Amiga interpreter).
        """

        self.vf_reset = CPU_QUIRKS["vf_reset"] if vf_reset is None else vf_reset
        self.shift_uses_vy = CPU_QUIRKS["shift_uses_vy"] if shift_uses_vy is None else shift_uses_vy
        self.memory_increments_i = (
            CPU_QUIRKS["memory_increments_i"] if memory_increments_i is None else memory_increments_i
        )
        self.clip_sprites = CPU_QUIRKS["clip_sprites"] if clip_sprites is None else clip_sprites
        self.jump_uses_vx = CPU_QUIRKS["jump_uses_vx"] if jump_uses_vx is None else jump_uses_vx
        self.index_overflow = CPU_QUIRKS["index_overflow"] if index_overflow is None else index_overflow

        # Instruction pointers, indexed by the form the decoder returns
        self.instructions = {
            "00E0": self._00E0,
            "00EE": self._00EE,
            "0nnn": self._0nnn,
            "1nnn": self._1nnn,
            "2nnn": self._2nnn,
            "3xkk": self._3xkk,
            "4xkk": self._4xkk,
            "5xy0": self._5xy0,
            "6xkk": self._6xkk,
            "7xkk": self._7xkk,
            "8xy0": self._8xy0,
            "8xy1": self._8xy1,
            "8xy2": self._8xy2,
            "8xy3": self._8xy3,
            "8xy4": self._8xy4,
            "8xy5": self._8xy5,
            "8xy6": self._8xy6,
            "8xy7": self._8xy7,
            "8xyE": self._8xyE,
            "9xy0": self._9xy0,
            "Annn": self._Annn,
            "Bnnn": self._Bnnn,
            "Cxkk": self._Cxkk,
            "Dxyn": self._Dxyn,
            "Ex9E": self._Ex9E,
            "ExA1": self._ExA1,
            "Fx07": self._Fx07,
            "Fx0A": self._Fx0A,
            "Fx15": self._Fx15,
            "Fx18": self._Fx18,
            "Fx1E": self._Fx1E,
            "Fx29": self._Fx29,
            "Fx33": self._Fx33,
            "Fx55": self._Fx55,
            "Fx65": self._Fx65
        }

        # Address and opcode of the instruction being executed, for fault reports
        self.debug_pc = machine.pc
        self.opcode = None

    def quirks(self):
        return {quirk: getattr(self, quirk) for quirk in CPU_QUIRKS}

    def step(self):
        machine = self.machine
        # Only keys pressed since the last cycle count, so drain the log every time
        presses = machine.keypad.take_presses()

        if machine.waiting_for_key is not None:
            if presses:
                machine.v[machine.waiting_for_key] = presses[0]
                machine.waiting_for_key = None

            # The program counter already points past Fx0A, so there's nothing else to do this cycle
            return

        # Keep track of the program counter before altering it in any way, in case there is a fault
        self.debug_pc = machine.pc
        self.opcode = None

        try:
            self.opcode = self.fetch()
            self.inc_pc()  # Program counter updates after fetch, but before execute
            self.execute(decode(self.opcode))
        except MachineFault as fault:
            fault.locate(self.debug_pc, self.opcode)
            raise

    def fetch(self):
        return int.from_bytes(self.machine.ram.read_block(self.machine.pc, 2), CPU_ENDIAN, signed=False)

    def execute(self, instruction):
        if instruction.form == INVALID:
            raise UnknownOpcode(instruction.word)

        self.instructions[instruction.form](instruction)

    def inc_pc(self):
        self.machine.pc = (self.machine.pc + 2) & 0xFFF

    def _00E0(self, ins):  # CLS
        self.machine.framebuffer.clear()

    def _00EE(self, ins):  # RET
        self.machine.pc = self.machine.stack.pop()

    def _0nnn(self, ins):  # SYS addr
        # Machine code routines can't run here, so this is ignored
        pass

    def _1nnn(self, ins):  # JP addr
        self.machine.pc = ins.nnn

    def _2nnn(self, ins):  # CALL addr
        machine = self.machine
        machine.stack.push(machine.pc)
        machine.pc = ins.nnn

    def _3xkk(self, ins):  # SE Vx, byte
        if self.machine.v[ins.x] == ins.kk:
            self.inc_pc()

    def _4xkk(self, ins):  # SNE Vx, byte
        if self.machine.v[ins.x] != ins.kk:
            self.inc_pc()

    def _5xy0(self, ins):  # SE Vx, Vy
        v = self.machine.v

        if v[ins.x] == v[ins.y]:
            self.inc_pc()

    def _6xkk(self, ins):  # LD Vx, byte
        self.machine.v[ins.x] = ins.kk

    def _7xkk(self, ins):  # ADD Vx, byte
        v = self.machine.v
        v[ins.x] = (v[ins.x] + ins.kk) & 0xFF  # No carry flag

    def _8xy0(self, ins):  # LD Vx, Vy
        v = self.machine.v
        v[ins.x] = v[ins.y]

    def _post_8xy1_8xy2_8xy3(self):
        if self.vf_reset:
            self.machine.v[0xF] = 0

    def _8xy1(self, ins):  # OR Vx, Vy
        v = self.machine.v
        v[ins.x] |= v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self, ins):  # AND Vx, Vy
        v = self.machine.v
        v[ins.x] &= v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self, ins):  # XOR Vx, Vy
        v = self.machine.v
        v[ins.x] ^= v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    # The flag must always be written after Vx, so that VF holds the flag when it is also the target register

    def _8xy4(self, ins):  # ADD Vx, Vy
        v = self.machine.v
        val = v[ins.x] + v[ins.y]
        v[ins.x] = val & 0xFF
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, ins, val):  # Post-SUB/SUBN
        v = self.machine.v
        v[ins.x] = val & 0xFF
        v[0xF] = int(val >= 0)  # Vf is set when NOT borrowing

    def _8xy5(self, ins):  # SUB Vx, Vy
        v = self.machine.v
        self._post_8xy5_8xy7(ins, v[ins.x] - v[ins.y])

    def _8xy6(self, ins):  # SHR Vx {, Vy}
        v = self.machine.v
        val = v[ins.y if self.shift_uses_vy else ins.x]
        v[ins.x] = val >> 1
        v[0xF] = val & 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        v = self.machine.v
        self._post_8xy5_8xy7(ins, v[ins.y] - v[ins.x])

    def _8xyE(self, ins):  # SHL Vx {, Vy}
        v = self.machine.v
        val = v[ins.y if self.shift_uses_vy else ins.x]
        v[ins.x] = (val << 1) & 0xFF
        v[0xF] = val >> 7

    def _9xy0(self, ins):  # SNE Vx, Vy
        v = self.machine.v

        if v[ins.x] != v[ins.y]:
            self.inc_pc()

    def _Annn(self, ins):  # LD I, addr
        self.machine.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        # This quirk breaks lots of games if set incorrectly.  Super-CHIP games expect Vx, where x is the address'
        # first nibble.
        reg = ins.x if self.jump_uses_vx else 0
        self.machine.pc = (self.machine.v[reg] + ins.nnn) & 0xFFF

    def _Cxkk(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.machine.v[ins.x] = self.random_source() & ins.kk

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        machine = self.machine
        framebuffer = machine.framebuffer
        v = machine.v
        vid_width, vid_height = framebuffer.get_vid_size()

        # Reads the whole sprite up front, so a sprite running off the end of RAM faults before anything is drawn
        sprite = machine.ram.read_block(machine.i, ins.n) if ins.n else b""

        # The sprite's start always wraps.  Whether the rest of it wraps or clips is a quirk.
        vx_pos = v[ins.x] % vid_width
        vy_pos = v[ins.y] % vid_height
        clip_sprites = self.clip_sprites
        collided = False

        for y, spr_data in enumerate(sprite):
            scr_y = y + vy_pos

            if scr_y >= vid_height:
                if clip_sprites:
                    break

                scr_y %= vid_height

            for x in range(8):
                if spr_data & (0x80 >> x):
                    scr_x = x + vx_pos

                    if scr_x >= vid_width:
                        if clip_sprites:
                            break

                        scr_x %= vid_width

                    # Don't stop drawing on a collision, just remember it
                    if framebuffer.xor_pixel(scr_x, scr_y):
                        collided = True

        v[0xF] = int(collided)

    def _Ex9E(self, ins):  # SKP Vx
        machine = self.machine

        if machine.keypad.is_key_down(machine.v[ins.x]):
            self.inc_pc()

    def _ExA1(self, ins):  # SKNP Vx
        machine = self.machine

        if not machine.keypad.is_key_down(machine.v[ins.x]):
            self.inc_pc()

    def _Fx07(self, ins):  # LD Vx, DT
        self.machine.v[ins.x] = self.machine.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # Hand control back, and let the next cycles watch the keypad until a key goes down
        self.machine.waiting_for_key = ins.x

    def _Fx15(self, ins):  # LD DT, Vx
        self.machine.dt = self.machine.v[ins.x]

    def _Fx18(self, ins):  # LD ST, Vx
        self.machine.st = self.machine.v[ins.x]

    def _Fx1E(self, ins):  # ADD I, Vx
        machine = self.machine
        val = machine.i + machine.v[ins.x]
        machine.i = val & 0xFFFF

        # Allow for Amiga CHIP-8 interpreter behaviour
        if self.index_overflow:
            machine.v[0xF] = int(val > 0xFFF)

    def _Fx29(self, ins):  # LD F, Vx
        machine = self.machine
        machine.i = FONT_LOC + FONT_CHAR_SIZE * (machine.v[ins.x] & 0xF)

    def _Fx33(self, ins):  # LD B, Vx
        machine = self.machine
        val = machine.v[ins.x]
        machine.ram.write_block(machine.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _post_Fx55_Fx65(self, ins):
        if self.memory_increments_i:
            self.machine.i = (self.machine.i + ins.x + 1) & 0xFFFF

    def _Fx55(self, ins):  # LD [I], Vx
        machine = self.machine
        # Ensure with +1s that the final register is copied
        machine.ram.write_block(machine.i, machine.v[:ins.x + 1])
        self._post_Fx55_Fx65(ins)

    def _Fx65(self, ins):  # LD Vx, [I]
        machine = self.machine
        machine.v[:ins.x + 1] = machine.ram.read_block(machine.i, ins.x + 1)
        self._post_Fx55_Fx65(ins)
