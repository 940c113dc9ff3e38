#!/usr/bin/env python3

"""
Machine Faults

Everything that can go wrong inside the emulated machine is raised as a
MachineFault.  The driver decides whether a fault halts emulation, is logged,
or is simply skipped over.

Faults raised deep inside RAM or the stack don't know which instruction caused
them, so the CPU annotates them with the program counter and opcode before
passing them on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class MachineFault(Exception):
    def __init__(self, message, pc=None, opcode=None):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.opcode = opcode

    def locate(self, pc, opcode):
        self.pc = pc
        self.opcode = opcode

    @property
    def kind(self):
        return type(self).__name__

    def __str__(self):
        if self.pc is None:
            return self.message

        if self.opcode is None:
            return "{} at address 0x{:03x}".format(self.message, self.pc)

        return "{} (opcode 0x{:04x} at address 0x{:03x})".format(self.message, self.opcode, self.pc)


class RAMError(MachineFault):
    pass


class AddressOutOfRange(RAMError):
    def __init__(self, address):
        super().__init__("Memory address 0x{:x} is out of range".format(address))
        self.address = address


class LoadTooLarge(RAMError):
    def __init__(self, size, limit):
        super().__init__("Program is {} bytes, but only {} bytes fit in memory".format(size, limit))
        self.size = size


class StackError(MachineFault):
    pass


class StackOverflow(StackError):
    def __init__(self):
        super().__init__("Stack overflow")


class StackUnderflow(StackError):
    def __init__(self):
        super().__init__("Stack underflow")


class CPUError(MachineFault):
    pass


class UnknownOpcode(CPUError):
    def __init__(self, opcode):
        super().__init__("Unknown opcode 0x{:04x}".format(opcode), opcode=opcode)
