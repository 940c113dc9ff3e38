#!/usr/bin/env python3

"""
Machine Diagnostics

When emulation halts on a fault, the following is reported:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Address of the faulting instruction
    * OP - OpCode number
    * IN - Decoded instruction
    * SP and the stack contents
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO
from .decoder import decode, describe


def format_state(machine, pc=None, opcode=None):
    instruction = "---" if opcode is None else describe(decode(opcode))
    state_str = (
        "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: {} IN: {}"
    ).format(
        *[machine.v[reg_num] for reg_num in range(15, -1, -1)] +
        [machine.i, machine.dt, machine.st, machine.pc if pc is None else pc,
         "----" if opcode is None else "0x{:04x}".format(opcode), instruction]
    )

    stack_items = machine.stack.get_items()
    stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
    state_str += "\nSP: {} Stack:{}".format(machine.sp, stack_str or " (Empty)")

    if machine.waiting_for_key is not None:
        state_str += "\nWaiting for a keypress into V{:01x}".format(machine.waiting_for_key)

    return state_str


def format_fault(machine, fault):
    return (
        "Emulation halted.\n\n" +
        "{}{}: {}\n\nDebug info:\n{}"
    ).format(APP_INTRO, fault.kind, fault, format_state(machine, fault.pc, fault.opcode))
