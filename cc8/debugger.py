#!/usr/bin/env python3

"""
CPU Debugger

If enabled, this will output information before each instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * OP - OpCode number
    * IN - Decoded instruction

If a fault occurs, all of the above will be outputted, with the addition of
the stack contents and the CPU state.

Warnings (such as skipped opcodes) always go to stderr, whether live output is
enabled or not.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import sys
from .constants import APP_INTRO


class Debugger:
    def __init__(self):
        self.live = False

    def debug(self, cpu, instruction, verbose=False):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: {} IN: {}"
        ).format(
            *[cpu.v[reg_num] for reg_num in range(15, -1, -1)] +
            [
                cpu.i, cpu.timers.delay, cpu.timers.sound, cpu.debug_pc,
                "----" if cpu.opcode is None else "0x{:04x}".format(cpu.opcode), instruction
            ]
        )

        if verbose:
            stack_items = cpu.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += "\nStack:{}".format(stack_str or " (Empty)")
            debug_str += "\nState: {}".format(cpu.get_state_name())

        return debug_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, cpu, instruction):
        print(self.debug(cpu, instruction))

    def warn(self, message):
        print("{}Warning: {}".format(APP_INTRO, message), file=sys.stderr)

    def report_fault(self, cpu, fault):
        print(
            "Emulation halted.\n\n{}Debug info:\n{}\n\n{}: {}".format(
                APP_INTRO, self.debug(cpu, "???", verbose=True), type(fault).__name__, fault
            ),
            file=sys.stderr
        )
