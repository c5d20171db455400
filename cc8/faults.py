#!/usr/bin/env python3

"""
Emulation Faults

Every error the emulated machine can raise while loading or running a program.
Faults are deterministic, so the address and opcode of the failing instruction
are attached (when known) to make the problem reproducible.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Fault(Exception):
    def __init__(self, message, pc=None, opcode=None):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.opcode = opcode

    def locate(self, pc, opcode):
        # Only the first location is kept, as that is where the fault happened
        if self.pc is None:
            self.pc = pc
            self.opcode = opcode

        return self

    def __str__(self):
        if self.pc is None:
            return self.message

        if self.opcode is None:
            return "{} (at address 0x{:03x})".format(self.message, self.pc)

        return "{} (opcode 0x{:04x} at address 0x{:03x})".format(self.message, self.opcode, self.pc)


class UnknownOpcode(Fault):
    pass


class MemoryFault(Fault):
    pass


class StackFault(Fault):
    pass


class RomTooLarge(Fault):
    pass
