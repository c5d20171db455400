#!/usr/bin/env python3

"""
Stack Emulator

The CPU call stack has no specified location in RAM, and there is no stack
pointer register exposed to the running program.  This means we can simply
wrap a list to emulate it, keeping it out of the emulated address space.

Only return addresses are ever stored here.  Overflowing or underflowing the
stack is a fault, as it always indicates a broken program.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .faults import StackFault


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackFault("Stack overflow ({} levels)".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackFault("Stack underflow") from None

    def clear(self):
        self.items.clear()

    def depth(self):
        return len(self.items)

    def get_items(self):
        # For debugging
        return self.items
