#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, plus
zeroing of blocks.  Every access is bounds-checked: the emulated programs can
point the index register anywhere, and an access outside the address space is
a fault rather than something to silently wrap.

The same class is used for the main 4K address space and for video memory.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .faults import MemoryFault, RomTooLarge


class RAM:
    def __init__(self, mem_size=0):
        self.resize(mem_size)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_bounds(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_bounds(location, size)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_bounds(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        self.check_bounds(location, block_size)
        self.mem[location:location + block_size] = block

    def check_bounds(self, location, size=1):
        if location < 0 or location + size - 1 > self.mem_top:
            raise MemoryFault(
                "Memory access out of range: 0x{:04x}-0x{:04x}".format(location, location + size - 1)
            )

    def load_rom(self, rom, origin):
        # ROMs are checked up-front so nothing is written if the image doesn't fit
        rom_top = origin + len(rom)

        if rom_top > self.mem_size:
            raise RomTooLarge(
                "ROM is {} bytes, but only {} bytes are available from 0x{:03x}".format(
                    len(rom), max(0, self.mem_size - origin), origin
                )
            )

        self.write_block(origin, rom)

    def zero_block(self, offset, size):
        self.check_bounds(offset, size)
        self.mem[offset:offset + size] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)
