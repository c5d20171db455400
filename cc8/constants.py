#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "ChocChip-8 Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEMORY_SIZE = 0x1000
FONT_LOCATION = 0x50
PROGRAM_ORIGIN = 0x200
STACK_DEPTH = 16

# Display
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Timing
TIMER_FREQ = 60.0  # 60Hz timer decrement and display refresh
DEFAULT_CLOCK_SPEED = 600  # Instructions per second

# Standard hex digit glyphs 0-F, 5 rows of 4 pixels each (left-aligned in each byte)
SYSTEM_FONT = bytes((
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
FONT_GLYPH_SIZE = 5

# Default mappings for keys 0-F, later populated into a dictionary.  These are PyGame keyscans for the usual layout:
#   1 2 3 4        1 2 3 C
#   Q W E R   ->   4 5 6 D
#   A S D F        7 8 9 E
#   Z X C V        A 0 B F
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# CPU quirks (not including display wrapping), and whether each is enabled by default
CPU_QUIRKS = {
    "shift": True,   # SHR/SHL shift Vx in place rather than copying from Vy
    "logic": False,  # OR/AND/XOR reset Vf
    "load":  False,  # Register dump/load leaves I incremented
    "jump":  False   # BNNN adds Vx rather than V0
}

# Policies for opcodes that cannot be decoded
UNKNOWN_OPCODE_POLICIES = ["halt", "skip"]
