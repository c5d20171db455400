#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to step() fetches, decodes and executes exactly one instruction, so whatever
drives the CPU keeps full control over timing, and can stop between any two
instructions without leaving anything half-done.

Decoding is a dictionary lookup on the first nibble of the opcode, followed by
a second lookup on a masked opcode for the groups that share a first nibble.

A few instructions have behaved differently across historical interpreters.
Each of these is a 'quirk' flag, so the behaviour is a configuration choice:

- Shift quirks : SHR/SHL shift Vx in place.  Otherwise Vy is shifted into Vx.
- Logic quirks : OR/AND/XOR reset Vf to zero afterwards.
- Load quirks  : Register dump/load leave I pointing past the last register.
- Jump quirks  : BNNN jumps to Vx + NNN rather than V0 + NNN.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import CPU_QUIRKS, FONT_GLYPH_SIZE, FONT_LOCATION, PROGRAM_ORIGIN
from .faults import MemoryFault, StackFault, UnknownOpcode

CPU_ENDIAN = "big"  # CHIP-8 is big-endian

STATE_RUNNING = 0
STATE_AWAITING_KEYPRESS = 1

STATE_NAMES = {
    STATE_RUNNING:           "Running",
    STATE_AWAITING_KEYPRESS: "AwaitingKeyPress"
}


class CPU:
    def __init__(self, ram, stack, framebuffer, keypad, timers, debugger, program_origin=PROGRAM_ORIGIN,
                 font_location=FONT_LOCATION, skip_unknown_opcodes=False, shift_quirks=None, logic_quirks=None,
                 load_quirks=None, jump_quirks=None):

        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.timers = timers
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()
        self.program_origin = program_origin
        self.font_location = font_location
        self.skip_unknown_opcodes = skip_unknown_opcodes

        self.shift_quirks = CPU_QUIRKS["shift"] if shift_quirks is None else shift_quirks
        self.logic_quirks = CPU_QUIRKS["logic"] if logic_quirks is None else logic_quirks
        self.load_quirks = CPU_QUIRKS["load"] if load_quirks is None else load_quirks
        self.jump_quirks = CPU_QUIRKS["jump"] if jump_quirks is None else jump_quirks

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        # Initialise registers
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.i = 0  # Index register
        self.pc = program_origin
        self.debug_pc = program_origin
        self.opcode = None
        self.state = STATE_RUNNING

    def reset(self):
        # Back to power-on state.  RAM is left alone, so a loaded ROM can simply be restarted.
        self.v[:] = bytes(16)
        self.i = 0
        self.pc = self.program_origin
        self.debug_pc = self.program_origin
        self.opcode = None
        self.state = STATE_RUNNING
        self.stack.clear()
        self.timers.reset()
        self.framebuffer.clear()

    def load_rom(self, rom):
        self.ram.load_rom(rom, self.program_origin)

    def step(self):
        # Keep track of the program counter before altering it in any way, so faults can report it
        self.debug_pc = self.pc
        self.opcode = None

        try:
            self.opcode = self.fetch()
            self.inc_pc()  # Program counter updates after fetch (and technically before decode), but before execute
            self.decode_exec()
        except UnknownOpcode as fault:
            if not self.skip_unknown_opcodes:
                raise

            # Execution carries on with the next instruction, as PC has already moved past this one
            self.debugger.warn("Skipped unknown opcode. {}".format(fault))
        except (MemoryFault, StackFault) as fault:
            raise fault.locate(self.debug_pc, self.opcode)

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def decode_exec(self):
        self._call_masked_instruction((0xF000 & self.opcode) >> 12)

    def inc_pc(self):
        self.pc += 2

    def dec_pc(self):
        # Only used to re-run an instruction (keypress wait)
        self.pc -= 2

    def get_state_name(self):
        return STATE_NAMES[self.state]

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication (ever so slight slowdown).  Don't reference these more than necessary as they are
    # recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        raise UnknownOpcode(
            "Opcode 0x{:04x} is not a CHIP-8 instruction".format(self.opcode), self.debug_pc, self.opcode
        )

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _0nnn(self):
        opcode = self.opcode

        if opcode < 0x10:
            # Opcodes 0x0 - 0xF are used internally for indexing, and machine code routines (0NNN) are not emulated
            self._opcode_unsupported()

        self._call_masked_instruction(opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        if self.live_debug:
            self.debug("CLS")

        self.framebuffer.clear()

    def _00EE(self):  # RET
        if self.live_debug:
            self.debug("RET")

        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        if self.live_debug:
            self.debug("JP 0x{:03x}".format(self.addr))

        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        if self.live_debug:
            self.debug("CALL 0x{:03x}".format(self.addr))

        # PC already points at the instruction after the call
        self.stack.push(self.pc)
        self.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.live_debug:
            self.debug("SE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] == self.byte:
            self.inc_pc()

    def _4xkk(self):  # SNE Vx, byte
        if self.live_debug:
            self.debug("SNE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] != self.byte:
            self.inc_pc()

    def _5xy0(self):  # SE Vx, Vy
        if self.live_debug:
            self.debug("SE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] == self.v[self.vy]:
            self.inc_pc()

    def _6xkk(self):  # LD Vx, byte
        if self.live_debug:
            self.debug("LD V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        byte = self.byte

        if self.live_debug:
            self.debug("ADD V{:01x}, 0x{:02x}".format(vx, byte))

        # No carry flag for this one
        self.v[vx] = (self.v[vx] + byte) & 0xFF

    def _write_alu(self, val, flag):
        # Vf must be set AFTER Vx, as Vf is sometimes specified in the parameters
        self.v[self.vx] = val & 0xFF
        self.v[0xF] = flag

    def _post_8xy1_8xy2_8xy3(self):
        if self.logic_quirks:
            self.v[0xF] = 0

    def _8xy0(self):  # LD Vx, Vy
        if self.live_debug:
            self.debug("LD V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        if self.live_debug:
            self.debug("OR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] |= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self):  # AND Vx, Vy
        if self.live_debug:
            self.debug("AND V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] &= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self):  # XOR Vx, Vy
        if self.live_debug:
            self.debug("XOR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] ^= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self):  # ADD Vx, Vy
        if self.live_debug:
            self.debug("ADD V{:01x}, V{:01x}".format(self.vx, self.vy))

        val = self.v[self.vx] + self.v[self.vy]
        self._write_alu(val, int(val > 0xFF))  # Vf is set when carrying

    def _8xy5(self):  # SUB Vx, Vy
        if self.live_debug:
            self.debug("SUB V{:01x}, V{:01x}".format(self.vx, self.vy))

        val = self.v[self.vx] - self.v[self.vy]
        self._write_alu(val, int(val >= 0))  # Vf is set when NOT borrowing

    def _debug_8xy6_8xyE(self, direction):
        self.debug(
            "{} V{:01x}".format(direction, self.vx) if self.shift_quirks else
            "{} V{:01x}, V{:01x}".format(direction, self.vx, self.vy)
        )

    def _8xy6(self):  # SHR Vx {, Vy}
        if self.live_debug:
            self._debug_8xy6_8xyE("SHR")

        val = self.v[self.vx if self.shift_quirks else self.vy]
        self._write_alu(val >> 1, val & 1)

    def _8xy7(self):  # SUBN Vx, Vy
        if self.live_debug:
            self.debug("SUBN V{:01x}, V{:01x}".format(self.vx, self.vy))

        val = self.v[self.vy] - self.v[self.vx]
        self._write_alu(val, int(val >= 0))

    def _8xyE(self):  # SHL Vx {, Vy}
        if self.live_debug:
            self._debug_8xy6_8xyE("SHL")

        val = self.v[self.vx if self.shift_quirks else self.vy]
        self._write_alu(val << 1, val >> 7)

    def _9xy0(self):  # SNE Vx, Vy
        if self.live_debug:
            self.debug("SNE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] != self.v[self.vy]:
            self.inc_pc()

    def _Annn(self):  # LD I, addr
        if self.live_debug:
            self.debug("LD I, 0x{:03x}".format(self.addr))

        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        vr = self.vx if self.jump_quirks else 0

        if self.live_debug:
            self.debug("JP V{:01x}, 0x{:03x}".format(vr, self.addr))

        # Not masked.  Jumping off the end of memory faults on the next fetch.
        self.pc = self.v[vr] + self.addr

    def _Cxkk(self):  # RND Vx, byte
        if self.live_debug:
            self.debug("RND V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        if self.live_debug:
            self.debug("DRW V{:01x}, V{:01x}, 0x{:01x}".format(self.vx, self.vy, self.nibble))

        rows = self.ram.read_block(self.i, self.nibble)
        collided = self.framebuffer.draw_sprite(self.v[self.vx], self.v[self.vy], rows)
        self.v[0xF] = int(collided)

    def _Ex9E(self):  # SKP Vx
        if self.live_debug:
            self.debug("SKP V{:01x}".format(self.vx))

        if self.keypad.is_key_down(self.v[self.vx]):
            self.inc_pc()

    def _ExA1(self):  # SKNP Vx
        if self.live_debug:
            self.debug("SKNP V{:01x}".format(self.vx))

        if not self.keypad.is_key_down(self.v[self.vx]):
            self.inc_pc()

    def _Fx07(self):  # LD Vx, DT
        if self.live_debug:
            self.debug("LD V{:01x}, DT".format(self.vx))

        self.v[self.vx] = self.timers.delay

    def _Fx0A(self):  # LD Vx, K
        if self.live_debug:
            self.debug("LD V{:01x}, K".format(self.vx))

        # The sound and delay timers still need to expire, and the display still needs updating, so rather than
        # blocking here, control returns to the driver with the program counter rewound onto this instruction.
        if self.state == STATE_RUNNING:
            self.keypad.latch()  # Keys already held down don't count
            self.state = STATE_AWAITING_KEYPRESS

        key = self.keypad.get_new_keypress()

        if key is None:
            self.dec_pc()
        else:
            self.v[self.vx] = key
            self.state = STATE_RUNNING

    def _Fx15(self):  # LD DT, Vx
        if self.live_debug:
            self.debug("LD DT, V{:01x}".format(self.vx))

        self.timers.set_delay(self.v[self.vx])

    def _Fx18(self):  # LD ST, Vx
        if self.live_debug:
            self.debug("LD ST, V{:01x}".format(self.vx))

        self.timers.set_sound(self.v[self.vx])

    def _Fx1E(self):  # ADD I, Vx
        if self.live_debug:
            self.debug("ADD I, V{:01x}".format(self.vx))

        self.i = (self.i + self.v[self.vx]) & 0xFFFF

    def _Fx29(self):  # LD F, Vx
        if self.live_debug:
            self.debug("LD F, V{:01x}".format(self.vx))

        self.i = self.font_location + FONT_GLYPH_SIZE * (self.v[self.vx] & 0xF)

    def _Fx33(self):  # LD B, Vx
        if self.live_debug:
            self.debug("LD B, V{:01x}".format(self.vx))

        val = self.v[self.vx]
        # Hundreds, tens, units.  Written as one block so nothing is stored if it runs off the end of RAM
        self.ram.write_block(self.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _post_Fx55_Fx65(self):
        if self.load_quirks:
            self.i = (self.i + self.vx + 1) & 0xFFFF

    def _Fx55(self):  # LD [I], Vx
        if self.live_debug:
            self.debug("LD [I], V{:01x}".format(self.vx))

        # Ensure with +1 that the final register is copied
        self.ram.write_block(self.i, self.v[:self.vx + 1])
        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        if self.live_debug:
            self.debug("LD V{:01x}, [I]".format(self.vx))

        count = self.vx + 1
        self.v[:count] = self.ram.read_block(self.i, count)
        self._post_Fx55_Fx65()
