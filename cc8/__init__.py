#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import (
    APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_KEYMAP, FONT_LOCATION, MEMORY_SIZE, PROGRAM_ORIGIN, STACK_DEPTH,
    SYSTEM_FONT
)
from .cpu import CPU
from .debugger import Debugger
from .driver import Driver
from .framebuffer import Framebuffer
from .hostio import Loader
from .keypad import Keypad
from .ram import RAM
from .stack import Stack
from .timers import Timers


class StartupError(Exception):
    pass


def build_machine(rom, debugger, program_origin=None, allow_wrapping=True, skip_unknown_opcodes=False,
                  **quirk_settings):
    # Assemble a powered-on machine with the font and ROM in RAM.  No host systems are involved.
    program_origin = PROGRAM_ORIGIN if program_origin is None else program_origin

    if not FONT_LOCATION + len(SYSTEM_FONT) <= program_origin < MEMORY_SIZE:
        raise StartupError("Program origin 0x{:x} overlaps the system font or lies outside RAM".format(program_origin))

    ram = RAM(MEMORY_SIZE)
    ram.write_block(FONT_LOCATION, SYSTEM_FONT)
    ram.load_rom(rom, program_origin)

    cpu = CPU(
        ram, Stack(STACK_DEPTH), Framebuffer(allow_wrapping=allow_wrapping), Keypad(), Timers(), debugger,
        program_origin=program_origin, font_location=FONT_LOCATION, skip_unknown_opcodes=skip_unknown_opcodes,
        **quirk_settings
    )

    return cpu


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = args[quirk_label]
        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    opt_renderer = args["renderer"]
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then run headless
    mute_audio = args["mute"]

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if not auto_select_renderer:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )

            opt_renderer = "null"
        else:
            opt_renderer = "pygame"
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    # Read ROM binary before opening any windows, so a bad filename fails cleanly
    rom = Loader().load_rom(args["filename"])

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    screen_wrap_quirks = args["screen_wrap_quirks"]

    cpu = build_machine(
        rom, debugger,
        program_origin=args["origin"],
        allow_wrapping=(True if screen_wrap_quirks is None else bool(screen_wrap_quirks)),
        skip_unknown_opcodes=(args["unknown_opcodes"] == "skip"),
        **quirk_settings
    )

    # Set up a new rendering system matching the emulated screen
    renderer = Renderer(scale=args["scale"], pygame_palette=args["pygame_palette"])
    renderer.set_resolution(*cpu.framebuffer.get_vid_size())

    # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
    inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, renderer)
    audio = Audio()

    # Only hold a faulted program on screen if there's a window for the user to close
    driver = Driver(
        cpu, renderer, inputs, audio, debugger, clock_speed=args["clock_speed"],
        hold_on_fault=(opt_renderer == "pygame")
    )

    try:
        driver.run()
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()
