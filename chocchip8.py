#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from cc8 import main
from cc8.constants import CPU_QUIRKS, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP, UNKNOWN_OPCODE_POLICIES


def parse_args():
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="set the CPU speed in instructions/second (default {})".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise null)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default), 1 = muted"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes for keys 0-F.  Separate each decimal with a comma"
    )
    parser.add_argument(
        "-o", "--origin", type=lambda value: int(value, 0),
        help="set the address the ROM is loaded at and started from (default 0x200)"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours in comma-separated hex, e.g. 000000,33FF33"
    )
    parser.add_argument(
        "--unknown_opcodes", choices=UNKNOWN_OPCODE_POLICIES, default="halt",
        help="halt on opcodes that are not CHIP-8 instructions (default), or warn and skip them"
    )

    for sys_quirk in list(CPU_QUIRKS) + ["screen_wrap"]:
        parser.add_argument(
            "--{}_quirks".format(sys_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(sys_quirk.replace("_", " "))
        )

    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output.  Slows CPU execution"
    )
    return parser.parse_args()  # Can call sys.exit(2) if args are incorrect


def cli():
    args = vars(parse_args())
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    main(args)


if __name__ == "__main__":
    cli()
