#!/usr/bin/env python3

"""
Delay and Sound Timers

Both count down towards zero at 60Hz, regardless of how fast the CPU is
running.  Nothing here knows about real time: whoever owns the frame loop
calls tick() once per 60th of a second.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Timers:
    def __init__(self):
        self.delay = 0
        self.sound = 0

    def set_delay(self, value):
        self.delay = value & 0xFF

    def set_sound(self, value):
        self.sound = value & 0xFF

    def tick(self):
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1

    def is_sound_active(self):
        return self.sound > 0

    def reset(self):
        self.delay = 0
        self.sound = 0
