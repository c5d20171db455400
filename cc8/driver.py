#!/usr/bin/env python3

"""
Driver Loop

Runs the emulated machine one 60Hz frame at a time.  Each frame:

    1. Host inputs are processed, and the held keys are copied to the keypad
    2. A fixed number of CPU instructions are executed
    3. The delay and sound timers tick once, and the buzzer follows the sound
       timer
    4. The framebuffer is handed to the renderer, if anything has changed

The instruction rate and the timer rate are two separate counters here rather
than separate threads, so nothing else ever touches the machine while it runs.

If the CPU faults, execution stops.  The last frame can be left on screen until
the user quits, and the fault is then raised to the caller.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, TIMER_FREQ
from .faults import Fault

FRAME_INTERVAL = 1.0 / TIMER_FREQ


class Driver:
    def __init__(self, cpu, renderer, inputs, audio, debugger, clock_speed=None, hold_on_fault=False):
        self.cpu = cpu
        self.framebuffer = cpu.framebuffer
        self.keypad = cpu.keypad
        self.timers = cpu.timers
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.debugger = debugger
        self.hold_on_fault = hold_on_fault

        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        # At least one instruction per frame, so programs always make progress
        self.steps_per_frame = max(1, round(clock_speed / TIMER_FREQ))
        self.fault = None

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self):
        next_frame_time = perf_counter()

        while True:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if self.inputs.process_messages():
                break

            if self.fault is None:
                try:
                    self.run_frame()
                except Fault as fault:
                    self.halt(fault)

                    if not self.hold_on_fault:
                        break

            self.perf_counter_fps += 1

            # Wait for the next frame.  If the host has fallen behind, don't try to catch up.
            next_frame_time = max(next_frame_time + FRAME_INTERVAL, this_time)
            delay = next_frame_time - perf_counter()

            if delay > 0:
                sleep(delay)

        if self.fault is not None:
            raise self.fault

    def run_frame(self):
        self.keypad.set_keys(self.inputs.get_keys())
        step = self.cpu.step

        for _ in range(self.steps_per_frame):
            step()
            self.perf_counter_ops += 1

        self.timers.tick()
        self.audio.enable_buzzer(self.timers.is_sound_active())
        self.refresh_display()

    def refresh_display(self):
        # Render pending screen updates.  Nothing is drawn if the framebuffer hasn't changed.
        if self.framebuffer.is_dirty():
            self.renderer.draw_frame(self.framebuffer.snapshot())
            self.framebuffer.mark_clean()

    def halt(self, fault):
        self.fault = fault
        self.audio.enable_buzzer(False)
        self.refresh_display()  # Show whatever was drawn up to the fault
        self.debugger.report_fault(self.cpu, fault)
        self.renderer.set_title("{} - Halted: {}".format(APP_NAME, type(fault).__name__))

    def report_perf(self, fps=0, ops=0):
        if self.fault is None:
            self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
