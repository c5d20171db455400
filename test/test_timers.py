#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cc8.timers import Timers


class TestTimers(unittest.TestCase):
    def setUp(self):
        self.timers = Timers()

    def test_timers_tick(self):
        self.timers.set_delay(3)
        self.timers.set_sound(2)
        self.timers.tick()
        self.assertEqual(2, self.timers.delay)
        self.assertEqual(1, self.timers.sound)

    def test_timers_never_below_zero(self):
        self.timers.set_delay(1)
        self.timers.tick()
        self.timers.tick()
        self.assertEqual(0, self.timers.delay)
        self.assertEqual(0, self.timers.sound)

    def test_timers_independent(self):
        self.timers.set_delay(0)
        self.timers.set_sound(5)
        self.timers.tick()
        self.assertEqual(0, self.timers.delay)
        self.assertEqual(4, self.timers.sound)

    def test_timers_sound_active(self):
        self.assertFalse(self.timers.is_sound_active())
        self.timers.set_sound(1)
        self.assertTrue(self.timers.is_sound_active())
        self.timers.tick()
        self.assertFalse(self.timers.is_sound_active())

    def test_timers_byte_range(self):
        self.timers.set_delay(0x1FF)
        self.assertEqual(0xFF, self.timers.delay)

    def test_timers_reset(self):
        self.timers.set_delay(9)
        self.timers.set_sound(9)
        self.timers.reset()
        self.assertEqual((0, 0), (self.timers.delay, self.timers.sound))
