#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cc8.framebuffer import Framebuffer


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer_clip = Framebuffer(4, 5, allow_wrapping=False)
        self.framebuffer_wrap = Framebuffer(3, 4, allow_wrapping=True)

    def test_framebuffer_default_size(self):
        fb = Framebuffer()
        self.assertEqual((64, 32), fb.get_vid_size())
        frame = fb.snapshot()
        self.assertEqual(32, len(frame))
        self.assertTrue(all(len(row) == 64 for row in frame))
        self.assertFalse(any(any(row) for row in frame))

    def test_framebuffer_resize_vid(self):
        self.assertEqual((4, 5), self.framebuffer_clip.get_vid_size())
        self.assertEqual(20, self.framebuffer_clip.vram.mem_size)
        self.assertEqual((3, 4), self.framebuffer_wrap.get_vid_size())

    def test_framebuffer_writes_clipped(self):
        fb = self.framebuffer_clip
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("ff00000000000000000000000000000000000000", fb.vram.mem.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("ff00000000ff0000000000000000000000000000", fb.vram.mem.hex())
        self.assertIsNone(fb.xor_pixel(4, 5))  # Should do nothing as wrapping is off
        self.assertEqual("ff00000000ff0000000000000000000000000000", fb.vram.mem.hex())

        # Check clear works
        fb.clear()
        self.assertEqual("0000000000000000000000000000000000000000", fb.vram.mem.hex())

    def test_framebuffer_writes_wrapped(self):
        fb = self.framebuffer_wrap
        fb.xor_pixel(0, 0)
        self.assertEqual("ff0000000000000000000000", fb.vram.mem.hex())
        fb.xor_pixel(1, 1)
        self.assertEqual("ff000000ff00000000000000", fb.vram.mem.hex())
        self.assertTrue(fb.xor_pixel(3, 4))  # Should wrap round and erase the first pixel
        self.assertEqual("00000000ff00000000000000", fb.vram.mem.hex())

    def test_framebuffer_get_pixel(self):
        fb = self.framebuffer_wrap
        fb.xor_pixel(2, 3)
        self.assertTrue(fb.get_pixel(2, 3))
        self.assertFalse(fb.get_pixel(1, 3))

    def test_framebuffer_draw_sprite(self):
        fb = Framebuffer()
        self.assertFalse(fb.draw_sprite(0, 0, b"\xF0\x90"))
        self.assertEqual(
            (True, True, True, True, False, False, False, False),
            fb.snapshot()[0][:8]
        )
        self.assertEqual(
            (True, False, False, True, False, False, False, False),
            fb.snapshot()[1][:8]
        )

    def test_framebuffer_draw_sprite_twice_restores(self):
        fb = Framebuffer()
        fb.draw_sprite(10, 5, b"\x01")
        before = fb.snapshot()
        self.assertFalse(fb.draw_sprite(20, 8, b"\xFF\x81\xFF"))
        self.assertTrue(fb.draw_sprite(20, 8, b"\xFF\x81\xFF"))  # Turns pixels off, so collides
        self.assertEqual(before, fb.snapshot())

    def test_framebuffer_draw_sprite_wraps(self):
        fb = Framebuffer()
        fb.draw_sprite(62, 31, b"\xC0\xC0")
        frame = fb.snapshot()
        self.assertTrue(frame[31][62])
        self.assertTrue(frame[31][63])
        self.assertTrue(frame[0][62])
        self.assertTrue(frame[0][63])
        self.assertFalse(frame[0][0])

    def test_framebuffer_draw_sprite_origin_wraps(self):
        fb = Framebuffer()
        fb.draw_sprite(64 + 3, 32 + 2, b"\x80")
        self.assertTrue(fb.get_pixel(3, 2))

    def test_framebuffer_draw_sprite_clipped(self):
        fb = Framebuffer(allow_wrapping=False)
        self.assertFalse(fb.draw_sprite(62, 31, b"\xFF\xFF"))
        frame = fb.snapshot()
        self.assertTrue(frame[31][62])
        self.assertTrue(frame[31][63])
        self.assertFalse(frame[31][0])
        self.assertFalse(frame[0][62])

    def test_framebuffer_dirty_tracking(self):
        fb = Framebuffer()
        self.assertTrue(fb.is_dirty())  # A new screen needs drawing once
        fb.mark_clean()
        self.assertFalse(fb.is_dirty())
        fb.draw_sprite(0, 0, b"\x80")
        self.assertTrue(fb.is_dirty())
        fb.mark_clean()
        fb.clear()
        self.assertTrue(fb.is_dirty())

    def test_framebuffer_snapshot_is_immutable(self):
        fb = Framebuffer()
        frame = fb.snapshot()
        fb.draw_sprite(0, 0, b"\x80")
        self.assertFalse(frame[0][0])
        self.assertTrue(fb.snapshot()[0][0])
