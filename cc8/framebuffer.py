#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only handed to the actual display (the host
rendering system) at 60Hz.  Programs for this system cannot write directly into
video RAM.  Instead, sprites are drawn to the screen using an XOR method, and
any pixel that was set, but was unset by an XOR, is reported as a collision.

Sprite origins always wrap around the screen.  Pixels which then run off the
right or bottom edges either wrap too (the default), or are clipped if wrapping
is disabled.

Renderers never see video RAM itself, only immutable snapshots, and only when
something has changed since the last one was taken.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DISPLAY_WIDTH, DISPLAY_HEIGHT
from .ram import RAM

SPRITE_WIDTH = 8


class Framebuffer():
    def __init__(self, vid_width=DISPLAY_WIDTH, vid_height=DISPLAY_HEIGHT, allow_wrapping=True):
        self.allow_wrapping = allow_wrapping
        self.vram = RAM()
        self.resize_vid(vid_width, vid_height)

    def resize_vid(self, vid_width, vid_height):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.vram.resize(self.vid_size)
        self.dirty = True

    def clear(self):
        self.vram.clear()
        self.dirty = True

    def get_pixel(self, x, y):
        return self.vram.read(y * self.vid_width + x) != 0

    def xor_pixel(self, x, y):
        # Returns flagging any collision, or None if the pixel is off-screen and clipped

        if self.allow_wrapping:
            x %= self.vid_width
            y %= self.vid_height
        elif x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        self.vram.write(vram_loc, pixel ^ 0xFF)
        self.dirty = True

        return pixel != 0

    def draw_sprite(self, x, y, rows):
        # Each byte in rows is one line of 8 pixels, most significant bit leftmost
        x %= self.vid_width
        y %= self.vid_height
        collided = False

        for row_num, spr_data in enumerate(rows):
            for col in range(SPRITE_WIDTH):
                if spr_data & (0x80 >> col) and self.xor_pixel(x + col, y + row_num):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    collided = True

        return collided

    def snapshot(self):
        vid_width = self.vid_width
        mem = self.vram.mem

        return tuple(
            tuple(mem[row_start + x] != 0 for x in range(vid_width))
            for row_start in range(0, self.vid_size, vid_width)
        )

    def is_dirty(self):
        return self.dirty

    def mark_clean(self):
        self.dirty = False

    def get_vid_size(self):
        return self.vid_width, self.vid_height
