#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only drawn to the actual display (the host
rendering system) at 60Hz, when the driver hands a snapshot to the renderer.
The framebuffer itself never talks to a renderer, so the machine produces no
output of its own.

Unlike other computers, programs for this system cannot write directly into
video RAM.  Instead, sprites are drawn to the screen using an XOR method.  Each
pixel is stored as a whole byte (0 or 1) in a RAM bank laid out row-major.

Whether a sprite clips or wraps at the screen edges is decided by the CPU, so
only on-screen coordinates are accepted here.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer():
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.plane = RAM(self.vid_size)
        self.dirty = True  # Nothing has been rendered yet

    def clear(self):
        self.plane.clear()
        self.dirty = True

    def _vram_loc(self, x, y):
        if not (0 <= x < self.vid_width and 0 <= y < self.vid_height):
            raise FramebufferError("Pixel ({}, {}) is outside the screen".format(x, y))

        return y * self.vid_width + x

    def xor_pixel(self, x, y):
        # Returns True if the pixel was already set, i.e. it has just been erased (a collision)
        vram_loc = self._vram_loc(x, y)
        plane = self.plane
        pixel = plane.read(vram_loc)
        plane.write(vram_loc, pixel ^ 1)
        self.dirty = True
        return pixel != 0

    def is_pixel_on(self, x, y):
        return self.plane.read(self._vram_loc(x, y)) != 0

    def snapshot(self):
        # Immutable copy, so the host can hold on to it while the CPU carries on drawing
        return self.plane.read_block(0, self.vid_size)

    def rows(self):
        snapshot = self.snapshot()
        vid_width = self.vid_width
        return [snapshot[y * vid_width:(y + 1) * vid_width] for y in range(self.vid_height)]

    def get_vid_size(self):
        return self.vid_width, self.vid_height
