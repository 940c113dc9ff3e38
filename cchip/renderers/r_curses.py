#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the screen in a standard Linux-style TTY Terminal, the Windows Command
Prompt, or PowerShell.  Each lit pixel is an inverted space, stretched
horizontally by the scale so the display keeps roughly the right shape.

The top line of the pad is reserved for the title and performance report.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        self.pixel_char = " " * scale
        self.pad = None
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.refresh_needed = False
        self.cursor_mode = curses_cursor_mode
        self.screen = curses.initscr()

        try:
            curses.curs_set(self.cursor_mode)
        except _curses.error:
            pass  # Not every terminal can change the cursor

        curses.noecho()
        curses.cbreak()
        super().__init__(scale)

    def set_resolution(self, width, height):
        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  One more line holds the title.
        self.pad = curses.newpad(height + 2, width * self.scale + 1)
        super().set_resolution(width, height)

    def draw(self, snapshot):
        width = self.width
        scale = self.scale
        pixel_char = self.pixel_char
        pad = self.pad

        for y in range(self.height):
            row_offset = y * width

            for x in range(width):
                pad.addstr(
                    y + 1, x * scale, pixel_char, curses.A_REVERSE if snapshot[row_offset + x] else curses.A_NORMAL
                )

        self.refresh_needed = True
        super().draw(snapshot)

    def refresh_display(self, content_changed=False):
        screen_height, screen_width = self.screen.getmaxyx()  # This doesn't seem to ever change/work on Windows?!

        if screen_height == self.last_screen_height and screen_width == self.last_screen_width:
            # Fast delta update
            if self.refresh_needed:
                self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
                self.refresh_needed = False
        else:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width
            self.refresh_needed = True

        super().refresh_display(content_changed)

    def set_title(self, title):
        if self.pad:
            line_width = self.width * self.scale

            if line_width > len(title):
                self.pad.addstr(0, 0, title.ljust(line_width), curses.A_REVERSE)
                self.refresh_needed = True

        super().set_title(title)

    def shutdown(self):
        # Restore the terminal to how it was before we started
        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except _curses.error:
                pass

        curses.endwin()
        super().shutdown()

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
