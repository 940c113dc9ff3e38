#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

Uses a thread to trap Terminal inputs and redirects them to the emulator.  Note
that standard TTY Terminals only understand characters, they do not know when
an actual key is 'pressed' or 'released'.

What we can do (for this plugin) is assume a key is held for a short time, and
then take advantage of keyboard repeats to fake a 'press' and 'release'.  Each
character seen presses its key (if not already down) and pushes back the
release time.  Once a key hasn't been seen for a while, it is released.

We will also quit if ESC (char 27) or CTRL+C (char 3) is detected.

Key states are only ever changed on the main thread, inside process_messages,
so the keypad is never touched while the CPU is mid-cycle.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Thread
from time import monotonic
from .i_null import Inputs as InputsBase
from ..constants import NUM_KEYS

# Terminals don't have separate key press/release, so we have to pause after a character is seen.
KEYBOARD_FAKE_KEYDOWN_TIME = 0.2


# For thread safety, use proper queues to exchange information, avoiding shared variables.
def input_thread(thread_quitter_queue, input_queue, keymap_dict, curses_screen):
    while thread_quitter_queue.empty():
        # This blocks the thread from proceeding, so it won't get the quit message until at least one key is pressed.
        # However, as a daemon thread, it will be terminated when the main thread shuts down.
        char_code = curses_screen.getch()

        if char_code < 0:
            continue

        char = ord(chr(char_code).lower())

        if char == 27 or char == 3:  # Detect ESC or CTRL+C
            input_queue.put(None, block=True)
            break

        keymap_char = keymap_dict.get(char)

        if keymap_char is not None:
            try:
                input_queue.put(keymap_char, block=False)
            except queue.Full:
                pass


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, machine, clock=monotonic):
        super().__init__(keymap, renderer, machine, force_lowercase=True)

        self.clock = clock
        self.release_times = [None] * NUM_KEYS
        self.thread_quitter_queue = queue.Queue(1)  # Used to inform the thread it should quit
        self.input_queue = queue.Queue(16)
        self.thread = Thread(
            target=input_thread,
            args=(
                self.thread_quitter_queue,
                self.input_queue,
                self.keymap_dict,
                renderer.get_curses_screen()
            )
        )
        # Terminate the thread when the main program quits (even if currently waiting for a keypress)
        self.thread.daemon = True
        self.thread.start()

    def process_messages(self):
        now = self.clock()
        release_time = now + KEYBOARD_FAKE_KEYDOWN_TIME

        # Deal with any keys pressed
        while True:
            try:
                # Blocking here would lock up the main thread if nothing was pressed
                key_pressed = self.input_queue.get(block=False)
            except queue.Empty:
                break
            else:
                if key_pressed is None:
                    return True

                self.machine.press_key(key_pressed)
                self.release_times[key_pressed] = release_time

        # Release anything that hasn't been seen for a while
        for key, key_release_time in enumerate(self.release_times):
            if key_release_time is not None and key_release_time <= now:
                self.machine.release_key(key)
                self.release_times[key] = None

        return False

    def shutdown(self):
        try:
            self.thread_quitter_queue.put(None, block=False)
        except queue.Full:
            # Something else has already requested the thread quits
            pass

        # Don't wait for the thread to quit (because this is likely to happen after a keypress)
        super().shutdown()
