#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer through PyGame / SDL.  The buzzer simply has an 'on' or 'off'
status, so a short square wave is built at the chosen pitch and looped for as
long as the buzzer is on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
DEFAULT_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


def square_wave(frequency, playback_frequency=PLAYBACK_FREQUENCY):
    # One full cycle of unsigned 8-bit samples, high for the first half and low for the second
    cycle_size = max(2, int(round(playback_frequency / frequency)))
    half_size = cycle_size // 2
    return bytes((0xFF,) * half_size + (0x00,) * (cycle_size - half_size))


class Audio(AudioBase):
    def __init__(self):
        self.sound = None
        self.frequency = None
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()
        self.set_frequency(DEFAULT_FREQUENCY)

    def set_frequency(self, frequency):
        if frequency == self.frequency:
            return

        self.frequency = frequency

        if self.buzzer_enabled:
            self.sound.stop()

        self.sound = pygame.mixer.Sound(buffer=square_wave(frequency))
        self.sound.set_volume(DEFAULT_VOLUME)

        if self.buzzer_enabled:
            # If the pitch has been changed while the buzzer is sounding, play the new tone now
            self.sound.play(-1)

    def enable_buzzer(self, enabled):
        # If the tone is already playing, it won't be restarted
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        elif self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()

    def is_null(self):
        return False
