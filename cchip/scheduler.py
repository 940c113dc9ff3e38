#!/usr/bin/env python3

"""
Cycle and Timer Scheduler

Works out what the driver should do next.  Given the current time, due() yields
CPU steps and 60Hz timer ticks in the order they fell due.  Nothing here sleeps
or reads the clock by itself unless asked to, so the whole schedule can be
driven from a fake clock in tests.

Timer ticks are never dropped.  CPU steps are: if the host falls far enough
behind (a window being dragged, the process being suspended), catching up on
thousands of instructions at once would only make things worse, so the step
schedule is resynchronised to the present instead.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import TIMER_FREQ, UNCAPPED_BATCH_SIZE

EVENT_STEP = "step"
EVENT_TIMER = "timer"

DEFAULT_MAX_LAG = 0.25  # Seconds of CPU steps that may be caught up on before resynchronising


class SchedulerError(Exception):
    pass


class Scheduler:
    def __init__(self, clock_speed, timer_freq=TIMER_FREQ, clock=perf_counter, sleeper=sleep,
                 max_lag=DEFAULT_MAX_LAG, batch_size=UNCAPPED_BATCH_SIZE):

        if timer_freq <= 0:
            raise SchedulerError("Timer frequency must be positive")

        self.clock = clock
        self.sleeper = sleeper
        self.step_interval = None if clock_speed is None or clock_speed <= 0 else 1.0 / clock_speed
        self.timer_interval = 1.0 / timer_freq
        self.max_lag = max_lag
        self.batch_size = batch_size
        self.next_step_time = None
        self.next_timer_time = None

    def start(self, now=None):
        if now is None:
            now = self.clock()

        self.next_step_time = now
        self.next_timer_time = now + self.timer_interval

    def is_uncapped(self):
        return self.step_interval is None

    def due(self, now=None):
        if now is None:
            now = self.clock()

        if self.next_timer_time is None:
            self.start(now)

        step_interval = self.step_interval
        timer_interval = self.timer_interval

        if step_interval is None:
            # Uncapped: run a batch of steps, then any ticks that are due
            for _ in range(self.batch_size):
                yield EVENT_STEP

            while self.next_timer_time <= now:
                self.next_timer_time += timer_interval
                yield EVENT_TIMER

            return

        if now - self.next_step_time > self.max_lag:
            self.next_step_time = now

        while True:
            next_step_time = self.next_step_time
            next_timer_time = self.next_timer_time

            if next_timer_time <= now and next_timer_time <= next_step_time:
                self.next_timer_time = next_timer_time + timer_interval
                yield EVENT_TIMER
            elif next_step_time <= now:
                self.next_step_time = next_step_time + step_interval
                yield EVENT_STEP
            else:
                return

    def time_until_next(self, now=None):
        if now is None:
            now = self.clock()

        if self.next_timer_time is None or self.step_interval is None:
            return 0.0

        return max(0.0, min(self.next_step_time, self.next_timer_time) - now)

    def wait(self):
        # Sleep until something is due, rather than spinning
        delay = self.time_until_next()

        if delay > 0:
            self.sleeper(delay)
