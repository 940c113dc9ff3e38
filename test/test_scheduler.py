#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cchip.scheduler import EVENT_STEP, EVENT_TIMER, Scheduler, SchedulerError

S = EVENT_STEP
T = EVENT_TIMER


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, delay):
        self.sleeps.append(delay)
        self.now += delay


class TestScheduler(unittest.TestCase):
    def setUp(self):
        # Powers of two keep the floating point schedule exact
        self.clock = FakeClock()
        self.scheduler = Scheduler(8, timer_freq=2, clock=self.clock, sleeper=self.clock.sleep, max_lag=100)

    def test_scheduler_intervals(self):
        self.assertEqual(0.125, self.scheduler.step_interval)
        self.assertEqual(0.5, self.scheduler.timer_interval)
        self.assertFalse(self.scheduler.is_uncapped())

    def test_scheduler_bad_timer_freq(self):
        self.assertRaises(SchedulerError, Scheduler, 600, timer_freq=0)

    def test_scheduler_due_at_start(self):
        self.scheduler.start(0.0)
        self.assertEqual([S], list(self.scheduler.due(0.0)))
        self.assertEqual([], list(self.scheduler.due(0.0)))

    def test_scheduler_due_starts_itself(self):
        self.assertEqual([S], list(self.scheduler.due()))

    def test_scheduler_chronological_order(self):
        self.scheduler.start(0.0)
        # A timer tick falling at the same moment as a step goes first
        self.assertEqual([S, S, S, S, T, S, S, S, S, T, S], list(self.scheduler.due(1.0)))

    def test_scheduler_resumes_where_it_left_off(self):
        self.scheduler.start(0.0)
        self.assertEqual([S, S], list(self.scheduler.due(0.25 - 0.001)))
        self.assertEqual([S, S, T, S], list(self.scheduler.due(0.5)))

    def test_scheduler_ticks_kept_at_high_step_rate(self):
        scheduler = Scheduler(1024, timer_freq=64, max_lag=100)
        scheduler.start(0.0)
        events = list(scheduler.due(1.0))
        self.assertEqual(64, events.count(T))
        self.assertEqual(1025, events.count(S))

    def test_scheduler_backlog_resync(self):
        scheduler = Scheduler(8, timer_freq=2, max_lag=0.25)
        scheduler.start(0.0)
        events = list(scheduler.due(10.0))
        # Every tick is still delivered, but the missed steps are not caught up on
        self.assertEqual(20, events.count(T))
        self.assertEqual(1, events.count(S))
        self.assertEqual(10.125, scheduler.next_step_time)

    def test_scheduler_uncapped(self):
        scheduler = Scheduler(0, timer_freq=2, batch_size=5)
        self.assertTrue(scheduler.is_uncapped())
        scheduler.start(0.0)
        self.assertEqual([S, S, S, S, S], list(scheduler.due(0.25)))
        self.assertEqual([S, S, S, S, S, T, T], list(scheduler.due(1.0)))
        self.assertEqual(0.0, scheduler.time_until_next(1.0))

    def test_scheduler_time_until_next(self):
        self.scheduler.start(0.0)
        list(self.scheduler.due(0.0))
        self.assertEqual(0.125, self.scheduler.time_until_next(0.0))
        self.assertEqual(0.0, self.scheduler.time_until_next(0.2))

    def test_scheduler_time_until_next_not_started(self):
        self.assertEqual(0.0, self.scheduler.time_until_next(5.0))

    def test_scheduler_wait(self):
        self.scheduler.start()
        list(self.scheduler.due())
        self.scheduler.wait()
        self.assertEqual([0.125], self.clock.sleeps)
        self.assertEqual([S], list(self.scheduler.due()))

    def test_scheduler_wait_nothing_pending(self):
        self.scheduler.start()
        self.scheduler.wait()
        self.assertEqual([], self.clock.sleeps)
