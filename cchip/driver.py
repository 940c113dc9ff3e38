#!/usr/bin/env python3

"""
Machine Driver

Runs the machine in real time.  The scheduler decides when each CPU step and
60Hz timer tick is due; the driver carries them out, and on every timer tick
also polls the host inputs, switches the buzzer on or off, and hands a fresh
framebuffer snapshot to the renderer if anything was drawn.

What happens on a fault depends on the fault policy:

    * halt   - Stop and re-raise the fault (default).
    * log    - Log a warning, then carry on with the next instruction.
    * ignore - Carry on with the next instruction, as if it were a no-op.

A fault while fetching (the program counter running off the end of RAM) always
halts, whatever the policy, since the program counter would never move on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import APP_NAME, FAULT_POLICIES
from .faults import MachineFault
from .scheduler import EVENT_STEP

logger = logging.getLogger(__name__)


class DriverError(Exception):
    pass


class Driver:
    def __init__(self, machine, cpu, renderer, inputs, audio, scheduler, fault_policy="halt"):
        if fault_policy not in FAULT_POLICIES:
            raise DriverError("Unknown fault policy '{}'".format(fault_policy))

        self.machine = machine
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.scheduler = scheduler
        self.fault_policy = fault_policy
        self.faults_skipped = 0

        # Audio-related vars
        self.buzzer_enabled = False
        self.audio_null = audio.is_null()

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

        vid_width, vid_height = machine.framebuffer.get_vid_size()
        self.renderer.set_resolution(vid_width, vid_height)
        self.report_perf()

    def run(self):
        scheduler = self.scheduler
        clock = scheduler.clock
        logger.info("Starting emulation")
        scheduler.start()

        while True:
            this_time = clock()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            for event in scheduler.due(this_time):
                if event == EVENT_STEP:
                    self.cycle()
                elif self.frame():
                    logger.info("Quit requested by host")
                    self.refresh_framebuffer()
                    return

            scheduler.wait()

    def cycle(self):
        try:
            self.cpu.step()
        except MachineFault as fault:
            # An instruction that couldn't be fetched has no length, so there is nothing to skip over
            if self.fault_policy == "halt" or fault.opcode is None:
                raise

            self.faults_skipped += 1

            if self.fault_policy == "log":
                logger.warning("Skipping faulty instruction: %s: %s", fault.kind, fault)

        self.perf_counter_ops += 1

    def frame(self):
        # Returns True if the host has asked to quit
        self.machine.tick_timers()
        quit_program = self.inputs.process_messages()
        self.update_audio()
        self.refresh_framebuffer()
        self.perf_counter_fps += 1
        return quit_program

    def update_audio(self):
        gate = self.machine.audio_gate()

        if gate != self.buzzer_enabled:
            self.buzzer_enabled = gate

            if not self.audio_null:
                self.audio.enable_buzzer(gate)

    def refresh_framebuffer(self):
        # Only pass the screen on to the renderer if something has been drawn since last time
        framebuffer = self.machine.framebuffer

        if framebuffer.dirty:
            self.renderer.draw(framebuffer.snapshot())
            framebuffer.dirty = False
            self.renderer.refresh_display(True)
        else:
            self.renderer.refresh_display(False)

    def cycles_per_frame(self):
        scheduler = self.scheduler

        if scheduler.is_uncapped():
            return scheduler.batch_size

        return max(1, int(round(scheduler.timer_interval / scheduler.step_interval)))

    def run_cycles(self, count):
        # Run without any real-time pacing or timer ticks
        for _ in range(count):
            self.cycle()

    def run_frames(self, count):
        # Run a number of 60Hz frames as fast as possible.  Returns True if the host asked to quit.
        cycles = self.cycles_per_frame()

        for _ in range(count):
            self.run_cycles(cycles)

            if self.frame():
                return True

        return False

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
