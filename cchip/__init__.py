#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP
from .cpu import CPU, seeded_random_source
from .diagnostics import format_fault
from .driver import Driver
from .faults import MachineFault
from .hostio import Loader
from .machine import Machine
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


class EmulationHalted(Exception):
    def __init__(self, fault, report):
        super().__init__(report)
        self.fault = fault


def select_plugins(opt_renderer, mute_audio):
    # Returns the Renderer, Inputs and Audio classes to use.  If necessary, try PyGame first, then Curses.
    auto_select_renderer = opt_renderer is None

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

            return Renderer, Inputs, Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

            # Terminals can handle fixed-length beeps, but not sampled sound
            if mute_audio or mute_audio is None:
                from .audio.a_null import Audio
            else:
                from .audio.a_curses import Audio

            return Renderer, Inputs, Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

        return Renderer, Inputs, Audio

    raise StartupError("Unknown renderer '{}'".format(opt_renderer))


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_setting = args.get(cpu_quirk)
        quirk_settings[cpu_quirk] = None if quirk_setting is None else bool(quirk_setting)

    Renderer, Inputs, Audio = select_plugins(args.get("renderer"), args.get("mute"))

    # Read ROM binary and write it into RAM.  Do this before any plugin takes over the terminal.
    machine = Machine()
    machine.load_program(Loader().load_binary(args["filename"]))
    logger.info("Loaded %s", args["filename"])

    # Create a new CPU, with a reproducible random number stream if a seed was given
    cpu = CPU(machine, random_source=seeded_random_source(args.get("seed")), **quirk_settings)
    clock_speed = args.get("clock_speed")
    scheduler = Scheduler(DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed)

    renderer = None
    inputs = None
    audio = None

    try:
        renderer = Renderer(
            scale=args.get("scale"),
            pygame_palette=args.get("pygame_palette"),
            curses_cursor_mode=args.get("curses_cursor_mode") or 0
        )

        # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
        keymap = args.get("keymap")
        inputs = Inputs(DEFAULT_KEYMAP if keymap is None else keymap, renderer, machine)
        audio = Audio()
        driver = Driver(
            machine, cpu, renderer, inputs, audio, scheduler, fault_policy=args.get("fault_policy") or "halt"
        )
        driver.run()
    except MachineFault as fault:
        raise EmulationHalted(fault, format_fault(machine, fault)) from fault
    finally:
        # The driver has quit, so shut everything down.  __del__ cannot be relied upon when using PyPy
        if audio is not None:
            audio.shutdown()

        if inputs is not None:
            inputs.shutdown()

        if renderer is not None:
            renderer.shutdown()

    return machine
