#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import logging
import sys
from argparse import ArgumentParser
from cchip import main, EmulationHalted, StartupError
from cchip.constants import CPU_QUIRKS, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP, FAULT_POLICIES
from cchip.driver import DriverError
from cchip.faults import LoadTooLarge
from cchip.inputs.i_null import InputsError
from cchip.renderers.r_null import RendererError


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int, default=DEFAULT_CLOCK_SPEED,
        help="set the CPU speed in operations/second (default {}, 0 = uncapped)".format(DEFAULT_CLOCK_SPEED)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512), and scale in Curses mode (default 2)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--seed", type=int,
        help="seed the random number generator, so the same inputs always give the same run"
    )
    parser.add_argument(
        "--fault_policy", choices=FAULT_POLICIES, default="halt",
        help="halt on a machine fault (default), log it and continue, or silently ignore it"
    )
    parser.add_argument(
        "--curses_cursor_mode", type=int, choices=[0, 1, 2], default=0,
        help="control cursor visibility in the Curses renderer"
    )
    parser.add_argument(
        "--pygame_palette",
        help="redefine the background and foreground colours for the PyGame renderer in hex, e.g. 222222,DDDDDD"
    )

    for cpu_quirk, default in CPU_QUIRKS.items():
        parser.add_argument(
            "--{}".format(cpu_quirk), type=int, choices=[0, 1],
            help="manually disable or enable the {} quirk (default {})".format(
                cpu_quirk.replace("_", " "), int(default)
            )
        )

    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable debug logging"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def run(argv=None):
    args = vars(parse_args(argv))
    logging.basicConfig(level=logging.DEBUG if args["debug"] else logging.WARNING)

    try:
        main(args)
    except EmulationHalted as halted:
        # The renderer has been shut down by now, so the terminal is back to normal
        print(halted, file=sys.stderr)
        return 1
    except (StartupError, LoadTooLarge, OSError, InputsError, RendererError, DriverError) as error:
        # Bad options or an unreadable ROM
        print(error, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    sys.exit(run())
