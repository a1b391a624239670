"""Command line host loop for the chip8vm engine.

Loads a ROM (or the built-in demo program), steps the engine headlessly with a
fixed set of held keys, and renders the final frame to the terminal or to an
image file.
"""

import argparse
import sys
from typing import Optional, Sequence

import jax

from chip8vm.constants import DEFAULT_INSTRUCTIONS_PER_FRAME, DEMO_PROGRAM
from chip8vm.display import Display
from chip8vm.emulator import run
from chip8vm.errors import EngineError
from chip8vm.keyboard import Keyboard
from chip8vm.logging import ConsoleCallback, ConsoleLogger
from chip8vm.rendering import create_color_scheme, display_to_text, save_frame
from chip8vm.state import create_state, format_state, load_program, load_rom


def parse_keys(text: str) -> list[int]:
    """Parse a comma separated list of hex key names such as ``"5,a"``."""
    keys = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            key = int(part, 16)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid key '{part}'") from None
        if not 0 <= key <= 0xF:
            raise argparse.ArgumentTypeError(f"key '{part}' is outside 0-F")
        keys.append(key)
    return keys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8vm",
        description="Run a CHIP-8 program headlessly and show the final frame",
    )
    parser.add_argument(
        "rom",
        nargs="?",
        help="Path to a raw CHIP-8 ROM (default: built-in demo program)",
    )
    parser.add_argument(
        "--cycles",
        type=int,
        default=None,
        help="Number of steps to run (default: 4 for the demo, 1000 otherwise)",
    )
    parser.add_argument(
        "--ipf",
        type=int,
        default=DEFAULT_INSTRUCTIONS_PER_FRAME,
        help=f"Instructions per 60 Hz timer tick (default: {DEFAULT_INSTRUCTIONS_PER_FRAME})",
    )
    parser.add_argument("--seed", type=int, default=0, help="PRNG seed for CXNN (default: 0)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop on unknown instructions instead of skipping them",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log every executed instruction and dump the state after the run",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (default: INFO)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored log output")
    parser.add_argument(
        "--keys",
        type=parse_keys,
        default=[],
        help="Comma separated hex keys held down for the whole run, e.g. 5,a",
    )
    parser.add_argument(
        "--render",
        choices=["text", "none"],
        default="text",
        help="How to show the final frame (default: text)",
    )
    parser.add_argument("--screenshot", help="Save the final frame to this image file")
    parser.add_argument("--scale", type=int, default=8, help="Screenshot upscaling factor (default: 8)")
    parser.add_argument(
        "--color-scheme",
        default="classic",
        help="Screenshot color scheme (default: classic)",
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_level = "DEBUG" if args.trace else args.log_level
    logger = ConsoleLogger(log_level=log_level, use_colors=not args.no_color)
    diagnostics = ConsoleCallback(logger)

    if args.ipf < 1:
        logger.error(f"--ipf must be positive, got {args.ipf}")
        return 2
    if args.screenshot:
        try:
            create_color_scheme(args.color_scheme)
        except ValueError as e:
            logger.error(str(e))
            return 2

    state = create_state(jax.random.PRNGKey(args.seed), strict=args.strict)
    try:
        if args.rom:
            state = load_rom(state, args.rom)
            cycles = 1000 if args.cycles is None else args.cycles
        else:
            state = load_program(state, DEMO_PROGRAM)
            cycles = 4 if args.cycles is None else args.cycles
    except OSError as e:
        logger.error(f"Cannot read ROM: {e}")
        return 1
    except EngineError as e:
        logger.error(str(e))
        return 1
    logger.info(f"Loaded {args.rom or 'demo program'}")

    keyboard = Keyboard()
    for key in args.keys:
        keyboard = keyboard.set_key(key, True)

    result = run(
        state,
        Display(),
        keyboard,
        cycles,
        instructions_per_frame=args.ipf,
        diagnostics=diagnostics,
        progress=args.progress,
    )
    logger.info(f"Executed {result.executed} step(s)")

    if args.trace:
        for line in format_state(result.state).splitlines():
            logger.debug(line)
    if args.render == "text":
        print(display_to_text(result.display))
    if args.screenshot:
        save_frame(result.display, args.screenshot, args.scale, args.color_scheme)
        logger.info(f"Frame saved: {args.screenshot}")

    if result.error is not None:
        logger.error(f"Halted: {result.error}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
