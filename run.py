"""Command-line entry point for the CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import MONOCHROME, PHOSPHOR, resolve_palette


def _palette_arg(text: str):
    try:
        return resolve_palette(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "program",
        type=Path,
        help="Path to a raw CHIP-8 program image (loaded at 0x200)",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    parser.add_argument(
        "--ips",
        type=int,
        default=700,
        help="Instructions executed per second (default: 700)",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip invalid opcodes instead of halting",
    )
    colours = parser.add_mutually_exclusive_group()
    colours.add_argument(
        "--palette",
        type=_palette_arg,
        default=MONOCHROME,
        help="Palette name (amber, mono, phosphor) or BG,FG hex colours (default: mono)",
    )
    colours.add_argument(
        "--phosphor",
        dest="palette",
        action="store_const",
        const=PHOSPHOR,
        help="Shortcut for --palette phosphor",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.program.exists():
        parser.error(f"Program file not found: {args.program}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.ips <= 0:
        parser.error("--ips must be positive")

    config = AppConfig(
        program_path=args.program,
        scale=args.scale,
        fullscreen=args.fullscreen,
        instructions_per_second=args.ips,
        palette=args.palette,
        strict_illegal=not args.lenient,
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
