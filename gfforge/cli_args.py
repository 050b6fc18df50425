# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for GFForge.

Handles command-line argument definition and the derived profiling
settings.
"""

from __future__ import annotations

import argparse

from . import __version__
from .utils import profiler as gf_profiler


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the GFForge argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="gfforge",
        description="GFForge - GF (Generic Font) raster font reader",
        epilog="Each input file is decoded independently; a failing file does not stop the others.",
    )

    parser.add_argument("inputfiles", nargs="+", help="GF font files to decode")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--specials", action="store_true",
        help="List the font's xxx specials and their yyy parameters"
    )
    parser.add_argument(
        "--runs", action="store_true",
        help="List every black run of every character"
    )

    parser.add_argument(
        "--memory-profile", action="store_true",
        help="Report process memory before and after each decode"
    )

    # Performance profiling options
    parser.add_argument(
        "--profile", action="store_true",
        help="Profile decoding with cProfile"
    )
    parser.add_argument(
        "--profile-output",
        help="Stats file for --profile (default: auto-generated); "
             "a text report is written beside it"
    )

    return parser


def resolve_profile_settings(args: argparse.Namespace) -> tuple[bool, str | None]:
    """
    Derive (enabled, output_path) from parsed arguments.

    An output path is generated when profiling is on and none was given.
    """
    enabled = args.profile
    output_path = args.profile_output
    if enabled and not output_path:
        output_path = gf_profiler.generate_default_output_path()
    return enabled, output_path
