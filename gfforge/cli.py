#!/usr/bin/env python3
# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
GFForge - GF Font Reader

Command-line front end: decodes each GF file given and prints a summary of
the font and its characters.

Usage:
    gfforge cmr10.2602gf
    gfforge --specials --runs cmr10.2602gf
    gfforge --profile --memory-profile cmr10.2602gf cmbx10.2602gf

Exit code is 0 when every file decodes and 1 otherwise.

Author: Scott Bowman
License: AGPL-3.0-or-later
"""

from __future__ import annotations

import contextlib
import logging
import sys
from typing import TextIO

from . import cli_args
from .core.error import GFError
from .core.gf_reader import read_gf_file
from .core.types import GFFont
from .utils import memory as gf_memory
from .utils import profiler as gf_profiler

logger = logging.getLogger(__name__)


def format_font(font: GFFont, show_specials: bool = False, show_runs: bool = False) -> str:
    """Render a decoded font as the text listing printed by the CLI."""
    lines = [
        f"Title: {font.title}",
        f"Design size: {font.design_size:g}pt",
        f"Pixels per point: h={font.hppp:g} v={font.vppp:g}",
        f"Font box: m={font.bbox.min_m}..{font.bbox.max_m} n={font.bbox.min_n}..{font.bbox.max_n}",
        f"Characters: {len(font.chars)}",
    ]

    if show_specials:
        lines.append(f"Specials: {len(font.specials)}")
        for special in font.specials:
            params = ''.join(f" {p}" for p in special.numeric_params)
            lines.append(f"  xxx {special.special!r}{params}")

    for char in font.chars:
        lines.append(
            f"[{char.code}] m={char.min_m}..{char.max_m} "
            f"n={char.min_n}..{char.max_n} runs={len(char.bitmap)}"
        )
        if show_runs:
            for run in char.bitmap:
                lines.append(f"    x={run.x} y={run.y} w={run.w}")

    return "\n".join(lines)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _decode_file(path: str, args, out: TextIO,
                 memory_profiler: gf_memory.MemoryProfiler | None) -> bool:
    """Decode and print one file. Returns False if it failed."""
    logger.debug("Decoding %s", path)
    measure = memory_profiler.measure(path) if memory_profiler else contextlib.nullcontext()
    try:
        with measure as sample:
            font = read_gf_file(path)
            if sample is not None:
                sample.record_font(font)
    except (GFError, OSError) as e:
        print(f"GFForge Error: {path}: {e}", file=sys.stderr)
        return False

    if len(args.inputfiles) > 1:
        print(f"== {path}", file=out)
    print(format_font(font, args.specials, args.runs), file=out)
    return True


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the GFForge command line.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = cli_args.build_argument_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    profile_enabled, profile_output = cli_args.resolve_profile_settings(args)
    perf_profiler = None
    if profile_enabled:
        perf_profiler = gf_profiler.DecodeProfiler(profile_output)

    memory_profiler = None
    if args.memory_profile:
        memory_profiler = gf_memory.MemoryProfiler(enable_tracemalloc=True)

    ok = True
    try:
        with perf_profiler.profile_context() if perf_profiler else contextlib.nullcontext():
            for path in args.inputfiles:
                ok = _decode_file(path, args, sys.stdout, memory_profiler) and ok
                if perf_profiler:
                    perf_profiler.files_decoded += 1
    finally:
        if memory_profiler:
            print(memory_profiler.generate_report(), file=sys.stderr)
            memory_profiler.stop()

    if perf_profiler:
        perf_profiler.save_results()
        perf_profiler.print_summary()

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
