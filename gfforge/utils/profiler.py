# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
cProfile wrapper for GF decoding runs.

Usage:
    gfforge --profile cmr10.2602gf
    gfforge --profile --profile-output=results.prof cmr10.2602gf

    profiler = DecodeProfiler("results.prof")
    with profiler.profile_context():
        font = read_gf_file(path)
    profiler.save_results()

save_results() writes the binary stats (loadable with pstats or snakeviz)
and a text report next to them. Status messages go to stderr so they never
mix with the font listing.
"""

from __future__ import annotations

import cProfile
import os
import pstats
import sys
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import TextIO

# Decoder modules; their functions get their own report section.
DECODER_FILTER = 'gf_reader|byte_source|opcodes'


def report_path_for(output_path: str) -> str:
    """Text report path belonging to a stats file: run.prof -> run_report.txt."""
    return os.path.splitext(output_path)[0] + '_report.txt'


def generate_default_output_path() -> str:
    """Timestamped stats file name in the working directory."""
    return f"gfforge_profile_{time.strftime('%Y%m%d_%H%M%S')}.prof"


class DecodeProfiler:
    """Collects cProfile stats across one or more decodes."""

    def __init__(self, output_path: str) -> None:
        self.output_path = output_path
        self.profiler = cProfile.Profile()
        self.stats: pstats.Stats | None = None
        self.files_decoded = 0

    @contextmanager
    def profile_context(self) -> Generator[DecodeProfiler, None, None]:
        print("Starting cProfile profiling...", file=sys.stderr)
        self.profiler.enable()
        try:
            yield self
        finally:
            self.profiler.disable()
            self.stats = pstats.Stats(self.profiler)
            print("Profiling stopped.", file=sys.stderr)

    def _write_report(self, out: TextIO) -> None:
        stats = pstats.Stats(self.profiler, stream=out)
        out.write("GFForge Performance Profiling Report\n")
        out.write("=" * 50 + "\n")
        out.write(f"Files decoded: {self.files_decoded}\n\n")

        out.write("Top 30 functions by cumulative time:\n")
        out.write("-" * 40 + "\n")
        stats.sort_stats('cumulative').print_stats(30)

        out.write("\n\nTop 20 functions by total time:\n")
        out.write("-" * 35 + "\n")
        stats.sort_stats('tottime').print_stats(20)

        out.write("\n\nDecoder functions:\n")
        out.write("-" * 30 + "\n")
        stats.print_stats(DECODER_FILTER)

    def save_results(self) -> None:
        """Write the binary stats and the text report."""
        if self.stats is None:
            return
        self.stats.dump_stats(self.output_path)
        with open(report_path_for(self.output_path), 'w') as f:
            self._write_report(f)
        print(f"Profiling results saved to: {self.output_path}", file=sys.stderr)

    def print_summary(self) -> None:
        out = sys.stderr
        print("\nProfiler Summary:", file=out)
        print("-" * 20, file=out)
        print(f"Output: {self.output_path}", file=out)
        if self.stats is None:
            print("No profiling statistics available", file=out)
            return

        print(f"Files decoded: {self.files_decoded}", file=out)
        print(f"Total function calls: {self.stats.total_calls:,}", file=out)
        print(f"Total execution time: {self.stats.total_tt:.3f} seconds", file=out)

        print("\nDecoder hotspots:", file=out)
        hotspots = pstats.Stats(self.profiler, stream=out)
        hotspots.sort_stats('tottime').print_stats(DECODER_FILTER, 5)
