# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Memory Profiling for GF Decoding

Measures each decode on its own: process RSS before and after (psutil),
the tracemalloc peak reached while the file was being decoded, and how
many characters and black runs the decoded font holds.
"""

from __future__ import annotations

import os
import time
import tracemalloc
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass

import psutil

from ..core.types import GFFont

_MB = 1024 * 1024


@dataclass
class DecodeSample:
    """Memory figures for one decoded file."""
    path: str
    rss_before_mb: float
    rss_after_mb: float = 0.0
    traced_peak_mb: float | None = None
    seconds: float = 0.0
    chars: int | None = None
    black_runs: int | None = None

    @property
    def rss_growth_mb(self) -> float:
        return self.rss_after_mb - self.rss_before_mb

    @property
    def failed(self) -> bool:
        return self.chars is None

    def record_font(self, font: GFFont) -> None:
        self.chars = len(font.chars)
        self.black_runs = sum(len(c.bitmap) for c in font.chars)


class MemoryProfiler:
    """Collects a DecodeSample per file measured with measure()."""

    def __init__(self, enable_tracemalloc: bool = True):
        self.process = psutil.Process(os.getpid())
        self.samples: list[DecodeSample] = []
        self.startup_rss_mb = self._rss_mb()

        self._owns_tracemalloc = enable_tracemalloc and not tracemalloc.is_tracing()
        if self._owns_tracemalloc:
            tracemalloc.start()

    def _rss_mb(self) -> float:
        return self.process.memory_info().rss / _MB

    @contextmanager
    def measure(self, path: str) -> Generator[DecodeSample, None, None]:
        """
        Measure the decode run inside the block.

        The caller passes the decoded font to DecodeSample.record_font();
        a sample without a font is reported as failed. The sample is kept
        even when the block raises.
        """
        sample = DecodeSample(path=path, rss_before_mb=self._rss_mb())
        tracing = tracemalloc.is_tracing()
        if tracing:
            tracemalloc.reset_peak()
        start = time.perf_counter()
        try:
            yield sample
        finally:
            sample.seconds = time.perf_counter() - start
            sample.rss_after_mb = self._rss_mb()
            if tracing:
                sample.traced_peak_mb = tracemalloc.get_traced_memory()[1] / _MB
            self.samples.append(sample)

    def generate_report(self) -> str:
        """Generate a per-file memory report."""
        report = []
        report.append("=" * 80)
        report.append("GFFORGE MEMORY ANALYSIS REPORT")
        report.append("=" * 80)

        current_rss = self._rss_mb()
        report.append("\nSUMMARY:")
        report.append(f"  Files Measured: {len(self.samples)}")
        report.append(f"  RSS at Startup: {self.startup_rss_mb:.2f} MB")
        report.append(f"  RSS Now: {current_rss:.2f} MB")
        report.append(f"  Memory Growth: {current_rss - self.startup_rss_mb:.2f} MB")

        report.append("\nDECODES:")
        if not self.samples:
            report.append("  (none)")
        for sample in self.samples:
            line = (f"  {sample.path} - {sample.seconds:.3f}s - "
                    f"RSS {sample.rss_after_mb:.2f} MB ({sample.rss_growth_mb:+.2f})")
            if sample.traced_peak_mb is not None:
                line += f" - traced peak {sample.traced_peak_mb:.2f} MB"
            if sample.failed:
                line += " - failed"
            else:
                line += f" - {sample.chars} chars, {sample.black_runs:,} runs"
            report.append(line)

        report.append("=" * 80)
        return "\n".join(report)

    def stop(self) -> None:
        """Stop tracemalloc if this profiler started it."""
        if self._owns_tracemalloc and tracemalloc.is_tracing():
            tracemalloc.stop()
