# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Decoded GF font data.

Coordinates follow the GF convention: ``m`` is the horizontal pixel index
(increasing to the right), ``n`` the vertical one (increasing upwards).
A character's bitmap is a list of BlackLine runs, one per maximal stretch
of black pixels on a row, in the order the stream painted them (top row
first, left to right).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Color(Enum):
    """Paint color of the run-length automaton."""
    BLACK = 'black'
    WHITE = 'white'

    def flipped(self) -> Color:
        return Color.WHITE if self is Color.BLACK else Color.BLACK


@dataclass(frozen=True)
class BlackLine:
    """A run of ``w`` black pixels starting at column ``x`` on row ``y``."""
    x: int
    y: int
    w: int


@dataclass(frozen=True)
class BoundingBox:
    min_m: int = 0
    max_m: int = 0
    min_n: int = 0
    max_n: int = 0

    @property
    def width(self) -> int:
        return self.max_m - self.min_m + 1

    @property
    def height(self) -> int:
        return self.max_n - self.min_n + 1


@dataclass
class Special:
    """An xxx string special and the yyy numeric parameters that follow it."""
    special: str
    numeric_params: list[int] = field(default_factory=list)


@dataclass
class GFChar:
    """One decoded character.

    ``specials`` exists for consumers that want per-character annotations;
    the decoder itself collects specials at font level only.
    """
    code: int = 0
    bbox: BoundingBox = field(default_factory=BoundingBox)
    specials: list[Special] = field(default_factory=list)
    bitmap: list[BlackLine] = field(default_factory=list)

    @property
    def min_m(self) -> int:
        return self.bbox.min_m

    @property
    def max_m(self) -> int:
        return self.bbox.max_m

    @property
    def min_n(self) -> int:
        return self.bbox.min_n

    @property
    def max_n(self) -> int:
        return self.bbox.max_n


@dataclass
class GFFont:
    """A decoded GF font: preamble title, characters and postamble metrics."""
    title: str = ''
    chars: list[GFChar] = field(default_factory=list)
    specials: list[Special] = field(default_factory=list)
    design_size: float = 0.0     # points
    hppp: float = 0.0            # horizontal pixels per point
    vppp: float = 0.0            # vertical pixels per point
    bbox: BoundingBox = field(default_factory=BoundingBox)

    def char_codes(self) -> list[int]:
        """Character codes in stream order."""
        return [c.code for c in self.chars]

    def find_char(self, code: int) -> GFChar | None:
        """First character with *code*, or None."""
        for char in self.chars:
            if char.code == code:
                return char
        return None
