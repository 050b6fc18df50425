# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Mutable state of one GF decode."""

from __future__ import annotations

from .byte_source import ByteSource
from .types import Color, GFChar, GFFont, Special


class CharacterState:
    """Progress through the character currently being painted."""
    __slots__ = ('char', 'color', 'm', 'n', 'started')

    def __init__(self) -> None:
        self.char = GFChar()
        self.color = Color.BLACK
        self.m = 0
        self.n = 0
        self.started = False


class DecodeState:
    """Everything a GF handler may read or mutate.

    Owned by a single ``read_gf`` call and passed to each handler.
    ``specials`` collects every xxx/yyy in the stream regardless of which
    character was open when it appeared.
    """
    __slots__ = ('source', 'font', 'current', 'specials', 'finished')

    def __init__(self, source: ByteSource) -> None:
        self.source = source
        self.font = GFFont()
        self.current = CharacterState()
        self.specials: list[Special] = []
        self.finished = False
