# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared fixtures: a GF byte-stream builder and fresh decode states."""

from __future__ import annotations

import struct

import pytest

from gfforge.core.byte_source import BufferByteSource
from gfforge.core.state import DecodeState


class GFStream:
    """Assembles GF opcodes and operands into bytes, in call order."""

    def __init__(self) -> None:
        self.buf = bytearray()

    def op(self, *values: int) -> GFStream:
        self.buf.extend(values)
        return self

    def raw(self, data: bytes) -> GFStream:
        self.buf.extend(data)
        return self

    def int4(self, value: int) -> GFStream:
        self.buf.extend(struct.pack('>i', value))
        return self

    def pre(self, title: str, gf_id: int = 131) -> GFStream:
        data = title.encode('utf-8')
        return self.op(247, gf_id, len(data)).raw(data)

    def boc(self, code: int, min_m: int, max_m: int, min_n: int, max_n: int,
            back_pointer: int = -1) -> GFStream:
        self.op(67).int4(code).int4(back_pointer)
        return self.int4(min_m).int4(max_m).int4(min_n).int4(max_n)

    def boc1(self, code: int, del_m: int, max_m: int, del_n: int, max_n: int) -> GFStream:
        return self.op(68, code, del_m, max_m, del_n, max_n)

    def eoc(self) -> GFStream:
        return self.op(69)

    def paint(self, *runs: int) -> GFStream:
        for d in runs:
            if d < 64:
                self.op(d)
            elif d < 0x100:
                self.op(64, d)
            elif d < 0x10000:
                self.op(65).raw(d.to_bytes(2, 'big'))
            else:
                self.op(66).raw(d.to_bytes(3, 'big'))
        return self

    def skip(self, rows: int) -> GFStream:
        if rows == 0:
            return self.op(70)
        if rows < 0x100:
            return self.op(71, rows)
        if rows < 0x10000:
            return self.op(72).raw(rows.to_bytes(2, 'big'))
        return self.op(73).raw(rows.to_bytes(3, 'big'))

    def new_row(self, indent: int) -> GFStream:
        return self.op(74 + indent)

    def xxx(self, text: str, width: int = 1) -> GFStream:
        data = text.encode('utf-8')
        self.op(238 + width)
        if width == 4:
            self.int4(len(data))
        else:
            self.raw(len(data).to_bytes(width, 'big'))
        return self.raw(data)

    def yyy(self, value: int) -> GFStream:
        return self.op(243).int4(value)

    def post(self, design_size: float = 10.0, hppp: float = 36.0, vppp: float = 36.0,
             bbox: tuple[int, int, int, int] = (0, 0, 0, 0), checksum: int = 0,
             back_pointer: int = 0) -> GFStream:
        self.op(248).int4(back_pointer)
        self.int4(round(design_size * (1 << 20))).int4(checksum)
        self.int4(round(hppp * (1 << 16))).int4(round(vppp * (1 << 16)))
        for value in bbox:
            self.int4(value)
        return self

    def bytes(self) -> bytes:
        return bytes(self.buf)


@pytest.fixture
def gf_stream() -> GFStream:
    return GFStream()


@pytest.fixture
def make_state():
    """Build a DecodeState reading from the given bytes."""
    def _make(data: bytes = b'') -> DecodeState:
        return DecodeState(BufferByteSource(data))
    return _make


@pytest.fixture
def small_font_bytes(gf_stream: GFStream) -> bytes:
    """A two-character font followed by an unread locator tail.

    'A' (code 65, boc1) is a 3x3 "I":   ###
                                         #
                                        ###
    'B' (code 66, boc) has a skipped blank row.
    """
    s = gf_stream
    s.pre("Title")
    s.xxx("mode=cx").yyy(47).yyy(-21)
    s.boc1(65, 2, 2, 2, 2)
    s.paint(0, 3).new_row(1).paint(1).new_row(0).paint(3)
    s.eoc()
    s.op(244)
    s.boc(66, 0, 1, -1, 2)
    s.paint(0, 2).skip(1).paint(1, 1)
    s.eoc()
    s.post(design_size=10.0, hppp=36.0, vppp=36.0, bbox=(0, 2, -1, 2), checksum=12345)
    # char_loc entries and post_post follow in a real file; they must stay unread.
    s.op(245, 65).int4(0).int4(0).int4(0).int4(0)
    s.op(249).int4(0).op(131, 223, 223, 223, 223)
    return s.bytes()
