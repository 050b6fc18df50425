# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
GF (Generic Font) Decoder

Decodes a GF raster font stream into a GFFont. The stream is a sequence of
one-byte opcodes, some followed by operands:

  pre  id[1] k[1] x[k]                      preamble: format id 131, title
  boc / boc1                                begin a character, set its box
  paint / skip / new_row                    run-length encoded rows
  eoc                                       end of character
  xxx / yyy / no_op                         specials, anywhere between chars
  post p[4] ds[4] cs[4] hppp[4] vppp[4]     postamble: font-wide metrics
       min_m[4] max_m[4] min_n[4] max_n[4]

Rows are painted top to bottom. Within a row, paint alternates between
white and black runs, starting white after boc or skip and black after
new_row. Only black runs are stored.

Decoding stops as soon as the postamble's fixed fields are read; the
character locators and post_post trailer after them are never consumed.

Based on: the GF file format description in GFtype.web (D. E. Knuth).
"""

from __future__ import annotations

import copy
import logging
import os
from typing import BinaryIO, Callable

from .byte_source import ByteSource, as_byte_source
from .error import (
    BadFormatId,
    GFError,
    NegativeSpecialLength,
    OrphanParameter,
    UnexpectedOpcode,
)
from .opcodes import GF_ID, NEW_ROW_0, OpKind, classify, operand_width
from .state import DecodeState
from .types import BlackLine, BoundingBox, Color, GFChar, GFFont, Special

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Run painting and row navigation
# ---------------------------------------------------------------------------

def paint(state: DecodeState, d: int) -> None:
    """Paint *d* pixels in the current color, then switch color."""
    cur = state.current
    if cur.color is Color.BLACK and d > 0:
        cur.char.bitmap.append(BlackLine(x=cur.m, y=cur.n, w=d))
    cur.color = cur.color.flipped()
    cur.m += d


def skip(state: DecodeState, rows: int) -> None:
    """Move down *rows* + 1 rows to the left edge, painting white."""
    cur = state.current
    cur.color = Color.WHITE
    cur.m = cur.char.min_m
    cur.n -= rows + 1


def new_row(state: DecodeState, indent: int) -> None:
    """Move down one row to min_m + *indent*, painting black."""
    cur = state.current
    cur.color = Color.BLACK
    cur.m = cur.char.min_m + indent
    cur.n -= 1


# ---------------------------------------------------------------------------
# Character assembly
# ---------------------------------------------------------------------------

def begin_char(state: DecodeState, code: int, min_m: int, max_m: int,
               min_n: int, max_n: int) -> None:
    """Open a fresh character; any unfinished one is dropped."""
    cur = state.current
    if cur.started:
        logger.debug("Character %d discarded without eoc (%d runs)",
                     cur.char.code, len(cur.char.bitmap))
    cur.started = True
    cur.m = min_m
    cur.n = max_n
    cur.color = Color.WHITE
    cur.char = GFChar(code=code, bbox=BoundingBox(min_m, max_m, min_n, max_n))


def boc(state: DecodeState, code: int) -> None:
    """boc: back pointer and four 4-byte box fields follow the code."""
    src = state.source
    src.read4()  # p: pointer to previous boc of the same code mod 256
    min_m = src.read4()
    max_m = src.read4()
    min_n = src.read4()
    max_n = src.read4()
    begin_char(state, code, min_m, max_m, min_n, max_n)


def boc1(state: DecodeState, code: int) -> None:
    """boc1: box given as one-byte extents and deltas."""
    src = state.source
    del_m = src.read1()
    max_m = src.read1()
    del_n = src.read1()
    max_n = src.read1()
    begin_char(state, code, max_m - del_m, max_m, max_n - del_n, max_n)


def eoc(state: DecodeState) -> None:
    """Store a copy of the open character in the font."""
    cur = state.current
    state.font.chars.append(copy.deepcopy(cur.char))
    cur.started = False
    logger.debug("Character %d: m=%d..%d n=%d..%d, %d runs",
                 cur.char.code, cur.char.min_m, cur.char.max_m,
                 cur.char.min_n, cur.char.max_n, len(cur.char.bitmap))


# ---------------------------------------------------------------------------
# Specials
# ---------------------------------------------------------------------------

def xxx(state: DecodeState, size: int) -> None:
    """Read a *size*-byte special string."""
    if size < 0:
        raise NegativeSpecialLength(size)
    text = state.source.read_string(size)
    state.specials.append(Special(special=text))


def yyy(state: DecodeState, value: int) -> None:
    """Attach a numeric parameter to the most recent special."""
    if not state.specials:
        raise OrphanParameter(value)
    state.specials[-1].numeric_params.append(value)


# ---------------------------------------------------------------------------
# Preamble and postamble
# ---------------------------------------------------------------------------

def pre(state: DecodeState, gf_id: int) -> None:
    """Check the format id and read the title."""
    if gf_id != GF_ID:
        raise BadFormatId(gf_id, GF_ID)
    state.font.title = state.source.read_prefixed_string(1)
    logger.debug("GF preamble: %r", state.font.title)


def post(state: DecodeState) -> None:
    """Read the postamble's font-wide fields and finish decoding."""
    src = state.source
    font = state.font
    src.read4()  # p: pointer to the last eoc
    font.design_size = src.read_design_units()
    checksum = src.read4()
    font.hppp = src.read_density_units()
    font.vppp = src.read_density_units()
    min_m = src.read4()
    max_m = src.read4()
    min_n = src.read4()
    max_n = src.read4()
    font.bbox = BoundingBox(min_m, max_m, min_n, max_n)
    font.specials = list(state.specials)
    state.finished = True
    logger.debug("GF postamble: ds=%g hppp=%g vppp=%g checksum=%d, %d chars",
                 font.design_size, font.hppp, font.vppp, checksum,
                 len(font.chars))


# ---------------------------------------------------------------------------
# Opcode dispatch
# ---------------------------------------------------------------------------

def _op_paint_immediate(state: DecodeState, opcode: int) -> None:
    paint(state, opcode)


def _op_paint(state: DecodeState, opcode: int) -> None:
    paint(state, state.source.read_int(operand_width(opcode)))


def _op_boc(state: DecodeState, opcode: int) -> None:
    boc(state, state.source.read4())


def _op_boc1(state: DecodeState, opcode: int) -> None:
    boc1(state, state.source.read1())


def _op_eoc(state: DecodeState, opcode: int) -> None:
    eoc(state)


def _op_skip0(state: DecodeState, opcode: int) -> None:
    skip(state, 0)


def _op_skip(state: DecodeState, opcode: int) -> None:
    skip(state, state.source.read_int(operand_width(opcode)))


def _op_new_row(state: DecodeState, opcode: int) -> None:
    new_row(state, opcode - NEW_ROW_0)


def _op_xxx(state: DecodeState, opcode: int) -> None:
    xxx(state, state.source.read_int(operand_width(opcode)))


def _op_yyy(state: DecodeState, opcode: int) -> None:
    yyy(state, state.source.read4())


def _op_no_op(state: DecodeState, opcode: int) -> None:
    pass


def _op_pre(state: DecodeState, opcode: int) -> None:
    pre(state, state.source.read1())


def _op_post(state: DecodeState, opcode: int) -> None:
    post(state)


def _op_invalid(state: DecodeState, opcode: int) -> None:
    # char_loc, char_loc0 and post_post only occur after the postamble
    # fields, which is where decoding stops.
    raise UnexpectedOpcode(opcode)


_DISPATCH: dict[OpKind, Callable[[DecodeState, int], None]] = {
    OpKind.PAINT_IMMEDIATE: _op_paint_immediate,
    OpKind.PAINT: _op_paint,
    OpKind.BOC: _op_boc,
    OpKind.BOC1: _op_boc1,
    OpKind.EOC: _op_eoc,
    OpKind.SKIP0: _op_skip0,
    OpKind.SKIP: _op_skip,
    OpKind.NEW_ROW: _op_new_row,
    OpKind.XXX: _op_xxx,
    OpKind.YYY: _op_yyy,
    OpKind.NO_OP: _op_no_op,
    OpKind.CHAR_LOC: _op_invalid,
    OpKind.CHAR_LOC0: _op_invalid,
    OpKind.PRE: _op_pre,
    OpKind.POST: _op_post,
    OpKind.POST_POST: _op_invalid,
    OpKind.UNDEFINED: _op_invalid,
}

_missing = set(OpKind) - set(_DISPATCH)
if _missing:
    raise RuntimeError(f"GF opcode kinds without handler: {sorted(k.name for k in _missing)}")
del _missing


def execute_opcode(state: DecodeState, opcode: int) -> None:
    """Run a single opcode (0-255) against *state*."""
    _DISPATCH[classify(opcode)](state, opcode)


def read_gf(source: ByteSource | BinaryIO | bytes | bytearray | memoryview) -> GFFont:
    """Decode a GF font from *source*.

    Args:
        source: A ByteSource, a binary file-like object positioned at the
            first byte of the font, or the font's bytes.

    Returns:
        The decoded GFFont.

    Raises:
        GFError: On the first malformed or truncated construct. No partial
            font is returned.
    """
    state = DecodeState(as_byte_source(source))
    src = state.source
    while not state.finished:
        offset = src.tell()
        try:
            opcode = src.read1()
            execute_opcode(state, opcode)
        except GFError as exc:
            logger.debug("GF decode failed at offset %d: %s", offset, exc)
            raise
    return state.font


def read_gf_file(path: str | os.PathLike[str]) -> GFFont:
    """Open *path* and decode it as a GF font."""
    with open(path, 'rb') as f:
        return read_gf(f)
