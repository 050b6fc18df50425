# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
GF Opcode Space

Every byte value 0-255 is an opcode. Ranges share one operation and differ
only in an immediate value (paint_0..paint_63, new_row_0..new_row_164) or
in the width of the operand that follows (paint1/2/3, skip1/2/3,
xxx1..xxx4). OpKind names each operation; OPCODE_KINDS maps every byte to
exactly one kind.

Based on: the GF file format description in GFtype.web (D. E. Knuth).
"""

from __future__ import annotations

from enum import Enum

GF_ID = 131

PAINT_0 = 0
PAINT1 = 64
PAINT2 = 65
PAINT3 = 66
BOC = 67
BOC1 = 68
EOC = 69
SKIP0 = 70
SKIP1 = 71
SKIP2 = 72
SKIP3 = 73
NEW_ROW_0 = 74
NEW_ROW_164 = 238
XXX1 = 239
XXX4 = 242
YYY = 243
NO_OP = 244
CHAR_LOC = 245
CHAR_LOC0 = 246
PRE = 247
POST = 248
POST_POST = 249


class OpKind(Enum):
    PAINT_IMMEDIATE = 'paint_0..paint_63'
    PAINT = 'paint1..paint3'
    BOC = 'boc'
    BOC1 = 'boc1'
    EOC = 'eoc'
    SKIP0 = 'skip0'
    SKIP = 'skip1..skip3'
    NEW_ROW = 'new_row_0..new_row_164'
    XXX = 'xxx1..xxx4'
    YYY = 'yyy'
    NO_OP = 'no_op'
    CHAR_LOC = 'char_loc'
    CHAR_LOC0 = 'char_loc0'
    PRE = 'pre'
    POST = 'post'
    POST_POST = 'post_post'
    UNDEFINED = 'undefined'


def _build_kind_table() -> tuple[OpKind, ...]:
    table = []
    for op in range(256):
        if op < PAINT1:
            kind = OpKind.PAINT_IMMEDIATE
        elif op <= PAINT3:
            kind = OpKind.PAINT
        elif op == BOC:
            kind = OpKind.BOC
        elif op == BOC1:
            kind = OpKind.BOC1
        elif op == EOC:
            kind = OpKind.EOC
        elif op == SKIP0:
            kind = OpKind.SKIP0
        elif op <= SKIP3:
            kind = OpKind.SKIP
        elif op <= NEW_ROW_164:
            kind = OpKind.NEW_ROW
        elif op <= XXX4:
            kind = OpKind.XXX
        elif op == YYY:
            kind = OpKind.YYY
        elif op == NO_OP:
            kind = OpKind.NO_OP
        elif op == CHAR_LOC:
            kind = OpKind.CHAR_LOC
        elif op == CHAR_LOC0:
            kind = OpKind.CHAR_LOC0
        elif op == PRE:
            kind = OpKind.PRE
        elif op == POST:
            kind = OpKind.POST
        elif op == POST_POST:
            kind = OpKind.POST_POST
        else:
            kind = OpKind.UNDEFINED
        table.append(kind)
    return tuple(table)


OPCODE_KINDS = _build_kind_table()


def classify(opcode: int) -> OpKind:
    """Return the OpKind of a byte value 0-255."""
    return OPCODE_KINDS[opcode]


def operand_width(opcode: int) -> int:
    """Byte width of the operand read by a paint/skip/xxx opcode.

    paint1..paint3 and skip1..skip3 take 1-3 bytes; xxx1..xxx4 take 1-4.
    """
    kind = OPCODE_KINDS[opcode]
    if kind is OpKind.PAINT:
        return opcode - PAINT1 + 1
    elif kind is OpKind.SKIP:
        return opcode - SKIP1 + 1
    elif kind is OpKind.XXX:
        return opcode - XXX1 + 1
    raise ValueError(f"Opcode {opcode} ({kind.value}) has no sized operand")
