# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Each GF handler run in isolation against a fresh DecodeState."""

import pytest

from gfforge.core import gf_reader
from gfforge.core.error import BadFormatId, NegativeSpecialLength, OrphanParameter
from gfforge.core.types import BlackLine, BoundingBox, Color


def test_paint(make_state):
    state = make_state()
    cur = state.current

    gf_reader.paint(state, 12)
    assert cur.char.bitmap[0] == BlackLine(x=0, y=0, w=12)
    assert cur.m == 12
    assert cur.color is Color.WHITE

    gf_reader.paint(state, 12)
    assert len(cur.char.bitmap) == 1
    assert cur.m == 24
    assert cur.color is Color.BLACK

    gf_reader.paint(state, 0)
    assert len(cur.char.bitmap) == 1
    assert cur.m == 24
    assert cur.color is Color.WHITE


def test_color_flipped():
    assert Color.BLACK.flipped() is Color.WHITE
    assert Color.WHITE.flipped() is Color.BLACK


@pytest.mark.parametrize("color, after", [(Color.BLACK, Color.WHITE), (Color.WHITE, Color.BLACK)])
def test_zero_paint_only_flips_color(make_state, color, after):
    state = make_state()
    state.current.color = color
    state.current.m = 5
    gf_reader.paint(state, 0)
    assert state.current.char.bitmap == []
    assert state.current.m == 5
    assert state.current.color is after


def test_black_run_uses_row_before_call(make_state):
    state = make_state()
    cur = state.current
    cur.m, cur.n = 3, 17
    gf_reader.paint(state, 9)
    assert cur.char.bitmap == [BlackLine(x=3, y=17, w=9)]
    assert (cur.m, cur.n) == (12, 17)


def test_boc(make_state):
    state = make_state(bytes([0xff, 0xff, 0xff, 0xff,
                              0x00, 0x00, 0x01, 0x00,
                              0x00, 0x00, 0x02, 0x00,
                              0x00, 0x00, 0x03, 0x00,
                              0x00, 0x00, 0x04, 0x00]))
    cur = state.current
    assert cur.started is False
    gf_reader.boc(state, 65)
    assert cur.char.code == 65
    assert cur.char.bbox == BoundingBox(0x100, 0x200, 0x300, 0x400)
    assert cur.started is True
    assert (cur.m, cur.n) == (0x100, 0x400)
    assert cur.color is Color.WHITE
    assert state.source.remaining() == 0


def test_boc1(make_state):
    state = make_state(bytes([0x05, 0x10, 0x1f, 0x3f]))
    cur = state.current
    gf_reader.boc1(state, 65)
    assert cur.char.code == 65
    assert cur.char.min_m == 0x0b
    assert cur.char.max_m == 0x10
    assert cur.char.min_n == 0x20
    assert cur.char.max_n == 0x3f
    assert cur.started is True
    assert (cur.m, cur.n) == (0x0b, 0x3f)
    assert cur.color is Color.WHITE


def test_eoc_stores_independent_copy(make_state):
    state = make_state(bytes([0x05, 0x10, 0x1f, 0x3f] * 2))
    gf_reader.boc1(state, 65)
    gf_reader.paint(state, 0)
    gf_reader.paint(state, 32)
    gf_reader.eoc(state)

    assert state.current.started is False
    assert len(state.font.chars) == 1
    assert len(state.font.chars[0].bitmap) == 1

    state.current.char.bitmap.append(BlackLine(0, 0, 1))
    assert len(state.font.chars[0].bitmap) == 1

    gf_reader.boc1(state, 66)
    assert len(state.font.chars[0].bitmap) == 1
    assert state.current.char.bitmap == []


def test_boc_without_eoc_drops_unfinished_character(make_state):
    state = make_state(bytes([0, 4, 0, 4] * 2))
    gf_reader.boc1(state, 1)
    gf_reader.paint(state, 0)
    gf_reader.paint(state, 2)
    gf_reader.boc1(state, 2)
    assert state.current.char.code == 2
    assert state.current.char.bitmap == []
    assert state.font.chars == []


@pytest.mark.parametrize("rows", [0, 1, 3, 255, 70000])
def test_skip(make_state, rows):
    state = make_state()
    cur = state.current
    cur.char.bbox = BoundingBox(min_m=-2, max_m=5, min_n=0, max_n=9)
    cur.m = 42
    cur.n = 9
    cur.color = Color.BLACK
    gf_reader.skip(state, rows)
    assert cur.n == 9 - (rows + 1)
    assert cur.m == -2
    assert cur.color is Color.WHITE


def test_skip_from_origin(make_state):
    state = make_state()
    state.current.m = 42
    gf_reader.skip(state, 3)
    assert state.current.n == -4
    assert state.current.m == 0


@pytest.mark.parametrize("indent", [0, 3, 164])
def test_new_row(make_state, indent):
    state = make_state()
    cur = state.current
    cur.char.bbox = BoundingBox(min_m=7, max_m=200, min_n=0, max_n=0)
    cur.m = 42
    cur.color = Color.WHITE
    gf_reader.new_row(state, indent)
    assert cur.n == -1
    assert cur.m == 7 + indent
    assert cur.color is Color.BLACK


def test_xxx(make_state):
    state = make_state(b"rule ")
    gf_reader.xxx(state, 5)
    assert state.specials[0].special == "rule "
    assert state.specials[0].numeric_params == []


def test_xxx_negative_length(make_state):
    state = make_state(b"rule ")
    with pytest.raises(NegativeSpecialLength):
        gf_reader.xxx(state, -1)


def test_yyy(make_state):
    state = make_state(b"rule ")
    gf_reader.xxx(state, 5)
    gf_reader.yyy(state, 47)
    gf_reader.yyy(state, 21)
    assert state.specials[0].numeric_params == [47, 21]


def test_yyy_targets_latest_special(make_state):
    state = make_state(b"ab")
    gf_reader.xxx(state, 1)
    gf_reader.xxx(state, 1)
    gf_reader.yyy(state, -8)
    assert state.specials[0].numeric_params == []
    assert state.specials[1].numeric_params == [-8]


def test_yyy_without_xxx(make_state):
    state = make_state()
    with pytest.raises(OrphanParameter):
        gf_reader.yyy(state, 47)


def test_specials_stay_at_font_level(make_state):
    state = make_state(bytes([0, 4, 0, 4]) + b"hi")
    gf_reader.boc1(state, 1)
    gf_reader.xxx(state, 2)
    gf_reader.eoc(state)
    assert state.font.chars[0].specials == []
    assert [s.special for s in state.specials] == ["hi"]


def test_pre(make_state):
    state = make_state(b"\x05Title")
    gf_reader.pre(state, 131)
    assert state.font.title == "Title"


def test_pre_rejects_bad_id(make_state):
    state = make_state(b"\x05Title")
    with pytest.raises(BadFormatId) as excinfo:
        gf_reader.pre(state, 89)
    assert excinfo.value.found == 89
    assert state.font.title == ''


def test_post(make_state, gf_stream):
    data = gf_stream.post(design_size=10.0, hppp=36.5, vppp=72.0,
                          bbox=(-3, 12, -4, 20), checksum=-1).bytes()
    state = make_state(data[1:])
    gf_reader.post(state)
    font = state.font
    assert state.finished is True
    assert font.design_size == 10.0
    assert font.hppp == 36.5
    assert font.vppp == 72.0
    assert font.bbox == BoundingBox(-3, 12, -4, 20)
    assert state.source.remaining() == 0
