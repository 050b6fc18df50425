# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Byte Sources for GF Decoding

GF files are read strictly forward. The decoder only needs a handful of
primitives on top of "give me the next N bytes":

- Big-endian integers 1, 2, 3 or 4 bytes wide. Only the 4-byte form is
  signed; the narrower forms are zero-extended and never negative.
- Strings of a given length (invalid UTF-8 is replaced, not rejected).
- Length-prefixed strings, where the prefix is one of the integer widths.
- Fixed-point reals: a 4-byte signed integer over 2^20 (design size) or
  2^16 (pixels per point).

ByteSource implements all of these in terms of read_bytes(); subclasses
only provide the raw reads. BufferByteSource serves in-memory data (tests,
embedded fonts), StreamByteSource wraps any binary file-like object.
"""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import BinaryIO

from .error import StreamReadFailure

DESIGN_SCALE = 1 << 20
DENSITY_SCALE = 1 << 16
READ_CHUNK = 1 << 16


class ByteSource(ABC):
    """Forward-only reader of GF primitives."""

    @abstractmethod
    def read_bytes(self, count: int) -> bytes:
        """Read exactly *count* bytes or raise StreamReadFailure."""
        pass

    @abstractmethod
    def tell(self) -> int:
        """Number of bytes consumed so far."""
        pass

    def read1(self) -> int:
        return self.read_bytes(1)[0]

    def read2(self) -> int:
        return struct.unpack('>H', self.read_bytes(2))[0]

    def read3(self) -> int:
        b1, b2, b3 = self.read_bytes(3)
        return (b1 << 16) | (b2 << 8) | b3

    def read4(self) -> int:
        return struct.unpack('>i', self.read_bytes(4))[0]

    def read_int(self, width: int) -> int:
        """Read a big-endian integer of *width* bytes (1-4).

        Widths 1-3 are zero-extended; width 4 is two's complement.
        """
        if width == 1:
            return self.read1()
        elif width == 2:
            return self.read2()
        elif width == 3:
            return self.read3()
        elif width == 4:
            return self.read4()
        else:
            raise ValueError(f"Invalid integer width: {width}")

    def read_string(self, size: int) -> str:
        """Read *size* bytes as UTF-8, replacing undecodable sequences."""
        if size < 0:
            raise ValueError(f"Negative string length: {size}")
        if size == 0:
            return ''
        return self.read_bytes(size).decode('utf-8', errors='replace')

    def read_prefixed_string(self, width: int) -> str:
        """Read a string whose length precedes it as a *width*-byte integer."""
        return self.read_string(self.read_int(width))

    def read_fixed(self, scale: int) -> float:
        """Read a 4-byte signed fixed-point value divided by *scale*."""
        return self.read4() / scale

    def read_design_units(self) -> float:
        return self.read_fixed(DESIGN_SCALE)

    def read_density_units(self) -> float:
        return self.read_fixed(DENSITY_SCALE)


class BufferByteSource(ByteSource):
    """ByteSource over an in-memory bytes-like object."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._offset = 0

    def read_bytes(self, count: int) -> bytes:
        end = self._offset + count
        if end > len(self._data):
            raise StreamReadFailure(
                f"Unexpected end of data: wanted {count} bytes, "
                f"{len(self._data) - self._offset} available",
                self._offset)
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def tell(self) -> int:
        return self._offset

    def remaining(self) -> int:
        """Bytes left in the buffer."""
        return len(self._data) - self._offset


class StreamByteSource(ByteSource):
    """ByteSource over a binary file-like object.

    Short reads are retried until the stream reports EOF, so pipes and
    sockets that deliver data in pieces are handled the same as files.
    Reads are issued in chunks of at most READ_CHUNK bytes, so a bogus
    length in a truncated file fails at EOF instead of allocating it.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._offset = 0

    def read_bytes(self, count: int) -> bytes:
        buf = bytearray()
        while len(buf) < count:
            try:
                chunk = self._stream.read(min(count - len(buf), READ_CHUNK))
            except OSError as exc:
                raise StreamReadFailure(f"Read error: {exc}", self._offset + len(buf)) from exc
            if not chunk:
                raise StreamReadFailure(
                    f"Unexpected end of stream: wanted {count} bytes, got {len(buf)}",
                    self._offset + len(buf))
            buf.extend(chunk)
        self._offset += count
        return bytes(buf)

    def tell(self) -> int:
        return self._offset


def as_byte_source(source: ByteSource | BinaryIO | bytes | bytearray | memoryview) -> ByteSource:
    """Wrap *source* in the matching ByteSource unless it already is one."""
    if isinstance(source, ByteSource):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return BufferByteSource(source)
    if hasattr(source, 'read'):
        return StreamByteSource(source)
    raise TypeError(f"Cannot read GF data from {type(source).__name__}")
