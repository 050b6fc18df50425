# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
GF decode errors.

Every failure is fatal for the decode in progress: the first error raised
by a handler propagates out of ``read_gf`` and no partial font is returned.
The format has no resynchronization markers, so callers report the error
and discard the attempt.
"""

from __future__ import annotations


class GFError(Exception):
    """Error during GF decoding."""
    pass


class BadFormatId(GFError):
    """The preamble's identification byte is not the GF format id."""

    def __init__(self, found: int, expected: int) -> None:
        super().__init__(f"invalid GF ID: expected {expected}, found {found}")
        self.found = found
        self.expected = expected


class OrphanParameter(GFError):
    """A yyy parameter arrived with no preceding xxx special."""

    def __init__(self, value: int) -> None:
        super().__init__(f"yyy ({value}) without preceding xxx")
        self.value = value


class UnexpectedOpcode(GFError):
    """An opcode that is reserved, undefined, or belongs past the postamble."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"invalid opcode {opcode}")
        self.opcode = opcode


class NegativeSpecialLength(GFError):
    """An xxx4 special declared a negative payload length."""

    def __init__(self, size: int) -> None:
        super().__init__(f"negative length for special: {size}")
        self.size = size


class StreamReadFailure(GFError):
    """The underlying stream failed or ended before the requested bytes."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        if offset is not None:
            message = f"{message} at offset {offset}"
        super().__init__(message)
        self.offset = offset
