# GFForge - A Generic Font Reader
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
GFForge - GF (Generic Font) raster font reader

Decodes METAFONT's GF bitmap fonts into Python objects:

```python
import gfforge

font = gfforge.read_gf_file("cmr10.2602gf")
for char in font.chars:
    print(char.code, char.bbox, len(char.bitmap))
```
"""

from .core.byte_source import (
    DENSITY_SCALE,
    DESIGN_SCALE,
    BufferByteSource,
    ByteSource,
    StreamByteSource,
)
from .core.error import (
    BadFormatId,
    GFError,
    NegativeSpecialLength,
    OrphanParameter,
    StreamReadFailure,
    UnexpectedOpcode,
)
from .core.gf_reader import read_gf, read_gf_file
from .core.opcodes import GF_ID
from .core.types import BlackLine, BoundingBox, Color, GFChar, GFFont, Special

__version__ = "0.1.0"

__all__ = [
    "BadFormatId",
    "BlackLine",
    "BoundingBox",
    "BufferByteSource",
    "ByteSource",
    "Color",
    "DENSITY_SCALE",
    "DESIGN_SCALE",
    "GF_ID",
    "GFChar",
    "GFError",
    "GFFont",
    "NegativeSpecialLength",
    "OrphanParameter",
    "Special",
    "StreamByteSource",
    "StreamReadFailure",
    "UnexpectedOpcode",
    "read_gf",
    "read_gf_file",
]
