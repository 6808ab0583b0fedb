from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from blockpic.buffer import InvalidInput, PixelBuffer
from blockpic.glyphs import LOWER_HALF
from blockpic.matcher import match_grid
from blockpic.quantize import RGB, quantize_grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellRendering:
    glyph: str
    foreground: RGB
    background: RGB


@dataclass
class CellGrid:
    rows: list[list[CellRendering]]  # one list per 8-pixel band

    @property
    def chars(self) -> list[str]:
        return ["".join(cell.glyph for cell in row) for row in self.rows]


def render_cells(buffer: PixelBuffer, optimise: bool = True) -> CellGrid:
    """Pick a glyph and two colours for every whole 4x8 cell of the buffer.

    With ``optimise`` off every cell is drawn as a lower half block, which only
    needs the two colours of the top and bottom half.
    """
    if not isinstance(buffer, PixelBuffer):
        raise InvalidInput(f"Expected a PixelBuffer, got {type(buffer).__name__}")

    if optimise:
        split = quantize_grid(buffer.pixels)
        glyphs, invert, _ = match_grid(split.bitmaps)
    else:
        split = quantize_grid(buffer.pixels, bitmap=LOWER_HALF.mask)
        glyphs = np.full(split.shape, LOWER_HALF.glyph)
        invert = np.zeros(split.shape, dtype=bool)

    # Inverted glyphs swap the roles of the two colours
    fg = np.where(invert[..., np.newaxis], split.background, split.foreground)
    bg = np.where(invert[..., np.newaxis], split.foreground, split.background)

    rows, cols = split.shape
    logger.debug("Rendering %dx%d pixels as %dx%d cells", buffer.width, buffer.height, cols, rows)
    return CellGrid(
        rows=[
            [
                CellRendering(
                    glyph=str(glyphs[r, c]),
                    foreground=tuple(int(v) for v in fg[r, c]),
                    background=tuple(int(v) for v in bg[r, c]),
                )
                for c in range(cols)
            ]
            for r in range(rows)
        ]
    )
