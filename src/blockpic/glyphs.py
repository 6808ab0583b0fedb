from typing import NamedTuple

import numpy as np


class GlyphEntry(NamedTuple):
    mask: int  # 4x8 bitmap, one hex digit per row, MSB = top-left pixel
    glyph: str


# Order matters: the first entry reaching the minimum distance wins.
# Full block, upper half and the 3/4 quadrants are left out because they are
# the inverses of entries below.
GLYPHS = (
    GlyphEntry(0x00000000, " "),
    # Block elements
    GlyphEntry(0x0000000F, "▁"),  # lower 1/8
    GlyphEntry(0x000000FF, "▂"),  # lower 1/4
    GlyphEntry(0x00000FFF, "▃"),
    GlyphEntry(0x0000FFFF, "▄"),  # lower 1/2
    GlyphEntry(0x000FFFFF, "▅"),
    GlyphEntry(0x00FFFFFF, "▆"),  # lower 3/4
    GlyphEntry(0x0FFFFFFF, "▇"),
    GlyphEntry(0xEEEEEEEE, "▊"),  # left 3/4
    GlyphEntry(0xCCCCCCCC, "▌"),  # left 1/2
    GlyphEntry(0x88888888, "▎"),  # left 1/4
    GlyphEntry(0x0000CCCC, "▖"),  # quadrant lower left
    GlyphEntry(0x00003333, "▗"),  # quadrant lower right
    GlyphEntry(0xCCCC0000, "▘"),  # quadrant upper left
    GlyphEntry(0xCCCC3333, "▚"),  # diagonal
    GlyphEntry(0x33330000, "▝"),  # quadrant upper right
    # Box drawing without double lines; light lines twice since a 4x8 grid has no center pixel
    GlyphEntry(0x000FF000, "━"),  # heavy horizontal
    GlyphEntry(0x66666666, "┃"),  # heavy vertical
    GlyphEntry(0x00077666, "┏"),  # heavy down and right
    GlyphEntry(0x000EE666, "┓"),  # heavy down and left
    GlyphEntry(0x66677000, "┗"),  # heavy up and right
    GlyphEntry(0x666EE000, "┛"),  # heavy up and left
    GlyphEntry(0x66677666, "┣"),  # heavy vertical and right
    GlyphEntry(0x666EE666, "┫"),  # heavy vertical and left
    GlyphEntry(0x000FF666, "┳"),  # heavy down and horizontal
    GlyphEntry(0x666FF000, "┻"),  # heavy up and horizontal
    GlyphEntry(0x666FF666, "╋"),  # heavy cross
    GlyphEntry(0x000CC000, "╸"),  # heavy left
    GlyphEntry(0x00066000, "╹"),  # heavy up
    GlyphEntry(0x00033000, "╺"),  # heavy right
    GlyphEntry(0x00066000, "╻"),  # heavy down
    GlyphEntry(0x06600660, "╏"),  # heavy double dash vertical
    GlyphEntry(0x000F0000, "─"),  # light horizontal
    GlyphEntry(0x0000F000, "─"),
    GlyphEntry(0x44444444, "│"),  # light vertical
    GlyphEntry(0x22222222, "│"),
    GlyphEntry(0x000E0000, "╴"),  # light left
    GlyphEntry(0x0000E000, "╴"),
    GlyphEntry(0x44440000, "╵"),  # light up
    GlyphEntry(0x22220000, "╵"),
    GlyphEntry(0x00030000, "╶"),  # light right
    GlyphEntry(0x00003000, "╶"),
    GlyphEntry(0x00004444, "╷"),  # light down
    GlyphEntry(0x00002222, "╷"),
    # Misc technical
    GlyphEntry(0x44444444, "⎢"),  # left bracket extension
    GlyphEntry(0x22222222, "⎥"),  # right bracket extension
    GlyphEntry(0x0F000000, "⎺"),  # horizontal scan line 1
    GlyphEntry(0x00F00000, "⎻"),  # horizontal scan line 3
    GlyphEntry(0x00000F00, "⎼"),  # horizontal scan line 7
    GlyphEntry(0x000000F0, "⎽"),  # horizontal scan line 9
    # Geometric shapes
    GlyphEntry(0x00066000, "▪"),  # black small square
)

# Density ramp from empty to solid, used when no glyph matches well enough
SHADES = " ░▒▓█"

# Bitmap and glyph used when glyph matching is switched off
LOWER_HALF = GlyphEntry(0x0000FFFF, "▄")

CELL_WIDTH = 4
CELL_HEIGHT = 8
CELL_BITS = CELL_WIDTH * CELL_HEIGHT
FULL_MASK = 0xFFFFFFFF

MASKS = np.array([entry.mask for entry in GLYPHS], dtype=np.uint32)
