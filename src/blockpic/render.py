from blockpic.buffer import InvalidInput, PixelBuffer
from blockpic.colours import RESET, ColourMode, Role, encode
from blockpic.engine import CellGrid, render_cells


def format_cells(grid: CellGrid, mode: ColourMode) -> str:
    """Turn cells into lines of escape sequences and glyphs.

    A colour is only emitted when it differs from the one set by the previous
    cell on the same line. Every line ends with a reset and a newline.
    """
    if not isinstance(mode, ColourMode):
        raise InvalidInput(f"Unknown colour mode: {mode!r}")

    out = []
    for row in grid.rows:
        parts = []
        last_fg = last_bg = None
        for cell in row:
            fg = encode(cell.foreground, Role.FOREGROUND, mode)
            bg = encode(cell.background, Role.BACKGROUND, mode)
            if fg != last_fg:
                parts.append(fg)
                last_fg = fg
            if bg != last_bg:
                parts.append(bg)
                last_bg = bg
            parts.append(cell.glyph)
        parts.append(RESET)
        parts.append("\n")
        out.append("".join(parts))
    return "".join(out)


def render(buffer: PixelBuffer, mode: ColourMode, optimise: bool = True) -> str:
    if not isinstance(mode, ColourMode):
        raise InvalidInput(f"Unknown colour mode: {mode!r}")
    return format_cells(render_cells(buffer, optimise=optimise), mode)
