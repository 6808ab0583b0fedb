import numpy as np

from blockpic.glyphs import CELL_BITS, FULL_MASK, GLYPHS, MASKS, SHADES

# Matches worse than this many differing pixels fall back to a shade
MATCH_THRESHOLD = 10

# Direct and inverted mask of each entry, interleaved so that argmin prefers the
# earlier entry, and the direct orientation within an entry.
_CANDIDATES = np.stack([MASKS, ~MASKS], axis=1).reshape(-1)
_CHARS = np.array([entry.glyph for entry in GLYPHS])
_SHADE_CHARS = np.array(list(SHADES))


def popcount(values: np.ndarray) -> np.ndarray:
    """Number of set bits in each element of a uint32 array."""
    values = np.ascontiguousarray(values, dtype=np.uint32)
    as_bytes = values.view(np.uint8).reshape(values.shape + (4,))
    return np.unpackbits(as_bytes, axis=-1).sum(axis=-1, dtype=np.int64)


def match_grid(bitmaps: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Find the closest glyph for every bitmap.

    Args:
        bitmaps: uint32 array of any shape

    Returns:
        glyphs: str array, same shape as bitmaps
        invert: bool array, True where the glyph's colours must be swapped
        distances: int array, differing pixels of the winning candidate
    """
    bitmaps = np.asarray(bitmaps, dtype=np.uint32)
    shape = bitmaps.shape
    flat = bitmaps.reshape(-1)

    distances = popcount(flat[:, np.newaxis] ^ _CANDIDATES[np.newaxis, :])  # (N, 2 * entries)
    best = distances.argmin(axis=1)
    best_distance = distances[np.arange(flat.size), best]

    glyphs = _CHARS[best // 2]
    invert = best % 2 == 1

    # Poor match: pick a shade by foreground density instead, never inverted
    poor = best_distance > MATCH_THRESHOLD
    shade_index = np.minimum(len(SHADES) - 1, popcount(flat) * len(SHADES) // CELL_BITS)
    glyphs = np.where(poor, _SHADE_CHARS[shade_index], glyphs)
    invert = invert & ~poor

    return glyphs.reshape(shape), invert.reshape(shape), best_distance.reshape(shape)


def match_distance(bitmap: int) -> tuple[str, bool, int]:
    glyphs, invert, distances = match_grid(np.array([bitmap & FULL_MASK], dtype=np.uint32))
    return str(glyphs[0]), bool(invert[0]), int(distances[0])


def match(bitmap: int) -> tuple[str, bool]:
    """Return the glyph closest to a 4x8 bitmap and whether it is drawn inverted."""
    glyph, invert, _ = match_distance(bitmap)
    return glyph, invert
