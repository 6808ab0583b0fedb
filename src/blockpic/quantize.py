from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from blockpic.glyphs import CELL_BITS, CELL_HEIGHT, CELL_WIDTH

RGB = tuple[int, int, int]

# Shift for each pixel of a cell in row-major order: the first pixel lands in bit 31
_SHIFTS = np.arange(CELL_BITS - 1, -1, -1, dtype=np.uint64)


@dataclass(frozen=True)
class SplitResult:
    foreground: RGB
    background: RGB
    bitmap: int
    foreground_count: int


@dataclass
class SplitGrid:
    foreground: np.ndarray  # (rows, cols, 3) uint8
    background: np.ndarray  # (rows, cols, 3) uint8
    bitmaps: np.ndarray  # (rows, cols) uint32
    foreground_counts: np.ndarray  # (rows, cols) int

    @property
    def shape(self) -> tuple[int, int]:
        return self.bitmaps.shape

    def __getitem__(self, index: tuple[int, int]) -> SplitResult:
        return SplitResult(
            foreground=_rgb(self.foreground[index]),
            background=_rgb(self.background[index]),
            bitmap=int(self.bitmaps[index]),
            foreground_count=int(self.foreground_counts[index]),
        )


def _rgb(values) -> RGB:
    return (int(values[0]), int(values[1]), int(values[2]))


def split_cells(pixels: np.ndarray) -> np.ndarray:
    """Cut an (H, W, channels) array into cells.

    Returns an int64 array of shape (rows, cols, 32, 3) holding the RGB values of
    each whole cell in row-major pixel order. Alpha and partial cells are dropped.
    """
    arr = np.asarray(pixels)[..., :3].astype(np.int64)
    rows = arr.shape[0] // CELL_HEIGHT
    cols = arr.shape[1] // CELL_WIDTH
    trimmed = arr[: rows * CELL_HEIGHT, : cols * CELL_WIDTH]
    cells = trimmed.reshape(rows, CELL_HEIGHT, cols, CELL_WIDTH, 3).transpose(0, 2, 1, 3, 4)
    return cells.reshape(rows, cols, CELL_BITS, 3)


def _bucket_means(cells: np.ndarray, mask: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Floor-average the pixels selected by mask; empty buckets get the cell mean."""
    counts = mask.sum(axis=2)
    sums = (cells * mask[..., np.newaxis]).sum(axis=2)
    cell_mean = cells.sum(axis=2) // CELL_BITS
    means = np.where(counts[..., np.newaxis] > 0, sums // np.maximum(counts, 1)[..., np.newaxis], cell_mean)
    return means.astype(np.uint8), counts


def _split_masks(cells: np.ndarray) -> np.ndarray:
    lo = cells.min(axis=2)  # (rows, cols, 3)
    spread = cells.max(axis=2) - lo

    # argmax keeps the first channel on ties: red, then green, then blue
    channel = spread.argmax(axis=2)[..., np.newaxis]
    split_value = (
        np.take_along_axis(lo, channel, axis=2) + np.take_along_axis(spread, channel, axis=2) // 2
    )  # (rows, cols, 1)

    values = np.take_along_axis(cells, channel[..., np.newaxis], axis=3)[..., 0]  # (rows, cols, 32)
    return values > split_value


def quantize_grid(pixels: np.ndarray, bitmap: int | None = None) -> SplitGrid:
    """Split every cell of an image into a foreground and a background colour.

    The channel with the widest range is cut at the middle of its range; pixels
    above the cut are foreground. With a fixed ``bitmap`` the cut is skipped and
    every cell is averaged over that pattern instead.
    """
    cells = split_cells(pixels)
    rows, cols = cells.shape[:2]

    if bitmap is None:
        fg_mask = _split_masks(cells)
    else:
        pattern = ((bitmap >> _SHIFTS) & 1).astype(bool)
        fg_mask = np.broadcast_to(pattern, (rows, cols, CELL_BITS))

    bitmaps = (fg_mask.astype(np.uint64) << _SHIFTS).sum(axis=2, dtype=np.uint64).astype(np.uint32)
    foreground, fg_counts = _bucket_means(cells, fg_mask)
    background, _ = _bucket_means(cells, ~fg_mask)

    return SplitGrid(foreground=foreground, background=background, bitmaps=bitmaps, foreground_counts=fg_counts)


def quantize(cell: np.ndarray, bitmap: int | None = None) -> SplitResult:
    """Quantize a single 4x8 cell, given as an (8, 4, channels) array."""
    cell = np.asarray(cell)
    if cell.ndim != 3 or cell.shape[:2] != (CELL_HEIGHT, CELL_WIDTH) or cell.shape[2] < 3:
        raise ValueError(f"Expected an ({CELL_HEIGHT}, {CELL_WIDTH}, 3) cell, got {cell.shape}")
    return quantize_grid(cell, bitmap)[0, 0]
