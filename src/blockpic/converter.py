from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from blockpic.buffer import InvalidInput, PixelBuffer
from blockpic.colours import ColourMode
from blockpic.glyphs import CELL_HEIGHT, CELL_WIDTH
from blockpic.render import render
from blockpic.terminal import get_terminal_size

logger = logging.getLogger(__name__)

# Gap between thumbnails, in cells
THUMBNAIL_GAP = 2


@dataclass(frozen=True)
class RenderOptions:
    mode: ColourMode = ColourMode.TRUECOLOUR
    grayscale: bool = False
    optimise: bool = True
    max_columns: int | None = None  # output size in cells, None = terminal size
    max_rows: int | None = None

    def limits(self) -> tuple[int, int]:
        """Maximum output size in cells, filling gaps from the terminal size."""
        if self.max_columns is not None and self.max_rows is not None:
            return self.max_columns, self.max_rows
        columns, rows = get_terminal_size()
        return (
            self.max_columns if self.max_columns is not None else columns,
            self.max_rows if self.max_rows is not None else rows,
        )


def load_image(path: str | Path) -> Image.Image:
    with Image.open(path) as image:
        return image.convert("RGB")


def fit_size(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Largest size with the same aspect ratio that fits the box. Never upscales."""
    if width <= max_width and height <= max_height:
        return width, height
    scale = min(max_width / width, max_height / height)
    return max(1, int(width * scale)), max(1, int(height * scale))


def _prepare(image: Image.Image, options: RenderOptions) -> PixelBuffer:
    if options.grayscale:
        image = image.convert("L")
    return PixelBuffer.from_image(image)


def image_to_text(image: Image.Image | str | Path, options: RenderOptions | None = None) -> str:
    if options is None:
        options = RenderOptions()
    if not isinstance(image, Image.Image):
        image = load_image(image)
    image = image.convert("RGB")

    columns, rows = options.limits()
    size = fit_size(image.width, image.height, columns * CELL_WIDTH, rows * CELL_HEIGHT)
    if size != image.size:
        logger.debug("Scaling %dx%d image down to %dx%d", image.width, image.height, *size)
        image = image.resize(size, Image.LANCZOS)

    if image.width < CELL_WIDTH or image.height < CELL_HEIGHT:
        return ""
    return render(_prepare(image, options), options.mode, optimise=options.optimise)


def thumbnails(paths: list[str | Path], options: RenderOptions | None = None, columns: int = 3) -> str:
    """Render images side by side in rows of square thumbnails, names underneath.

    Files that cannot be decoded are skipped.
    """
    if options is None:
        options = RenderOptions()
    if columns < 1:
        raise InvalidInput(f"Need at least one thumbnail per row, got {columns}")

    max_columns, _ = options.limits()
    thumb_cells = (max_columns - THUMBNAIL_GAP * (columns - 1)) // columns
    if thumb_cells < 1:
        raise InvalidInput(f"{max_columns} columns are too narrow for {columns} thumbnails per row")
    thumb = thumb_cells * CELL_WIDTH
    gap = THUMBNAIL_GAP * CELL_WIDTH

    out = []
    pending = list(paths)
    while pending:
        sheet = Image.new("RGB", (thumb * columns + gap * (columns - 1), thumb), (0, 0, 0))
        labels = []
        while pending and len(labels) < columns:
            path = Path(pending.pop(0))
            try:
                image = load_image(path)
            except (UnidentifiedImageError, OSError) as e:
                logger.warning("Skipping %s: %s", path, e)
                continue
            size = fit_size(image.width, image.height, thumb, thumb)
            if size != image.size:
                image = image.resize(size, Image.LANCZOS)
            x = len(labels) * (thumb + gap) + (thumb - size[0]) // 2
            sheet.paste(image, (x, (thumb - size[1]) // 2))
            labels.append(path.name[:thumb_cells].ljust(thumb_cells))

        if labels:
            out.append(render(_prepare(sheet, options), options.mode, optimise=options.optimise))
            out.append((" " * THUMBNAIL_GAP).join(labels).rstrip() + "\n\n")
    return "".join(out)
