import argparse
import logging
import sys
from pathlib import Path

from PIL import UnidentifiedImageError

from blockpic.colours import ColourMode
from blockpic.converter import RenderOptions, image_to_text, thumbnails

logger = logging.getLogger(__name__)

# sysexits.h
EXIT_OK = 0
EXIT_USAGE = 64
EXIT_DATA_FORMAT = 65
EXIT_NO_INPUT = 66


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _positive(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="blockpic", description="Show images in the terminal using block characters and ANSI colours"
    )
    parser.add_argument("images", nargs="+", help="Image files or directories of images")
    parser.add_argument("-w", "--width", type=_positive, default=None, help="Maximum width in characters")
    parser.add_argument("-H", "--height", type=_positive, default=None, help="Maximum height in lines")
    parser.add_argument(
        "-2", "--256", dest="palette", action="store_true", help="Use the 256-colour palette instead of truecolor"
    )
    parser.add_argument("-g", "--grayscale", action="store_true", help="Render in shades of gray")
    parser.add_argument(
        "-0",
        "--no-optimise",
        dest="optimise",
        action="store_false",
        help="Always use the lower half block instead of matching glyphs",
    )
    parser.add_argument("-c", "--columns", type=_positive, default=3, help="Thumbnails per row (default: 3)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-d", "--dir", dest="thumbnails", action="store_true", default=None, help="Thumbnail mode")
    group.add_argument("-f", "--full", dest="thumbnails", action="store_false", default=None, help="Full size mode")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return parser


def _expand(names: list[str]) -> tuple[list[Path], int]:
    """Expand directories into their files; report inputs that do not exist."""
    paths = []
    status = EXIT_OK
    for name in names:
        path = Path(name)
        if path.is_dir():
            paths.extend(sorted(p for p in path.iterdir() if p.is_file()))
        elif path.is_file():
            paths.append(path)
        else:
            print(f"Error: Cannot open '{name}'", file=sys.stderr)
            status = EXIT_NO_INPUT
    return paths, status


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    options = RenderOptions(
        mode=ColourMode.PALETTE256 if args.palette else ColourMode.TRUECOLOUR,
        grayscale=args.grayscale,
        optimise=args.optimise,
        max_columns=args.width,
        max_rows=args.height,
    )
    paths, status = _expand(args.images)

    use_thumbnails = args.thumbnails if args.thumbnails is not None else len(paths) > 1
    if use_thumbnails:
        if paths:
            sys.stdout.write(thumbnails(paths, options, columns=args.columns))
        return status

    for path in paths:
        try:
            sys.stdout.write(image_to_text(path, options))
        except (UnidentifiedImageError, OSError) as e:
            logger.debug("Failed to decode %s: %s", path, e)
            print(f"Error: '{path}' has an unrecognized file format", file=sys.stderr)
            status = EXIT_DATA_FORMAT
    return status


if __name__ == "__main__":
    sys.exit(main())
