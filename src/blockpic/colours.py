import math
from bisect import bisect_left
from enum import Enum

RESET = "\033[0m"

# Channel values of the 6x6x6 colour cube (palette entries 16-231)
CUBE_STEPS = (0, 95, 135, 175, 215, 255)

# Levels of the grayscale ramp (palette entries 232-255)
GRAY_STEPS = tuple(range(8, 239, 10))

# Perceptual weights: luma for the gray level, error weights for picking a palette entry
LUMA_WEIGHTS = (0.2989, 0.5870, 0.1140)
ERROR_WEIGHTS = (0.3, 0.59, 0.11)


class ColourMode(Enum):
    TRUECOLOUR = "truecolour"
    PALETTE256 = "256"


class Role(Enum):
    FOREGROUND = 38
    BACKGROUND = 48


def clamp(value) -> int:
    return max(0, min(255, int(value)))


def nearest_step(value: int, steps: tuple[int, ...]) -> int:
    """Index of the step closest to value; ties go to the lower index."""
    i = bisect_left(steps, value)
    if i == 0:
        return 0
    if i == len(steps):
        return len(steps) - 1
    return i - 1 if value - steps[i - 1] <= steps[i] - value else i


def to_grayscale(colour) -> int:
    r, g, b = (clamp(c) for c in colour)
    # round half up
    return int(math.floor(r * LUMA_WEIGHTS[0] + g * LUMA_WEIGHTS[1] + b * LUMA_WEIGHTS[2] + 0.5))


def _error(colour, target) -> float:
    return sum(w * (t - c) ** 2 for w, c, t in zip(ERROR_WEIGHTS, colour, target))


def palette_index(colour) -> int:
    """Map an RGB colour to the closest entry of the 256-colour terminal palette.

    Each channel is snapped to the colour cube, and the perceptual gray level to
    the grayscale ramp. Whichever candidate has the lower weighted squared error
    wins, the cube on a tie.
    """
    r, g, b = (clamp(c) for c in colour)
    ri, gi, bi = (nearest_step(c, CUBE_STEPS) for c in (r, g, b))
    cube = (CUBE_STEPS[ri], CUBE_STEPS[gi], CUBE_STEPS[bi])

    gray_index = nearest_step(to_grayscale((r, g, b)), GRAY_STEPS)
    gray = (GRAY_STEPS[gray_index],) * 3

    if _error((r, g, b), cube) <= _error((r, g, b), gray):
        return 16 + 36 * ri + 6 * gi + bi
    return 232 + gray_index


def encode(colour, role: Role, mode: ColourMode) -> str:
    """Escape sequence setting the foreground or background colour."""
    if mode is ColourMode.TRUECOLOUR:
        r, g, b = (clamp(c) for c in colour)
        return f"\033[{role.value};2;{r};{g};{b}m"
    if mode is ColourMode.PALETTE256:
        return f"\033[{role.value};5;{palette_index(colour)}m"
    raise ValueError(f"Unknown colour mode: {mode!r}")
