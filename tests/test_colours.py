import itertools

import pytest

from blockpic.colours import (
    CUBE_STEPS,
    GRAY_STEPS,
    ColourMode,
    Role,
    encode,
    nearest_step,
    palette_index,
    to_grayscale,
)


def test_gray_ramp():
    assert len(GRAY_STEPS) == 24
    assert GRAY_STEPS[0] == 8
    assert GRAY_STEPS[-1] == 238


def test_truecolour_carries_exact_values():
    assert encode((12, 34, 56), Role.FOREGROUND, ColourMode.TRUECOLOUR) == "\033[38;2;12;34;56m"
    assert encode((12, 34, 56), Role.BACKGROUND, ColourMode.TRUECOLOUR) == "\033[48;2;12;34;56m"


def test_truecolour_clamps():
    assert encode((300, -5, 128), Role.FOREGROUND, ColourMode.TRUECOLOUR) == "\033[38;2;255;0;128m"


def test_palette_sequences():
    assert encode((255, 0, 0), Role.FOREGROUND, ColourMode.PALETTE256) == "\033[38;5;196m"
    assert encode((255, 0, 0), Role.BACKGROUND, ColourMode.PALETTE256) == "\033[48;5;196m"


def test_unknown_mode():
    with pytest.raises(ValueError):
        encode((0, 0, 0), Role.FOREGROUND, "truecolour")


@pytest.mark.parametrize(
    "value, expected",
    [(0, 0), (47, 0), (48, 1), (95, 1), (115, 1), (116, 2), (255, 5), (300, 5)],
)
def test_nearest_cube_step(value, expected):
    # 115 is equally far from 95 and 135: lower index wins
    assert nearest_step(value, CUBE_STEPS) == expected


def test_nearest_gray_step():
    assert nearest_step(0, GRAY_STEPS) == 0
    assert nearest_step(13, GRAY_STEPS) == 0
    assert nearest_step(14, GRAY_STEPS) == 1
    assert nearest_step(255, GRAY_STEPS) == 23


def test_to_grayscale():
    assert to_grayscale((0, 0, 0)) == 0
    assert to_grayscale((255, 255, 255)) == 255
    assert to_grayscale((255, 0, 0)) == 76
    assert to_grayscale((0, 0, 255)) == 29


@pytest.mark.parametrize(
    "colour, expected",
    [
        ((0, 0, 0), 16),
        ((255, 255, 255), 231),
        ((255, 0, 0), 196),
        ((0, 255, 0), 46),
        ((0, 0, 255), 21),
        ((95, 135, 175), 16 + 36 * 1 + 6 * 2 + 3),
        ((128, 128, 128), 244),  # exactly on the gray ramp
        ((8, 8, 8), 232),
    ],
)
def test_palette_index(colour, expected):
    assert palette_index(colour) == expected


def test_palette_index_range():
    values = (0, 1, 37, 64, 95, 100, 128, 135, 200, 215, 254, 255)
    for colour in itertools.product(values, repeat=3):
        index = palette_index(colour)
        assert 16 <= index <= 255


def test_palette_is_pure():
    assert encode((1, 2, 3), Role.FOREGROUND, ColourMode.PALETTE256) == encode(
        (1, 2, 3), Role.FOREGROUND, ColourMode.PALETTE256
    )
