import re

import pytest

from palette import build_palette
from random_stream import RandomStream

HSL = re.compile(r"^hsl\((\d+) (\d+)% (\d+)%\)$")


def test_palette_size_and_format():
    palette = build_palette(RandomStream(6), 50)
    assert len(palette) == 50
    for colour in palette:
        match = HSL.match(colour)
        assert match is not None
        hue, saturation, lightness = (int(g) for g in match.groups())
        assert 0 <= hue < 360
        assert 40 <= saturation <= 100
        assert 20 <= lightness <= 80


def test_palette_deterministic_for_seed():
    assert build_palette(RandomStream(6), 8) == build_palette(RandomStream(6), 8)


def test_palette_draws_three_values_per_colour():
    stream = RandomStream(6)
    build_palette(stream, 4)
    reference = RandomStream(6)
    for _ in range(12):
        reference.next()
    assert stream.next() == reference.next()


def test_empty_and_negative_sizes():
    assert build_palette(RandomStream(1), 0) == []
    with pytest.raises(ValueError):
        build_palette(RandomStream(1), -1)
