import pytest

from hadmolee.colors import JPAC_COLORS, JpacColor, cycle_color


def test_indices_follow_source_numbering():
    indices = [int(cycle_color(i)) for i in range(len(JPAC_COLORS))]
    assert indices == list(range(2001, 2012))
    assert int(cycle_color(0)) == 2001
    assert int(cycle_color(10)) == 2011


def test_rgb_values_from_palette():
    assert JpacColor.BLUE.rgb() == (0.12156862745098039, 0.4666666666666667, 0.7058823529411765)
    assert JpacColor.GREEN.rgb()[0] == 0.0


@pytest.mark.parametrize("index", range(11))
def test_rgb_components_in_unit_interval(index):
    components = cycle_color(index).rgb()
    assert len(components) == 3
    assert all(0.0 <= c <= 1.0 for c in components)


@pytest.mark.parametrize("index", range(11))
def test_hex_round_trips_rgb(index):
    color = cycle_color(index)
    text = color.hex()
    assert text.startswith("#") and len(text) == 7
    parsed = [int(text[i:i + 2], 16) / 255 for i in (1, 3, 5)]
    for got, expected in zip(parsed, color.rgb()):
        assert got == pytest.approx(expected, abs=1 / 510)


def test_hex_of_blue():
    assert JpacColor.BLUE.hex() == "#1f77b4"


def test_cycle_color_order_and_wrap():
    assert cycle_color(0) is JpacColor.BLUE
    assert cycle_color(1) is JpacColor.RED
    assert cycle_color(len(JPAC_COLORS)) is cycle_color(0)
    assert cycle_color(-1) is JpacColor.DARK_GREY