"""The JPAC colour palette used for every plot."""

from __future__ import annotations

from enum import IntEnum


class JpacColor(IntEnum):
    """Palette colours, each carrying a fixed integer colour index."""

    BLUE = 2001
    RED = 2002
    GREEN = 2003
    ORANGE = 2004
    PURPLE = 2005
    BROWN = 2006
    PINK = 2007
    GOLD = 2008
    AQUA = 2009
    GREY = 2010
    DARK_GREY = 2011

    def rgb(self) -> tuple[float, float, float]:
        """Red, green and blue components, each in [0, 1]."""
        return _RGB[self]

    def hex(self) -> str:
        """The colour as a ``#rrggbb`` string."""
        return "#" + "".join(f"{round(c * 255):02x}" for c in self.rgb())


_RGB: dict[JpacColor, tuple[float, float, float]] = {
    JpacColor.BLUE: (0.12156862745098039, 0.4666666666666667, 0.7058823529411765),
    JpacColor.RED: (0.8392156862745098, 0.15294117647058825, 0.1568627450980392),
    JpacColor.GREEN: (0.0, 0.6196078431372549, 0.45098039215686275),
    JpacColor.ORANGE: (0.8823529411764706, 0.4980392156862745, 0.054901960784313725),
    JpacColor.PURPLE: (0.5803921568627451, 0.403921568627451, 0.7411764705882353),
    JpacColor.BROWN: (0.5490196078431373, 0.33725490196078434, 0.29411764705882354),
    JpacColor.PINK: (0.8901960784313725, 0.4666666666666667, 0.7607843137254902),
    JpacColor.GOLD: (0.7372549019607844, 0.7411764705882353, 0.13333333333333333),
    JpacColor.AQUA: (0.09019607843137255, 0.7450980392156863, 0.8117647058823529),
    JpacColor.GREY: (0.4980392156862745, 0.4980392156862745, 0.4980392156862745),
    JpacColor.DARK_GREY: (0.31372549019, 0.31372549019, 0.31372549019),
}

JPAC_COLORS: tuple[JpacColor, ...] = tuple(JpacColor)


def cycle_color(index: int) -> JpacColor:
    """Return the palette colour for a running curve index, wrapping around."""
    return JPAC_COLORS[index % len(JPAC_COLORS)]