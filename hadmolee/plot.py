"""A single plot: curves, data points, error bands and their drawing options."""

from __future__ import annotations

import warnings
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import ClassVar

import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .colors import JpacColor, cycle_color
from .data_set import DataSet, DataType
from .elementwise import add, divide, subtract

SOLID = "-"
DASHED = "--"
SOLID_FILL = 1001

# Marker shapes handed out to successive data sets
_MARKERS = ("o", "s", "^", "v", "D", "*", "P", "X", "p", "h")

ErrorPair = tuple[list[float], list[float]]


@dataclass
class EntryStyle:
    """Drawing options of one plot entry."""

    color: JpacColor = JpacColor.DARK_GREY
    # Line style for curves, marker shape for data points
    style: str = SOLID
    add_to_legend: bool = True
    label: str = ""
    # "L" for a line, "P" for points, "3" for a filled band
    draw_opt: str = "L"
    fill: int = SOLID_FILL


@dataclass
class PlotEntry:
    """One curve, band or set of data points to be drawn."""

    x: list[float]
    y: list[float]
    style: EntryStyle = field(default_factory=EntryStyle)
    is_data: bool = False
    xerr: ErrorPair | None = None
    yerr: ErrorPair | None = None

    DEFAULT_LINEWIDTH: ClassVar[float] = 3.0
    DEFAULT_MARKERWIDTH: ClassVar[float] = 2.0

    def set_style(self, style: EntryStyle) -> None:
        """Replace the drawing options of this entry."""
        self.style = style

    def linewidth(self, scale: float = 1.0) -> float:
        """Line width of this entry with the given scale factor applied."""
        base = self.DEFAULT_MARKERWIDTH if self.is_data else self.DEFAULT_LINEWIDTH
        return base * scale


@dataclass
class Vertical:
    """A vertical line drawn at a fixed x value."""

    x_value: float = 0.0
    color: str = "black"
    linestyle: str = DASHED


def _error_pair(low: Sequence[float], high: Sequence[float], n: int) -> ErrorPair | None:
    if len(low) < n or len(high) < n:
        return None
    return (list(low[:n]), list(high[:n]))


class Plot:
    """Entries, data and options of a single figure, drawn with matplotlib."""

    def __init__(self, filename: str = "") -> None:
        self.filename = filename

        self.xlog = False
        self.ylog = False
        self.xlabel = ""
        self.ylabel = ""
        self.ranges: tuple[tuple[float, float], tuple[float, float]] | None = None

        self.legend_visible = True
        self.legend_coords = (0.3, 0.7)
        self.legend_spacing = 0.036
        self.legend_count = 0
        self.has_header = False
        self.header = ""

        self.show_logo = False
        self.logo_coords = (0.93, 0.885)
        self.logo_scale = 1.0
        self.watermark = False

        self.linewidth_scale = 1.0
        self.curve_points = 100

        self._n_data = 0
        self._n_curve = -1
        self._entries: deque[PlotEntry] = deque()
        self._verticals: list[Vertical] = []

    # ------------------------------------------------------------------
    # Inspection

    @property
    def entries(self) -> tuple[PlotEntry, ...]:
        """All entries in drawing order."""
        return tuple(self._entries)

    @property
    def verticals(self) -> tuple[Vertical, ...]:
        """All vertical lines."""
        return tuple(self._verticals)

    @property
    def curve_index(self) -> int:
        """Running index used to pick the colour of the next curve."""
        return self._n_curve

    # ------------------------------------------------------------------
    # Output

    def save(self, filename: str | None = None) -> None:
        """Draw the plot and write it to ``filename`` (or the stored filename)."""
        if filename is not None:
            self.filename = filename
        if not self._entries:
            warnings.warn("plot.save(): No entries added! Returning...", stacklevel=2)
            return
        if not self.filename:
            raise ValueError("No filename given to save the plot to")

        figure = Figure(figsize=(6.0, 3.0))
        figure.subplots_adjust(left=0.1, right=0.98, bottom=0.12, top=0.95)
        self.draw(figure.add_subplot())
        figure.savefig(self.filename)

    # ------------------------------------------------------------------
    # Entries

    def add_entry(self, entry: PlotEntry) -> None:
        """Append an already prepared entry."""
        self._entries.append(entry)

    def add_data(self, data: DataSet, different_id: str | None = None) -> None:
        """Add the points of a data set, optionally under another legend label."""
        if different_id is not None:
            data = replace(data, id=different_id)

        n = data.n
        if data.type is DataType.INTEGRATED:
            x, xerr = data.w, data.werr
        else:
            x, xerr = data.t, data.terr

        style = EntryStyle(
            color=JpacColor.DARK_GREY,
            style=_MARKERS[self._n_data % len(_MARKERS)],
            add_to_legend=data.add_to_legend,
            label=data.id,
            draw_opt="P",
        )
        self._n_data += 1
        self.legend_count += 1

        self._entries.append(
            PlotEntry(
                x=list(x[:n]),
                y=list(data.obs[:n]),
                style=style,
                is_data=True,
                xerr=_error_pair(xerr[0], xerr[1], n),
                yerr=_error_pair(data.obserr, data.obserr, n),
            )
        )

    def color_offset(self, n: int) -> None:
        """Skip ``n`` colours of the palette for the following curves."""
        self._n_curve += n

    def _curve_style(self, style: EntryStyle | str) -> EntryStyle:
        if isinstance(style, EntryStyle):
            return style
        self._n_curve += 1
        return EntryStyle(
            color=cycle_color(self._n_curve),
            style=SOLID,
            label=style,
            add_to_legend=style != "",
        )

    def add_curve(
        self, x: Sequence[float], fx: Sequence[float], style: EntryStyle | str = ""
    ) -> None:
        """Add a curve through the points (x, fx).

        ``style`` is either a full ``EntryStyle`` or a legend label; with a
        label the colour cycles through the palette.
        """
        if len(x) != len(fx):
            raise ValueError(f"x and f(x) have different sizes ({len(x)} and {len(fx)})")
        entry_style = self._curve_style(style)
        if entry_style.add_to_legend:
            self.legend_count += 1
        self._entries.append(PlotEntry(list(x), list(fx), entry_style, is_data=False))

    def _sample(
        self, bounds: Sequence[float], function: Callable[[float], float]
    ) -> tuple[list[float], list[float]]:
        xs = [float(v) for v in np.linspace(bounds[0], bounds[1], self.curve_points)]
        return xs, [function(v) for v in xs]

    def add_function(
        self,
        bounds: Sequence[float],
        function: Callable[[float], float],
        style: EntryStyle | str = "",
    ) -> None:
        """Add a curve sampled from ``function`` between the two bounds."""
        entry_style = self._curve_style(style)
        x, fx = self._sample(bounds, function)
        self.add_curve(x, fx, entry_style)

    def add_dashed(self, x: Sequence[float], fx: Sequence[float]) -> None:
        """Add a dashed curve in the colour of the last full curve, not in the legend."""
        if len(x) != len(fx):
            raise ValueError(f"x and f(x) have different sizes ({len(x)} and {len(fx)})")
        style = EntryStyle(
            color=cycle_color(self._n_curve), style=DASHED, add_to_legend=False
        )
        self._entries.append(PlotEntry(list(x), list(fx), style, is_data=False))

    def add_dashed_function(
        self, bounds: Sequence[float], function: Callable[[float], float]
    ) -> None:
        """Add a dashed curve sampled from ``function`` between the two bounds."""
        x, fx = self._sample(bounds, function)
        self.add_dashed(x, fx)

    def set_curve_points(self, n: int) -> None:
        """Number of points at which functions are sampled."""
        if n < 2:
            raise ValueError("A curve needs at least two points")
        self.curve_points = n

    def add_band(
        self,
        x: Sequence[float],
        band: tuple[Sequence[float], Sequence[float]],
        fill: int = SOLID_FILL,
    ) -> None:
        """Add a shaded band between ``band[0]`` (lower) and ``band[1]`` (upper)."""
        lower, higher = band
        if len(lower) != len(x):
            raise ValueError("Band and x values have different sizes")
        y = divide(add(higher, lower), 2)
        ey = divide(subtract(higher, lower), 2)
        style = EntryStyle(
            color=cycle_color(self._n_curve),
            draw_opt="3",
            add_to_legend=False,
            fill=fill,
        )
        self._entries.appendleft(PlotEntry(list(x), y, style, is_data=False, yerr=(ey, ey)))

    def add_vertical(
        self, x_value: float, color: str = "black", linestyle: str = DASHED
    ) -> None:
        """Draw a vertical line at ``x_value``."""
        self._verticals.append(Vertical(x_value, color, linestyle))

    # ------------------------------------------------------------------
    # Options

    def set_labels(self, x: str, y: str) -> None:
        """Axis titles."""
        self.xlabel, self.ylabel = x, y

    def set_logscale(self, x: bool, y: bool) -> None:
        """Use a logarithmic x and/or y axis."""
        self.xlog, self.ylog = x, y

    def set_ranges(self, x: Sequence[float], y: Sequence[float]) -> None:
        """Fix the ranges of both axes."""
        self.ranges = ((x[0], x[1]), (y[0], y[1]))

    def set_legend(self, x: float, y: float) -> None:
        """Show the legend with its lower left corner at (x, y) in axes units."""
        self.legend_visible = True
        self.legend_coords = (x, y)

    def show_legend(self, flag: bool) -> None:
        """Turn the legend on or off."""
        self.legend_visible = flag

    def add_header(self, text: str, value: float | None = None, units: str = "") -> None:
        """Set the legend header, optionally as ``text value units``."""
        self.header = text if value is None else f"{text} {value:.3g} {units}"
        self.has_header = True

    def add_logo(
        self, show: bool, coords: Sequence[float] = (0.93, 0.885), scale: float = 1.0
    ) -> None:
        """Choose whether and where the logo is drawn."""
        self.show_logo = show
        self.logo_coords = (coords[0], coords[1])
        self.logo_scale = scale

    def reset_logo(self) -> None:
        """Show the logo at its default place and size."""
        self.add_logo(True)

    def set_legend_spacing(self, spacing: float) -> None:
        """Height taken by each legend line, in axes units."""
        self.legend_spacing = spacing

    def preliminary(self, flag: bool) -> None:
        """Mark the plot with a PRELIMINARY watermark."""
        self.watermark = flag

    def scale_linewidth(self, factor: float) -> None:
        """Scale the width of every line drawn."""
        self.linewidth_scale = factor

    def reset_linewidth(self) -> None:
        """Return line widths to their defaults."""
        self.linewidth_scale = 1.0

    # ------------------------------------------------------------------
    # Drawing

    def _draw_entry(self, axes: Axes, entry: PlotEntry):
        color = entry.style.color.hex()
        width = entry.linewidth(self.linewidth_scale)
        if entry.style.draw_opt == "3":
            low_err, high_err = entry.yerr if entry.yerr else ([0.0] * len(entry.y),) * 2
            return axes.fill_between(
                entry.x,
                subtract(entry.y, low_err),
                add(entry.y, high_err),
                color=color,
                alpha=0.25,
                linewidth=0,
                hatch=None if entry.style.fill == SOLID_FILL else "//",
            )
        if entry.is_data or entry.style.draw_opt == "P":
            return axes.errorbar(
                entry.x,
                entry.y,
                xerr=entry.xerr,
                yerr=entry.yerr,
                fmt=entry.style.style,
                color=color,
                alpha=0.9,
                elinewidth=width,
            )
        (line,) = axes.plot(
            entry.x,
            entry.y,
            linestyle=entry.style.style,
            color=color,
            alpha=0.9,
            linewidth=width,
        )
        return line

    def draw(self, axes: Axes) -> Axes:
        """Draw every entry and option onto ``axes`` and return it."""
        handles, labels = [], []
        for entry in self._entries:
            artist = self._draw_entry(axes, entry)
            if entry.style.add_to_legend:
                handles.append(artist)
                labels.append(entry.style.label)

        if self.xlog:
            axes.set_xscale("log")
        if self.ylog:
            axes.set_yscale("log")
        axes.set_xlabel(self.xlabel)
        axes.set_ylabel(self.ylabel)

        if self.show_logo:
            axes.text(
                *self.logo_coords,
                "JPAC",
                transform=axes.transAxes,
                ha="right",
                va="center",
                color=JpacColor.BLUE.hex(),
                fontstyle="italic",
                fontsize=14 * self.logo_scale,
            )
        if self.watermark:
            axes.text(
                0.33,
                0.15,
                "PRELIMINARY",
                transform=axes.transAxes,
                color="grey",
                alpha=0.5,
                fontsize=24,
            )

        title = f"  {self.header}" if self.has_header else None
        height = self.legend_spacing * (self.legend_count + int(self.has_header))
        anchor = (self.legend_coords[0], self.legend_coords[1], 0.3, height)
        if self.legend_visible or self.has_header:
            shown_handles = handles if self.legend_visible else []
            shown_labels = labels if self.legend_visible else []
            axes.legend(
                shown_handles,
                shown_labels,
                title=title,
                loc="lower left",
                bbox_to_anchor=anchor,
                bbox_transform=axes.transAxes,
                frameon=False,
            )

        if self.ranges is not None:
            axes.set_xlim(*self.ranges[0])
            axes.set_ylim(*self.ranges[1])

        for vertical in self._verticals:
            axes.axvline(
                vertical.x_value,
                color=vertical.color,
                linestyle=vertical.linestyle,
                alpha=0.7,
                linewidth=PlotEntry.DEFAULT_LINEWIDTH,
            )
        return axes