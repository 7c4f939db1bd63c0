"""Shared JPAC plot style and the factory that creates and arranges plots."""

from __future__ import annotations

import copy
import warnings
from collections.abc import Sequence
from typing import Any

import matplotlib
from matplotlib.figure import Figure

from .plot import Plot

_FIRST_LOGO_COORDS = (0.94, 0.85)
_FIRST_LOGO_SCALE = 1.4
_FIRST_LEGEND_SPACING = 0.05


def jpac_style() -> dict[str, Any]:
    """Matplotlib settings shared by every plot in the JPAC style."""
    return {
        "font.family": "serif",
        "font.serif": ["Times New Roman", "Times", "DejaVu Serif"],
        "mathtext.fontset": "stix",
        "figure.facecolor": "white",
        "axes.facecolor": "white",
        "savefig.facecolor": "white",
        "axes.linewidth": 2.0,
        "axes.titlesize": 14,
        "axes.labelsize": 12,
        "axes.titlelocation": "center",
        "xtick.labelsize": 10,
        "ytick.labelsize": 10,
        "xtick.direction": "in",
        "ytick.direction": "in",
        "xtick.top": True,
        "ytick.right": True,
        "legend.frameon": False,
        "legend.fontsize": 9,
    }


def _working_copy(plot: Plot, scale: float) -> Plot:
    """Shallow copy of a plot with its line widths scaled, leaving the original alone."""
    duplicate = copy.copy(plot)
    duplicate.scale_linewidth(scale)
    return duplicate


class Plotter:
    """Creates plots in the JPAC style and combines several into one file."""

    def __init__(self) -> None:
        self.style = jpac_style()
        self._n_plots = 0

    @property
    def n_plots(self) -> int:
        """Number of plots created so far."""
        return self._n_plots

    def new_plot(self, filename: str = "") -> Plot:
        """Create a new plot; without a filename it is named ``plot<N>.pdf``."""
        self._n_plots += 1
        if not filename:
            filename = f"plot{self._n_plots}.pdf"
        return Plot(filename)

    def combine(
        self, dims: Sequence[int], plots: Sequence[Plot], filename: str
    ) -> Figure | None:
        """Draw the plots on a grid of ``dims`` = (columns, rows) and save it.

        Returns the figure, or ``None`` with a warning if the plots do not fit.
        """
        xdim, ydim = dims[0], dims[1]
        if xdim < 1 or ydim < 1:
            raise ValueError(f"Grid dimensions must be positive, got {xdim} x {ydim}")
        if len(plots) > xdim * ydim:
            warnings.warn(
                "plotter.combine: Number of plots received is larger than slots "
                "in given dimensions!",
                stacklevel=2,
            )
            return None

        scale = 0.95 ** max(xdim, ydim)
        with matplotlib.rc_context(self.style):
            figure = Figure(figsize=(6.0 * xdim, 3.0 * ydim))
            grid = figure.add_gridspec(
                ydim,
                xdim,
                left=0.16 / xdim,
                right=1.0 - 0.03 / xdim,
                bottom=0.12 / ydim,
                top=1.0 - 0.05 / ydim,
            )
            for slot in range(xdim * ydim):
                axes = figure.add_subplot(grid[slot // xdim, slot % xdim])
                if slot < len(plots):
                    _working_copy(plots[slot], scale).draw(axes)
                else:
                    axes.set_axis_off()
            figure.savefig(filename)
        return figure

    def stack(self, plots: Sequence[Plot], filename: str) -> Figure:
        """Draw the plots on top of each other sharing the x axis and save them."""
        if not plots:
            raise ValueError("No plots given to stack")

        ydim = len(plots)
        scale = 0.9**ydim
        with matplotlib.rc_context(self.style):
            figure = Figure(figsize=(6.0, 4.6 * ydim))
            grid = figure.add_gridspec(
                ydim,
                1,
                hspace=0.0,
                left=0.16,
                right=0.98,
                top=1.0 - 0.05 / ydim,
                bottom=0.15 / ydim,
            )
            for index, plot in enumerate(plots):
                working = _working_copy(plot, scale)
                working.add_logo(False)
                is_first = index == 0
                is_last = index == ydim - 1 and not is_first
                if is_first:
                    working.add_logo(True, _FIRST_LOGO_COORDS, _FIRST_LOGO_SCALE)
                    working.set_legend_spacing(_FIRST_LEGEND_SPACING)
                if not is_last:
                    working.xlabel = ""
                axes = figure.add_subplot(grid[index, 0])
                working.draw(axes)
                if not is_last and ydim > 1:
                    axes.tick_params(labelbottom=False)
            figure.savefig(filename)
        return figure