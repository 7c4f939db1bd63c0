"""Containers for fit parameters and sub-channel data sets used by the fitter."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

DEFAULT_STEP = 0.1


class Subchannel(Enum):
    """Two-particle subsystem of a three-body final state a, b, c."""

    AB = "ab"
    BC = "bc"
    AC = "ac"

    def label(self) -> str:
        """Default text label of the subchannel."""
        return self.value


@dataclass
class FitParameter:
    """Everything the minimiser needs to know about one model parameter."""

    index: int
    label: str = ""
    fixed: bool = False
    custom_limits: bool = False
    lower_limit: float | None = None
    upper_limit: float | None = None
    step_size: float = DEFAULT_STEP

    def __post_init__(self) -> None:
        if not self.label:
            self.label = f"par[{self.index}]"

    def set_limits(self, lower: float, upper: float, step: float = DEFAULT_STEP) -> None:
        """Restrict the parameter to [lower, upper] with the given initial step."""
        if lower > upper:
            raise ValueError(
                f"Lower limit {lower} of {self.label} is above upper limit {upper}"
            )
        self.custom_limits = True
        self.lower_limit = lower
        self.upper_limit = upper
        self.step_size = step

    @property
    def limits(self) -> tuple[float, float] | None:
        """The (lower, upper) limits, or ``None`` if none were set."""
        if not self.custom_limits:
            return None
        return (self.lower_limit, self.upper_limit)


@dataclass
class SubchannelData:
    """A mass-projection data set at fixed e+e- energy in one subchannel."""

    index: int
    id: str
    subchannel: Subchannel
    sqrts: float
    sqrt_sigmas: list[float]
    data: list[float]
    errors: tuple[list[float], list[float]]
    # Free normalisation fitted together with the model parameters
    normalization: float = 1.0
    _n: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        n = len(self.sqrt_sigmas)
        if len(self.data) != n or any(len(e) != n for e in self.errors):
            raise ValueError(
                f"Vectors received not the correct size for data set {self.id}!"
            )
        self._n = n

    @classmethod
    def from_arrays(
        cls,
        index: int,
        abc: Subchannel,
        sqrts: float,
        sqrt_sigmas: Sequence[float],
        data: Sequence[float],
        errors: Sequence[Sequence[float]],
        id: str = "",
    ) -> SubchannelData:
        """Build a data set from plain sequences.

        ``errors`` holds the lower and upper errors. Without an ``id`` the set
        is named ``<subchannel>_data[<index>]``.
        """
        if len(errors) != 2:
            raise ValueError("Errors must be given as a (lower, upper) pair")
        if not id:
            id = f"{abc.label()}_data[{index}]"
        return cls(
            index=index,
            id=id,
            subchannel=abc,
            sqrts=float(sqrts),
            sqrt_sigmas=[float(v) for v in sqrt_sigmas],
            data=[float(v) for v in data],
            errors=([float(v) for v in errors[0]], [float(v) for v in errors[1]]),
        )

    @property
    def n(self) -> int:
        """Number of data points."""
        return self._n

    @property
    def total_errors(self) -> list[float]:
        """Sum of lower and upper error at each point."""
        low, high = self.errors
        return [a + b for a, b in zip(low, high)]