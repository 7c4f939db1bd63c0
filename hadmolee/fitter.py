"""Chi-squared fits of a decay amplitude and its production lineshape to data."""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Protocol

import numpy as np
from scipy.optimize import minimize

from .data_set import import_data
from .fit_data import DEFAULT_STEP, FitParameter, Subchannel, SubchannelData

# Minimiser strategies and the scipy method each one is carried out with
_STRATEGIES = {
    "Combined": "L-BFGS-B",
    "Migrad": "L-BFGS-B",
    "Simplex": "Nelder-Mead",
}


class Lineshape(Protocol):
    """What the fitter needs from the production lineshape."""

    id: str
    n_parameters: int

    def set_parameters(self, pars: Sequence[float]) -> None: ...


class Kinematics(Protocol):
    """What the fitter needs from the final-state kinematics."""

    id: str

    def subchannel_label(self, abc: Subchannel) -> str: ...


class Amplitude(Protocol):
    """What the fitter needs from the decay amplitude being fit."""

    id: str
    n_parameters: int
    lineshape: Lineshape
    kinematics: Kinematics

    def set_parameters(self, pars: Sequence[float]) -> None: ...

    def normalize(self, norm: float) -> None: ...

    def differential_xsection(self, abc: Subchannel, s: float, sigma: float) -> float: ...


class Fitter:
    """Fits an amplitude and its lineshape to sub-channel mass-projection data.

    The fit variables are the lineshape parameters, then the amplitude
    parameters, then one free normalisation per data set.
    """

    def __init__(
        self, amplitude: Amplitude, strategy: str = "Combined", tolerance: float = 1e-6
    ) -> None:
        if strategy not in _STRATEGIES:
            raise ValueError(
                f"Unknown strategy {strategy!r}; choose one of {sorted(_STRATEGIES)}"
            )
        self.amplitude = amplitude
        self.lineshape = amplitude.lineshape
        self.strategy = strategy
        self.tolerance = tolerance
        self.print_level = 0
        self.max_calls = 1_000_000

        self._n_v = self.lineshape.n_parameters
        self._n_amp = amplitude.n_parameters
        self._pars = [FitParameter(i) for i in range(self._n_v + self._n_amp)]
        self._data: list[SubchannelData] = []
        self._n_data = 0

        self._best_fit: list[float] = []
        self._normalizations: list[float] = []
        self.min_chi2: float | None = None
        self.dof: int | None = None

    # ------------------------------------------------------------------
    # Inspection

    @property
    def parameters(self) -> tuple[FitParameter, ...]:
        """All model parameters, lineshape ones first."""
        return tuple(self._pars)

    @property
    def data_sets(self) -> tuple[SubchannelData, ...]:
        """All data sets added so far."""
        return tuple(self._data)

    @property
    def n_data(self) -> int:
        """Total number of data points."""
        return self._n_data

    # ------------------------------------------------------------------
    # Data management

    def add_subchannel_data(
        self,
        abc: Subchannel,
        sqrts: float,
        sqrt_sigmas: Sequence[float],
        data: Sequence[float],
        errors: Sequence[Sequence[float]],
        id: str = "",
    ) -> SubchannelData:
        """Add data points at fixed sqrt(s) as a function of sqrt(sigma) in ``abc``."""
        data_set = SubchannelData.from_arrays(
            len(self._data), abc, sqrts, sqrt_sigmas, data, errors, id
        )
        self._data.append(data_set)
        self._n_data += data_set.n
        return data_set

    def add_subchannel_file(
        self,
        abc: Subchannel,
        sqrts: float,
        filename: str,
        id: str = "",
        base_dir: str | None = None,
    ) -> SubchannelData:
        """Add data from a four-column file: sqrt(sigma), value, lower and upper error."""
        sqrt_sigmas, data, low, high = import_data(filename, 4, base_dir)
        return self.add_subchannel_data(abc, sqrts, sqrt_sigmas, data, (low, high), id)

    # ------------------------------------------------------------------
    # Parameter management

    def set_parameter_labels(self, labels: Sequence[str]) -> None:
        """Name every model parameter."""
        if len(labels) != len(self._pars):
            raise ValueError(
                f"Expected {len(self._pars)} parameter labels but received {len(labels)}!"
            )
        for parameter, label in zip(self._pars, labels):
            parameter.label = label

    def find_parameter(self, name: str) -> int:
        """Index of the parameter with the given label."""
        for parameter in self._pars:
            if parameter.label == name:
                return parameter.index
        raise KeyError(f"Parameter named {name} not found!")

    def _parameter(self, parameter: int | str) -> FitParameter:
        index = self.find_parameter(parameter) if isinstance(parameter, str) else parameter
        return self._pars[index]

    def set_parameter_limits(
        self, parameter: int | str, ranges: Sequence[float], step: float = DEFAULT_STEP
    ) -> None:
        """Restrict a parameter, given by index or label, to ``ranges``."""
        self._parameter(parameter).set_limits(ranges[0], ranges[1], step)

    def fix_parameter(self, parameter: int | str) -> None:
        """Keep a parameter at its starting value during the fit."""
        self._parameter(parameter).fixed = True

    def free_parameter(self, parameter: int | str) -> None:
        """Let a previously fixed parameter float again."""
        self._parameter(parameter).fixed = False

    def set_print_level(self, n: int) -> None:
        """Verbosity of the minimiser; 0 keeps it quiet."""
        self.print_level = n

    def set_max_calls(self, n: int) -> None:
        """Maximum number of chi-squared evaluations."""
        self.max_calls = n

    # ------------------------------------------------------------------
    # Chi-squared

    def _allocate(self, pars: Sequence[float], best_fit: bool = False) -> None:
        n_model = self._n_v + self._n_amp
        values = [float(v) for v in pars]
        norms = values[n_model:]

        self.lineshape.set_parameters(values[: self._n_v])
        self.amplitude.set_parameters(values[self._n_v : n_model])
        for data_set, norm in zip(self._data, norms):
            data_set.normalization = norm

        if best_fit:
            self._best_fit = values[:n_model]
            self._normalizations = norms
            self.amplitude.normalize(1.0)

    def chi2(self, pars: Sequence[float]) -> float:
        """Chi-squared of all data for model parameters followed by normalisations."""
        expected = len(self._pars) + len(self._data)
        if len(pars) != expected:
            raise ValueError(f"Expected {expected} values but received {len(pars)}")
        self._allocate(pars)

        total = 0.0
        for data_set in self._data:
            s = data_set.sqrts**2
            self.amplitude.normalize(data_set.normalization)
            for sqrt_sigma, measured, error in zip(
                data_set.sqrt_sigmas, data_set.data, data_set.total_errors
            ):
                theory = self.amplitude.differential_xsection(
                    data_set.subchannel, s, sqrt_sigma**2
                )
                total += ((theory - measured) / error) ** 2
        return total

    # ------------------------------------------------------------------
    # Fitting

    def do_fit(self, starting_guess: Sequence[float]) -> float:
        """Minimise chi-squared from ``starting_guess`` and return its minimum.

        The best-fit values are handed to the lineshape and amplitude.
        """
        guess = [float(v) for v in starting_guess]
        if not self._data:
            raise RuntimeError("No data points saved, nothing to fit!")
        if len(guess) != len(self._pars):
            raise ValueError(
                f"Initial guess has {len(guess)} values but there are "
                f"{len(self._pars)} parameters!"
            )

        print()
        print(self.data_info())
        print()
        print(self.variable_info(guess, fitted=False))
        print()

        n_norms = len(self._data)
        free = [p for p in self._pars if not p.fixed]
        template = guess + [1.0] * n_norms

        def expand(x: Sequence[float]) -> list[float]:
            full = list(template)
            for parameter, value in zip(free, x):
                full[parameter.index] = float(value)
            full[len(self._pars) :] = [float(v) for v in x[len(free) :]]
            return full

        x0 = np.array([guess[p.index] for p in free] + [1.0] * n_norms)
        limits = [p.limits or (None, None) for p in free] + [(None, None)] * n_norms
        has_bounds = any(p.custom_limits for p in free)

        method = _STRATEGIES[self.strategy]
        if method == "Nelder-Mead":
            options = {"maxfev": self.max_calls, "disp": self.print_level > 0}
        else:
            options = {"maxfun": self.max_calls}

        print("Beginning fit...", end="", flush=True)
        start = time.perf_counter()
        result = minimize(
            lambda x: self.chi2(expand(x)),
            x0,
            method=method,
            bounds=limits if has_bounds else None,
            tol=self.tolerance,
            options=options,
        )
        elapsed = time.perf_counter() - start
        print("Done!")
        print(f"Finished in {int(elapsed)} sec")

        best = expand(result.x)
        self.min_chi2 = float(result.fun)
        self.dof = self._n_data - (len(free) + n_norms)
        self._allocate(best, best_fit=True)
        self._print_results(best)
        return self.min_chi2

    def best_fit(self) -> list[float]:
        """Best-fit model parameters from the last fit."""
        return list(self._best_fit)

    def normalizations(self) -> list[float]:
        """Best-fit data-set normalisations from the last fit."""
        return list(self._normalizations)

    # ------------------------------------------------------------------
    # Reports

    def _channel_label(self, abc: Subchannel) -> str:
        return self.amplitude.kinematics.subchannel_label(abc)

    def data_info(self) -> str:
        """Summary of the model and of the saved data sets."""
        lines = [
            f"{'Using e+e- lineshape model:':<28}{self.lineshape.id}  "
            f"({self.lineshape.n_parameters} free parameters)",
            "",
            f"Using decays to 1 final-state with total of {self._n_data} data points:",
            "",
            f"FINAL-STATE: {self.amplitude.kinematics.id}",
            "",
            f"{'AMPLITUDE: ':<13}{self.amplitude.id}  "
            f"({self.amplitude.n_parameters} free parameters)",
            "",
            f"{'DATA SET':<23}{'SQRT(s)':<11}{'CHANNEL':<13}{'POINTS':<10}",
            f"{'-------------------':<23}{'--------':<11}{'----------':<13}{'-------':<10}",
        ]
        for data_set in self._data:
            lines.append(
                f"{data_set.id:<23}{data_set.sqrts:<11g}"
                f"{self._channel_label(data_set.subchannel):<13}{data_set.n:<10}"
            )
        return "\n".join(lines)

    def variable_info(self, values: Sequence[float], fitted: bool = True) -> str:
        """Table of parameters with ``values``, as starting or fitted values."""
        column_3 = "FIT VALUE" if fitted else "START VALUE"
        lines = []
        if not fitted:
            n_free = sum(not p.fixed for p in self._pars)
            lines += [
                f"Fitting {n_free} (out of {len(self._pars)}) model parameters "
                f"and {len(self._data)} normalizations:",
                "",
            ]
        lines += [
            f"{'N':<7}{'PARAMETER':<20}{column_3:<10}",
            f"{'----':<7}{'----------':<20}{'------------':<10}",
        ]
        for parameter, value in zip(self._pars, values):
            extra = ""
            if not fitted and parameter.custom_limits:
                extra = f"[{parameter.lower_limit:.5g}, {parameter.upper_limit:.5g}]"
            if not fitted and parameter.fixed:
                extra = "FIXED"
            lines.append(
                f"{parameter.index:<7}{parameter.label:<20}{value:<20.10g}{extra:<10}"
            )

        if fitted:
            lines += [
                "",
                f"{'DATA SET':<23}{'SQRT(s)':<11}{'CHANNEL':<13}{'NORMALIZATION':<15}",
                f"{'-------------------':<23}{'--------':<11}{'----------':<13}"
                f"{'--------------':<15}",
            ]
            for data_set in self._data:
                lines.append(
                    f"{data_set.id:<23}{data_set.sqrts:<11g}"
                    f"{self._channel_label(data_set.subchannel):<13}"
                    f"{data_set.normalization:<15.10g}"
                )
        return "\n".join(lines)

    def _print_results(self, best: Sequence[float]) -> None:
        chi2 = self.min_chi2 if self.min_chi2 is not None else float("nan")
        dof = self.dof or 0
        chi2dof = chi2 / dof if dof > 0 else float("inf")
        print()
        print(f"{'chi2 = ':<10}{chi2:<15.10g}{'chi2/dof = ':<10}{chi2dof:<15.10g}")
        print()
        print(self.variable_info(best, fitted=True))
        print()