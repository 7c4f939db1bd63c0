"""Loading of tabulated data files and the data-set container used for plots."""

from __future__ import annotations

import os
import warnings
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class DataImportError(Exception):
    """Raised when a data file or the data directory cannot be found."""


def hadmolee_dir() -> str:
    """Top-level data directory, taken from the ``HADMOLEE`` environment variable."""
    env = os.environ.get("HADMOLEE", "")
    if not env:
        raise DataImportError("Cannot find environment variable HADMOLEE!")
    return env


def _resolve(rel_path: str, base_dir: str | os.PathLike | None) -> Path:
    base = Path(hadmolee_dir() if base_dir is None else base_dir)
    return base / rel_path.lstrip("/")


def _read_lines(path: Path) -> list[str]:
    try:
        with path.open() as handle:
            return handle.read().splitlines()
    except OSError as exc:
        raise DataImportError(f"Cannot open file {path}!") from exc


def _parse_floats(line: str):
    """Yield leading numeric tokens of a line, stopping at the first bad one."""
    for token in line.split():
        try:
            yield float(token)
        except ValueError:
            return


def import_data(
    rel_path: str, columns: int, base_dir: str | os.PathLike | None = None
) -> list[list[float]]:
    """Read a whitespace-separated file into ``columns`` column lists.

    Empty lines and lines starting with ``#`` are skipped. Values missing
    from a row are read as zero.
    """
    result: list[list[float]] = [[] for _ in range(columns)]
    for line in _read_lines(_resolve(rel_path, base_dir)):
        if not line.strip() or line.startswith("#"):
            continue
        values = list(_parse_floats(line))[:columns]
        values += [0.0] * (columns - len(values))
        for column, value in zip(result, values):
            column.append(value)
    return result


def import_transposed(
    rel_path: str, rows: int, base_dir: str | os.PathLike | None = None
) -> list[list[float]]:
    """Read the first ``rows`` lines of a file, each line becoming one list.

    An empty or comment line still takes up its row, which is left empty.
    """
    lines = _read_lines(_resolve(rel_path, base_dir))
    result: list[list[float]] = []
    for i in range(rows):
        line = lines[i] if i < len(lines) else ""
        if not line.strip() or line.startswith("#"):
            result.append([])
        else:
            result.append(list(_parse_floats(line)))
    return result


def reshape_data(data: Sequence[Sequence[float]], to_keep: Sequence[int]) -> list[list[float]]:
    """Keep only the columns named by ``to_keep``, in that order."""
    return [list(data[i]) for i in to_keep]


def check(data: Sequence[Sequence[float]], id: str) -> int:
    """Return the common column length, or 0 with a warning if they differ."""
    if not data:
        return 0
    size = len(data[0])
    if any(len(column) != size for column in data):
        warnings.warn(f"Input vectors of {id} have mismatching sizes!", stacklevel=2)
        return 0
    return size


class DataType(Enum):
    """Whether a data set is integrated or differential."""

    INTEGRATED = "integrated"
    DIFFERENTIAL = "differential"


def _empty_pair() -> tuple[list[float], list[float]]:
    return ([], [])


@dataclass
class DataSet:
    """Measured points with their errors, ready to be drawn."""

    n: int = 0
    id: str = "data_set"
    type: DataType = DataType.INTEGRATED
    w: list[float] = field(default_factory=list)
    t: list[float] = field(default_factory=list)
    obs: list[float] = field(default_factory=list)
    obserr: list[float] = field(default_factory=list)
    werr: tuple[list[float], list[float]] = field(default_factory=_empty_pair)
    terr: tuple[list[float], list[float]] = field(default_factory=_empty_pair)
    # True if w holds lab-frame photon energy rather than W = sqrt(s)
    lab: bool = False
    # True if t holds t' = t - t_min
    tprime: bool = False
    # True if t holds -t
    negt: bool = False
    avg_w: float = 0.0
    add_to_legend: bool = False