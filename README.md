# hadmolee

Analysis tools for studies of hadronic molecules produced in e+e- annihilation. The
package covers three areas:

- **Plotting** in one consistent publication style, built on matplotlib. The modules
  are `hadmolee.colors`, `hadmolee.plot` and `hadmolee.plotter`.
- **Data handling**. `hadmolee.data_set` reads whitespace-separated data files and
  holds data sets for plotting. `hadmolee.elementwise` does element-wise arithmetic on
  lists of floats.
- **Fitting**. `hadmolee.fit_data` holds the fit containers and `hadmolee.fitter`
  provides `Fitter`. The fitter minimises the chi-squared of a model against
  mass-projection data in the sub-channels of a three-body final state. It uses
  `scipy.optimize.minimize`.

## Installation

The package needs Python 3.10 or newer and depends on numpy, scipy and matplotlib. The
`test` extra adds pytest.

## Colours

Plots use a palette of eleven colours, defined by `JpacColor`, an `IntEnum`:

```python
from hadmolee.colors import JpacColor, JPAC_COLORS, cycle_color

JpacColor.BLUE.rgb()   # (0.1215..., 0.4666..., 0.7058...)
JpacColor.RED.hex()    # "#d62728"
cycle_color(0)         # JpacColor.BLUE; the index wraps around the palette
```

## Reading data

```python
from hadmolee.data_set import import_data, import_transposed, reshape_data, check

columns = import_data("data/example.dat", 4, base_dir="/path/to/project")
sqrt_sigma, values = reshape_data(columns, [0, 1])
n_points = check([sqrt_sigma, values], "example")
```

- `import_data(rel_path, columns, base_dir=None)` returns one list per column.
  - It skips empty lines and lines that start with `#`.
  - Values missing from a row are read as `0.0`.
  - A leading `/` in `rel_path` is ignored.
  - Without `base_dir`, the path is taken relative to the directory named by the
    `HADMOLEE` environment variable, as returned by `hadmolee_dir()`.
  - An unset variable or a file that cannot be opened raises `DataImportError`.
- `import_transposed(rel_path, rows, base_dir=None)` reads the first `rows` lines and
  turns each line into one list. An empty or comment line leaves its row empty.
- `reshape_data(data, to_keep)` keeps the listed columns, in the order given.
- `check(data, id)` returns the common column length. If the lengths differ, it issues
  a warning and returns `0`.

`DataSet` is a dataclass that holds measured points for plotting:

- `type` is `DataType.INTEGRATED` or `DataType.DIFFERENTIAL`.
- `w`, `t`, `obs` and `obserr` hold the values.
- `werr` and `terr` hold the lower and upper x errors.
- `n` is the number of points, and `id` is the legend label.
- `add_to_legend` controls whether the set appears in the legend.

## Element-wise helpers

```python
from hadmolee.elementwise import add, subtract, scale, divide, negate, shift

add([1.0, 2.0], [3.0, 4.0])   # [4.0, 6.0]
subtract([3.0], [1.0])        # [2.0]
scale([1.0, 2.0], 2.0)        # [2.0, 4.0]
divide([2.0, 4.0], 2.0)       # [1.0, 2.0]
negate([1.0, -2.0])           # [-1.0, 2.0]
shift([1.0, 2.0], 0.5)        # [1.5, 2.5]
```

`add` and `subtract` raise `ValueError` on lists of different lengths.

## Plotting

```python
import math
from hadmolee.plotter import Plotter

plotter = Plotter()
p = plotter.new_plot("curve.pdf")       # without a name: plot<N>.pdf
p.set_curve_points(100)
p.set_labels("E [GeV]", "f(E)")
p.add_function((4.0, 4.4), math.sin, "sine")
p.add_dashed_function((4.0, 4.4), math.cos)
p.add_vertical(4.2)
p.set_ranges((4.0, 4.4), (-1.0, 1.0))
p.set_legend(0.7, 0.7)
p.save()
```

Adding entries to a `Plot`:

- `add_curve(x, fx, style="")` and `add_function(bounds, function, style="")` draw a
  curve.
  - `style` is either an `EntryStyle` or a legend label.
  - With a label, the curve gets the next palette colour. An empty label keeps the
    curve out of the legend.
  - `add_function` samples the function at `set_curve_points(n)` evenly spaced points.
    The default is 100, and `n` must be at least 2.
- `add_dashed(x, fx)` and `add_dashed_function(bounds, function)` draw a dashed curve.
  It has the colour of the last full curve and does not appear in the legend.
- `add_band(x, (lower, upper), fill=1001)` shades a band. The band is placed beneath
  all other entries.
- `add_data(data_set, different_id=None)` draws the points of a `DataSet` with error
  bars.
- `add_vertical(x, color="black", linestyle="--")` draws a vertical line.
- `color_offset(n)` skips `n` palette colours.

Plot options:

- `set_logscale`, `set_labels` and `set_ranges` control the axes.
- `set_legend(x, y)` places the legend, and `show_legend(flag)` turns it on or off.
- `add_header(text, value=None, units="")` sets the legend title.
- `set_legend_spacing` sets the height given to each legend line.
- `add_logo` and `reset_logo` control the logo.
- `preliminary(flag)` adds a PRELIMINARY watermark.
- `scale_linewidth` and `reset_linewidth` change the line widths.

Output:

- `save(filename=None)` writes the file. It issues a warning and writes nothing if the
  plot has no entries. It raises `ValueError` if no filename is known.
- `draw(axes)` draws onto any matplotlib `Axes` you provide.

Several plots can go into one file:

- `Plotter.combine(dims, plots, filename)` draws plots on a grid of
  `(columns, rows)`.
  - Line widths are scaled by `0.95 ** max(dims)`.
  - It returns the matplotlib `Figure`.
  - If there are more plots than slots, it issues a warning and returns `None`.
- `Plotter.stack(plots, filename)` draws the plots one above another with a shared
  x axis.
  - Only the bottom plot keeps its x label.
  - Only the top plot shows the logo.
  - It raises `ValueError` if `plots` is empty.

Neither method changes the `Plot` objects passed to it. `jpac_style()` returns the
matplotlib rc settings that both methods apply.

## Fitting

The package contains no physics models. You supply the model as an amplitude object
with these members:

- `id` and `n_parameters`
- `set_parameters(pars)`
- `normalize(norm)`
- `differential_xsection(abc, s, sigma)`
- `lineshape`: an object with `id`, `n_parameters` and `set_parameters(pars)`
- `kinematics`: an object with `id` and `subchannel_label(abc)`

```python
from hadmolee.fit_data import Subchannel
from hadmolee.fitter import Fitter

fitter = Fitter(amplitude, strategy="Combined", tolerance=1e-6)
fitter.add_subchannel_data(Subchannel.AB, 4.23, sqrt_sigmas, values, (low_err, high_err))
fitter.add_subchannel_file(Subchannel.BC, 4.23, "data/bc.dat", base_dir="/path/to/project")

fitter.set_parameter_labels(["mass", "width", "coupling"])
fitter.set_parameter_limits("width", (0.0, 0.1))
fitter.fix_parameter("mass")
chi2 = fitter.do_fit([4.23, 0.04, 1.0])

fitter.best_fit()         # fitted model parameters
fitter.normalizations()   # fitted normalization of each data set
```

Fit variables:

- The fit variables are the lineshape parameters, then the amplitude parameters, then
  one free normalization per data set. Each normalization starts at 1.
- Each data point contributes `((theory - value) / (low_err + high_err)) ** 2`.
- Parameters can be referred to by index or by label. `find_parameter` raises
  `KeyError` for an unknown label.

Strategies:

- `"Combined"` and `"Migrad"` use L-BFGS-B.
- `"Simplex"` uses Nelder-Mead.
- `set_max_calls(n)` limits the number of evaluations.

Errors from `do_fit`:

- It raises `RuntimeError` when no data has been added.
- It raises `ValueError` when the starting guess has the wrong length.

After the fit, `do_fit` passes the best-fit values to the lineshape and the amplitude.
It then prints a summary.

Reports:

- `data_info()` returns a table of the data in use as a string.
- `variable_info(values, fitted=True)` returns a table of the parameters as a string.
- `chi2(pars)` evaluates the chi-squared for the full vector of fit variables.

## What the package does not do

- It has no amplitude, lineshape or kinematics models. You provide them yourself, with
  the members listed above.
- It installs no command-line program. It is used as a library.