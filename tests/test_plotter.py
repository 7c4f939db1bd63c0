import matplotlib
import pytest

from hadmolee.plot import Plot
from hadmolee.plotter import Plotter, jpac_style


def _filled_plot(plotter, label="curve"):
    plot = plotter.new_plot()
    plot.set_curve_points(10)
    plot.add_function((0.0, 1.0), lambda x: x * x, label)
    plot.set_labels("x", "y")
    return plot


def test_jpac_style_has_no_legend_border():
    style = jpac_style()
    assert style["legend.frameon"] is False


def test_jpac_style_is_valid_for_matplotlib():
    style = jpac_style()
    assert style["xtick.top"] is True
    assert style["ytick.right"] is True
    with matplotlib.rc_context(style):
        assert matplotlib.rcParams["xtick.top"] is style["xtick.top"]
        assert matplotlib.rcParams["ytick.right"] is style["ytick.right"]


def test_new_plot_default_filenames_are_numbered():
    plotter = Plotter()
    first = plotter.new_plot()
    second = plotter.new_plot()
    assert first.filename == "plot1.pdf"
    assert second.filename == "plot2.pdf"
    assert plotter.n_plots == 2


def test_new_plot_keeps_given_filename_and_counts():
    plotter = Plotter()
    named = plotter.new_plot("custom.pdf")
    unnamed = plotter.new_plot()
    assert named.filename == "custom.pdf"
    assert unnamed.filename == "plot2.pdf"


def test_new_plot_has_default_options():
    plot = Plotter().new_plot()
    assert isinstance(plot, Plot)
    assert plot.curve_points == 100
    assert plot.entries == ()


def test_combine_writes_pdf(tmp_path):
    plotter = Plotter()
    plots = [_filled_plot(plotter, "a"), _filled_plot(plotter, "b")]
    target = tmp_path / "combined.pdf"
    figure = plotter.combine((2, 1), plots, str(target))
    assert target.read_bytes().startswith(b"%PDF")
    assert tuple(figure.get_size_inches()) == (12.0, 3.0)
    assert len(figure.axes) == 2


def test_combine_leaves_plots_unchanged(tmp_path):
    plotter = Plotter()
    plots = [_filled_plot(plotter)]
    before = plots[0].linewidth_scale
    plotter.combine((2, 2), plots, str(tmp_path / "grid.pdf"))
    assert plots[0].linewidth_scale == before
    assert len(plots[0].entries) == 1


def test_combine_hides_unused_slots(tmp_path):
    plotter = Plotter()
    plots = [_filled_plot(plotter)]
    figure = plotter.combine((2, 2), plots, str(tmp_path / "grid.pdf"))
    visible = [axes for axes in figure.axes if axes.axison]
    assert len(figure.axes) == 4
    assert len(visible) == 1


def test_combine_too_many_plots_warns_and_writes_nothing(tmp_path):
    plotter = Plotter()
    plots = [_filled_plot(plotter) for _ in range(3)]
    target = tmp_path / "none.pdf"
    with pytest.warns(UserWarning):
        result = plotter.combine((1, 2), plots, str(target))
    assert result is None
    assert not target.exists()


def test_combine_rejects_bad_dimensions(tmp_path):
    plotter = Plotter()
    with pytest.raises(ValueError):
        plotter.combine((0, 2), [], str(tmp_path / "bad.pdf"))


def test_stack_writes_pdf_with_label_only_on_last(tmp_path):
    plotter = Plotter()
    plots = [_filled_plot(plotter, name) for name in ("a", "b", "c")]
    target = tmp_path / "stack.pdf"
    figure = plotter.stack(plots, str(target))
    assert target.read_bytes().startswith(b"%PDF")
    labels = [axes.get_xlabel() for axes in figure.axes]
    assert labels == ["", "", "x"]


def test_stack_leaves_plots_unchanged(tmp_path):
    plotter = Plotter()
    plots = [_filled_plot(plotter), _filled_plot(plotter)]
    spacing = plots[0].legend_spacing
    logo = plots[0].show_logo
    plotter.stack(plots, str(tmp_path / "stack.pdf"))
    assert plots[0].legend_spacing == spacing
    assert plots[0].show_logo == logo
    assert plots[1].xlabel == "x"
    assert plots[0].linewidth_scale == 1.0


def test_stack_empty_raises(tmp_path):
    with pytest.raises(ValueError):
        Plotter().stack([], str(tmp_path / "empty.pdf"))