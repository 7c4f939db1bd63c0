"""Plotting, data handling and chi-squared fitting for hadronic molecule line-shape analyses."""

__version__ = "0.1.0"

__all__ = [
    "colors",
    "elementwise",
    "data_set",
    "plot",
    "plotter",
    "fit_data",
    "fitter",
]