[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hadmolee"
version = "0.1.0"
description = "Plotting, data handling and chi-squared fitting tools for hadronic molecule line-shape analyses in e+e- annihilation"
requires-python = ">=3.10"
keywords = [
    "physics",
    "hadron",
    "hadronic molecules",
    "line shape",
    "dalitz",
    "fitting",
    "plotting",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "numpy",
    "scipy",
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hadmolee"]

[tool.hatch.build.targets.sdist]
include = [
    "hadmolee",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
