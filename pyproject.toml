[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neurogo"
version = "0.1.0"
description = "A small feedforward neural network with an interactive menu for training on the Iris dataset"
requires-python = ">=3.10"
dependencies = []
keywords = ["neural network", "machine learning", "iris", "backpropagation", "classification"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
neurogo = "neurogo.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["neurogo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
