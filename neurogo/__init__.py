"""A small feedforward neural network, its training loop and an interactive Iris menu."""

__version__ = "0.1.0"
__all__ = ["__version__"]