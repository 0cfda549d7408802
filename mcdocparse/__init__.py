"""Parser that turns MCDOC tokens into a syntax tree of imports and declarations."""

__version__ = "0.1.0"

__all__ = ["__version__"]