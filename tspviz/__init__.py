"""Step-by-step travelling salesman solver with an interactive pygame viewer."""

__version__ = "0.1.0"
__all__ = ["city", "solver", "panel", "app"]