"""Mirrored maze layouts: parse quarter-level CSV files and autotile their walls."""

__version__ = "0.1.0"
