"""Toolbox website: a directory of calculators, converters and text utilities."""

__version__ = "0.1.0"
