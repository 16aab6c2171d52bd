"""Equaliser maths, dynamics mappings and saved controller settings for Beacn audio devices."""

__version__ = "0.1.0"

__all__ = ["biquad", "ranges", "dynamics", "eq_geometry", "parametric_eq", "states"]