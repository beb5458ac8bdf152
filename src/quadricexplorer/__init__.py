"""Quadric Surface Explorer: interactive visualizer and quiz for Ax² + By² + Cz² + D = 0."""

__version__ = "0.1.0"
