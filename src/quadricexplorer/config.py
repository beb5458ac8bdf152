"""
Configuration & Constants
=========================
This module serves as the central registry for tolerances, grid presets and
global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (tolerances, delays, spans) from being
   scattered throughout the model, controllers and widgets.
2. Call-site presets: The visualizer and the quiz draw the same surfaces with a
   different grid resolution and parameter spans. Both presets live here.

Exports:
    CONE_TOLERANCE (float): |D| below this value classifies as a cone.
    EQUALITY_TOLERANCE (float): |A-B| and |B-C| below this value mean "equal".
    NEAR_ZERO (float): Divisors smaller than this are treated as zero.
    VISUALIZER_MESH, QUIZ_MESH, POINT_CLOUD (MeshConfig): Grid presets.
    DEBOUNCE_MS, RENDER_DELAY_MS (int): Timer intervals in milliseconds.
"""
from __future__ import annotations

from dataclasses import dataclass


# Classification tolerances
CONE_TOLERANCE: float = 0.1
EQUALITY_TOLERANCE: float = 0.1

# Anything smaller in magnitude is a zero divisor for the mesh generator
NEAR_ZERO: float = 1e-3


@dataclass(frozen=True)
class MeshConfig:
    """
    Grid resolution and parameter spans for one call site.

    The grid always has (resolution + 1) x (resolution + 1) points. Spans are the
    full width of the symmetric parameter sweep, e.g. a span of 4 sweeps t over [-2, 2].
    """
    resolution: int = 25
    implicit_range: float = 2.5
    one_sheet_span: float = 3.0
    two_sheet_span: float = 4.0
    cone_span: float = 4.0
    cylinder_span: float = 6.0


VISUALIZER_MESH = MeshConfig(
    resolution=25,
    implicit_range=2.5,
    one_sheet_span=3.0,
    two_sheet_span=4.0,
    cone_span=4.0,
    cylinder_span=6.0,
)

QUIZ_MESH = MeshConfig(
    resolution=20,
    implicit_range=2.0,
    one_sheet_span=2.5,
    two_sheet_span=3.0,
    cone_span=3.0,
    cylinder_span=4.0,
)

# The scattered point variant samples a slightly larger square
POINT_CLOUD = MeshConfig(
    resolution=25,
    implicit_range=3.0,
    one_sheet_span=3.0,
    two_sheet_span=4.0,
    cone_span=4.0,
    cylinder_span=6.0,
)

# Timers (ms)
DEBOUNCE_MS: int = 100
RENDER_DELAY_MS: int = 100

# Slider limits for the coefficient rows
SLIDER_MIN: float = -5.0
SLIDER_MAX: float = 5.0
SLIDER_STEP: float = 0.1

# QSettings identity + keys
ORG_ID = "quadric-explorer"
APP_ID = "quadric-explorer"
VISIBLE_APP_NAME = "Quadric Surface Explorer"
STREAK_SETTINGS_KEY = "quiz/current_streak"

# Environment variable read by main() to pick the log level
LOG_LEVEL_ENV = "QUADRIC_LOG_LEVEL"
