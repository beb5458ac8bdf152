"""
Quadric Coefficients
====================
The central value type of the application: the four real numbers of the
axis-aligned quadric A*x^2 + B*y^2 + C*z^2 + D = 0.

No invariant is enforced on construction. Zero, negative and positive values are
all valid; their meaning comes entirely from the sign pattern (see `families`).
"""
from __future__ import annotations

from dataclasses import dataclass, replace, astuple

COEFFICIENT_NAMES: tuple[str, ...] = ("a", "b", "c", "d")


@dataclass(frozen=True)
class Coefficients:
    """Immutable (A, B, C, D) tuple. Updates return a new instance."""
    a: float = 1.0
    b: float = 1.0
    c: float = 1.0
    d: float = -1.0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return astuple(self)

    def with_value(self, name: str, value: float) -> Coefficients:
        """Return a copy with one coefficient replaced."""
        key = name.lower()
        if key not in COEFFICIENT_NAMES:
            raise KeyError(f"Unknown coefficient '{name}'.")
        return replace(self, **{key: float(value)})


# Named starting points offered by the visualizer
PRESETS: dict[str, Coefficients] = {
    "sphere": Coefficients(1.0, 1.0, 1.0, -1.0),
    "ellipsoid": Coefficients(1.0, 2.0, 0.5, -1.0),
    "one-sheet": Coefficients(1.0, 1.0, -1.0, -1.0),
    "two-sheet": Coefficients(1.0, 1.0, -1.0, 1.0),
    "cone": Coefficients(1.0, 1.0, -1.0, 0.0),
    "cylinder": Coefficients(1.0, 1.0, 0.0, -1.0),
}
