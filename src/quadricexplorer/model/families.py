"""
Surface Families & Classifier
=============================
Maps a coefficient tuple onto one of the six named quadric families (or
`unknown`) and holds the static display table for every family.

The rules are evaluated in a fixed precedence order; each rule short-circuits:

1. |D| < 0.1                           -> cone (checked before any sign)
2. C == 0 (exact)                      -> cylinder
3. A, B, C > 0 and D < 0               -> sphere if A ~ B ~ C else ellipsoid
   A, B, C > 0 and D > 0               -> two-sheet
4. mixed signs; an equation with D > 0 is first multiplied by -1, then
   two positive + one negative, D < 0 -> one-sheet
   one positive + two negative, D < 0 -> two-sheet
5. anything else                       -> unknown
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from quadricexplorer.config import CONE_TOLERANCE, EQUALITY_TOLERANCE
from quadricexplorer.model.coefficients import Coefficients


class SurfaceFamily(StrEnum):
    SPHERE = "sphere"
    ELLIPSOID = "ellipsoid"
    ONE_SHEET = "one-sheet"
    TWO_SHEET = "two-sheet"
    CONE = "cone"
    CYLINDER = "cylinder"
    UNKNOWN = "unknown"


# Answerable families, in the order the quiz shows its buttons
QUIZ_FAMILIES: tuple[SurfaceFamily, ...] = (
    SurfaceFamily.SPHERE,
    SurfaceFamily.ELLIPSOID,
    SurfaceFamily.ONE_SHEET,
    SurfaceFamily.TWO_SHEET,
    SurfaceFamily.CONE,
    SurfaceFamily.CYLINDER,
)


@dataclass(frozen=True)
class SurfaceInfo:
    name: str
    description: str


SURFACE_INFO: dict[SurfaceFamily, SurfaceInfo] = {
    SurfaceFamily.SPHERE: SurfaceInfo(
        "Sphere", "All coefficients are positive and equal, D is negative"),
    SurfaceFamily.ELLIPSOID: SurfaceInfo(
        "Ellipsoid", "All coefficients are positive but different, D is negative"),
    SurfaceFamily.ONE_SHEET: SurfaceInfo(
        "One-Sheet Hyperboloid", "Two coefficients positive, one negative, D is negative"),
    SurfaceFamily.TWO_SHEET: SurfaceInfo(
        "Two-Sheet Hyperboloid",
        "All coefficients positive, D is positive OR two negative, one positive"),
    SurfaceFamily.CONE: SurfaceInfo(
        "Elliptic Cone", "Two coefficients positive, one negative, D is zero"),
    SurfaceFamily.CYLINDER: SurfaceInfo(
        "Elliptic Cylinder", "One coefficient is zero, others are positive, D is negative"),
    SurfaceFamily.UNKNOWN: SurfaceInfo(
        "Quadric Surface", "General quadric form"),
}


def sign_counts(coefficients: Coefficients) -> tuple[int, int]:
    """Number of strictly positive and strictly negative values among A, B, C."""
    quadratic = coefficients.as_tuple()[:3]
    positive = sum(1 for v in quadratic if v > 0)
    negative = sum(1 for v in quadratic if v < 0)
    return positive, negative


def canonical_sign(coefficients: Coefficients) -> Coefficients:
    """
    Multiply the equation by -1 when D > 0 and the quadratic signs are mixed.

    Both forms describe the same point set; the mixed-sign rules are written for D < 0.
    """
    positive, negative = sign_counts(coefficients)
    if coefficients.d > 0 and positive and negative:
        a, b, c, d = coefficients.as_tuple()
        return Coefficients(-a, -b, -c, -d)
    return coefficients


def classify(coefficients: Coefficients) -> SurfaceFamily:
    """Classify the quadric. Pure and total: falls back to `SurfaceFamily.UNKNOWN`."""
    a, b, c, d = coefficients.as_tuple()

    if abs(d) < CONE_TOLERANCE:
        return SurfaceFamily.CONE

    if c == 0:
        return SurfaceFamily.CYLINDER

    if a > 0 and b > 0 and c > 0:
        if d < 0:
            if abs(a - b) < EQUALITY_TOLERANCE and abs(b - c) < EQUALITY_TOLERANCE:
                return SurfaceFamily.SPHERE
            return SurfaceFamily.ELLIPSOID
        if d > 0:
            return SurfaceFamily.TWO_SHEET

    canonical = canonical_sign(coefficients)
    positive, negative = sign_counts(canonical)

    if positive == 2 and negative == 1 and canonical.d < 0:
        return SurfaceFamily.ONE_SHEET

    if positive == 1 and negative == 2 and canonical.d < 0:
        return SurfaceFamily.TWO_SHEET

    return SurfaceFamily.UNKNOWN


def _sign_symbol(value: float) -> str:
    return "+" if value > 0 else "-"


def describe(coefficients: Coefficients) -> str:
    """Sign-pattern readout for the visualizer info panel."""
    family = classify(coefficients)
    a, b, c, d = coefficients.as_tuple()
    pattern = f"{_sign_symbol(a)} {_sign_symbol(b)} {_sign_symbol(c)}"
    d_sign = _sign_symbol(d)

    match family:
        case SurfaceFamily.SPHERE:
            return f"All coefficients positive and equal ({pattern}), D negative ({d_sign}): creates perfect symmetry"
        case SurfaceFamily.ELLIPSOID:
            return f"All coefficients positive ({pattern}), D negative ({d_sign}): closed surface with different radii"
        case SurfaceFamily.ONE_SHEET:
            return f"Two positive, one negative ({pattern}), D negative ({d_sign}): opens like a saddle"
        case SurfaceFamily.TWO_SHEET:
            return f"Pattern {pattern}, D {d_sign}: creates two separate sheets"
        case SurfaceFamily.CONE:
            return f"Two positive, one negative ({pattern}), D = 0: vertex at origin"
        case SurfaceFamily.CYLINDER:
            return "One coefficient zero, others positive, D negative: extends infinitely along missing axis"
        case _:
            return f"Pattern {pattern}, D {d_sign}: general quadric form"
