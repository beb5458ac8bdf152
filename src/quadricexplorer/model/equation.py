"""Human-readable rendering of A*x^2 + B*y^2 + C*z^2 + D = 0."""
from __future__ import annotations

from quadricexplorer.model.coefficients import Coefficients


def format_number(value: float) -> str:
    """Shortest readable form: 2.0 -> '2', 0.5 -> '0.5', -1.5 -> '-1.5'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _format_coefficient(value: float) -> str:
    if value == 1:
        return ""
    if value == -1:
        return "-"
    return format_number(value)


def _format_term(value: float, variable: str, force_zero: bool) -> str:
    if force_zero:
        return f"0{variable}²"
    if value == 0:
        return ""
    return f"{_format_coefficient(value)}{variable}²"


def format_equation(
    coefficients: Coefficients,
    force_zero: tuple[bool, bool, bool] = (False, False, False),
) -> str:
    """
    Render the equation with conventional simplification.

    A coefficient of 1 is omitted, -1 becomes a bare minus and zero terms are
    dropped. Terms flagged in `force_zero` are written literally as "0x²" so a
    disabled parameter stays visible. Negative quadratic terms follow a single
    space and carry their own sign; a negative constant gets a spaced minus.

    Examples:
        (1, 1, 1, -1)  -> "x² + y² + z² - 1 = 0"
        (1, -2, 1, 3)  -> "x² -2y² + z² + 3 = 0"
        (-1, 1, 0, 0)  -> "-x² + y² = 0"
    """
    a, b, c, d = coefficients.as_tuple()
    equation = ""

    for value, variable, forced in zip((a, b, c), ("x", "y", "z"), force_zero):
        term = _format_term(value, variable, forced)
        if not term:
            continue
        if equation:
            # negative terms carry their own sign
            equation += " " if (value < 0 and not forced) else " + "
        equation += term

    if not equation:
        return f"{format_number(d)} = 0"

    if d > 0:
        equation += f" + {format_number(d)}"
    elif d < 0:
        equation += f" - {format_number(-d)}"

    return equation + " = 0"
