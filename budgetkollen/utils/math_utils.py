"""Numeric helpers shared by the calculators"""


def safe_divide(numerator: float, denominator: float) -> float | None:
    """Ratio, or None when the denominator is not positive"""
    if denominator <= 0:
        return None
    return numerator / denominator


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
