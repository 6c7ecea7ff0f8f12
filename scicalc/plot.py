"""Sample points of a function of x for charting."""

from __future__ import annotations

from scicalc.evaluator import generate_points


def plot_points(
    expression: str,
    x_min: float,
    x_max: float,
    num_points: int,
    degrees: bool = False,
) -> list[dict[str, float]]:
    """Points of the curve as ``{"x": ..., "y": ...}`` mappings."""
    return [
        {"x": x, "y": y}
        for x, y in generate_points(expression, x_min, x_max, num_points, degrees)
    ]