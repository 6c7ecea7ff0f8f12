"""Scientific calculator engine: parsing, evaluation, plot data, history and currency conversion."""

__version__ = "0.1.0"

__all__ = [
    "calculator",
    "currency",
    "db",
    "evaluator",
    "history",
    "models",
    "parser",
    "plot",
    "repositories",
]