"""Evaluator helper modules for the Boomerang runtime."""

__all__ = [
    "blocks",
    "control",
    "expr",
    "fn",
    "helpers",
    "literals",
    "loops",
    "match",
]
