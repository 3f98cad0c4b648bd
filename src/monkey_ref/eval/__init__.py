"""Evaluator helper modules for the Monkey runtime."""

__all__ = [
    "blocks",
    "chains",
    "common",
    "control",
    "expr",
    "fn",
    "helpers",
    "let",
    "literals",
]
