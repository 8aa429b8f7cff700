"""Configuration text parsers."""

from .simple_yaml import InvalidValueKind, coerce_scalar, needs_quotes, parse, serialize

__all__ = ["parse", "serialize", "coerce_scalar", "needs_quotes", "InvalidValueKind"]
