"""Exact and prefix comparison of strings or byte strings."""

from typing import Union

Text = Union[str, bytes, bytearray]


def prefix_compare(string: Text, prefix: Text) -> bool:
    """Return True if ``string`` begins with ``prefix``."""
    if len(string) < len(prefix):
        return False
    return string[: len(prefix)] == prefix


def string_compare(string: Text, standard: Text) -> bool:
    """Return True if ``string`` and ``standard`` hold the same characters."""
    if len(string) != len(standard):
        return False
    return string == standard