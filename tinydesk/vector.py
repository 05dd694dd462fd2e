"""A small two-dimensional vector value."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator


def _divide(value, k):
    """Divide, truncating toward zero when both operands are integers."""
    if isinstance(value, int) and isinstance(k, int):
        quotient = abs(value) // abs(k)
        return quotient if (value >= 0) == (k >= 0) else -quotient
    return value / k


def _is_scalar(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Vector2:
    """An immutable pair of coordinates supporting vector arithmetic."""

    x: float
    y: float

    def __iter__(self) -> Iterator:
        yield self.x
        yield self.y

    def __pos__(self) -> Vector2:
        return Vector2(self.x, self.y)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def __add__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other):
        """Dot product with another vector, or scaling by a number."""
        if isinstance(other, Vector2):
            return self.x * other.x + self.y * other.y
        if _is_scalar(other):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __truediv__(self, k):
        if not _is_scalar(k):
            return NotImplemented
        return Vector2(_divide(self.x, k), _divide(self.y, k))

    def __abs__(self) -> float:
        return math.sqrt(self.abs2())

    def abs2(self):
        """Squared length of the vector."""
        return self.x * self.x + self.y * self.y

    def cast(self, kind: Callable) -> Vector2:
        """Return a vector whose coordinates are converted with ``kind``."""
        return Vector2(kind(self.x), kind(self.y))


def abs2(v: Vector2):
    """Squared length of ``v``."""
    return v.abs2()