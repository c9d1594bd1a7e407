"""Rectangular seed regions that tie pixels to a terminal node."""

from __future__ import annotations

from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from numbers import Integral
from typing import Iterator, Sequence, Tuple, Union

from seamcut.errors import SeedRegionOutOfBounds


@dataclass(frozen=True)
class SeedRegion:
    """Axis-aligned rectangle with inclusive corners ``(x0, y0)-(x1, y1)``."""

    x0: int
    y0: int
    x1: int
    y1: int

    @classmethod
    def parse(cls, text: str) -> SeedRegion:
        """Parse ``"x0,y0,x1,y1"`` (``"x0,y0:x1,y1"`` is accepted too).

        Raises:
            ValueError: If the text does not hold four integers.
        """
        parts = [p.strip() for p in text.replace(":", ",").split(",")]
        if len(parts) != 4:
            raise ValueError(
                f"Seed region '{text}' must have four integers: x0,y0,x1,y1"
            )
        try:
            x0, y0, x1, y1 = (int(p) for p in parts)
        except ValueError:
            raise ValueError(
                f"Seed region '{text}' must have four integers: x0,y0,x1,y1"
            ) from None
        return cls(x0, y0, x1, y1)

    @classmethod
    def coerce(cls, value: Union[str, Sequence[int], SeedRegion]) -> SeedRegion:
        """Build a region from a string, a four-item sequence or a region.

        Raises:
            ValueError: If ``value`` is none of those, or a sequence item is
                not an integer.
        """
        if isinstance(value, SeedRegion):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if not isinstance(value, SequenceABC) or len(value) != 4:
            raise ValueError(
                f"Seed region {value!r} must be 'x0,y0,x1,y1' or four integers"
            )
        for v in value:
            # bool is an Integral too
            if isinstance(v, bool) or not isinstance(v, Integral):
                raise ValueError(
                    f"Seed region {value!r} has a non-integer corner {v!r}"
                )
        x0, y0, x1, y1 = (int(v) for v in value)
        return cls(x0, y0, x1, y1)

    @property
    def width(self) -> int:
        return self.x1 - self.x0 + 1

    @property
    def height(self) -> int:
        return self.y1 - self.y0 + 1

    def contains(self, x: int, y: int) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1

    def pixels(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(x, y)`` for every pixel in row-major order."""
        for y in range(self.y0, self.y1 + 1):
            for x in range(self.x0, self.x1 + 1):
                yield x, y

    def validate(self, width: int, height: int, name: str = "seed") -> None:
        """Check that the region is non-empty and inside a ``width x height`` grid.

        Raises:
            SeedRegionOutOfBounds: Otherwise.
        """
        if self.x0 > self.x1 or self.y0 > self.y1:
            raise SeedRegionOutOfBounds(
                f"{name} region {self} is empty: corners must satisfy x0 <= x1 and y0 <= y1"
            )
        if self.x0 < 0 or self.y0 < 0 or self.x1 >= width or self.y1 >= height:
            raise SeedRegionOutOfBounds(
                f"{name} region {self} exceeds the {width}x{height} pixel grid"
            )

    def __str__(self) -> str:
        return f"({self.x0},{self.y0})-({self.x1},{self.y1})"
