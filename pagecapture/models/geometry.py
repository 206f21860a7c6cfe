"""Geometry primitives shared by every capture component."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CoordinatesType(str, Enum):
    """Reference frame a Region's coordinates are expressed in."""

    VIEWPORT_RELATIVE = "viewport_relative"
    CONTEXT_RELATIVE = "context_relative"
    CONTEXT_AS_IS = "context_as_is"
    SCREENSHOT_AS_IS = "screenshot_as_is"  # relative to a captured image


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0

    def offset(self, dx: int, dy: int) -> Location:
        return Location(x=self.x + dx, y=self.y + dy)

    def offset_by(self, other: Location) -> Location:
        return self.offset(other.x, other.y)

    def negated(self) -> Location:
        return Location(x=-self.x, y=-self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Size(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class Region(BaseModel):
    """An axis-aligned rectangle.

    ``EMPTY_REGION`` is a sentinel meaning "the entire subject, no crop";
    it is never drawn and passes through coordinate conversion untouched.
    """

    model_config = ConfigDict(frozen=True)

    left: int = 0
    top: int = 0
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)

    @classmethod
    def from_location_size(cls, location: Location, size: Size) -> Region:
        return cls(left=location.x, top=location.y, width=size.width, height=size.height)

    @property
    def location(self) -> Location:
        return Location(x=self.left, y=self.top)

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def is_empty(self) -> bool:
        return self == EMPTY_REGION

    def offset(self, dx: int, dy: int) -> Region:
        return Region(left=self.left + dx, top=self.top + dy,
                      width=self.width, height=self.height)

    def contains(self, location: Location) -> bool:
        return (self.left <= location.x < self.right
                and self.top <= location.y < self.bottom)

    def contains_region(self, other: Region) -> bool:
        return (self.left <= other.left and self.top <= other.top
                and other.right <= self.right and other.bottom <= self.bottom)

    def intersects(self, other: Region) -> bool:
        return (self.left < other.right and other.left < self.right
                and self.top < other.bottom and other.top < self.bottom)

    def intersect(self, other: Region) -> Region:
        """Return the overlap of both regions, or ``EMPTY_REGION``."""
        if not self.intersects(other):
            return EMPTY_REGION
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        return Region(
            left=left,
            top=top,
            width=min(self.right, other.right) - left,
            height=min(self.bottom, other.bottom) - top,
        )

    def middle_offset(self) -> Location:
        """Offset of the region's center relative to its own top-left corner."""
        return Location(x=self.width // 2, y=self.height // 2)

    def sub_regions(self, part_size: Size) -> list[Region]:
        """Partition the region into row-major tiles of ``part_size``.

        The last row and column are clipped to the region's bounds, so
        tiles never overlap and never extend past the region.
        """
        if part_size.width <= 0 or part_size.height <= 0:
            raise ValueError(f"Sub-region size must be positive, got {part_size}")

        parts: list[Region] = []
        for top in range(self.top, self.bottom, part_size.height):
            height = min(part_size.height, self.bottom - top)
            for left in range(self.left, self.right, part_size.width):
                width = min(part_size.width, self.right - left)
                parts.append(Region(left=left, top=top, width=width, height=height))
        return parts

    def __str__(self) -> str:
        return f"({self.left}, {self.top}) {self.width}x{self.height}"


ORIGIN = Location(x=0, y=0)
EMPTY_REGION = Region(left=0, top=0, width=0, height=0)
