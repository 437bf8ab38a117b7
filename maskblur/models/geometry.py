"""
Rectangle helpers and region-of-interest resolution
"""

from typing import NamedTuple, Sequence, Tuple

# Width/height used when the ROI leaves them unbounded
UNBOUNDED = 1_000_000


class Rect(NamedTuple):
    """Integer rectangle ``(x, y, width, height)`` in pixel coordinates"""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        if self.is_empty:
            return 0
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @classmethod
    def from_shape(cls, shape: Sequence[int]) -> "Rect":
        """Rectangle covering a whole image of the given numpy shape"""
        return cls(0, 0, int(shape[1]), int(shape[0]))

    def intersect(self, other: "Rect") -> "Rect":
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.x + self.width, other.x + other.width)
        y2 = min(self.y + self.height, other.y + other.height)
        if x2 <= x1 or y2 <= y1:
            return Rect(0, 0, 0, 0)
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def clamp(self, shape: Sequence[int]) -> "Rect":
        """Intersect with the bounds of an image of the given shape"""
        return self.intersect(Rect.from_shape(shape))

    def contains(self, other: "Rect") -> bool:
        return (other.x >= self.x and other.y >= self.y
                and other.x + other.width <= self.x + self.width
                and other.y + other.height <= self.y + self.height)

    def slices(self) -> Tuple[slice, slice]:
        """Row/column slices for indexing a numpy image"""
        return (slice(self.y, self.y + self.height),
                slice(self.x, self.x + self.width))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}) {self.width}x{self.height}"


def resolve_roi(roi: Rect, shape: Sequence[int]) -> Rect:
    """
    Apply negative-offset and unbounded-size rules, then clamp

    Negative ``x``/``y`` count from the right/bottom edge. Non-positive
    width/height stand for "unbounded".

    Args:
        roi: User supplied region of interest
        shape: Shape of the image the ROI applies to

    Returns:
        Clamped rectangle, empty when the ROI falls outside the image
    """
    height, width = int(shape[0]), int(shape[1])
    x = width + roi.x if roi.x < 0 else roi.x
    y = height + roi.y if roi.y < 0 else roi.y
    w = roi.width if roi.width > 0 else UNBOUNDED
    h = roi.height if roi.height > 0 else UNBOUNDED
    return Rect(x, y, w, h).clamp(shape)
