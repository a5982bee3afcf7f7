from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BBox:
    """
    Axis-aligned box in original image pixels: top-left corner plus size.
    """

    x: int
    y: int
    width: int
    height: int

    def as_xywh(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


@dataclass(frozen=True)
class Detection:
    confidence: float
    bbox: BBox
    class_id: int
    class_name: str

    def describe(self) -> str:
        x, y, w, h = self.bbox.as_xywh()
        return (
            f"Class ID: {self.class_id} Confidence: {self.confidence:g} "
            f"BBox: [{x}, {y}, {w}, {h}] Class Name: {self.class_name}"
        )

    def label(self) -> str:
        return f"{self.class_name}: {self.confidence:.6f}"
