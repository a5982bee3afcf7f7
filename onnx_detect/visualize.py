from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .types import Detection


BOX_COLOR: Tuple[int, int, int] = (0, 255, 0)
LABEL_BG_COLOR: Tuple[int, int, int] = (255, 255, 255)
LABEL_TEXT_COLOR: Tuple[int, int, int] = (0, 0, 0)


def draw_detections(
    image_bgr: np.ndarray,
    detections: Iterable[Detection],
    *,
    box_thickness: int = 2,
    font_scale: float = 0.5,
    font_thickness: int = 1,
) -> np.ndarray:
    """
    Draw bounding boxes + labels on an OpenCV BGR image and return a copy.

    Detections are drawn in iteration order, so later ones paint over earlier
    ones. Each gets a box outline, a filled label background sized to the text
    and the label "<class_name>: <confidence>" anchored at the box's top-left
    corner.
    """

    try:
        import cv2  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("OpenCV is required for draw_detections(). Install with `pip install opencv-python`.") from e

    if image_bgr is None or not hasattr(image_bgr, "shape"):
        raise TypeError("image_bgr must be a NumPy array (BGR).")
    if image_bgr.ndim != 3 or image_bgr.shape[2] != 3:
        raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image_bgr, 'shape', None)}")

    out = image_bgr.copy()

    for det in detections:
        x, y, w, h = det.bbox.as_xywh()
        # rect overload: draws nothing for empty boxes
        cv2.rectangle(out, (x, y, w, h), BOX_COLOR, thickness=box_thickness)

        label = det.label()
        (tw, th), baseline = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, font_scale, font_thickness)
        cv2.rectangle(out, (x, y - th), (x + tw, y + baseline), LABEL_BG_COLOR, thickness=cv2.FILLED)
        cv2.putText(
            out,
            label,
            (x, y),
            cv2.FONT_HERSHEY_SIMPLEX,
            font_scale,
            LABEL_TEXT_COLOR,
            thickness=font_thickness,
        )

    return out
