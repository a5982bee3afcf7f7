from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .errors import InferenceError
from .metadata import COCO_CLASS_NAMES, class_name_for
from .nms import NMSConfig, nms
from .types import BBox, Detection


RECORD_STRIDE = 6


@dataclass(frozen=True)
class FilterConfig:
    """
    Configuration for turning raw model output into detections.

    - conf_threshold: records with confidence >= threshold are kept
    - apply_nms: run class-agnostic NMS on the kept records; the exported
      model is expected to suppress duplicates itself, so this is off by default
    """

    conf_threshold: float = 0.5
    apply_nms: bool = False
    iou_threshold: float = 0.45
    max_detections: int = 300

    def __post_init__(self) -> None:
        if not 0.0 <= self.conf_threshold <= 1.0:
            raise ValueError("conf_threshold must be in [0, 1]")
        if not 0.0 <= self.iou_threshold <= 1.0:
            raise ValueError("iou_threshold must be in [0, 1]")
        if self.max_detections < 1:
            raise ValueError("max_detections must be >= 1")


class DetectionFilter:
    """
    Post-process for models with a decoded head.

    The output tensor is read as records of six values,
    [left, top, right, bottom, confidence, class_id], in network input pixels.
    Records are thresholded, rescaled to the original image and named; their
    order is preserved.
    """

    def __init__(self, cfg: FilterConfig = FilterConfig(), class_names: Sequence[str] = COCO_CLASS_NAMES):
        self.cfg = cfg
        self.class_names = tuple(class_names)

    def process(
        self,
        output: np.ndarray,
        input_size: Tuple[int, int],
        orig_size: Tuple[int, int],
    ) -> List[Detection]:
        """
        Convert raw model output into detections in original image coordinates.

        Args:
            output: model output for one image, any shape; flattened here
            input_size: (width, height) of the network input
            orig_size: (width, height) of the original image
        """

        records = self._records(output)
        if records.shape[0] == 0:
            return []

        scores = records[:, 4]
        keep = scores >= np.float32(self.cfg.conf_threshold)
        records = records[keep]
        if records.shape[0] == 0:
            return []

        # C-style float -> int conversion truncates toward zero
        class_ids = np.trunc(records[:, 5]).astype(np.int64)

        if self.cfg.apply_nms:
            idx = nms(
                records[:, :4],
                records[:, 4],
                NMSConfig(iou_threshold=self.cfg.iou_threshold, max_detections=self.cfg.max_detections),
            )
            records, class_ids = records[idx], class_ids[idx]

        boxes = self._scale_boxes(records[:, :4], input_size, orig_size)

        return [
            Detection(
                confidence=float(score),
                bbox=BBox(x=int(x), y=int(y), width=int(w), height=int(h)),
                class_id=int(cls_id),
                class_name=class_name_for(int(cls_id), self.class_names),
            )
            for (x, y, w, h), score, cls_id in zip(boxes, records[:, 4], class_ids)
        ]

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _records(self, output: np.ndarray) -> np.ndarray:
        flat = np.asarray(output, dtype=np.float32).reshape(-1)
        if flat.size % RECORD_STRIDE != 0:
            raise InferenceError(
                f"Model output has {flat.size} values, which is not a multiple of {RECORD_STRIDE}"
            )
        return flat.reshape(-1, RECORD_STRIDE)

    def _scale_boxes(
        self,
        boxes: np.ndarray,
        input_size: Tuple[int, int],
        orig_size: Tuple[int, int],
    ) -> np.ndarray:
        """
        Map ltrb boxes from network input pixels to original image xywh, truncated.

        Scaling is done in float32 as value * orig / input, in that order.
        """

        in_w, in_h = (np.float32(v) for v in input_size)
        orig_w, orig_h = (np.float32(v) for v in orig_size)
        left, top, right, bottom = (boxes[:, i].astype(np.float32) for i in range(4))

        x = left * orig_w / in_w
        y = top * orig_h / in_h
        w = (right - left) * orig_w / in_w
        h = (bottom - top) * orig_h / in_h

        return np.trunc(np.stack([x, y, w, h], axis=1)).astype(np.int64)
