from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

import numpy as np

from .backends.base import InferenceBackend
from .backends.onnxruntime_backend import OnnxRuntimeBackend, OnnxRuntimeBackendConfig
from .config import DetectConfig
from .image_io import load_image, write_image
from .metadata import COCO_CLASS_NAMES, load_class_names, names_to_table
from .postprocess import DetectionFilter, FilterConfig
from .preprocess import InputShape, preprocess
from .types import Detection
from .visualize import draw_detections


LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]
BackendFactory = Callable[[PathLike, OnnxRuntimeBackendConfig], InferenceBackend]


def load_backend(
    model_path: PathLike,
    cfg: OnnxRuntimeBackendConfig = OnnxRuntimeBackendConfig(),
) -> InferenceBackend:
    """Load a model file into an ONNX Runtime session."""

    return OnnxRuntimeBackend(model_path, cfg)


class DetectionPipeline:
    """
    Preprocess -> inference -> filter for a single BGR image.

    Returns detections in original image coordinates, in the order the model
    emitted them.
    """

    def __init__(
        self,
        backend: InferenceBackend,
        *,
        input_shape: InputShape = InputShape(),
        filter_cfg: FilterConfig = FilterConfig(),
        class_names: Sequence[str] = COCO_CLASS_NAMES,
        swap_rb: bool = False,
    ):
        self.backend = backend
        self.input_shape = input_shape
        self.swap_rb = swap_rb
        self.filter = DetectionFilter(filter_cfg, class_names)

    def __call__(self, image_bgr: np.ndarray) -> List[Detection]:
        orig_h, orig_w = image_bgr.shape[:2]

        t0 = time.perf_counter()
        tensor = preprocess(image_bgr, self.input_shape, swap_rb=self.swap_rb)
        t1 = time.perf_counter()
        output = self.backend.run(tensor, self.input_shape.as_tuple())
        t2 = time.perf_counter()
        detections = self.filter.process(
            output,
            input_size=(self.input_shape.width, self.input_shape.height),
            orig_size=(orig_w, orig_h),
        )
        t3 = time.perf_counter()

        LOGGER.debug(
            "preprocess %.1f ms, inference %.1f ms, filter %.1f ms, %d detections",
            (t1 - t0) * 1000.0,
            (t2 - t1) * 1000.0,
            (t3 - t2) * 1000.0,
            len(detections),
        )
        return detections


@dataclass(frozen=True)
class DetectionResult:
    image: np.ndarray
    detections: List[Detection]


def resolve_class_names(metadata_path: Optional[PathLike]) -> Sequence[str]:
    if metadata_path is None:
        return COCO_CLASS_NAMES
    return names_to_table(load_class_names(str(metadata_path)))


def run_detection(cfg: DetectConfig, backend_factory: Optional[BackendFactory] = None) -> DetectionResult:
    """
    Run one image through the model.

    The image is loaded before the model so that an unreadable image never
    reaches the engine.
    """

    loaded = load_image(cfg.image_path)
    class_names = resolve_class_names(cfg.metadata_path)

    factory = backend_factory or load_backend
    backend = factory(cfg.model_path, cfg.backend)

    pipeline = DetectionPipeline(
        backend,
        input_shape=cfg.input_shape,
        filter_cfg=cfg.filter,
        class_names=class_names,
        swap_rb=cfg.swap_rb,
    )
    return DetectionResult(image=loaded.image, detections=pipeline(loaded.image))


def save_annotated(result: DetectionResult, output_path: PathLike) -> Path:
    vis = draw_detections(result.image, result.detections)
    return write_image(output_path, vis)
