"""
Single-image object detection with ONNX Runtime.

Loads an image, runs it through a detection model whose output is a list of
[left, top, right, bottom, confidence, class_id] records, and writes a copy of
the image with the detections drawn on it. Pre/post-processing only needs
NumPy and OpenCV; ONNX Runtime is imported when a model is loaded.
"""

__version__ = "0.1.0"

from .errors import ArgumentError, ClassIndexError, DetectError, InferenceError, LoadError
from .types import BBox, Detection
from .metadata import COCO_CLASS_NAMES, class_name_for, load_class_names
from .image_io import LoadedImage, load_image, write_image
from .preprocess import InputShape, preprocess
from .nms import NMSConfig, nms
from .postprocess import DetectionFilter, FilterConfig
from .visualize import draw_detections
from .config import DetectConfig
from .runtime import DetectionPipeline, DetectionResult, load_backend, run_detection, save_annotated

__all__ = [
    "ArgumentError",
    "ClassIndexError",
    "DetectError",
    "InferenceError",
    "LoadError",
    "BBox",
    "Detection",
    "COCO_CLASS_NAMES",
    "class_name_for",
    "load_class_names",
    "LoadedImage",
    "load_image",
    "write_image",
    "InputShape",
    "preprocess",
    "NMSConfig",
    "nms",
    "DetectionFilter",
    "FilterConfig",
    "draw_detections",
    "DetectConfig",
    "DetectionPipeline",
    "DetectionResult",
    "load_backend",
    "run_detection",
    "save_annotated",
]
