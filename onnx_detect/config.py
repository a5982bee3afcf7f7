from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .backends.onnxruntime_backend import OnnxRuntimeBackendConfig
from .postprocess import FilterConfig
from .preprocess import InputShape


DEFAULT_OUTPUT_PATH = Path("result.jpg")


@dataclass(frozen=True)
class DetectConfig:
    """
    Everything one detection run needs, resolved from the command line.

    - output_path: annotated image, overwritten if it exists
    - metadata_path: optional class names file; the COCO table is used otherwise
    - swap_rb: feed RGB instead of the decoder's BGR
    """

    model_path: Path
    image_path: Path
    output_path: Path = DEFAULT_OUTPUT_PATH
    input_shape: InputShape = field(default_factory=InputShape)
    swap_rb: bool = False
    metadata_path: Optional[Path] = None
    filter: FilterConfig = field(default_factory=FilterConfig)
    backend: OnnxRuntimeBackendConfig = field(default_factory=OnnxRuntimeBackendConfig)
