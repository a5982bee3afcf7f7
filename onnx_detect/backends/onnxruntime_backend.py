from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from ..errors import InferenceError


LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

# ORT severities: 0 verbose, 1 info, 2 warning, 3 error, 4 fatal
_WARNING = 2


@dataclass(frozen=True)
class OnnxRuntimeBackendConfig:
    """
    Configuration for ONNX Runtime inference.

    - providers: ORT execution providers (e.g., ["CUDAExecutionProvider", "CPUExecutionProvider"])
    - input_name/output_name: override auto-selected I/O names if needed
    - intra_op_num_threads: threads ORT may use inside one operator
    - graph_optimization: "disable", "basic", "extended" or "all"
    """

    providers: Optional[Sequence[str]] = None
    input_name: Optional[str] = None
    output_name: Optional[str] = None
    intra_op_num_threads: int = 1
    graph_optimization: str = "basic"
    log_severity_level: int = _WARNING

    def __post_init__(self) -> None:
        if self.intra_op_num_threads < 0:
            raise ValueError("intra_op_num_threads must be >= 0")
        if self.graph_optimization.lower() not in ("disable", "basic", "extended", "all"):
            raise ValueError(f"Unknown graph_optimization: {self.graph_optimization!r}")


def _graph_optimization_level(ort, name: str):
    levels = {
        "disable": ort.GraphOptimizationLevel.ORT_DISABLE_ALL,
        "basic": ort.GraphOptimizationLevel.ORT_ENABLE_BASIC,
        "extended": ort.GraphOptimizationLevel.ORT_ENABLE_EXTENDED,
        "all": ort.GraphOptimizationLevel.ORT_ENABLE_ALL,
    }
    return levels[name.lower()]


class OnnxRuntimeBackend:
    """
    ONNX Runtime backend.

    Loads the model once and exposes `run(tensor, shape)`, which feeds a flat
    float32 tensor reshaped to `shape` into the model's single input and
    returns the primary output flattened to float32.
    """

    def __init__(self, model_path: PathLike, cfg: OnnxRuntimeBackendConfig = OnnxRuntimeBackendConfig()):
        try:
            import onnxruntime as ort  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ImportError(
                "onnxruntime is required for the ONNX backend. Install it with `pip install onnxruntime` "
                "(or `onnxruntime-gpu`)."
            ) from e

        self.model_path = Path(model_path)
        if not self.model_path.is_file():
            raise InferenceError(f"Model file not found: {self.model_path}")

        sess_opts = ort.SessionOptions()
        sess_opts.intra_op_num_threads = cfg.intra_op_num_threads
        sess_opts.graph_optimization_level = _graph_optimization_level(ort, cfg.graph_optimization)
        sess_opts.log_severity_level = cfg.log_severity_level
        providers = list(cfg.providers) if cfg.providers is not None else None

        LOGGER.debug("Loading ONNX model %s (providers=%s)", self.model_path, providers)
        try:
            self.session = ort.InferenceSession(str(self.model_path), sess_options=sess_opts, providers=providers)
        except Exception as e:
            raise InferenceError(f"Could not load model {self.model_path}: {e}") from e

        self.input_name = cfg.input_name or self.session.get_inputs()[0].name
        # If output_name not provided, pick first output.
        self.output_name = cfg.output_name or self.session.get_outputs()[0].name
        LOGGER.debug(
            "Model I/O: input=%s output=%s providers=%s",
            self.input_name,
            self.output_name,
            self.providers_in_use,
        )

    @property
    def providers_in_use(self) -> Sequence[str]:
        # ORT returns providers in priority order for this session.
        return tuple(self.session.get_providers())

    def run(self, tensor: np.ndarray, shape: Sequence[int]) -> np.ndarray:
        dims = tuple(int(d) for d in shape)
        flat = np.asarray(tensor, dtype=np.float32).reshape(-1)
        expected = int(np.prod(dims)) if dims else 0
        if flat.size != expected:
            raise InferenceError(f"Input tensor has {flat.size} values but shape {dims} needs {expected}")

        blob = flat.reshape(dims)
        try:
            outputs = self.session.run([self.output_name], {self.input_name: blob})
        except Exception as e:
            raise InferenceError(f"Inference failed: {e}") from e

        out = np.asarray(outputs[0], dtype=np.float32)
        LOGGER.debug("Output %s shape=%s", self.output_name, out.shape)
        return out.reshape(-1)
