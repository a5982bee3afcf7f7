from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np


class InferenceBackend(Protocol):
    """
    Narrow engine interface used by the pipeline.

    A backend is constructed once from a model file and then run with a flat
    float32 tensor plus its NCHW shape; it returns the model's primary output
    as a flat float32 array.
    """

    input_name: str
    output_name: str

    def run(self, tensor: np.ndarray, shape: Sequence[int]) -> np.ndarray:
        ...
