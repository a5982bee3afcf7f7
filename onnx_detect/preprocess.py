from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import cv2
import numpy as np


@dataclass(frozen=True)
class InputShape:
    """
    NCHW shape descriptor of the network input, e.g. (1, 3, 640, 640).
    """

    batch: int = 1
    channels: int = 3
    height: int = 640
    width: int = 640

    def __post_init__(self) -> None:
        for name in ("batch", "channels", "height", "width"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"Input shape {name} must be a positive integer, got {value!r}")

    @classmethod
    def from_sequence(cls, dims: Sequence[int]) -> "InputShape":
        if len(dims) != 4:
            raise ValueError(f"Input shape must have exactly 4 entries (N, C, H, W), got {tuple(dims)}")
        n, c, h, w = (int(d) for d in dims)
        return cls(batch=n, channels=c, height=h, width=w)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.batch, self.channels, self.height, self.width

    @property
    def size(self) -> int:
        return self.batch * self.channels * self.height * self.width


def preprocess(image: np.ndarray, shape: InputShape, *, swap_rb: bool = False) -> np.ndarray:
    """
    Resize, normalize and lay out an image as a flat planar float32 tensor.

    The image is stretched (no letterboxing) to the network input size with
    bilinear interpolation, scaled from [0, 255] to [0, 1], and its interleaved
    channels are written plane by plane in channel order. Channels stay in the
    decoder's BGR order unless `swap_rb` is set.

    Returns a 1-D array of length channels * height * width.
    """

    if image is None or not hasattr(image, "shape"):
        raise TypeError("image must be a NumPy array (BGR).")
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image, 'shape', None)}")
    if shape.batch != 1:
        raise ValueError(f"Batch > 1 is not supported (got {shape.batch}).")
    if shape.channels != image.shape[2]:
        raise ValueError(f"Input shape expects {shape.channels} channels, image has {image.shape[2]}")

    resized = cv2.resize(image, (shape.width, shape.height), interpolation=cv2.INTER_LINEAR)
    if swap_rb:
        resized = resized[:, :, ::-1]

    blob = resized.astype(np.float32) / 255.0
    # HWC -> CHW
    planar = np.ascontiguousarray(np.transpose(blob, (2, 0, 1)))
    return planar.reshape(-1)
