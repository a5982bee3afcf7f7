from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from .errors import LoadError


LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class LoadedImage:
    image: np.ndarray  # (H, W, 3) uint8, BGR
    width: int
    height: int


def load_image(path: PathLike) -> LoadedImage:
    p = Path(path)
    if not p.is_file():
        raise LoadError(f"Could not read the image: {path}")

    img = cv2.imread(str(p), cv2.IMREAD_COLOR)
    if img is None:
        raise LoadError(f"Could not read the image: {path}")

    h, w = img.shape[:2]
    LOGGER.debug("Loaded %s (%dx%d)", p, w, h)
    return LoadedImage(image=img, width=int(w), height=int(h))


def write_image(path: PathLike, image: np.ndarray) -> Path:
    p = Path(path)
    try:
        ok = cv2.imwrite(str(p), image)
    except cv2.error as e:
        raise OSError(f"Failed to write output image: {p}") from e
    if not ok:
        raise OSError(f"Failed to write output image: {p}")
    LOGGER.debug("Wrote %s", p)
    return p
