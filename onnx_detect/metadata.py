from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .errors import ClassIndexError


COCO_CLASS_NAMES: Tuple[str, ...] = (
    "person", "bicycle", "car", "motorcycle", "airplane", "bus", "train", "truck", "boat", "traffic light",
    "fire hydrant", "stop sign", "parking meter", "bench", "bird", "cat", "dog", "horse", "sheep", "cow",
    "elephant", "bear", "zebra", "giraffe", "backpack", "umbrella", "handbag", "tie", "suitcase", "frisbee",
    "skis", "snowboard", "sports ball", "kite", "baseball bat", "baseball glove", "skateboard", "surfboard",
    "tennis racket", "bottle", "wine glass", "cup", "fork", "knife", "spoon", "bowl", "banana", "apple",
    "sandwich", "orange", "broccoli", "carrot", "hot dog", "pizza", "donut", "cake", "chair", "couch",
    "potted plant", "bed", "dining table", "toilet", "tv", "laptop", "mouse", "remote", "keyboard",
    "cell phone", "microwave", "oven", "toaster", "sink", "refrigerator", "book", "clock", "vase",
    "scissors", "teddy bear", "hair drier", "toothbrush",
)


def class_name_for(class_id: int, table: Sequence[str] = COCO_CLASS_NAMES) -> str:
    if not 0 <= class_id < len(table):
        raise ClassIndexError(class_id, len(table))
    return table[class_id]


def load_class_names(metadata_path: str) -> Dict[int, str]:
    """
    Load class names from a lightweight `metadata.yaml` file.

    Only the `names:` mapping is read:

        names:
          0: person
          1: bicycle
          ...

    Lines outside that block, comments and non-numeric keys are ignored.
    """

    names: Dict[int, str] = {}
    in_names = False

    with open(metadata_path, "r", encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line == "names:":
                in_names = True
                continue
            if not in_names:
                continue
            # a new top-level key ends the block
            if not raw[:1].isspace():
                break

            if ":" not in line:
                continue
            left, right = line.split(":", 1)
            left = left.strip()
            right = right.strip().strip("'").strip('"')
            if not left.isdigit():
                continue
            names[int(left)] = right

    return names


def names_to_table(names: Dict[int, str]) -> Tuple[str, ...]:
    """
    Turn an {id: name} mapping into a dense table indexed by class id.

    Ids must be contiguous from 0, otherwise lookups would silently shift.
    """

    if not names:
        raise ValueError("Class name mapping is empty")
    expected = list(range(len(names)))
    if sorted(names) != expected:
        raise ValueError(f"Class ids must be contiguous from 0, got {sorted(names)}")
    return tuple(names[i] for i in expected)
