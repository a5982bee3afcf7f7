import unittest

import numpy as np

from onnx_detect.types import BBox, Detection
from onnx_detect.visualize import BOX_COLOR, draw_detections


def _det(x: int, y: int, w: int, h: int, class_id: int = 0, name: str = "person") -> Detection:
    return Detection(confidence=0.9, bbox=BBox(x, y, w, h), class_id=class_id, class_name=name)


class TestDrawDetections(unittest.TestCase):
    def test_draws_on_copy(self) -> None:
        img = np.zeros((120, 160, 3), dtype=np.uint8)
        out = draw_detections(img, [_det(20, 40, 60, 50)])
        self.assertFalse(img.any())
        self.assertEqual(out.shape, img.shape)

    def test_box_outline_and_label_background(self) -> None:
        img = np.zeros((120, 160, 3), dtype=np.uint8)
        out = draw_detections(img, [_det(20, 40, 60, 50)])
        # left and bottom edges, away from the label
        self.assertEqual(tuple(out[70, 20]), BOX_COLOR)
        self.assertEqual(tuple(out[89, 50]), BOX_COLOR)
        # box interior untouched
        self.assertEqual(tuple(out[70, 50]), (0, 0, 0))
        # white label background above the box
        self.assertTrue(np.all(out[:45] == 255, axis=2).any())

    def test_empty_box_draws_no_outline(self) -> None:
        img = np.zeros((120, 160, 3), dtype=np.uint8)
        out = draw_detections(img, [_det(50, 60, 0, 40)])
        green = np.all(out == np.array(BOX_COLOR, dtype=np.uint8), axis=2)
        self.assertEqual(int(green.sum()), 0)
        # the label is still drawn
        self.assertTrue(np.all(out == 255, axis=2).any())

    def test_no_detections_returns_identical_image(self) -> None:
        img = np.random.default_rng(1).integers(0, 256, size=(32, 32, 3), dtype=np.uint8)
        self.assertTrue(np.array_equal(draw_detections(img, []), img))

    def test_later_detections_draw_over_earlier(self) -> None:
        img = np.zeros((120, 160, 3), dtype=np.uint8)
        a = _det(20, 40, 60, 50)
        b = _det(10, 70, 100, 40)
        ab = draw_detections(img, [a, b])
        ba = draw_detections(img, [b, a])
        self.assertFalse(np.array_equal(ab, ba))

    def test_rejects_non_image(self) -> None:
        with self.assertRaises(ValueError):
            draw_detections(np.zeros((10, 10), dtype=np.uint8), [])
        with self.assertRaises(TypeError):
            draw_detections(None, [])


if __name__ == "__main__":
    unittest.main()
