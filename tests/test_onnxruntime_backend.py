import os
import tempfile
import unittest
from unittest import mock

import numpy as np
import onnxruntime

from onnx_detect.backends.onnxruntime_backend import OnnxRuntimeBackend, OnnxRuntimeBackendConfig
from onnx_detect.errors import InferenceError
from onnx_detect.runtime import load_backend


class _FakeIO:
    def __init__(self, name: str):
        self.name = name


class _FakeSession:
    def __init__(self, path, sess_options=None, providers=None):
        self.path = path
        self.sess_options = sess_options
        self.providers = providers
        self.fed = None

    def get_inputs(self):
        return [_FakeIO("images")]

    def get_outputs(self):
        return [_FakeIO("output0"), _FakeIO("aux")]

    def get_providers(self):
        return ["CPUExecutionProvider"]

    def run(self, output_names, feeds):
        self.fed = (output_names, feeds)
        return [np.array([[[0, 0, 10, 10, 0.9, 1]]], dtype=np.float32)]


class TestOnnxRuntimeBackend(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.model = os.path.join(self._tmp.name, "model.onnx")
        with open(self.model, "wb") as f:
            f.write(b"not really onnx")

    def test_missing_model(self) -> None:
        with self.assertRaises(InferenceError):
            OnnxRuntimeBackend(os.path.join(self._tmp.name, "missing.onnx"))

    def test_invalid_model(self) -> None:
        with self.assertRaises(InferenceError):
            OnnxRuntimeBackend(self.model)

    def test_session_options_and_name_discovery(self) -> None:
        with mock.patch("onnxruntime.InferenceSession", _FakeSession):
            backend = OnnxRuntimeBackend(self.model)
        opts = backend.session.sess_options
        self.assertEqual(opts.intra_op_num_threads, 1)
        self.assertEqual(opts.graph_optimization_level, onnxruntime.GraphOptimizationLevel.ORT_ENABLE_BASIC)
        self.assertEqual(opts.log_severity_level, 2)
        self.assertEqual(backend.input_name, "images")
        self.assertEqual(backend.output_name, "output0")
        self.assertEqual(backend.providers_in_use, ("CPUExecutionProvider",))

    def test_run_reshapes_and_flattens(self) -> None:
        with mock.patch("onnxruntime.InferenceSession", _FakeSession):
            backend = OnnxRuntimeBackend(self.model)
        out = backend.run(np.zeros(3 * 4 * 4, dtype=np.float32), (1, 3, 4, 4))
        names, feeds = backend.session.fed
        self.assertEqual(names, ["output0"])
        self.assertEqual(feeds["images"].shape, (1, 3, 4, 4))
        self.assertEqual(out.shape, (6,))
        self.assertEqual(out.dtype, np.float32)

    def test_run_rejects_shape_mismatch(self) -> None:
        with mock.patch("onnxruntime.InferenceSession", _FakeSession):
            backend = OnnxRuntimeBackend(self.model)
        with self.assertRaises(InferenceError):
            backend.run(np.zeros(10, dtype=np.float32), (1, 3, 4, 4))

    def test_run_wraps_engine_failure(self) -> None:
        with mock.patch("onnxruntime.InferenceSession", _FakeSession):
            backend = OnnxRuntimeBackend(self.model)
        with mock.patch.object(backend.session, "run", side_effect=RuntimeError("boom")):
            with self.assertRaises(InferenceError) as ctx:
                backend.run(np.zeros(48, dtype=np.float32), (1, 3, 4, 4))
        self.assertIn("boom", str(ctx.exception))

    def test_io_name_overrides(self) -> None:
        cfg = OnnxRuntimeBackendConfig(input_name="x", output_name="aux", providers=["CPUExecutionProvider"])
        with mock.patch("onnxruntime.InferenceSession", _FakeSession):
            backend = OnnxRuntimeBackend(self.model, cfg)
        self.assertEqual((backend.input_name, backend.output_name), ("x", "aux"))
        self.assertEqual(backend.session.providers, ["CPUExecutionProvider"])

    def test_config_validation(self) -> None:
        with self.assertRaises(ValueError):
            OnnxRuntimeBackendConfig(graph_optimization="turbo")
        with self.assertRaises(ValueError):
            OnnxRuntimeBackendConfig(intra_op_num_threads=-1)

    def test_load_backend_builds_onnxruntime_session(self) -> None:
        with mock.patch("onnxruntime.InferenceSession", _FakeSession):
            backend = load_backend(self.model, OnnxRuntimeBackendConfig(intra_op_num_threads=2))
        self.assertIsInstance(backend, OnnxRuntimeBackend)
        self.assertEqual(backend.session.sess_options.intra_op_num_threads, 2)


if __name__ == "__main__":
    unittest.main()
