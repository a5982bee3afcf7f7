"""Command-line interface for onnx_detect."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .backends.onnxruntime_backend import OnnxRuntimeBackendConfig
from .config import DEFAULT_OUTPUT_PATH, DetectConfig
from .errors import ArgumentError
from .postprocess import FilterConfig
from .preprocess import InputShape
from .runtime import BackendFactory, run_detection, save_annotated


LOGGER = logging.getLogger(__name__)

PROG = "onnx-detect"


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog=PROG,
        description="Detect objects in one image with an ONNX model and write an annotated copy.",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("model_path", help="Path to the ONNX model.")
    parser.add_argument("image_path", help="Path to the input image.")
    parser.add_argument("--conf", type=float, default=0.5, help="Confidence threshold (default: 0.5).")
    parser.add_argument(
        "--output",
        default=str(DEFAULT_OUTPUT_PATH),
        help=f"Where to write the annotated image (default: {DEFAULT_OUTPUT_PATH}).",
    )
    parser.add_argument("--input-size", type=int, default=640, help="Square network input size (default: 640).")
    parser.add_argument(
        "--providers",
        default=None,
        help='Comma-separated ORT providers, e.g. "CUDAExecutionProvider,CPUExecutionProvider".',
    )
    parser.add_argument("--metadata", default=None, help="Class names file with a `names:` mapping.")
    parser.add_argument("--swap-rb", action="store_true", help="Feed the network RGB instead of BGR.")
    parser.add_argument("--nms", action="store_true", help="Apply NMS for models without built-in suppression.")
    parser.add_argument("--iou", type=float, default=0.45, help="IoU threshold for --nms (default: 0.45).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr.")
    return parser


def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root = logging.getLogger("onnx_detect")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


def config_from_args(args: argparse.Namespace) -> DetectConfig:
    try:
        providers: Optional[List[str]] = None
        if args.providers:
            providers = [p.strip() for p in str(args.providers).split(",") if p.strip()]

        return DetectConfig(
            model_path=Path(args.model_path),
            image_path=Path(args.image_path),
            output_path=Path(args.output),
            input_shape=InputShape(height=args.input_size, width=args.input_size),
            swap_rb=bool(args.swap_rb),
            metadata_path=Path(args.metadata) if args.metadata else None,
            filter=FilterConfig(conf_threshold=args.conf, apply_nms=bool(args.nms), iou_threshold=args.iou),
            backend=OnnxRuntimeBackendConfig(providers=providers),
        )
    except ValueError as e:
        raise ArgumentError(str(e)) from e


def main(argv: Optional[Sequence[str]] = None, *, backend_factory: Optional[BackendFactory] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        cfg = config_from_args(args)
    except ArgumentError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.verbose)

    try:
        result = run_detection(cfg, backend_factory=backend_factory)
        for det in result.detections:
            print(det.describe())
        out = save_annotated(result, cfg.output_path)
        LOGGER.info("Wrote %s with %d detections", out, len(result.detections))
    except Exception as e:
        LOGGER.debug("Detection failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0
