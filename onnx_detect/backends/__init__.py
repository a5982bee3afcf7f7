"""
Inference backends for onnx_detect.

Backends live in their own package so pre/post-processing stays importable
without an inference runtime installed.
"""

from __future__ import annotations

from .base import InferenceBackend

__all__ = ["InferenceBackend"]
