"""
Error types raised by the detection pipeline.

Every stage raises one of these and lets it propagate; the CLI is the only
place that catches them.
"""


class DetectError(Exception):
    """Base class for pipeline errors."""


class ArgumentError(DetectError):
    """Wrong number of positional arguments or an invalid option value."""


class LoadError(DetectError):
    """The input image could not be read or decoded."""


class InferenceError(DetectError):
    """The model could not be loaded, or running it failed."""


class ClassIndexError(DetectError, IndexError):
    """A class id produced by the model is outside the class name table."""

    def __init__(self, class_id: int, table_size: int):
        super().__init__(f"Class id {class_id} is out of range for a table of {table_size} class names")
        self.class_id = class_id
        self.table_size = table_size
