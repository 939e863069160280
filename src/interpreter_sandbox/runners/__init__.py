from .base import BoundedOutput, ExecutionRunner
from .languages import RUNNERS, BashRunner, PythonRunner, RRunner

__all__ = [
    "RUNNERS",
    "BashRunner",
    "BoundedOutput",
    "ExecutionRunner",
    "PythonRunner",
    "RRunner",
]
