# src/interpreter_sandbox/models/__init__.py

"""
Data models for the interpreter sandbox.
"""

from .container import BindMount, ContainerSpec, ContainerState, CreatedContainer, ExecStream, SandboxHandle
from .request import ExecutionRequest, ResourcePolicy
from .result import ExecutionResult

__all__ = [
    "BindMount",
    "ContainerSpec",
    "ContainerState",
    "CreatedContainer",
    "ExecStream",
    "ExecutionRequest",
    "ExecutionResult",
    "ResourcePolicy",
    "SandboxHandle",
]
