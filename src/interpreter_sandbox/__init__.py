# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""
interpreter-sandbox
"""

__version__ = "0.1.0"

from .config import InterpreterConfig
from .errors import (
    ExecutionIOError,
    ExecutionTimeoutError,
    InfrastructureError,
    InterpreterError,
    ResourceLimitViolation,
    RuntimeUnavailableError,
)
from .facade import ExecutionPipeline
from .factory import PipelineFactory
from .models import ExecutionRequest, ExecutionResult, ResourcePolicy, SandboxHandle
from .pipeline import ExecutionPipelineAsync
from .runtime import ContainerRuntime
from .runtimes.docker import DockerRuntime

__all__ = [
    "ContainerRuntime",
    "DockerRuntime",
    "ExecutionIOError",
    "ExecutionPipeline",
    "ExecutionPipelineAsync",
    "ExecutionRequest",
    "ExecutionResult",
    "ExecutionTimeoutError",
    "InfrastructureError",
    "InterpreterConfig",
    "InterpreterError",
    "PipelineFactory",
    "ResourceLimitViolation",
    "ResourcePolicy",
    "RuntimeUnavailableError",
    "SandboxHandle",
]
