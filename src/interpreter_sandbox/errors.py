# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""Error taxonomy for the interpreter sandbox."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from interpreter_sandbox.models import ExecutionResult


class InterpreterError(Exception):
    """Base error for every failure surfaced to callers of the pipeline."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        # Set when output was captured before a later teardown step failed.
        self.partial_result: "ExecutionResult | None" = None


class InfrastructureError(InterpreterError):
    """The container runtime failed (create, start, kill, inspect, remove, unknown state)."""


class RuntimeUnavailableError(InfrastructureError):
    """The runtime daemon is unreachable or the image could not be pulled."""


class ResourceLimitViolation(InterpreterError):
    """The container was killed because it exceeded its memory ceiling."""

    def __init__(self, message: str = "Container memory limit exceeded.") -> None:
        super().__init__(message)


class ExecutionIOError(InterpreterError):
    """Attaching to or reading from the container streams failed."""


class ExecutionTimeoutError(ExecutionIOError):
    """Output collection exceeded the configured execution timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Execution exceeded {timeout} seconds limit.")


class ContainerRuntimeError(Exception):
    """Raw failure reported by a runtime adapter.

    Never surfaced to pipeline callers: the provisioner, runner and reaper wrap it
    into one of the InterpreterError subclasses.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
