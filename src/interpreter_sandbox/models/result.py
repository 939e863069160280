# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from typing import Any

from pydantic import BaseModel, Field, field_validator


class ExecutionResult(BaseModel):
    """Represents the captured output of a normally terminated execution.

    Attributes:
        stdout: Standard output, whitespace-trimmed and bounded in bytes.
        stderr: Standard error, whitespace-trimmed and bounded in bytes.
        exit_code: Exit code of the interpreter, None if it was still running when collection stopped.
        stdout_truncated: Whether stdout exceeded its byte ceiling.
        stderr_truncated: Whether stderr exceeded its byte ceiling.
        execution_duration: The duration of the execution in seconds.
    """

    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None
    stdout_truncated: bool = False
    stderr_truncated: bool = False
    execution_duration: float = Field(default=0.0, ge=0.0)

    @field_validator("stdout", "stderr", mode="before")
    @classmethod
    def _trim(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value
