# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MEMORY_LIMIT_BYTES = 32 * 1024 * 1024
DEFAULT_OUTPUT_LIMIT_BYTES = 1024


class ExecutionRequest(BaseModel):
    """A single submission: where the source lives on the host and where it appears in the sandbox.

    Attributes:
        host_source_path: Absolute host path holding the submitted source.
        container_mount_path: Absolute path inside the sandbox where it is mounted.
        image: The runtime image to run the submission with.
    """

    model_config = ConfigDict(frozen=True)

    host_source_path: Path
    container_mount_path: str
    image: str = Field(..., min_length=1)

    @field_validator("host_source_path")
    @classmethod
    def _host_path_is_absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"host_source_path must be absolute: {value}")
        return value

    @field_validator("container_mount_path")
    @classmethod
    def _container_path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"container_mount_path must be absolute: {value}")
        return value


class ResourcePolicy(BaseModel):
    """Isolation and resource constraints applied to every sandbox.

    Networking is always disabled and the source bind is always read-only;
    neither can be switched off.
    """

    model_config = ConfigDict(frozen=True)

    memory_limit_bytes: int = Field(default=DEFAULT_MEMORY_LIMIT_BYTES, gt=0)
    network_disabled: Literal[True] = True
    stdin_open: bool = True
    bind_read_only: Literal[True] = True
    stdout_limit_bytes: int = Field(default=DEFAULT_OUTPUT_LIMIT_BYTES, gt=0)
    stderr_limit_bytes: int = Field(default=DEFAULT_OUTPUT_LIMIT_BYTES, gt=0)
