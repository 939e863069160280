# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

"""Runtime-neutral container models exchanged with a ContainerRuntime."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from interpreter_sandbox.runtime import ContainerRuntime


class BindMount(BaseModel):
    """A host path exposed inside the container."""

    model_config = ConfigDict(frozen=True)

    host_path: str
    container_path: str
    read_only: bool = True


class ContainerSpec(BaseModel):
    """Creation config handed to the runtime."""

    model_config = ConfigDict(frozen=True)

    image: str
    binds: tuple[BindMount, ...] = ()
    memory_limit_bytes: int
    network_disabled: bool = True
    stdin_open: bool = True
    working_dir: str | None = None
    # Main process; None runs the image CMD
    command: tuple[str, ...] | None = None


class CreatedContainer(BaseModel):
    id: str
    warnings: list[str] = []


class ContainerState(BaseModel):
    """Final state of a container as reported by the runtime."""

    oom_killed: bool = False
    running: bool = False
    exit_code: int | None = None
    status: str | None = None


@dataclass
class ExecStream:
    """An interpreter process attached inside a container.

    `chunks` yields demultiplexed (stdout, stderr) pairs; either side may be None.
    """

    exec_id: str
    chunks: Iterator[tuple[bytes | None, bytes | None]]


@dataclass(frozen=True)
class SandboxHandle:
    container_id: str
    runtime: "ContainerRuntime" = field(repr=False)
    warnings: tuple[str, ...] = ()

    @property
    def short_id(self) -> str:
        return self.container_id[:12]
