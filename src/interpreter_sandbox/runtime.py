# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from abc import ABC, abstractmethod

from interpreter_sandbox.models import ContainerSpec, ContainerState, CreatedContainer, ExecStream


class ContainerRuntime(ABC):
    """
    Abstract capability interface over a container runtime (e.g., Docker).
    Follows the Strategy Pattern.

    Implementations translate their native failures into ContainerRuntimeError.
    """

    @abstractmethod
    async def pull_image(self, image: str) -> None:
        """Fetch the image so containers can be created from it.

        Args:
            image: The image reference, with or without a tag.

        Raises:
            ContainerRuntimeError: If the image cannot be fetched.
        """
        pass  # pragma: no cover

    @abstractmethod
    async def create_container(self, spec: ContainerSpec) -> CreatedContainer:
        """Create (but do not start) a container.

        Args:
            spec: Image, binds, memory ceiling and isolation flags.

        Returns:
            CreatedContainer: The container id and any warnings reported by the runtime.

        Raises:
            ContainerRuntimeError: If creation fails.
        """
        pass  # pragma: no cover

    @abstractmethod
    async def start_container(self, container_id: str) -> None:
        """Start a created container."""
        pass  # pragma: no cover

    @abstractmethod
    async def attach_and_collect(self, container_id: str, command: list[str]) -> ExecStream:
        """Run a command inside the container and attach to its output.

        Args:
            container_id: The running container.
            command: The interpreter invocation.

        Returns:
            ExecStream: The exec id and an iterator of (stdout, stderr) byte chunks.
                Iterating it blocks and may raise ContainerRuntimeError.
        """
        pass  # pragma: no cover

    @abstractmethod
    async def exec_exit_code(self, exec_id: str) -> int | None:
        """Exit code of an attached command, None while it is still running."""
        pass  # pragma: no cover

    @abstractmethod
    async def kill_container(self, container_id: str) -> None:
        """Force-stop the container. Must not fail if it already exited."""
        pass  # pragma: no cover

    @abstractmethod
    async def inspect_container(self, container_id: str) -> ContainerState | None:
        """Final container state, None when the runtime reports no state."""
        pass  # pragma: no cover

    @abstractmethod
    async def remove_container(self, container_id: str) -> None:
        """Delete the container and its writable layer."""
        pass  # pragma: no cover

    @abstractmethod
    async def close(self) -> None:
        """Release the connection to the runtime."""
        pass  # pragma: no cover
