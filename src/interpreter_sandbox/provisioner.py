# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from interpreter_sandbox.errors import ContainerRuntimeError, InfrastructureError, RuntimeUnavailableError
from interpreter_sandbox.models import BindMount, ContainerSpec, ExecutionRequest, ResourcePolicy, SandboxHandle
from interpreter_sandbox.runtime import ContainerRuntime
from interpreter_sandbox.utils.logger import logger

# Holds the container open for exec regardless of the image CMD
KEEP_ALIVE_COMMAND = ("tail", "-f", "/dev/null")


class SandboxProvisioner:
    """Turns an ExecutionRequest into a running, isolated container."""

    def __init__(self, runtime: ContainerRuntime, image: str):
        self.runtime = runtime
        self.image = image

    async def prepare(self) -> None:
        """Pull the image once, before any request is accepted.

        Raises:
            RuntimeUnavailableError: If the image cannot be fetched.
        """
        try:
            await self.runtime.pull_image(self.image)
        except ContainerRuntimeError as e:
            logger.error(f"Failed to pull image {self.image}: {e}")
            raise RuntimeUnavailableError(f"Image {self.image} is unavailable.") from e

    @staticmethod
    def build_spec(request: ExecutionRequest, policy: ResourcePolicy) -> ContainerSpec:
        return ContainerSpec(
            image=request.image,
            binds=(
                BindMount(
                    host_path=str(request.host_source_path),
                    container_path=request.container_mount_path,
                    read_only=policy.bind_read_only,
                ),
            ),
            memory_limit_bytes=policy.memory_limit_bytes,
            network_disabled=policy.network_disabled,
            stdin_open=policy.stdin_open,
            working_dir=request.container_mount_path,
            command=KEEP_ALIVE_COMMAND,
        )

    async def provision(self, request: ExecutionRequest, policy: ResourcePolicy) -> SandboxHandle:
        """Create and start a sandbox for the request.

        Args:
            request: Host source path, mount path and image.
            policy: Memory ceiling and isolation flags.

        Returns:
            SandboxHandle: The running container, owned by the caller until teardown.

        Raises:
            InfrastructureError: If creation or start fails. No container is left behind.
        """
        spec = self.build_spec(request, policy)
        try:
            created = await self.runtime.create_container(spec)
        except ContainerRuntimeError as e:
            logger.error(f"Failed to create container from {request.image}: {e}")
            raise InfrastructureError("Interpreter exception occurred while container starting.") from e

        for warning in created.warnings:
            logger.warning(f"Container {created.id[:12]} creation warning: {warning}")

        try:
            await self.runtime.start_container(created.id)
        except ContainerRuntimeError as e:
            logger.error(f"Failed to start container {created.id[:12]}: {e}")
            await self._discard(created.id)
            raise InfrastructureError("Interpreter exception occurred while container starting.") from e

        logger.debug(f"Container started. ContainerId : {created.id}")
        return SandboxHandle(container_id=created.id, runtime=self.runtime, warnings=tuple(created.warnings))

    async def _discard(self, container_id: str) -> None:
        try:
            await self.runtime.remove_container(container_id)
        except ContainerRuntimeError as e:
            logger.error(f"Failed to remove unstarted container {container_id[:12]}: {e}")
