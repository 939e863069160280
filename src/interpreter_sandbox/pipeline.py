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

import anyio

from interpreter_sandbox.errors import InfrastructureError
from interpreter_sandbox.models import ExecutionRequest, ExecutionResult, ResourcePolicy, SandboxHandle
from interpreter_sandbox.provisioner import SandboxProvisioner
from interpreter_sandbox.reaper import SandboxReaper
from interpreter_sandbox.runners import ExecutionRunner
from interpreter_sandbox.runtime import ContainerRuntime
from interpreter_sandbox.staging import stage_source
from interpreter_sandbox.utils.logger import logger


class ExecutionPipelineAsync:
    """Async-native execution pipeline (The Core).

    Provision, execute and teardown run as one unit of work per call. The
    pipeline holds no per-request state, so calls may run concurrently, each
    with its own container.
    """

    def __init__(
        self,
        runtime: ContainerRuntime,
        runner: ExecutionRunner,
        image: str,
        policy: ResourcePolicy | None = None,
        container_mount_path: str = "/interpreter",
        staging_dir: Path | None = None,
    ):
        """Initializes the pipeline.

        Args:
            runtime: The container runtime, shared by every request.
            runner: The language variant driving the interpreter.
            image: The image every sandbox is created from.
            policy: Resource and isolation constraints.
            container_mount_path: Where `execute_source` mounts staged code.
            staging_dir: Parent directory for staged code, system temp when None.
        """
        self.runtime = runtime
        self.runner = runner
        self.image = image
        self.policy = policy or ResourcePolicy()
        self.container_mount_path = container_mount_path
        self.staging_dir = staging_dir
        self.provisioner = SandboxProvisioner(runtime, image)
        self.reaper = SandboxReaper()
        self._prepared = False

    async def prepare(self) -> None:
        """Pulls the image. Must succeed before any request is accepted."""
        await self.provisioner.prepare()
        self._prepared = True
        logger.info(f"Pipeline ready for {self.runner.language} on {self.image}")

    async def close(self) -> None:
        await self.runtime.close()

    async def __aenter__(self) -> "ExecutionPipelineAsync":
        await self.prepare()
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.close()

    async def run(self, host_path: str | Path, container_path: str) -> ExecutionResult:
        """Executes the source mounted from `host_path` in a fresh sandbox.

        Args:
            host_path: Absolute host directory holding the source.
            container_path: Absolute mount point and working directory inside the sandbox.

        Returns:
            ExecutionResult: Trimmed, byte-bounded stdout and stderr.

        Raises:
            InfrastructureError: If the runtime fails. Output captured before a
                teardown failure is attached as `partial_result`.
            ResourceLimitViolation: If the sandbox exceeded its memory ceiling.
            ExecutionIOError: If reading the sandbox output failed.
        """
        if not self._prepared:
            raise RuntimeError("Pipeline not prepared")

        request = ExecutionRequest(
            host_source_path=Path(host_path),
            container_mount_path=container_path,
            image=self.image,
        )
        handle = await self.provisioner.provision(request, self.policy)
        result: ExecutionResult | None = None
        try:
            result = await self.runner.execute(handle)
            return result
        finally:
            with anyio.CancelScope(shield=True):
                await self._teardown(handle, result)

    async def _teardown(self, handle: SandboxHandle, result: ExecutionResult | None) -> None:
        try:
            await self.reaper.teardown(handle)
        except InfrastructureError as e:
            if result is not None:
                logger.error(f"Teardown failed after successful execution on {handle.short_id}: {e}")
                e.partial_result = result
            raise

    async def execute_source(self, code: str) -> ExecutionResult:
        """Stages `code` as the runner's source file and runs it.

        Args:
            code: The submitted source code.

        Returns:
            ExecutionResult: The bounded output of the run.
        """
        async with stage_source(code, self.runner.source_file, self.staging_dir) as host_dir:
            return await self.run(host_dir, self.container_mount_path)
