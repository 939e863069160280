# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from interpreter_sandbox.errors import (
    ContainerRuntimeError,
    InfrastructureError,
    InterpreterError,
    ResourceLimitViolation,
)
from interpreter_sandbox.models import ContainerState, SandboxHandle
from interpreter_sandbox.utils.logger import logger


class SandboxReaper:
    """Kills, inspects and removes a sandbox once its execution is over.

    All three steps are attempted even when an earlier one fails, so the
    container is never leaked. The inspect-time classification wins over any
    other failure; otherwise the earliest failure is raised.
    """

    async def teardown(self, handle: SandboxHandle) -> ContainerState | None:
        """Destroy the sandbox.

        Args:
            handle: The sandbox to destroy.

        Returns:
            ContainerState | None: The final state observed before removal.

        Raises:
            ResourceLimitViolation: If the container was killed for exceeding its memory ceiling.
            InfrastructureError: If kill, inspect or remove failed, or the final state is unknown.
        """
        errors: list[InterpreterError] = []
        state: ContainerState | None = None

        try:
            await self._kill(handle)
        except InfrastructureError as e:
            errors.append(e)

        try:
            state = await self._check_execution_state(handle)
        except InterpreterError as e:
            errors.append(e)

        try:
            await self._remove(handle)
        except InfrastructureError as e:
            errors.append(e)

        if errors:
            error = self._prioritize(errors)
            for other in errors:
                if other is not error:
                    logger.error(f"Additional teardown failure for container {handle.short_id}: {other}")
            raise error
        return state

    @staticmethod
    def _prioritize(errors: list[InterpreterError]) -> InterpreterError:
        for error in errors:
            if isinstance(error, ResourceLimitViolation):
                return error
        return errors[0]

    async def _kill(self, handle: SandboxHandle) -> None:
        logger.debug(f"Killing container. ContainerId : {handle.container_id}")
        try:
            await handle.runtime.kill_container(handle.container_id)
        except ContainerRuntimeError as e:
            raise InfrastructureError("Interpreter exception occurred while destroying container.") from e
        logger.debug(f"Container killed. ContainerId : {handle.container_id}")

    async def _check_execution_state(self, handle: SandboxHandle) -> ContainerState:
        try:
            state = await handle.runtime.inspect_container(handle.container_id)
        except ContainerRuntimeError as e:
            raise InfrastructureError("Error occurred while checking after execution state.") from e

        if state is None:
            raise InfrastructureError("Code execution failed with unknown state.")
        if state.oom_killed:
            logger.warning(f"Container {handle.short_id} exceeded its memory limit")
            raise ResourceLimitViolation()

        logger.info(
            f"Container final state. ContainerId : {handle.container_id} ; "
            f"status : {state.status} ; exit code : {state.exit_code}"
        )
        return state

    async def _remove(self, handle: SandboxHandle) -> None:
        logger.debug(f"Removing container. ContainerId : {handle.container_id}")
        try:
            await handle.runtime.remove_container(handle.container_id)
        except ContainerRuntimeError as e:
            raise InfrastructureError("Interpreter exception occurred while destroying container.") from e
        logger.debug(f"Container removed. ContainerId : {handle.container_id}")
