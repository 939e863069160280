import asyncio
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

import docker
from docker.errors import APIError, DockerException
from docker.utils import parse_repository_tag

from interpreter_sandbox.errors import ContainerRuntimeError
from interpreter_sandbox.models import ContainerSpec, ContainerState, CreatedContainer, ExecStream
from interpreter_sandbox.runtime import ContainerRuntime
from interpreter_sandbox.utils.logger import logger

T = TypeVar("T")

# Docker answers 409 Conflict when killing a container that is not running
_NOT_RUNNING = 409


class DockerRuntime(ContainerRuntime):
    """
    Docker-based implementation of the ContainerRuntime.

    Uses the low-level docker-py API so creation warnings and demultiplexed
    exec output are available. Every blocking call is offloaded to a thread.
    """

    def __init__(self, base_url: str | None = None, client: docker.DockerClient | None = None):
        if client is None:
            try:
                client = docker.DockerClient(base_url=base_url) if base_url else docker.from_env()
            except (DockerException, OSError) as e:
                raise ContainerRuntimeError(f"Docker daemon unreachable: {e}") from e
        self.client = client
        self.api = client.api

    async def _call(self, action: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except APIError as e:
            raise ContainerRuntimeError(f"{action} failed: {e.explanation or e}", status_code=e.status_code) from e
        except (DockerException, OSError) as e:
            raise ContainerRuntimeError(f"{action} failed: {e}") from e

    async def pull_image(self, image: str) -> None:
        repository, tag = parse_repository_tag(image)
        logger.info(f"Pulling image {repository}:{tag or 'latest'}")
        # Without a tag docker-py pulls every tag of the repository
        await self._call("Image pull", self.client.images.pull, repository, tag=tag or "latest")

    async def create_container(self, spec: ContainerSpec) -> CreatedContainer:
        binds = {
            bind.host_path: {"bind": bind.container_path, "mode": "ro" if bind.read_only else "rw"}
            for bind in spec.binds
        }
        host_config = self.api.create_host_config(
            binds=binds,
            mem_limit=spec.memory_limit_bytes,
            # Equal memory and memory+swap limits disable swap
            memswap_limit=spec.memory_limit_bytes,
        )
        response = await self._call(
            "Container creation",
            self.api.create_container,
            spec.image,
            host_config=host_config,
            network_disabled=spec.network_disabled,
            stdin_open=spec.stdin_open,
            working_dir=spec.working_dir,
            command=list(spec.command) if spec.command else None,
        )
        return CreatedContainer(id=response["Id"], warnings=response.get("Warnings") or [])

    async def start_container(self, container_id: str) -> None:
        await self._call("Container start", self.api.start, container_id)

    async def attach_and_collect(self, container_id: str, command: list[str]) -> ExecStream:
        created = await self._call(
            "Exec creation", self.api.exec_create, container_id, command, stdout=True, stderr=True
        )
        exec_id = created["Id"]
        chunks = await self._call("Exec attach", self.api.exec_start, exec_id, stream=True, demux=True)
        return ExecStream(exec_id=exec_id, chunks=self._translate_stream(chunks))

    @staticmethod
    def _translate_stream(
        chunks: Iterator[tuple[bytes | None, bytes | None]],
    ) -> Iterator[tuple[bytes | None, bytes | None]]:
        try:
            yield from chunks
        except (DockerException, OSError) as e:
            raise ContainerRuntimeError(f"Reading exec output failed: {e}") from e

    async def exec_exit_code(self, exec_id: str) -> int | None:
        info = await self._call("Exec inspection", self.api.exec_inspect, exec_id)
        if info.get("Running"):
            return None
        exit_code = info.get("ExitCode")
        return int(exit_code) if exit_code is not None else None

    async def kill_container(self, container_id: str) -> None:
        try:
            await self._call("Container kill", self.api.kill, container_id)
        except ContainerRuntimeError as e:
            if e.status_code != _NOT_RUNNING:
                raise
            logger.debug(f"Container {container_id[:12]} already stopped")

    async def inspect_container(self, container_id: str) -> ContainerState | None:
        info = await self._call("Container inspection", self.api.inspect_container, container_id)
        state = info.get("State")
        if not state:
            return None
        return ContainerState(
            oom_killed=bool(state.get("OOMKilled")),
            running=bool(state.get("Running")),
            exit_code=state.get("ExitCode"),
            status=state.get("Status"),
        )

    async def remove_container(self, container_id: str) -> None:
        await self._call("Container removal", self.api.remove_container, container_id, v=True, force=True)

    async def close(self) -> None:
        await asyncio.to_thread(self.client.close)
