from typing import Any, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from interpreter_sandbox.models import ContainerState, CreatedContainer, ExecStream, SandboxHandle
from interpreter_sandbox.utils.logger import logger


def make_stream(*chunks: tuple[bytes | None, bytes | None], exec_id: str = "exec-1") -> ExecStream:
    return ExecStream(exec_id=exec_id, chunks=iter(chunks))


@pytest.fixture
def mock_runtime() -> Any:
    runtime = MagicMock()
    runtime.pull_image = AsyncMock()
    runtime.create_container = AsyncMock(return_value=CreatedContainer(id="abc123def4567890", warnings=[]))
    runtime.start_container = AsyncMock()
    runtime.attach_and_collect = AsyncMock(return_value=make_stream((b"hello\n", None)))
    runtime.exec_exit_code = AsyncMock(return_value=0)
    runtime.kill_container = AsyncMock()
    runtime.inspect_container = AsyncMock(return_value=ContainerState(status="exited", exit_code=137))
    runtime.remove_container = AsyncMock()
    runtime.close = AsyncMock()
    return runtime


@pytest.fixture
def handle(mock_runtime: Any) -> SandboxHandle:
    return SandboxHandle(container_id="abc123def4567890", runtime=mock_runtime)


@pytest.fixture
def log_messages() -> Generator[list[str], None, None]:
    messages: list[str] = []
    sink_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(sink_id)
