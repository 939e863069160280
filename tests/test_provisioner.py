from pathlib import Path
from typing import Any

import pytest

from interpreter_sandbox.errors import ContainerRuntimeError, InfrastructureError, RuntimeUnavailableError
from interpreter_sandbox.models import CreatedContainer, ExecutionRequest, ResourcePolicy
from interpreter_sandbox.provisioner import KEEP_ALIVE_COMMAND, SandboxProvisioner


@pytest.fixture
def request_() -> ExecutionRequest:
    return ExecutionRequest(host_source_path=Path("/tmp/sub"), container_mount_path="/interpreter", image="python:3.12")


def test_build_spec(request_: ExecutionRequest) -> None:
    spec = SandboxProvisioner.build_spec(request_, ResourcePolicy(memory_limit_bytes=1234, stdin_open=False))

    assert spec.image == "python:3.12"
    assert len(spec.binds) == 1
    assert spec.binds[0].host_path == "/tmp/sub"
    assert spec.binds[0].container_path == "/interpreter"
    assert spec.binds[0].read_only is True
    assert spec.memory_limit_bytes == 1234
    assert spec.network_disabled is True
    assert spec.stdin_open is False
    assert spec.working_dir == "/interpreter"
    assert spec.command == KEEP_ALIVE_COMMAND


@pytest.mark.asyncio
async def test_prepare_pulls_image(mock_runtime: Any) -> None:
    await SandboxProvisioner(mock_runtime, "python:3.12").prepare()
    mock_runtime.pull_image.assert_awaited_once_with("python:3.12")


@pytest.mark.asyncio
async def test_prepare_failure_is_runtime_unavailable(mock_runtime: Any) -> None:
    mock_runtime.pull_image.side_effect = ContainerRuntimeError("Image pull failed")

    with pytest.raises(RuntimeUnavailableError):
        await SandboxProvisioner(mock_runtime, "missing:latest").prepare()


@pytest.mark.asyncio
async def test_provision_creates_then_starts(mock_runtime: Any, request_: ExecutionRequest) -> None:
    handle = await SandboxProvisioner(mock_runtime, "python:3.12").provision(request_, ResourcePolicy())

    assert handle.container_id == "abc123def4567890"
    assert handle.runtime is mock_runtime
    spec = mock_runtime.create_container.await_args.args[0]
    assert spec.working_dir == "/interpreter"
    mock_runtime.start_container.assert_awaited_once_with("abc123def4567890")


@pytest.mark.asyncio
async def test_provision_logs_creation_warnings(
    mock_runtime: Any, request_: ExecutionRequest, log_messages: list[str]
) -> None:
    mock_runtime.create_container.return_value = CreatedContainer(
        id="abc123def4567890", warnings=["Your kernel does not support swap limit capabilities"]
    )

    handle = await SandboxProvisioner(mock_runtime, "python:3.12").provision(request_, ResourcePolicy())

    assert handle.warnings == ("Your kernel does not support swap limit capabilities",)
    assert any(m.startswith("WARNING") and "swap limit" in m for m in log_messages)


@pytest.mark.asyncio
async def test_provision_create_failure(mock_runtime: Any, request_: ExecutionRequest) -> None:
    mock_runtime.create_container.side_effect = ContainerRuntimeError("Container creation failed")

    with pytest.raises(InfrastructureError, match="while container starting"):
        await SandboxProvisioner(mock_runtime, "python:3.12").provision(request_, ResourcePolicy())

    mock_runtime.start_container.assert_not_awaited()
    mock_runtime.remove_container.assert_not_awaited()


@pytest.mark.asyncio
async def test_provision_start_failure_discards_container(mock_runtime: Any, request_: ExecutionRequest) -> None:
    mock_runtime.start_container.side_effect = ContainerRuntimeError("Container start failed")

    with pytest.raises(InfrastructureError):
        await SandboxProvisioner(mock_runtime, "python:3.12").provision(request_, ResourcePolicy())

    mock_runtime.remove_container.assert_awaited_once_with("abc123def4567890")


@pytest.mark.asyncio
async def test_provision_start_failure_survives_discard_failure(
    mock_runtime: Any, request_: ExecutionRequest
) -> None:
    mock_runtime.start_container.side_effect = ContainerRuntimeError("Container start failed")
    mock_runtime.remove_container.side_effect = ContainerRuntimeError("Container removal failed")

    with pytest.raises(InfrastructureError) as excinfo:
        await SandboxProvisioner(mock_runtime, "python:3.12").provision(request_, ResourcePolicy())

    assert "start failed" in str(excinfo.value.__cause__)
