from pathlib import Path

import pytest
from pydantic import ValidationError

from interpreter_sandbox.models import ExecutionRequest, ExecutionResult, ResourcePolicy


def test_execution_request_creation() -> None:
    request = ExecutionRequest(host_source_path=Path("/tmp/sub"), container_mount_path="/interpreter", image="python:3.12")
    assert request.host_source_path == Path("/tmp/sub")
    assert request.container_mount_path == "/interpreter"
    assert request.image == "python:3.12"


def test_execution_request_is_immutable() -> None:
    request = ExecutionRequest(host_source_path=Path("/tmp/sub"), container_mount_path="/interpreter", image="python")
    with pytest.raises(ValidationError):
        request.image = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    "host, container",
    [("relative/dir", "/interpreter"), ("/tmp/sub", "interpreter")],
)
def test_execution_request_rejects_relative_paths(host: str, container: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        ExecutionRequest(host_source_path=Path(host), container_mount_path=container, image="python")
    assert "must be absolute" in str(excinfo.value)


def test_resource_policy_defaults() -> None:
    policy = ResourcePolicy()
    assert policy.memory_limit_bytes == 32 * 1024 * 1024
    assert policy.network_disabled is True
    assert policy.bind_read_only is True
    assert policy.stdin_open is True
    assert policy.stdout_limit_bytes == 1024
    assert policy.stderr_limit_bytes == 1024


def test_resource_policy_cannot_enable_network_or_writable_bind() -> None:
    with pytest.raises(ValidationError):
        ResourcePolicy(network_disabled=False)  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        ResourcePolicy(bind_read_only=False)  # type: ignore[arg-type]


def test_resource_policy_rejects_non_positive_memory() -> None:
    with pytest.raises(ValidationError):
        ResourcePolicy(memory_limit_bytes=0)


def test_execution_result_trims_and_defaults() -> None:
    result = ExecutionResult(stdout="  hello\n", stderr=None)  # type: ignore[arg-type]
    assert result.stdout == "hello"
    assert result.stderr == ""
    assert result.exit_code is None
    assert result.stdout_truncated is False


def test_execution_result_streams_never_absent() -> None:
    result = ExecutionResult()
    assert result.stdout == ""
    assert result.stderr == ""
