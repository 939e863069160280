from typing import Any
from unittest.mock import patch

import pytest

from interpreter_sandbox.config import InterpreterConfig
from interpreter_sandbox.errors import ContainerRuntimeError, RuntimeUnavailableError
from interpreter_sandbox.facade import ExecutionPipeline
from interpreter_sandbox.models import ExecutionResult


@pytest.fixture
def config() -> InterpreterConfig:
    return InterpreterConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def patched_runtime(mock_runtime: Any) -> Any:
    with patch("interpreter_sandbox.factory.DockerRuntime", return_value=mock_runtime):
        yield mock_runtime


def test_construction_pulls_image(config: InterpreterConfig, patched_runtime: Any) -> None:
    with ExecutionPipeline(config):
        patched_runtime.pull_image.assert_awaited_once_with("python:3.12-slim")

    patched_runtime.close.assert_awaited_once()


def test_construction_fails_when_image_unavailable(config: InterpreterConfig, patched_runtime: Any) -> None:
    patched_runtime.pull_image.side_effect = ContainerRuntimeError("Image pull failed")

    with pytest.raises(RuntimeUnavailableError):
        ExecutionPipeline(config)

    patched_runtime.create_container.assert_not_awaited()
    patched_runtime.close.assert_awaited_once()


def test_run_sync(config: InterpreterConfig, patched_runtime: Any) -> None:
    with ExecutionPipeline(config) as pipeline:
        result = pipeline.run("/tmp/sub", "/interpreter")

    assert isinstance(result, ExecutionResult)
    assert result.stdout == "hello"
    patched_runtime.remove_container.assert_awaited_once()


def test_execute_source_sync(config: InterpreterConfig, patched_runtime: Any) -> None:
    with ExecutionPipeline(config) as pipeline:
        result = pipeline.execute_source("print('hello')")

    assert result.stdout == "hello"
    spec = patched_runtime.create_container.await_args.args[0]
    assert spec.binds[0].container_path == "/interpreter"
