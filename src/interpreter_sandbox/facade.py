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

from interpreter_sandbox.config import InterpreterConfig
from interpreter_sandbox.factory import PipelineFactory
from interpreter_sandbox.models import ExecutionResult


class ExecutionPipeline:
    """Sync Facade for ExecutionPipelineAsync (The Facade).

    Construction pulls the image, so an unavailable image fails here, before
    any request is accepted. Methods run the async core via anyio.run.
    """

    def __init__(self, config: InterpreterConfig | None = None):
        self._async = PipelineFactory.get_pipeline(config or InterpreterConfig())
        try:
            anyio.run(self._async.prepare)
        except BaseException:
            anyio.run(self._async.close)
            raise

    def __enter__(self) -> "ExecutionPipeline":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def run(self, host_path: str | Path, container_path: str) -> ExecutionResult:
        """Executes mounted source synchronously. See ExecutionPipelineAsync.run."""
        return anyio.run(self._async.run, host_path, container_path)

    def execute_source(self, code: str) -> ExecutionResult:
        """Stages and executes `code` synchronously."""
        return anyio.run(self._async.execute_source, code)

    def close(self) -> None:
        anyio.run(self._async.close)
