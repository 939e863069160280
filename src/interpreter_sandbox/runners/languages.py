# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

from interpreter_sandbox.runners.base import ExecutionRunner


class PythonRunner(ExecutionRunner):
    language = "python"
    default_image = "python:3.12-slim"
    source_file = "main.py"

    def command(self) -> list[str]:
        return ["python", "-u", self.source_file]


class BashRunner(ExecutionRunner):
    language = "bash"
    default_image = "bash:5.2"
    source_file = "main.sh"

    def command(self) -> list[str]:
        return ["bash", self.source_file]


class RRunner(ExecutionRunner):
    language = "r"
    default_image = "r-base:4.4.1"
    source_file = "main.R"

    def command(self) -> list[str]:
        return ["Rscript", self.source_file]


RUNNERS: dict[str, type[ExecutionRunner]] = {
    runner.language: runner for runner in (PythonRunner, BashRunner, RRunner)
}
