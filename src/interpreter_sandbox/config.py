from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from interpreter_sandbox.models import ResourcePolicy
from interpreter_sandbox.models.request import DEFAULT_MEMORY_LIMIT_BYTES, DEFAULT_OUTPUT_LIMIT_BYTES


class InterpreterConfig(BaseSettings):
    """
    Configuration for the interpreter sandbox pipeline.
    """

    language: Literal["python", "bash", "r"] = "python"
    # Overrides the runner's default image when set
    image: str | None = None

    memory_limit_bytes: int = Field(default=DEFAULT_MEMORY_LIMIT_BYTES, gt=0)
    stdout_limit_bytes: int = Field(default=DEFAULT_OUTPUT_LIMIT_BYTES, gt=0)
    stderr_limit_bytes: int = Field(default=DEFAULT_OUTPUT_LIMIT_BYTES, gt=0)
    stdin_open: bool = True

    # None leaves hung processes to the reaper's kill step
    execution_timeout: float | None = Field(default=None, gt=0)

    container_mount_path: str = "/interpreter"
    staging_dir: Path | None = None

    # None means docker.from_env()
    docker_base_url: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="INTERPRETER_SANDBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def resource_policy(self) -> ResourcePolicy:
        return ResourcePolicy(
            memory_limit_bytes=self.memory_limit_bytes,
            stdin_open=self.stdin_open,
            stdout_limit_bytes=self.stdout_limit_bytes,
            stderr_limit_bytes=self.stderr_limit_bytes,
        )
