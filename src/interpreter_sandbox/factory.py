from interpreter_sandbox.config import InterpreterConfig
from interpreter_sandbox.errors import ContainerRuntimeError, RuntimeUnavailableError
from interpreter_sandbox.pipeline import ExecutionPipelineAsync
from interpreter_sandbox.runners import RUNNERS, ExecutionRunner
from interpreter_sandbox.runtimes.docker import DockerRuntime


class PipelineFactory:
    """
    Factory to create ExecutionPipelineAsync instances based on configuration.
    """

    @staticmethod
    def get_runner(config: InterpreterConfig) -> ExecutionRunner:
        """
        Returns the runner variant for the configured language.
        """
        try:
            runner_cls = RUNNERS[config.language]
        except KeyError:
            # Unreachable through pydantic validation, kept for direct construction
            raise ValueError(f"Unsupported language: {config.language}") from None  # pragma: no cover
        return runner_cls(
            stdout_limit=config.stdout_limit_bytes,
            stderr_limit=config.stderr_limit_bytes,
            timeout=config.execution_timeout,
        )

    @staticmethod
    def get_pipeline(config: InterpreterConfig) -> ExecutionPipelineAsync:
        """
        Returns an unprepared pipeline wired to the Docker runtime.

        Raises:
            RuntimeUnavailableError: If the Docker daemon cannot be reached.
        """
        runner = PipelineFactory.get_runner(config)
        try:
            runtime = DockerRuntime(base_url=config.docker_base_url)
        except ContainerRuntimeError as e:
            raise RuntimeUnavailableError("Container runtime is unavailable.") from e

        return ExecutionPipelineAsync(
            runtime=runtime,
            runner=runner,
            image=config.image or runner.default_image,
            policy=config.resource_policy(),
            container_mount_path=config.container_mount_path,
            staging_dir=config.staging_dir,
        )
