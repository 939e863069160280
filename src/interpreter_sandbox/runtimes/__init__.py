from .docker import DockerRuntime

__all__ = ["DockerRuntime"]
