# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

import asyncio
import codecs
import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import ClassVar

from interpreter_sandbox.errors import ExecutionIOError, ExecutionTimeoutError
from interpreter_sandbox.models import ExecutionResult, SandboxHandle
from interpreter_sandbox.models.request import DEFAULT_OUTPUT_LIMIT_BYTES
from interpreter_sandbox.utils.logger import logger


class BoundedOutput:
    """Accumulates one output stream, keeping at most `limit` bytes."""

    def __init__(self, limit: int):
        self.limit = limit
        self.truncated = False
        self._buffer = bytearray()

    def feed(self, chunk: bytes | None) -> None:
        if not chunk:
            return
        room = self.limit - len(self._buffer)
        if len(chunk) > room:
            self.truncated = True
        if room > 0:
            self._buffer.extend(chunk[:room])

    def text(self) -> str:
        # A non-final decode holds back a sequence cut at the limit
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        text = decoder.decode(bytes(self._buffer), final=False)
        # U+FFFD is wider than the byte it replaces
        return text.encode("utf-8")[: self.limit].decode("utf-8", errors="ignore")


class ExecutionRunner(ABC):
    """
    Runs one language's interpreter inside a provisioned sandbox and captures bounded output.

    Variants differ only in the source file they read, the command they invoke
    and the image they default to.
    """

    language: ClassVar[str]
    default_image: ClassVar[str]
    source_file: ClassVar[str]

    def __init__(
        self,
        stdout_limit: int = DEFAULT_OUTPUT_LIMIT_BYTES,
        stderr_limit: int = DEFAULT_OUTPUT_LIMIT_BYTES,
        timeout: float | None = None,
    ):
        self.stdout_limit = stdout_limit
        self.stderr_limit = stderr_limit
        self.timeout = timeout

    @abstractmethod
    def command(self) -> list[str]:
        """The interpreter invocation, run from the mount directory."""
        pass  # pragma: no cover

    async def execute(self, handle: SandboxHandle) -> ExecutionResult:
        """Run the interpreter and capture its output.

        Args:
            handle: The running sandbox.

        Returns:
            ExecutionResult: Trimmed stdout and stderr, each bounded to its byte limit.

        Raises:
            ExecutionIOError: If attaching or reading fails.
            ExecutionTimeoutError: If the configured timeout elapses first.
        """
        logger.info(f"Executing {self.language} code in sandbox {handle.short_id}")
        stdout = BoundedOutput(self.stdout_limit)
        stderr = BoundedOutput(self.stderr_limit)

        start_time = time.time()
        try:
            stream = await handle.runtime.attach_and_collect(handle.container_id, self.command())
            collect = asyncio.to_thread(self._drain, stream.chunks, stdout, stderr)
            if self.timeout is None:
                await collect
            else:
                try:
                    await asyncio.wait_for(collect, timeout=self.timeout)
                except asyncio.TimeoutError as e:
                    logger.warning(f"Execution timed out ({self.timeout}s) in sandbox {handle.short_id}")
                    raise ExecutionTimeoutError(self.timeout) from e
            exit_code = await handle.runtime.exec_exit_code(stream.exec_id)
        except ExecutionTimeoutError:
            raise
        except Exception as e:
            logger.error(f"Execution failed in sandbox {handle.short_id}: {e}")
            raise ExecutionIOError("Interpreter exception occurred") from e
        duration = time.time() - start_time

        if stdout.truncated or stderr.truncated:
            logger.debug(
                f"Output truncated in sandbox {handle.short_id} "
                f"(stdout={stdout.truncated}, stderr={stderr.truncated})"
            )

        return ExecutionResult(
            stdout=stdout.text(),
            stderr=stderr.text(),
            exit_code=exit_code,
            stdout_truncated=stdout.truncated,
            stderr_truncated=stderr.truncated,
            execution_duration=duration,
        )

    @staticmethod
    def _drain(
        chunks: Iterator[tuple[bytes | None, bytes | None]],
        stdout: BoundedOutput,
        stderr: BoundedOutput,
    ) -> None:
        for out, err in chunks:
            stdout.feed(out)
            stderr.feed(err)
            if stdout.truncated and stderr.truncated:
                # Nothing more can be kept; the reaper's kill ends the process
                break
