import asyncio
import shutil
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles  # type: ignore[import-untyped]

from interpreter_sandbox.utils.logger import logger


@asynccontextmanager
async def stage_source(code: str, filename: str, base_dir: Path | None = None) -> AsyncIterator[Path]:
    """Write a submission into a fresh private directory for bind mounting.

    Yields the absolute directory path; the directory is deleted on exit.
    """
    staging_dir = Path(await asyncio.to_thread(tempfile.mkdtemp, prefix="interpreter-", dir=base_dir)).resolve()
    try:
        async with aiofiles.open(staging_dir / filename, "w", encoding="utf-8") as f:
            await f.write(code)
        logger.debug(f"Staged {len(code)} characters to {staging_dir / filename}")
        yield staging_dir
    finally:
        await asyncio.to_thread(shutil.rmtree, staging_dir, ignore_errors=True)
