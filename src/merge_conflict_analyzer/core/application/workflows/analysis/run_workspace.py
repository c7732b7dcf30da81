import asyncio
import shutil
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog

logger = structlog.get_logger()


@asynccontextmanager
async def run_workspace(root: Path, repo: str, run_id: str) -> AsyncIterator[Path]:
    """Create a working directory unique to one run and always remove it afterwards.

    Keyed by run id rather than repository name, so concurrent runs against
    the same repository never share or delete each other's clone. Removing a
    full clone can take seconds, so it runs in a worker thread.
    """
    root.mkdir(parents=True, exist_ok=True)
    workdir = Path(tempfile.mkdtemp(prefix=f"{repo}-{run_id[:8]}-", dir=root))
    logger.info("Run workspace created", workdir=str(workdir))
    try:
        yield workdir
    finally:
        await asyncio.to_thread(shutil.rmtree, workdir, ignore_errors=True)
        if workdir.exists():
            logger.warning("Run workspace could not be fully removed", workdir=str(workdir))
        else:
            logger.info("Run workspace removed", workdir=str(workdir))
