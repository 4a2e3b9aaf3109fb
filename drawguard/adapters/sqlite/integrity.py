"""
SQLite integrity verification adapter.

Runs PRAGMA integrity_check on uploaded database files in a worker process,
so a large file never stalls request handling or health checks.

Implements: IntegrityCheckPort
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from concurrent.futures import Executor, ProcessPoolExecutor
from pathlib import Path

logger = logging.getLogger(__name__)


def check_database_integrity(path: str | Path) -> bool:
    """
    Check a SQLite file read-only.

    Returns True only if integrity_check reports "ok". A missing file, a
    file that is not a database or a corrupt one all yield False.
    """
    try:
        uri = f"{Path(path).resolve().as_uri()}?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
        try:
            row = conn.execute("PRAGMA integrity_check;").fetchone()
        finally:
            conn.close()
    except (sqlite3.Error, OSError, ValueError) as e:
        logger.info("Integrity check failed for %s: %s", path, e)
        return False

    return row is not None and row[0] == "ok"


class SQLiteIntegrityVerifier:
    """
    Integrity verifier backed by an executor.

    Uses a process pool by default; the pool is created on first use and
    owned by the verifier. An injected executor is never shut down here.
    """

    def __init__(
        self,
        executor: Executor | None = None,
        max_workers: int = 1,
        timeout_seconds: float | None = 300.0,
    ) -> None:
        self._executor = executor
        self._owns_executor = executor is None
        self._max_workers = max_workers
        self._timeout = timeout_seconds

    def _get_executor(self) -> Executor:
        if self._executor is None:
            self._executor = ProcessPoolExecutor(max_workers=self._max_workers)
        return self._executor

    def verify(self, path: str | Path) -> bool:
        """Verify a database file, blocking until the worker answers."""
        future = self._get_executor().submit(check_database_integrity, str(path))
        try:
            return bool(future.result(timeout=self._timeout))
        except Exception:
            logger.exception("Integrity worker failed for %s", path)
            return False

    async def verify_async(self, path: str | Path) -> bool:
        """Verify a database file without blocking the event loop."""
        loop = asyncio.get_running_loop()
        task = loop.run_in_executor(self._get_executor(), check_database_integrity, str(path))
        try:
            return bool(await asyncio.wait_for(task, timeout=self._timeout))
        except Exception:
            logger.exception("Integrity worker failed for %s", path)
            return False

    def shutdown(self) -> None:
        """Shut down the owned worker pool, if one was started."""
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
