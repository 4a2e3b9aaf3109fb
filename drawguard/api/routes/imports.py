"""
Import API routes.

Verifies uploaded SQLite databases. File I/O runs in the threadpool and
the integrity check in a worker process, so the event loop stays free.
"""

import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from drawguard.api.deps import Settings, get_integrity_verifier, get_settings
from drawguard.core.ports.integrity import IntegrityCheckPort

router = APIRouter()

CHUNK_SIZE = 1024 * 1024


def spool_upload(source: BinaryIO, upload_dir: Path) -> Path:
    """Copy an upload to a temporary file under upload_dir."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=upload_dir, suffix=".db", delete=False) as target:
        shutil.copyfileobj(source, target, CHUNK_SIZE)
    return Path(target.name)


def remove_upload(path: Path) -> None:
    path.unlink(missing_ok=True)


@router.post("/sqlite/verify")
async def verify_sqlite(
    db: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
    verifier: IntegrityCheckPort = Depends(get_integrity_verifier),
) -> dict[str, bool]:
    """Check that an uploaded file is an intact SQLite database."""
    path = await run_in_threadpool(spool_upload, db.file, settings.upload_dir)
    try:
        valid = await verifier.verify_async(path)
    finally:
        await run_in_threadpool(remove_upload, path)
    return {"valid": valid}
