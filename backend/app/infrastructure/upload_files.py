"""Upload Files — request-scoped temporary copy of an uploaded file.

Invariants:
    - The temporary file is deleted on EVERY exit path (success, import error, exception mid-transfer)
    - Deletion failures are logged, never raised — cleanup is best-effort
    - The copy is always a .tmp file; readers parse it by content, not by name
"""

import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator
from uuid import uuid4

from fastapi import UploadFile

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def is_empty_upload(upload: UploadFile) -> bool:
    return not upload.filename or not upload.size


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Failed to delete temporary upload {path}: {e}")


@asynccontextmanager
async def temporary_upload(
    upload: UploadFile, directory: str | None = None,
) -> AsyncIterator[Path]:
    """Copy the upload to a temp file, yield its path, always delete it afterwards."""
    fd, raw_path = tempfile.mkstemp(prefix=f"{uuid4()}-", suffix=".tmp", dir=directory)
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "wb") as out:
            while chunk := await upload.read(_CHUNK_SIZE):
                out.write(chunk)
        yield path
    finally:
        _discard(path)
