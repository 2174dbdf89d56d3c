"""Thumbnail uploads — multipart files written to the upload directory.

Stored names are "<epoch millis>-<original name>", with the original
name reduced to a safe character set. The file copy runs in a worker
thread so a large upload does not stall the event loop.
"""

import os
import re
import shutil
import time

import structlog
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from storefront.config import settings

logger = structlog.get_logger()

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def stored_filename(original: str) -> str:
    name = _UNSAFE.sub("_", os.path.basename(original or "")).strip("._") or "upload"
    return f"{int(time.time() * 1000)}-{name}"


def _write(upload: UploadFile, path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    upload.file.seek(0)
    with open(path, "wb") as fh:
        shutil.copyfileobj(upload.file, fh)


async def save_thumbnail(upload: UploadFile, upload_dir: str | None = None) -> str:
    """Persist an uploaded thumbnail and return the stored filename."""
    filename = stored_filename(upload.filename)
    path = os.path.join(upload_dir or settings.upload_dir, filename)
    await run_in_threadpool(_write, upload, path)
    logger.debug("storefront.upload.saved", filename=filename)
    return filename


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


async def discard_thumbnail(filename: str, upload_dir: str | None = None) -> None:
    """Remove a stored thumbnail whose product write did not go through."""
    path = os.path.join(upload_dir or settings.upload_dir, filename)
    await run_in_threadpool(_remove, path)
    logger.debug("storefront.upload.discarded", filename=filename)
