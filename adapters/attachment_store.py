"""Filesystem adapter for uploaded meal and post images.

Files live under ``<upload_dir>/<kind>/`` and are addressed by a stored
reference ``<upload_url_prefix>/<kind>/<filename>`` which is also the public
URL the application serves them from.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from app.config import settings
from app.exceptions import AttachmentError, ServiceValidationError
from domain.enums import AttachmentKind

logger = logging.getLogger("nutrilife.attachments")

_CHUNK_SIZE = 1024 * 256
_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")

_root: Optional[Path] = None
_url_prefix: str = settings.upload_url_prefix


@dataclass
class StagedFile:
    """An uploaded file waiting to be persisted"""

    filename: str
    stream: BinaryIO


# ------------------ Configuration ------------------
def configure(root: str | Path | None = None, url_prefix: str | None = None) -> Path:
    """Point the store at a directory and create the per-kind folders."""
    global _root, _url_prefix
    _root = Path(root or settings.upload_dir).resolve()
    if url_prefix is not None:
        _url_prefix = "/" + url_prefix.strip("/")
    try:
        for kind in AttachmentKind:
            (_root / kind.value).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise AttachmentError(f"Cannot prepare upload directory {_root}") from exc
    logger.info("Attachment store ready at %s", _root)
    return _root


def root() -> Path:
    """Upload root, configured lazily from settings on first use."""
    if _root is None:
        return configure()
    return _root


# ------------------ Naming ------------------
def build_filename(title: Optional[str], original_filename: Optional[str]) -> str:
    """``{sanitized title or "untitled"}-{unix ms}{original extension}``"""
    base = _UNSAFE_CHARS.sub("-", title) if title else "untitled"
    extension = Path(original_filename or "").suffix
    return f"{base}-{int(time.time() * 1000)}{extension}"


def reference_for(kind: AttachmentKind, filename: str) -> str:
    return f"{_url_prefix}/{kind.value}/{filename}"


def resolve(reference: str) -> Path:
    """Map a stored reference to its file path inside the upload root."""
    relative = reference
    if relative.startswith(_url_prefix + "/"):
        relative = relative[len(_url_prefix) + 1 :]
    base = root()
    path = (base / relative.lstrip("/")).resolve()
    if base not in path.parents:
        raise AttachmentError(f"Attachment reference outside upload root: {reference}")
    return path


# ------------------ Operations ------------------
def save(kind: AttachmentKind, upload: StagedFile, title: Optional[str] = None) -> str:
    """Persist an uploaded file and return its stored reference.

    Raises:
        ServiceValidationError: file exceeds ``max_upload_mb``
        AttachmentError: the file could not be written
    """
    directory = root() / kind.value
    max_bytes = settings.max_upload_mb * 1024 * 1024

    filename = build_filename(title, upload.filename)
    path = directory / filename
    while path.exists():
        # same title uploaded within the same millisecond
        time.sleep(0.001)
        filename = build_filename(title, upload.filename)
        path = directory / filename

    size = 0
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with path.open("xb") as out:
            while True:
                chunk = upload.stream.read(_CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise ServiceValidationError(
                        f"Image too large (> {settings.max_upload_mb} MB)"
                    )
                out.write(chunk)
    except ServiceValidationError:
        path.unlink(missing_ok=True)
        raise
    except OSError as exc:
        path.unlink(missing_ok=True)
        logger.error("attachment_write_failed path=%s error=%s", path, exc)
        raise AttachmentError(f"Could not store image {upload.filename}") from exc

    reference = reference_for(kind, filename)
    logger.info("attachment_saved reference=%s bytes=%d", reference, size)
    return reference


def exists(reference: str) -> bool:
    return resolve(reference).is_file()


def delete(reference: str) -> bool:
    """Remove a stored file. Returns False if it was already gone.

    Raises:
        AttachmentError: any filesystem failure other than a missing file
    """
    path = resolve(reference)
    try:
        path.unlink()
    except FileNotFoundError:
        logger.debug("attachment_already_missing reference=%s", reference)
        return False
    except OSError as exc:
        logger.error("attachment_delete_failed reference=%s error=%s", reference, exc)
        raise AttachmentError(f"Could not delete image {reference}") from exc
    logger.info("attachment_deleted reference=%s", reference)
    return True


def release(reference: Optional[str]) -> bool:
    """Best-effort delete used during cleanup: failures are logged, never raised."""
    if not reference:
        return False
    try:
        return delete(reference)
    except AttachmentError:
        logger.warning("attachment_orphaned reference=%s", reference)
        return False
