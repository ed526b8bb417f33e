"""
Attachment lifecycle shared by the meal and post services.

File mutations cannot join the database transaction, so they are ordered to
never leak a file: a freshly stored upload is removed again when the record
write fails, and a replaced image is removed as soon as its successor is set.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from adapters import attachment_store
from adapters.attachment_store import StagedFile
from domain.enums import AttachmentKind

logger = logging.getLogger("nutrilife.attachments.lifecycle")


def store_upload(
    kind: AttachmentKind, image: Optional[StagedFile], title: Optional[str]
) -> Optional[str]:
    """Persist a staged upload, returning its reference (None when nothing was staged)."""
    if image is None:
        return None
    return attachment_store.save(kind, image, title)


@contextmanager
def discard_on_failure(reference: Optional[str]) -> Iterator[None]:
    """Remove a just-stored upload if the enclosed record write raises."""
    try:
        yield
    except Exception:
        if reference:
            logger.warning(f"upload_discarded reference={reference}")
            attachment_store.release(reference)
        raise


def replace_image(record, new_reference: Optional[str]) -> None:
    """Point record.image at a new upload, deleting the previous file first.

    Without a new upload the current reference is kept unchanged.
    """
    if not new_reference:
        return
    if record.image and record.image != new_reference:
        attachment_store.release(record.image)
    record.image = new_reference


def release_image(record) -> None:
    """Delete the file a record points at; a missing file is not an error."""
    if record.image:
        attachment_store.release(record.image)
