"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from fastapi import UploadFile
from sqlalchemy.orm import Session

from adapters.attachment_store import StagedFile
from domain.models import get_db_session


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def staged_image(image: Optional[UploadFile]) -> Optional[StagedFile]:
    """Turn the optional multipart `image` field into a StagedFile.

    Clients that submit the field without choosing a file send an empty
    filename; that counts as no upload.
    """
    if image is None or not image.filename:
        return None
    return StagedFile(filename=image.filename, stream=image.file)
