"""
Tests for the filesystem attachment store.
"""

import io
import re

import pytest

from test_fixtures import db_session, staged
from adapters import attachment_store
from app.config import settings
from app.exceptions import AttachmentError, ServiceValidationError
from domain.enums import AttachmentKind


def test_build_filename_sanitizes_title():
    name = attachment_store.build_filename("Chicken Salad!", "photo.JPG")
    assert re.fullmatch(r"Chicken-Salad--\d{13}\.JPG", name)


def test_build_filename_without_title_or_extension():
    assert re.fullmatch(r"untitled-\d{13}", attachment_store.build_filename(None, "blob"))


def test_save_and_delete(db_session):
    reference = attachment_store.save(AttachmentKind.POST, staged(content=b"abc"), "Tips")

    assert reference.startswith("/uploads/posts/Tips-")
    path = attachment_store.resolve(reference)
    assert path.parent == attachment_store.root() / "posts"
    assert path.read_bytes() == b"abc"

    assert attachment_store.delete(reference) is True
    # deleting again is not an error
    assert attachment_store.delete(reference) is False


def test_same_title_twice_gets_distinct_files(db_session):
    first = attachment_store.save(AttachmentKind.MEAL, staged(), "Lunch")
    second = attachment_store.save(AttachmentKind.MEAL, staged(), "Lunch")
    assert first != second
    assert attachment_store.exists(first) and attachment_store.exists(second)


def test_oversized_upload_is_rejected(db_session, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_mb", 0)

    with pytest.raises(ServiceValidationError):
        attachment_store.save(AttachmentKind.MEAL, staged(content=b"x" * 10), "Big")
    assert list((attachment_store.root() / "meals").iterdir()) == []


def test_resolve_rejects_paths_outside_root():
    with pytest.raises(AttachmentError):
        attachment_store.resolve("/uploads/../../etc/passwd")


def test_release_never_raises(monkeypatch):
    assert attachment_store.release(None) is False

    def broken_delete(reference):
        raise AttachmentError("permission denied")

    monkeypatch.setattr(attachment_store, "delete", broken_delete)
    assert attachment_store.release("/uploads/meals/x.png") is False


def test_save_write_failure_is_attachment_error(db_session):
    class BrokenStream(io.RawIOBase):
        def read(self, size=-1):
            raise OSError("device not ready")

    upload = attachment_store.StagedFile(filename="x.png", stream=BrokenStream())
    with pytest.raises(AttachmentError):
        attachment_store.save(AttachmentKind.MEAL, upload, "Broken")
    assert list((attachment_store.root() / "meals").iterdir()) == []
