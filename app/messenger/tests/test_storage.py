"""
Tests for AttachmentStorage.

Uses the in-memory FakeBlobStorage for path and removal logic, and Django's
FileSystemStorage (under a per-test MEDIA_ROOT) for real uploads.
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from core.exceptions import ValidationError
from messenger.attachments import AttachmentReference
from messenger.storage import AttachmentStorage
from messenger.tests.fakes import FakeBlobStorage


class TestPathsAndUrls:
    """Tests for folder layout."""

    def test_paths(self, fake_storage):
        assert fake_storage.path_for("a.png") == "attachments/a.png"
        assert fake_storage.avatar_path_for("me.png") == "users-avatar/me.png"

    def test_urls(self, fake_storage):
        assert fake_storage.attachment_url("a.png") == "/media/attachments/a.png"
        assert fake_storage.avatar_url("me.png") == "/media/users-avatar/me.png"

    def test_folder_comes_from_settings(self, settings):
        settings.MESSENGER["ATTACHMENTS"]["FOLDER"] = "uploads/chat"

        storage = AttachmentStorage(backend=FakeBlobStorage())

        assert storage.path_for("a.png") == "uploads/chat/a.png"


class TestValidateUpload:
    """Tests for validate_upload()."""

    def test_accepts_allowlisted_image(self, fake_storage):
        upload = SimpleUploadedFile("Photo.PNG", b"png-bytes")

        assert fake_storage.validate_upload(upload) == "png"

    def test_accepts_allowlisted_file(self, fake_storage):
        assert fake_storage.validate_upload(SimpleUploadedFile("a.zip", b"zip")) == "zip"

    @pytest.mark.parametrize("name", ["virus.exe", "no-extension", "archive.tar.gz"])
    def test_rejects_other_extensions(self, fake_storage, name):
        with pytest.raises(ValidationError) as exc_info:
            fake_storage.validate_upload(SimpleUploadedFile(name, b"data"))

        assert exc_info.value.error_code == "INVALID_EXTENSION"

    def test_rejects_oversized_upload(self, fake_storage):
        # MAX_UPLOAD_SIZE is 1 MB in the messenger test configuration
        upload = SimpleUploadedFile("big.txt", b"x" * (1048576 + 1))

        with pytest.raises(ValidationError) as exc_info:
            fake_storage.validate_upload(upload)

        assert exc_info.value.error_code == "FILE_TOO_LARGE"

    def test_accepts_upload_at_the_limit(self, fake_storage):
        upload = SimpleUploadedFile("limit.txt", b"x" * 1048576)

        assert fake_storage.validate_upload(upload) == "txt"


class TestStoreUpload:
    """Tests for store_upload() against the real file system storage."""

    def test_saves_under_generated_name(self, media_storage):
        storage = AttachmentStorage.default()
        upload = SimpleUploadedFile("holiday.jpg", b"jpeg-bytes")

        reference = storage.store_upload(upload)

        assert reference.old_name == "holiday.jpg"
        assert reference.new_name.endswith(".jpg")
        assert reference.new_name != "holiday.jpg"
        assert (media_storage / "attachments" / reference.new_name).read_bytes() == b"jpeg-bytes"

    def test_rejected_upload_is_not_saved(self, media_storage):
        storage = AttachmentStorage.default()

        with pytest.raises(ValidationError):
            storage.store_upload(SimpleUploadedFile("run.sh", b"#!/bin/sh"))

        assert not (media_storage / "attachments").exists()


class TestRemove:
    """Tests for best-effort remove()."""

    def test_removes_existing_file(self, blob_backend, fake_storage):
        blob_backend.files["attachments/a.png"] = b""

        assert fake_storage.remove(AttachmentReference("a.png")) is True
        assert blob_backend.deleted == ["attachments/a.png"]

    def test_missing_file_is_not_an_error(self, blob_backend, fake_storage):
        assert fake_storage.remove(AttachmentReference("gone.png")) is False
        assert blob_backend.deleted == []

    def test_none_reference(self, fake_storage):
        assert fake_storage.remove(None) is False

    def test_backend_failure_is_logged_and_swallowed(self, caplog):
        backend = FakeBlobStorage(files=["attachments/b.zip"], fail_on_delete=True)
        storage = AttachmentStorage(backend=backend)

        assert storage.remove(AttachmentReference("b.zip")) is False
        assert "Could not delete attachment file attachments/b.zip" in caplog.text
