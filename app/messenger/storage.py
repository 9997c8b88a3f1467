"""
Attachment and avatar file storage.

AttachmentStorage wraps the Django storage named by
``MESSENGER["STORAGE_ALIAS"]`` and applies the messenger's folder layout:

    <attachments folder>/<stored name>    message attachments
    <avatar folder>/<avatar name>         user avatars

Removal is best-effort: a failing delete is logged and reported as False,
never raised, because database rows must be deletable even when the file
backend misbehaves.
"""

from __future__ import annotations

import logging
import os
import uuid
from typing import TYPE_CHECKING

from django.core.files.storage import storages

from core.exceptions import ValidationError
from messenger.attachments import AttachmentReference
from messenger.constants import MessengerSettings, messenger_settings

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile

    from messenger.protocols import BlobStorage

logger = logging.getLogger(__name__)


class AttachmentStorage:
    """
    Folder-aware facade over a BlobStorage.

    Usage:
        storage = AttachmentStorage.default()
        reference = storage.store_upload(request.FILES["file"])
        storage.remove(reference)
    """

    def __init__(
        self,
        backend: BlobStorage | None = None,
        config: MessengerSettings | None = None,
    ):
        self.config = config or messenger_settings()
        self.backend = backend or storages[self.config.storage_alias]

    @classmethod
    def default(cls) -> AttachmentStorage:
        """Storage configured by settings."""
        return cls()

    # -------------------------------------------------------------------------
    # Paths and URLs
    # -------------------------------------------------------------------------

    def path_for(self, file_name: str) -> str:
        return f"{self.config.attachments_folder}/{file_name}"

    def avatar_path_for(self, avatar_name: str) -> str:
        return f"{self.config.avatar_folder}/{avatar_name}"

    def attachment_url(self, file_name: str) -> str:
        return self.backend.url(self.path_for(file_name))

    def avatar_url(self, avatar_name: str) -> str:
        return self.backend.url(self.avatar_path_for(avatar_name))

    # -------------------------------------------------------------------------
    # Uploads
    # -------------------------------------------------------------------------

    def validate_upload(self, upload: UploadedFile) -> str:
        """
        Check an uploaded file against the extension allowlists and size cap.

        Returns:
            The lower-cased extension of the upload

        Raises:
            ValidationError: INVALID_EXTENSION or FILE_TOO_LARGE
        """
        extension = os.path.splitext(upload.name or "")[1].lstrip(".").lower()
        allowed = set(self.config.allowed_images) | set(self.config.allowed_files)

        if not extension or extension not in allowed:
            raise ValidationError(
                "File extension not allowed",
                error_code="INVALID_EXTENSION",
                details={"extension": extension, "allowed": sorted(allowed)},
            )

        if upload.size is not None and upload.size > self.config.max_upload_size:
            raise ValidationError(
                "File size exceeds the upload limit",
                error_code="FILE_TOO_LARGE",
                details={"size": upload.size, "max_size": self.config.max_upload_size},
            )

        return extension

    def store_upload(self, upload: UploadedFile) -> AttachmentReference:
        """
        Validate and save an upload under a generated name.

        Returns:
            AttachmentReference with the stored name and the original name
        """
        extension = self.validate_upload(upload)
        new_name = f"{uuid.uuid4()}.{extension}"
        stored_path = self.backend.save(self.path_for(new_name), upload)
        # The backend may alter the name to avoid collisions
        new_name = stored_path.rsplit("/", 1)[-1]

        logger.debug(f"Stored attachment {new_name} ({upload.size} bytes)")
        return AttachmentReference(new_name=new_name, old_name=upload.name or "")

    # -------------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------------

    def remove(self, reference: AttachmentReference | None) -> bool:
        """
        Delete an attachment's file if it exists.

        Returns:
            True if a file was deleted; False if there was nothing to delete
            or the backend failed (logged)
        """
        if reference is None:
            return False

        path = self.path_for(reference.new_name)
        try:
            if not self.backend.exists(path):
                logger.debug(f"Attachment file {path} already absent")
                return False
            self.backend.delete(path)
        except Exception as exc:
            logger.warning(f"Could not delete attachment file {path}: {exc}")
            return False

        logger.debug(f"Deleted attachment file {path}")
        return True
