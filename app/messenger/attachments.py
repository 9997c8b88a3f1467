"""
Attachment reference value type.

An attachment is stored inline on its message as the JSON object
``{"new_name": ..., "old_name": ...}``:

    new_name: system-generated stored file name (collision resistant)
    old_name: user-supplied original file name (display only)

AttachmentReference is the parsed form; messenger.fields.AttachmentField
converts between the two at the database boundary.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Iterable

from django.utils.html import escape

from messenger.constants import ATTACHMENT_KIND


@dataclass(frozen=True)
class AttachmentReference:
    """
    A stored file bound to exactly one message.

    Attributes:
        new_name: Stored file name inside the attachments folder
        old_name: Original file name supplied by the uploader
    """

    new_name: str
    old_name: str = ""

    @property
    def extension(self) -> str:
        """Lower-cased extension of the stored name, without the dot."""
        return os.path.splitext(self.new_name)[1].lstrip(".").lower()

    @property
    def title(self) -> str:
        """Original file name, trimmed and HTML-escaped for display."""
        return escape(self.old_name.strip())

    def kind(self, image_extensions: Iterable[str]) -> str:
        """
        Classify the attachment.

        Args:
            image_extensions: Allowlist of image extensions (without dots)

        Returns:
            "image" if the stored file's extension is allowlisted, else "file"

        Matching ignores case on both sides, so a stored "X.PNG" is an image
        even when the allowlist only names "png".
        """
        allowed = {ext.lower().lstrip(".") for ext in image_extensions}
        if self.extension and self.extension in allowed:
            return ATTACHMENT_KIND.IMAGE
        return ATTACHMENT_KIND.FILE

    def is_image(self, image_extensions: Iterable[str]) -> bool:
        return self.kind(image_extensions) == ATTACHMENT_KIND.IMAGE

    def to_dict(self) -> dict[str, str]:
        return {"new_name": self.new_name, "old_name": self.old_name}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> AttachmentReference:
        """
        Build a reference from its stored mapping.

        Raises:
            ValueError: If new_name is missing or empty
        """
        new_name = data.get("new_name")
        if not new_name or not isinstance(new_name, str):
            raise ValueError("Attachment descriptor requires a non-empty new_name")
        old_name = data.get("old_name") or ""
        return cls(new_name=new_name, old_name=str(old_name))

    @classmethod
    def from_json(cls, raw: str) -> AttachmentReference:
        """
        Parse the stored JSON descriptor.

        Raises:
            ValueError: If the text is not a JSON object with a new_name
        """
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("Attachment descriptor must be a JSON object")
        return cls.from_dict(data)
