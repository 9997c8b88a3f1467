"""
Model field storing an AttachmentReference as inline JSON text.

The column keeps the ``{"new_name": ..., "old_name": ...}`` format so rows
written by other clients of the same table stay readable. Parsing happens
once here; the rest of the code only sees AttachmentReference or None.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import models

from messenger.attachments import AttachmentReference

logger = logging.getLogger(__name__)


class AttachmentField(models.TextField):
    """
    Nullable text column holding a serialized AttachmentReference.

    Accepted Python values: None, AttachmentReference, a dict with
    new_name/old_name, or the JSON text itself.
    """

    description = "Message attachment descriptor (JSON)"

    def from_db_value(self, value, expression, connection):
        if value is None or value == "":
            return None
        try:
            return AttachmentReference.from_json(value)
        except (ValueError, TypeError) as exc:
            # Unreadable descriptors are treated as "no attachment"
            logger.warning(f"Ignoring malformed attachment descriptor {value!r}: {exc}")
            return None

    def to_python(self, value):
        if value is None or value == "" or isinstance(value, AttachmentReference):
            return value or None
        try:
            if isinstance(value, dict):
                return AttachmentReference.from_dict(value)
            return AttachmentReference.from_json(value)
        except (ValueError, TypeError) as exc:
            raise ValidationError(
                "Invalid attachment descriptor: %(error)s",
                code="invalid",
                params={"error": exc},
            ) from exc

    def get_prep_value(self, value):
        value = self.to_python(value)
        if value is None:
            return None
        return value.to_json()

    def value_to_string(self, obj):
        value = self.value_from_object(obj)
        return value.to_json() if value is not None else ""
