"""
Tests for AttachmentReference.

Covers classification, display title escaping and parsing of the stored
descriptor, including the malformed inputs the database may hold.
"""

import pytest

from messenger.attachments import AttachmentReference

IMAGES = ["png", "jpg", "jpeg", "gif"]


class TestAttachmentKind:
    """Tests for kind() / is_image()."""

    def test_allowlisted_extension_is_image(self):
        assert AttachmentReference("a1.png", "cat.png").kind(IMAGES) == "image"

    def test_other_extension_is_file(self):
        reference = AttachmentReference("b2.zip", "archive.zip")

        assert reference.kind(IMAGES) == "file"
        assert reference.is_image(IMAGES) is False

    def test_extension_match_ignores_case(self):
        """Stored names with upper-case extensions still count as images."""
        assert AttachmentReference("c3.JPG", "photo.JPG").is_image(IMAGES) is True

    def test_name_without_extension_is_file(self):
        assert AttachmentReference("noextension", "README").kind(IMAGES) == "file"

    def test_kind_uses_stored_name_not_original_name(self):
        """A renamed upload is classified by what is actually stored."""
        assert AttachmentReference("d4.txt", "looks-like.png").kind(IMAGES) == "file"


class TestAttachmentTitle:
    """Tests for the display title."""

    def test_title_is_html_escaped(self):
        reference = AttachmentReference("e5.txt", '<script>alert("x")</script>.txt')

        assert reference.title == (
            "&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;.txt"
        )

    def test_title_is_trimmed(self):
        assert AttachmentReference("f6.txt", "  notes.txt \n").title == "notes.txt"


class TestAttachmentParsing:
    """Tests for from_json / from_dict."""

    def test_parses_stored_descriptor(self):
        reference = AttachmentReference.from_json(
            '{"new_name": "g7.png", "old_name": "me.png"}'
        )

        assert reference == AttachmentReference("g7.png", "me.png")

    def test_missing_old_name_defaults_to_empty(self):
        assert AttachmentReference.from_dict({"new_name": "h8.png"}).old_name == ""

    @pytest.mark.parametrize(
        "raw",
        ["not json", "[1, 2]", '{"old_name": "x.png"}', '{"new_name": ""}'],
    )
    def test_rejects_malformed_descriptors(self, raw):
        with pytest.raises(ValueError):
            AttachmentReference.from_json(raw)

    def test_to_json_keeps_stored_format(self):
        reference = AttachmentReference("i9.zip", "backup.zip")

        assert AttachmentReference.from_json(reference.to_json()) == reference
        assert reference.to_dict() == {"new_name": "i9.zip", "old_name": "backup.zip"}
