"""
Tests for MessengerSettings.

Related files:
    - constants.py: MESSENGER_DEFAULTS, MessengerSettings, messenger_settings
"""

from messenger.constants import FALLBACK_COLOR, MessengerSettings, messenger_settings


class TestColors:
    """Tests for the color palette and its fallback."""

    def test_default_palette_fallback_is_first_color(self):
        assert messenger_settings().fallback_color == "#2180f3"

    def test_empty_palette_falls_back_to_black(self, settings):
        settings.MESSENGER["COLORS"] = []

        assert messenger_settings().colors == []
        assert messenger_settings().fallback_color == "#000000"
        assert FALLBACK_COLOR == "#000000"

    def test_custom_palette_keeps_order(self, settings):
        settings.MESSENGER["COLORS"] = ["#111111", "#222222", "#333333"]

        assert messenger_settings().colors == ["#111111", "#222222", "#333333"]
        assert messenger_settings().fallback_color == "#111111"


class TestSectionMerging:
    """Tests for per-key merging of nested sections."""

    def test_partial_section_keeps_other_defaults(self):
        config = MessengerSettings({"GRAVATAR": {"IMAGE_SIZE": 64}})

        assert config.gravatar_image_size == 64
        assert config.gravatar_imageset == "identicon"
        assert config.gravatar_enabled is True

    def test_no_overrides_uses_defaults(self):
        config = MessengerSettings()

        assert config.channel_prefix == "private-messenger"
        assert config.default_avatar == "avatar.png"
