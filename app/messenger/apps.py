"""
Messenger application configuration.

This app provides the direct messaging core with:
- Per-pair conversations with seen/unseen tracking
- File attachments stored through Django storages
- Favorites (starred contacts)
- Realtime events on private user channels
"""

from django.apps import AppConfig


class MessengerConfig(AppConfig):
    """Configuration for the messenger application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "messenger"
    verbose_name = "Messenger"
