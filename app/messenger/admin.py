"""
Django admin configuration for messenger models.

Provides admin interfaces for:
- Message moderation
- Favorites viewing
"""

from django.contrib import admin

from messenger.models import Favorite, Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = ["id", "from_user", "to_user", "short_body", "seen", "created_at"]
    list_filter = ["seen", "created_at"]
    search_fields = ["id", "body", "from_user__email", "to_user__email"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["from_user", "to_user"]
    ordering = ["-created_at"]

    @admin.display(description="Body")
    def short_body(self, obj):
        if not obj.body:
            return ""
        return obj.body[:50] + "..." if len(obj.body) > 50 else obj.body


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    """Admin interface for Favorite model."""

    list_display = ["id", "user", "favorite", "created_at"]
    search_fields = ["user__email", "favorite__email"]
    raw_id_fields = ["user", "favorite"]
    ordering = ["-created_at"]
