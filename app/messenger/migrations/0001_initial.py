import uuid

import django.db.models.deletion
import messenger.fields
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Message",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "body",
                    models.TextField(
                        blank=True,
                        help_text="Message text (null when the message only carries a file)",
                        null=True,
                    ),
                ),
                (
                    "attachment",
                    messenger.fields.AttachmentField(
                        blank=True,
                        help_text='Attachment descriptor {"new_name": ..., "old_name": ...}',
                        null=True,
                    ),
                ),
                (
                    "seen",
                    models.BooleanField(
                        default=False,
                        help_text="Whether the recipient has seen this message",
                    ),
                ),
                (
                    "from_user",
                    models.ForeignKey(
                        help_text="User who sent this message",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_direct_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "to_user",
                    models.ForeignKey(
                        help_text="User this message was sent to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_direct_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "messenger_message",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["from_user", "to_user", "created_at"],
                        name="msgr_msg_pair_created_idx",
                    ),
                    models.Index(
                        fields=["to_user", "from_user", "seen"],
                        name="msgr_msg_unseen_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Favorite",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "favorite",
                    models.ForeignKey(
                        help_text="User added to the owner's favorites",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="Owner of this favorites entry",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messenger_favorites",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "messenger_favorite",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["user", "favorite"],
                        name="msgr_fav_owner_target_idx",
                    ),
                ],
            },
        ),
    ]
