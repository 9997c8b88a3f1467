"""
Direct messenger.

One-to-one conversations with optional file attachments, seen tracking,
starred contacts and realtime delivery over Django Channels.
"""
