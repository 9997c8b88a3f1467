"""
Authentication application.

Provides the project's custom, email-identified user model. Messenger
code only relies on a user's id, email, display name and avatar file name.

Usage:
    from authentication.models import User
"""
