"""
Tests for authentication app.

This package contains test modules for:
- test_managers.py: UserManager tests
- test_models.py: User model tests

Usage:
    pytest app/authentication/tests/
"""
