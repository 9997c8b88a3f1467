"""
Tests for the messenger app.

Usage:
    pytest app/messenger/tests/
"""
