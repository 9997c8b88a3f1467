"""Tests for core infrastructure (services, exceptions, decorators)."""
