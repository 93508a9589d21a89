"""Integration tests for adapter implementations.

These tests exercise adapters against a temporary SQLite database
to validate correct translation between core domain models and
stored rows.
"""
