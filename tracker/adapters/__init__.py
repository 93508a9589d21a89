"""External adapters for the business tracker.

This package contains all external dependencies (SQLite, the command line,
etc.) and provides implementations of the core port interfaces.

Adapter Organization:

- store/: Adapters for entity persistence (SQLite)
- cli/: Command-line interface and management commands
"""
