"""Test suite for the business tracker.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - Tests against a temporary SQLite database
   - Validates adapter behavior and error handling

3. fakes/: Port implementations for testing
   - In-memory implementations of the store ports
   - Used by core unit tests
"""
