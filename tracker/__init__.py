"""Business tracker: users, projects, members and their planning hierarchy."""

__version__ = "0.1.0"
