"""Command-line interface adapters.

Provides CLI commands for managing the business tracker:
- users and projects: register, inspect, list, remove
- members: attach users to projects, change positions, detach
- roadmaps, milestones and tasks: plan and track work
"""
