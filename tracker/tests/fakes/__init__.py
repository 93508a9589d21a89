"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeUserStorePort, FakeProjectStorePort: In-memory people and projects
- FakeMemberStorePort: In-memory memberships with canned project listings
- FakeRoadmapStorePort, FakeMilestoneStorePort, FakeTaskStorePort:
  In-memory planning hierarchy
"""

from .store import (
    FakeMemberStorePort,
    FakeMilestoneStorePort,
    FakeProjectStorePort,
    FakeRoadmapStorePort,
    FakeTaskStorePort,
    FakeUserStorePort,
)

__all__ = [
    "FakeMemberStorePort",
    "FakeMilestoneStorePort",
    "FakeProjectStorePort",
    "FakeRoadmapStorePort",
    "FakeTaskStorePort",
    "FakeUserStorePort",
]
