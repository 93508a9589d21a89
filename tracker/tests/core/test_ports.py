"""Unit tests for port interface contracts and domain model invariants."""

from datetime import date

import pytest

from tracker.core.exceptions import EntityNotFoundError
from tracker.core.member_service import MemberService
from tracker.core.models import Member, Milestone, Project, Roadmap, User
from tracker.core.ports import (
    MemberPort,
    MemberStorePort,
    MilestoneStorePort,
    ProjectStorePort,
    RoadmapStorePort,
    TaskStorePort,
    UserStorePort,
)
from tracker.tests.fakes import FakeMemberStorePort


@pytest.mark.parametrize(
    "port",
    [
        UserStorePort,
        ProjectStorePort,
        MemberStorePort,
        RoadmapStorePort,
        MilestoneStorePort,
        TaskStorePort,
        MemberPort,
    ],
)
def test_ports_cannot_be_instantiated(port: type) -> None:
    with pytest.raises(TypeError):
        port()


def test_incomplete_store_cannot_be_instantiated() -> None:
    """A store missing delete_by_id does not satisfy MemberStorePort."""

    class PartialMemberStore(MemberStorePort):
        async def get_by_id(self, member_id: int) -> Member | None:
            return None

        async def get_all_by_project(self, project: Project) -> list[Member]:
            return []

        async def save(self, member: Member) -> Member:
            return member

    with pytest.raises(TypeError):
        PartialMemberStore()  # type: ignore[abstract]


def test_fakes_and_services_satisfy_ports() -> None:
    store = FakeMemberStorePort()

    assert isinstance(store, MemberStorePort)
    assert isinstance(MemberService(store, None, None), MemberPort)  # type: ignore[arg-type]


class TestEntityNotFoundError:
    def test_message_names_entity(self) -> None:
        error = EntityNotFoundError("member")

        assert str(error) == "Error! This member doesn't exist in our DB"
        assert error.entity == "member"

    def test_is_a_lookup_error(self) -> None:
        assert issubclass(EntityNotFoundError, LookupError)


class TestModels:
    @pytest.fixture
    def user(self) -> User:
        return User(first_name="Ivan", last_name="Petrov", position="Boss", avatar="img-url")

    def test_new_entities_have_no_id(self, user: User) -> None:
        assert user.id is None
        assert Project(name="p", owner=user).id is None

    def test_member_join_copies_user_details(self, user: User) -> None:
        project = Project(name="p", owner=user)

        member = Member.join(project, user, "CTO")

        assert member.project is project
        assert member.user is user
        assert member.position == "CTO"
        assert (member.first_name, member.last_name, member.avatar) == (
            "Ivan",
            "Petrov",
            "img-url",
        )

    def test_change_position_keeps_references(self, user: User) -> None:
        project = Project(name="p", owner=user)
        member = Member.join(project, user, "Dev")

        member.change_position("Lead")

        assert member.position == "Lead"
        assert member.project is project
        assert member.user is user

    def test_project_name_required(self, user: User) -> None:
        with pytest.raises(ValueError):
            Project(name="", owner=user)

    def test_project_rename_rejects_blank(self, user: User) -> None:
        project = Project(name="p", owner=user)

        with pytest.raises(ValueError):
            project.rename(" ")
        assert project.name == "p"

    def test_milestone_dates_validated(self, user: User) -> None:
        roadmap = Roadmap(
            name="r", start_date=date(2024, 1, 1), project=Project(name="p", owner=user)
        )

        with pytest.raises(ValueError, match="cannot be before"):
            Milestone(
                name="m",
                start_date=date(2024, 2, 1),
                finish_date=date(2024, 1, 1),
                roadmap=roadmap,
            )

    def test_single_day_milestone_allowed(self, user: User) -> None:
        roadmap = Roadmap(
            name="r", start_date=date(2024, 1, 1), project=Project(name="p", owner=user)
        )

        milestone = Milestone(
            name="m",
            start_date=date(2024, 2, 1),
            finish_date=date(2024, 2, 1),
            roadmap=roadmap,
        )

        assert milestone.start_date == milestone.finish_date
