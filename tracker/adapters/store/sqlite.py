"""SQLite store adapters.

Implements every store port using SQLite with aiosqlite for async access.
All stores share one SQLiteDatabase, which owns the connection pool and
the schema. Each store rebuilds the references of the entities it reads
through the stores it depends on.
"""

import asyncio
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

import aiosqlite

from tracker.core.exceptions import EntityInUseError
from tracker.core.models import Member, Milestone, Project, Roadmap, Task, User
from tracker.core.ports import (
    MemberStorePort,
    MilestoneStorePort,
    ProjectStorePort,
    RoadmapStorePort,
    TaskStorePort,
    UserStorePort,
)

logger = logging.getLogger(__name__)

Row = tuple[Any, ...]

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        first_name TEXT NOT NULL,
        last_name TEXT NOT NULL,
        position TEXT NOT NULL,
        avatar TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        owner_id INTEGER NOT NULL REFERENCES users(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS members (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        avatar TEXT NOT NULL,
        first_name TEXT NOT NULL,
        last_name TEXT NOT NULL,
        position TEXT NOT NULL,
        project_id INTEGER NOT NULL REFERENCES projects(id),
        user_id INTEGER NOT NULL REFERENCES users(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS roadmaps (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        start_date TEXT NOT NULL,
        project_id INTEGER NOT NULL REFERENCES projects(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS milestones (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        start_date TEXT NOT NULL,
        finish_date TEXT NOT NULL,
        roadmap_id INTEGER NOT NULL REFERENCES roadmaps(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        active INTEGER NOT NULL DEFAULT 1,
        finished INTEGER NOT NULL DEFAULT 0,
        milestone_id INTEGER NOT NULL REFERENCES milestones(id),
        member_id INTEGER NOT NULL REFERENCES members(id),
        documents TEXT NOT NULL DEFAULT '[]'
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_members_project ON members(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_roadmaps_project ON roadmaps(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_milestones_roadmap ON milestones(roadmap_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_milestone ON tasks(milestone_id)",
)


class SQLiteDatabase:
    """Shared SQLite database with connection pooling and async access."""

    def __init__(self, db_path: str, pool_size: int = 5):
        """Initialize SQLite database with connection pooling.

        Args:
            db_path: Path to SQLite database file.
            pool_size: Number of connections to maintain in the pool.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._pool: list[aiosqlite.Connection] = []
        self._pool_lock = asyncio.Lock()
        self._schema_lock = asyncio.Lock()
        self._pool_size = pool_size
        self._schema_initialized = False

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get a connection from the pool or create a new one."""
        async with self._pool_lock:
            if self._pool:
                return self._pool.pop()
        conn = await aiosqlite.connect(str(self.db_path))
        # Enable foreign keys
        await conn.execute("PRAGMA foreign_keys = ON")
        return conn

    async def _return_connection(self, conn: aiosqlite.Connection) -> None:
        """Return a connection to the pool."""
        async with self._pool_lock:
            if len(self._pool) < self._pool_size:
                self._pool.append(conn)
                return
        await conn.close()

    async def close_pool(self) -> None:
        """Close all pooled connections."""
        async with self._pool_lock:
            for conn in self._pool:
                await conn.close()
            self._pool.clear()

    async def init_schema(self) -> None:
        """Initialize database schema on first use.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        if self._schema_initialized:
            return

        async with self._schema_lock:
            # Check again after acquiring lock to prevent race
            if self._schema_initialized:
                return

            conn = await self._get_connection()
            try:
                for statement in _SCHEMA:
                    await conn.execute(statement)
                await conn.commit()
                self._schema_initialized = True
            finally:
                await self._return_connection(conn)

    async def fetch_one(self, sql: str, params: tuple[Any, ...] = ()) -> Row | None:
        """Run a query and return its first row, or None."""
        await self.init_schema()

        conn = await self._get_connection()
        try:
            cursor = await conn.execute(sql, params)
            row = await cursor.fetchone()
            return tuple(row) if row is not None else None
        finally:
            await self._return_connection(conn)

    async def fetch_all(self, sql: str, params: tuple[Any, ...] = ()) -> list[Row]:
        """Run a query and return all rows."""
        await self.init_schema()

        conn = await self._get_connection()
        try:
            cursor = await conn.execute(sql, params)
            return [tuple(row) for row in await cursor.fetchall()]
        finally:
            await self._return_connection(conn)

    async def execute(self, sql: str, params: tuple[Any, ...] = ()) -> None:
        """Run a single write statement in its own transaction."""
        await self.init_schema()

        conn = await self._get_connection()
        try:
            await conn.execute(sql, params)
            await conn.commit()
        except aiosqlite.Error:
            await conn.rollback()
            raise
        finally:
            await self._return_connection(conn)

    async def delete(self, table: str, row_id: int, entity: str) -> None:
        """Delete a row by ID. Deleting a missing row is a no-op.

        Raises:
            EntityInUseError: If another row still references this one.
        """
        try:
            await self.execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))
        except aiosqlite.IntegrityError as e:
            logger.warning(
                f"Refusing to delete {entity} {row_id}: {e}",
                extra={"table": table, "row_id": row_id},
            )
            raise EntityInUseError(entity) from e

    async def upsert(
        self,
        table: str,
        values: dict[str, Any],
        row_id: int | None,
    ) -> int:
        """Insert a new row or update an existing one.

        Rows without an ID get one assigned by SQLite. A row with an ID that
        is not stored yet is inserted under that ID.

        Args:
            table: Table name (one of the schema tables).
            values: Column values, excluding the ID.
            row_id: Existing ID, or None for a new row.

        Returns:
            The row ID.
        """
        await self.init_schema()

        columns = list(values)
        params = tuple(values.values())

        conn = await self._get_connection()
        try:
            if row_id is not None:
                assignments = ", ".join(f"{column} = ?" for column in columns)
                cursor = await conn.execute(
                    f"UPDATE {table} SET {assignments} WHERE id = ?",
                    (*params, row_id),
                )
                if cursor.rowcount == 0:
                    placeholders = ", ".join("?" for _ in range(len(columns) + 1))
                    await conn.execute(
                        f"INSERT INTO {table} (id, {', '.join(columns)}) "
                        f"VALUES ({placeholders})",
                        (row_id, *params),
                    )
            else:
                placeholders = ", ".join("?" for _ in columns)
                cursor = await conn.execute(
                    f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                    params,
                )
                row_id = cursor.lastrowid
            await conn.commit()
        except aiosqlite.Error:
            await conn.rollback()
            raise
        finally:
            await self._return_connection(conn)

        if row_id is None:
            raise RuntimeError(f"SQLite assigned no row ID for insert into {table}")
        return row_id


def _check_row(row: Row, expected: int, table: str) -> None:
    if not row or len(row) != expected:
        raise ValueError(
            f"Invalid {table} row length: expected {expected}, "
            f"got {len(row) if row else 0}"
        )


def _parse_date(value: Any) -> date:
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid date format: {e}") from e


class SQLiteUserStore(UserStorePort):
    """SQLite-backed user store."""

    def __init__(self, db: SQLiteDatabase):
        self.db = db

    async def get_by_id(self, user_id: int) -> User | None:
        """Look up a user by its ID."""
        row = await self.db.fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        if row is None:
            return None
        return self._row_to_user(row)

    async def get_all(self) -> list[User]:
        rows = await self.db.fetch_all("SELECT * FROM users ORDER BY id")
        return [self._row_to_user(row) for row in rows]

    async def save(self, user: User) -> User:
        """Create or update a user."""
        user.id = await self.db.upsert(
            "users",
            {
                "first_name": user.first_name,
                "last_name": user.last_name,
                "position": user.position,
                "avatar": user.avatar,
            },
            user.id,
        )
        return user

    async def delete_by_id(self, user_id: int) -> None:
        await self.db.delete("users", user_id, "user")

    @staticmethod
    def _row_to_user(row: Row) -> User:
        _check_row(row, 5, "users")
        user_id, first_name, last_name, position, avatar = row
        return User(
            id=user_id,
            first_name=first_name,
            last_name=last_name,
            position=position,
            avatar=avatar,
        )


class SQLiteProjectStore(ProjectStorePort):
    """SQLite-backed project store."""

    def __init__(self, db: SQLiteDatabase, users: SQLiteUserStore):
        self.db = db
        self.users = users

    async def get_by_id(self, project_id: int) -> Project | None:
        """Look up a project by its ID."""
        row = await self.db.fetch_one(
            "SELECT * FROM projects WHERE id = ?", (project_id,)
        )
        if row is None:
            return None
        return await self._row_to_project(row)

    async def get_all(self) -> list[Project]:
        rows = await self.db.fetch_all("SELECT * FROM projects ORDER BY id")
        return [await self._row_to_project(row) for row in rows]

    async def save(self, project: Project) -> Project:
        """Create or update a project."""
        project.id = await self.db.upsert(
            "projects",
            {"name": project.name, "owner_id": project.owner.id},
            project.id,
        )
        return project

    async def delete_by_id(self, project_id: int) -> None:
        await self.db.delete("projects", project_id, "project")

    async def _row_to_project(self, row: Row) -> Project:
        _check_row(row, 3, "projects")
        project_id, name, owner_id = row

        owner = await self.users.get_by_id(owner_id)
        if owner is None:
            raise ValueError(f"Project {project_id} references missing user {owner_id}")

        return Project(id=project_id, name=name, owner=owner)


class SQLiteMemberStore(MemberStorePort):
    """SQLite-backed member store."""

    def __init__(
        self,
        db: SQLiteDatabase,
        projects: SQLiteProjectStore,
        users: SQLiteUserStore,
    ):
        """Initialize the member store.

        Args:
            db: Shared database.
            projects: Store used to rebuild project references.
            users: Store used to rebuild user references.
        """
        self.db = db
        self.projects = projects
        self.users = users

    async def get_by_id(self, member_id: int) -> Member | None:
        """Look up a member by its ID."""
        row = await self.db.fetch_one(
            "SELECT * FROM members WHERE id = ?", (member_id,)
        )
        if row is None:
            return None
        return await self._row_to_member(row)

    async def get_all_by_project(self, project: Project) -> list[Member]:
        """Return the members of a project ordered by ID."""
        rows = await self.db.fetch_all(
            "SELECT * FROM members WHERE project_id = ? ORDER BY id", (project.id,)
        )
        return [await self._row_to_member(row, project) for row in rows]

    async def save(self, member: Member) -> Member:
        """Create or update a member."""
        member.id = await self.db.upsert(
            "members",
            {
                "avatar": member.avatar,
                "first_name": member.first_name,
                "last_name": member.last_name,
                "position": member.position,
                "project_id": member.project.id,
                "user_id": member.user.id,
            },
            member.id,
        )
        return member

    async def delete_by_id(self, member_id: int) -> None:
        await self.db.delete("members", member_id, "member")

    async def _row_to_member(self, row: Row, project: Project | None = None) -> Member:
        """Convert a database row to a Member object.

        Args:
            row: Row from the members table.
            project: Already loaded project, reused instead of a lookup.

        Raises:
            ValueError: If the row is malformed or references missing data.
        """
        try:
            _check_row(row, 7, "members")
            (
                member_id,
                avatar,
                first_name,
                last_name,
                position,
                project_id,
                user_id,
            ) = row

            if project is None or project.id != project_id:
                project = await self.projects.get_by_id(project_id)
            if project is None:
                raise ValueError(f"missing project {project_id}")

            user = await self.users.get_by_id(user_id)
            if user is None:
                raise ValueError(f"missing user {user_id}")

            return Member(
                id=member_id,
                avatar=avatar,
                first_name=first_name,
                last_name=last_name,
                position=position,
                project=project,
                user=user,
            )

        except ValueError as e:
            logger.error(f"Failed to parse member row: {e}")
            raise ValueError(f"Row parsing failed: {e}") from e


class SQLiteRoadmapStore(RoadmapStorePort):
    """SQLite-backed roadmap store."""

    def __init__(self, db: SQLiteDatabase, projects: SQLiteProjectStore):
        self.db = db
        self.projects = projects

    async def get_by_id(self, roadmap_id: int) -> Roadmap | None:
        row = await self.db.fetch_one(
            "SELECT * FROM roadmaps WHERE id = ?", (roadmap_id,)
        )
        if row is None:
            return None
        return await self._row_to_roadmap(row)

    async def get_all_by_project(self, project: Project) -> list[Roadmap]:
        rows = await self.db.fetch_all(
            "SELECT * FROM roadmaps WHERE project_id = ? ORDER BY id", (project.id,)
        )
        return [await self._row_to_roadmap(row, project) for row in rows]

    async def save(self, roadmap: Roadmap) -> Roadmap:
        roadmap.id = await self.db.upsert(
            "roadmaps",
            {
                "name": roadmap.name,
                "start_date": roadmap.start_date.isoformat(),
                "project_id": roadmap.project.id,
            },
            roadmap.id,
        )
        return roadmap

    async def delete_by_id(self, roadmap_id: int) -> None:
        await self.db.delete("roadmaps", roadmap_id, "roadmap")

    async def _row_to_roadmap(
        self, row: Row, project: Project | None = None
    ) -> Roadmap:
        _check_row(row, 4, "roadmaps")
        roadmap_id, name, start_date, project_id = row

        if project is None or project.id != project_id:
            project = await self.projects.get_by_id(project_id)
        if project is None:
            raise ValueError(
                f"Roadmap {roadmap_id} references missing project {project_id}"
            )

        return Roadmap(
            id=roadmap_id,
            name=name,
            start_date=_parse_date(start_date),
            project=project,
        )


class SQLiteMilestoneStore(MilestoneStorePort):
    """SQLite-backed milestone store."""

    def __init__(self, db: SQLiteDatabase, roadmaps: SQLiteRoadmapStore):
        self.db = db
        self.roadmaps = roadmaps

    async def get_by_id(self, milestone_id: int) -> Milestone | None:
        row = await self.db.fetch_one(
            "SELECT * FROM milestones WHERE id = ?", (milestone_id,)
        )
        if row is None:
            return None
        return await self._row_to_milestone(row)

    async def get_all_by_roadmap(self, roadmap: Roadmap) -> list[Milestone]:
        rows = await self.db.fetch_all(
            "SELECT * FROM milestones WHERE roadmap_id = ? ORDER BY id",
            (roadmap.id,),
        )
        return [await self._row_to_milestone(row, roadmap) for row in rows]

    async def save(self, milestone: Milestone) -> Milestone:
        milestone.id = await self.db.upsert(
            "milestones",
            {
                "name": milestone.name,
                "start_date": milestone.start_date.isoformat(),
                "finish_date": milestone.finish_date.isoformat(),
                "roadmap_id": milestone.roadmap.id,
            },
            milestone.id,
        )
        return milestone

    async def delete_by_id(self, milestone_id: int) -> None:
        await self.db.delete("milestones", milestone_id, "milestone")

    async def _row_to_milestone(
        self, row: Row, roadmap: Roadmap | None = None
    ) -> Milestone:
        _check_row(row, 5, "milestones")
        milestone_id, name, start_date, finish_date, roadmap_id = row

        if roadmap is None or roadmap.id != roadmap_id:
            roadmap = await self.roadmaps.get_by_id(roadmap_id)
        if roadmap is None:
            raise ValueError(
                f"Milestone {milestone_id} references missing roadmap {roadmap_id}"
            )

        return Milestone(
            id=milestone_id,
            name=name,
            start_date=_parse_date(start_date),
            finish_date=_parse_date(finish_date),
            roadmap=roadmap,
        )


class SQLiteTaskStore(TaskStorePort):
    """SQLite-backed task store.

    Documents are kept as a JSON array in a single column.
    """

    def __init__(
        self,
        db: SQLiteDatabase,
        milestones: SQLiteMilestoneStore,
        members: SQLiteMemberStore,
    ):
        self.db = db
        self.milestones = milestones
        self.members = members

    async def get_by_id(self, task_id: int) -> Task | None:
        row = await self.db.fetch_one("SELECT * FROM tasks WHERE id = ?", (task_id,))
        if row is None:
            return None
        return await self._row_to_task(row)

    async def get_all_by_milestone(self, milestone: Milestone) -> list[Task]:
        rows = await self.db.fetch_all(
            "SELECT * FROM tasks WHERE milestone_id = ? ORDER BY id", (milestone.id,)
        )
        return [await self._row_to_task(row, milestone) for row in rows]

    async def save(self, task: Task) -> Task:
        task.id = await self.db.upsert(
            "tasks",
            {
                "name": task.name,
                "active": int(task.active),
                "finished": int(task.finished),
                "milestone_id": task.milestone.id,
                "member_id": task.responsible_member.id,
                "documents": json.dumps(list(task.documents)),
            },
            task.id,
        )
        return task

    async def delete_by_id(self, task_id: int) -> None:
        await self.db.delete("tasks", task_id, "task")

    async def _row_to_task(self, row: Row, milestone: Milestone | None = None) -> Task:
        """Convert a database row to a Task object.

        Raises:
            ValueError: If the row is malformed or references missing data.
        """
        _check_row(row, 7, "tasks")
        task_id, name, active, finished, milestone_id, member_id, documents_json = row

        if milestone is None or milestone.id != milestone_id:
            milestone = await self.milestones.get_by_id(milestone_id)
        if milestone is None:
            raise ValueError(
                f"Task {task_id} references missing milestone {milestone_id}"
            )

        member = await self.members.get_by_id(member_id)
        if member is None:
            raise ValueError(f"Task {task_id} references missing member {member_id}")

        try:
            parsed = json.loads(documents_json)
            if not isinstance(parsed, list):
                raise TypeError(f"expected a JSON array, got {type(parsed).__name__}")
            documents = tuple(str(doc) for doc in parsed)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(
                f"Failed to parse documents for task {task_id}: {e}. "
                f"Using no documents."
            )
            documents = ()

        return Task(
            id=task_id,
            name=name,
            active=bool(active),
            finished=bool(finished),
            milestone=milestone,
            responsible_member=member,
            documents=documents,
        )


class SQLiteStores:
    """All SQLite stores wired over one database."""

    def __init__(self, db_path: str, pool_size: int = 5):
        self.db = SQLiteDatabase(db_path, pool_size=pool_size)
        self.users = SQLiteUserStore(self.db)
        self.projects = SQLiteProjectStore(self.db, self.users)
        self.members = SQLiteMemberStore(self.db, self.projects, self.users)
        self.roadmaps = SQLiteRoadmapStore(self.db, self.projects)
        self.milestones = SQLiteMilestoneStore(self.db, self.roadmaps)
        self.tasks = SQLiteTaskStore(self.db, self.milestones, self.members)

    async def close_pool(self) -> None:
        """Close all pooled connections."""
        await self.db.close_pool()
