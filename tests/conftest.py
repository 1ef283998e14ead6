from uuid import uuid4

import pytest
from httpx import AsyncClient, ASGITransport

from taskhub.database import Database
from taskhub.main import create_app
from taskhub.models.base import generate_id
from taskhub.models.project import Project, ProjectMember, MemberRole
from taskhub.models.tasks import Task, TaskStatus, Tag, TaskTag
from taskhub.models.user import User
from taskhub.utils.security import create_access_token


@pytest.fixture
async def database(tmp_path):
    # A throwaway SQLite file per test; aiosqlite gives us the async driver
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.connect(create_schema=True)
    yield db
    await db.disconnect()


@pytest.fixture
async def client(database):
    app = create_app(database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        token = create_access_token({"sub": user.id})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def make_user(database):
    async def _make_user(name: str = "Test User", email: str | None = None) -> User:
        async with database.session() as db:
            user = User(id=generate_id(), name=name, email=email or f"{uuid4().hex[:10]}@example.com")
            db.add(user)
            await db.commit()
            return user
    return _make_user


@pytest.fixture
def make_project(database):
    async def _make_project(
        owner: User | None = None,
        name: str = "Test Project",
        description: str | None = "Test Description",
        members: tuple[User, ...] = (),
    ) -> Project:
        async with database.session() as db:
            project = Project(id=generate_id(), name=name, description=description)
            db.add(project)
            await db.flush()
            if owner is not None:
                db.add(ProjectMember(project_id=project.id, user_id=owner.id, role=MemberRole.OWNER))
            for member in members:
                db.add(ProjectMember(project_id=project.id, user_id=member.id, role=MemberRole.MEMBER))
            await db.commit()
            return project
    return _make_project


@pytest.fixture
def make_tag(database):
    async def _make_tag(name: str, color: str = "#FF0000") -> Tag:
        async with database.session() as db:
            tag = Tag(id=generate_id(), name=name, color=color)
            db.add(tag)
            await db.commit()
            return tag
    return _make_tag


@pytest.fixture
def make_task(database):
    async def _make_task(
        project: Project,
        creator: User,
        title: str = "Test Task",
        status: TaskStatus = TaskStatus.TODO,
        tags: tuple[Tag, ...] = (),
    ) -> Task:
        async with database.session() as db:
            task = Task(
                id=generate_id(),
                title=title,
                status=status,
                project_id=project.id,
                creator_id=creator.id,
            )
            db.add(task)
            await db.flush()
            for position, tag in enumerate(tags):
                db.add(TaskTag(task_id=task.id, tag_id=tag.id, position=position))
            await db.commit()
            return task
    return _make_task
