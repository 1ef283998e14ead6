"""
Demo data for local development.

Creates a demo user who owns a sample project with tags, tasks and a comment,
plus a few generated teammates. Prints a bearer token for the demo user.

    python -m taskhub.scripts.seed
"""
import asyncio
from datetime import datetime, timedelta, timezone

from faker import Faker

from taskhub.config import settings
from taskhub.database import Database
from taskhub.models.base import generate_id
from taskhub.models.project import Project, ProjectMember, MemberRole
from taskhub.models.tasks import Task, TaskStatus, TaskPriority, Tag, TaskTag, Comment
from taskhub.models.user import User
from taskhub.utils.security import create_access_token

DEMO_EMAIL = "demo@example.com"

DEMO_TAGS = [
    ("Urgent", "#FF0000"),
    ("Important", "#FFA500"),
    ("Bug", "#FF00FF"),
]


async def seed(database: Database, teammates: int = 3) -> dict:
    fake = Faker()
    now = datetime.now(timezone.utc)

    async with database.session() as db:
        demo_user = User(id=generate_id(), name="Demo User", email=DEMO_EMAIL)
        db.add(demo_user)

        project = Project(
            id=generate_id(),
            name="Sample Project",
            description="A project for trying things out.",
        )
        db.add(project)
        await db.flush()

        db.add(ProjectMember(project_id=project.id, user_id=demo_user.id, role=MemberRole.OWNER))

        for _ in range(teammates):
            mate = User(id=generate_id(), name=fake.name(), email=fake.unique.email())
            db.add(mate)
            await db.flush()
            db.add(ProjectMember(project_id=project.id, user_id=mate.id, role=MemberRole.MEMBER))

        tags = [Tag(id=generate_id(), name=name, color=color) for name, color in DEMO_TAGS]
        db.add_all(tags)

        design = Task(
            id=generate_id(),
            title="Project design",
            description="Draft the basic design of the project",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            due_date=now + timedelta(days=7),
            project_id=project.id,
            creator_id=demo_user.id,
            assignee_id=demo_user.id,
        )
        database_setup = Task(
            id=generate_id(),
            title="Database setup",
            description="Set up the database and load initial data",
            status=TaskStatus.TODO,
            priority=TaskPriority.MEDIUM,
            due_date=now + timedelta(days=14),
            project_id=project.id,
            creator_id=demo_user.id,
            assignee_id=demo_user.id,
        )
        db.add_all([design, database_setup])
        await db.flush()

        db.add_all([
            TaskTag(task_id=design.id, tag_id=tags[0].id, position=0),
            TaskTag(task_id=design.id, tag_id=tags[1].id, position=1),
        ])
        db.add(Comment(
            id=generate_id(),
            content="Reviewed the direction for the project design.",
            task_id=design.id,
            author_id=demo_user.id,
        ))

        await db.commit()

    return {
        "user_id": demo_user.id,
        "project_id": project.id,
        "task_ids": [design.id, database_setup.id],
        "token": create_access_token({"sub": demo_user.id}, expires_delta=timedelta(days=1)),
    }


async def main():
    database = Database(settings.async_database_url)
    await database.connect(create_schema=True)
    try:
        summary = await seed(database)
    finally:
        await database.disconnect()

    print("Seed data created.")
    print(f"   - Demo user: {DEMO_EMAIL} (ID: {summary['user_id']})")
    print(f"   - Project ID: {summary['project_id']}")
    print(f"   - Bearer token: {summary['token']}")


if __name__ == "__main__":
    asyncio.run(main())
