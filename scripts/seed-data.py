"""Seed the database with a sample workspace for development testing."""

import asyncio
import uuid
from datetime import datetime, timedelta

from tasknet.db.postgres import async_session_factory
from tasknet.models import Document, Note, Project, Task, Wiki
from tasknet.services.relevance import dump_tags

SAMPLE_NOTES = [
    {
        "title": "Q3 budget review",
        "content": (
            "Marketing asked for a 12% increase. Finance wants a breakdown of "
            "campaign spend before approving anything beyond the current budget."
        ),
        "tags": ["finance", "urgent"],
        "days_ago": 2,
    },
    {
        "title": "Onboarding checklist",
        "content": "Laptop, accounts, buddy assignment, first-week goals. Ask IT about the VPN budget.",
        "tags": ["hr"],
        "days_ago": 9,
    },
    {
        "title": "Standup notes",
        "content": "Search indexing is blocked on the schema migration. Release moved to Friday.",
        "tags": ["engineering", "urgent"],
        "days_ago": 1,
    },
]

SAMPLE_TASKS = [
    {
        "title": "Prepare budget deck for the board",
        "description": "Pull numbers from the Q3 budget review note.",
        "tags": ["finance", "urgent"],
        "status": "in-progress",
        "priority": "high",
        "due_in_days": 4,
    },
    {
        "title": "Fix tag filter on wiki pages",
        "description": "Tags with spaces do not match.",
        "tags": ["engineering"],
        "status": "todo",
        "priority": "medium",
        "due_in_days": None,
    },
]

SAMPLE_PROJECTS = [
    {
        "name": "Website relaunch",
        "description": "New marketing site with a reduced hosting budget.",
        "status": "active",
        "start_days_ago": 30,
        "duration_days": 90,
    },
    {
        "name": "Internal search",
        "description": "One search box across notes, tasks and wikis.",
        "status": "paused",
        "start_days_ago": 60,
        "duration_days": None,
    },
]

SAMPLE_WIKIS = [
    {
        "title": "Engineering handbook",
        "content": "How we review code, ship releases and handle incidents.",
        "tags": ["engineering"],
        "children": [
            {
                "title": "Release process",
                "content": "Releases go out on Tuesdays and Fridays after the standup.",
                "tags": ["engineering", "process"],
            },
        ],
    },
]

SAMPLE_DOCUMENTS = [
    {"name": "budget-2026.xlsx", "file_type": "xlsx", "size": 48_213},
    {"name": "board-deck.pdf", "file_type": "pdf", "size": 1_204_992},
    {"name": "logo.png", "file_type": "png", "size": 22_118},
]


async def seed():
    now = datetime.utcnow()

    async with async_session_factory() as session:
        for data in SAMPLE_NOTES:
            ts = now - timedelta(days=data["days_ago"])
            session.add(
                Note(
                    title=data["title"],
                    content=data["content"],
                    tags=dump_tags(data["tags"]),
                    created_at=ts,
                    updated_at=ts,
                )
            )

        for data in SAMPLE_TASKS:
            due = now + timedelta(days=data["due_in_days"]) if data["due_in_days"] else None
            session.add(
                Task(
                    title=data["title"],
                    description=data["description"],
                    tags=dump_tags(data["tags"]),
                    status=data["status"],
                    priority=data["priority"],
                    due_date=due,
                )
            )

        for data in SAMPLE_PROJECTS:
            start = now - timedelta(days=data["start_days_ago"])
            end = start + timedelta(days=data["duration_days"]) if data["duration_days"] else None
            session.add(
                Project(
                    name=data["name"],
                    description=data["description"],
                    status=data["status"],
                    start_date=start,
                    end_date=end,
                )
            )

        wiki_count = 0
        for data in SAMPLE_WIKIS:
            parent_id = uuid.uuid4()
            session.add(
                Wiki(
                    id=parent_id,
                    title=data["title"],
                    content=data["content"],
                    tags=dump_tags(data["tags"]),
                )
            )
            wiki_count += 1
            for child in data["children"]:
                session.add(
                    Wiki(
                        parent_id=parent_id,
                        title=child["title"],
                        content=child["content"],
                        tags=dump_tags(child["tags"]),
                    )
                )
                wiki_count += 1

        for data in SAMPLE_DOCUMENTS:
            session.add(Document(path=f"uploads/{data['name']}", **data))

        await session.commit()
        print(
            f"Seeded {len(SAMPLE_NOTES)} notes, {len(SAMPLE_TASKS)} tasks, "
            f"{len(SAMPLE_PROJECTS)} projects, {wiki_count} wiki pages and "
            f"{len(SAMPLE_DOCUMENTS)} documents."
        )


if __name__ == "__main__":
    asyncio.run(seed())
