"""Workspace CRUD, listing and data export/import endpoint tests."""

import uuid
from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from tasknet.models import Document, Note, Project, Task, Wiki
from tasknet.services.relevance import dump_tags

T0 = datetime(2026, 2, 1, 8, 0, 0)


@pytest.fixture
async def seeded(add_rows):
    root_id = uuid.uuid4()
    await add_rows(
        Note(title="Alpha", content="first", tags=dump_tags(["work"]), created_at=T0, updated_at=T0),
        Note(
            title="Beta",
            content="second",
            tags=dump_tags(["home", "work"]),
            created_at=T0,
            updated_at=T0 + timedelta(days=1),
        ),
        Task(title="Old", tags="[]", status="done", priority="low", created_at=T0, updated_at=T0),
        Task(
            title="New",
            tags=dump_tags(["work"]),
            status="todo",
            priority="high",
            created_at=T0 + timedelta(days=2),
            updated_at=T0 + timedelta(days=2),
        ),
        Project(name="Relaunch", status="active", created_at=T0, updated_at=T0),
        Project(name="Legacy", status="archived", created_at=T0, updated_at=T0),
        Wiki(id=root_id, title="Handbook", content="root", tags="[]", created_at=T0, updated_at=T0),
        Document(name="a.pdf", path="uploads/a.pdf", file_type="pdf", size=1, created_at=T0),
    )
    await add_rows(
        Wiki(
            title="Releases",
            content="child",
            tags="[]",
            parent_id=root_id,
            created_at=T0,
            updated_at=T0 + timedelta(days=1),
        ),
    )
    return root_id


async def test_list_notes_newest_first(client, seeded):
    data = (await client.get("/api/notes/")).json()
    assert [n["title"] for n in data["notes"]] == ["Beta", "Alpha"]
    assert data["notes"][0]["tags"] == ["home", "work"]
    assert "updatedAt" in data["notes"][0]


async def test_list_notes_filters(client, seeded):
    by_tag = (await client.get("/api/notes/", params={"tag": "home"})).json()
    assert [n["title"] for n in by_tag["notes"]] == ["Beta"]

    by_search = (await client.get("/api/notes/", params={"search": "FIRST"})).json()
    assert [n["title"] for n in by_search["notes"]] == ["Alpha"]


async def test_get_note_not_found(client, seeded):
    response = await client.get(f"/api/notes/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"detail": "Note not found"}


async def test_list_tasks_filters(client, seeded):
    data = (await client.get("/api/tasks/")).json()
    assert [t["title"] for t in data["tasks"]] == ["New", "Old"]

    done = (await client.get("/api/tasks/", params={"status": "done"})).json()
    assert [t["title"] for t in done["tasks"]] == ["Old"]

    response = await client.get("/api/tasks/", params={"status": "blocked"})
    assert response.status_code == 422


async def test_list_projects_by_status(client, seeded):
    data = (await client.get("/api/projects/", params={"status": "archived"})).json()
    assert [p["name"] for p in data["projects"]] == ["Legacy"]


async def test_list_wikis_tree_filters(client, seeded):
    root_id = seeded
    children = (await client.get("/api/wikis/", params={"parent_id": str(root_id)})).json()
    assert [w["title"] for w in children["wikis"]] == ["Releases"]
    assert children["wikis"][0]["parentId"] == str(root_id)

    roots = (await client.get("/api/wikis/", params={"root_only": "true"})).json()
    assert [w["title"] for w in roots["wikis"]] == ["Handbook"]


async def test_list_and_get_documents(client, seeded):
    data = (await client.get("/api/documents/")).json()
    assert data["documents"][0]["fileType"] == "pdf"

    doc_id = data["documents"][0]["id"]
    response = await client.get(f"/api/documents/{doc_id}")
    assert response.status_code == 200
    assert response.json()["name"] == "a.pdf"


async def test_export(client, seeded):
    data = (await client.get("/api/data/export")).json()
    assert {n["title"] for n in data["notes"]} == {"Alpha", "Beta"}
    assert {t["title"] for t in data["tasks"]} == {"Old", "New"}
    assert "exportedAt" in data
    assert "created_at" in data["notes"][0]


async def test_import_upserts_by_id(client, seeded, session_factory):
    exported = (await client.get("/api/data/export")).json()
    note = next(n for n in exported["notes"] if n["title"] == "Alpha")
    note["title"] = "Alpha v2"

    response = await client.post(
        "/api/data/import",
        json={"notes": [note, {"title": "Gamma", "tags": ["new"]}], "tasks": [{"title": "Imported"}]},
    )
    assert response.status_code == 200
    assert response.json() == {"imported": {"notes": 2, "tasks": 1}}

    async with session_factory() as session:
        titles = set((await session.execute(select(Note.title))).scalars().all())
        imported = (await session.execute(select(Task).where(Task.title == "Imported"))).scalar_one()

    assert titles == {"Alpha v2", "Beta", "Gamma"}
    assert imported.status == "todo"
    assert imported.priority == "medium"


async def test_import_overwrite_replaces_everything(client, seeded, session_factory):
    response = await client.post(
        "/api/data/import",
        json={"overwrite": True, "notes": [{"title": "Only", "content": "x"}]},
    )
    assert response.json() == {"imported": {"notes": 1, "tasks": 0}}

    async with session_factory() as session:
        notes = (await session.execute(select(Note))).scalars().all()
        tasks = (await session.execute(select(Task))).scalars().all()

    assert [n.title for n in notes] == ["Only"]
    assert tasks == []


async def test_import_rejects_bad_status(client, seeded):
    response = await client.post(
        "/api/data/import", json={"tasks": [{"title": "x", "status": "blocked"}]}
    )
    assert response.status_code == 422


async def test_note_create_update_delete(client):
    response = await client.post("/api/notes/", json={"title": "Draft", "content": "hello", "tags": ["café"]})
    assert response.status_code == 201
    created = response.json()
    assert created["tags"] == ["café"]
    assert created["createdAt"] == created["updatedAt"]
    note_id = created["id"]

    response = await client.put(f"/api/notes/{note_id}", json={"title": "Final"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Final"
    assert updated["content"] == "hello"
    assert updated["tags"] == ["café"]
    assert updated["updatedAt"] >= created["updatedAt"]

    assert (await client.get(f"/api/notes/{note_id}")).json()["title"] == "Final"

    response = await client.delete(f"/api/notes/{note_id}")
    assert response.status_code == 204
    assert (await client.get(f"/api/notes/{note_id}")).status_code == 404
    assert (await client.delete(f"/api/notes/{note_id}")).status_code == 404


async def test_created_note_is_searchable_by_tag(client):
    await client.post("/api/notes/", json={"title": "Lunch", "tags": ["café"]})
    await client.post("/api/notes/", json={"title": "Dinner", "tags": ["bistro"]})

    data = (await client.get("/api/search", params={"query": "café"})).json()
    assert [r["title"] for r in data["results"]] == ["Lunch"]
    assert data["totalCount"] == 1

    by_tag = (await client.get("/api/notes/", params={"tag": "café"})).json()
    assert [n["title"] for n in by_tag["notes"]] == ["Lunch"]


async def test_note_update_retags(client):
    note_id = (await client.post("/api/notes/", json={"title": "Plan", "tags": ["old"]})).json()["id"]
    await client.put(f"/api/notes/{note_id}", json={"tags": ["new"]})

    assert (await client.get("/api/search", params={"query": "old"})).json()["totalCount"] == 0
    assert (await client.get("/api/search", params={"query": "new"})).json()["totalCount"] == 1


async def test_missing_ids_return_404(client):
    missing = uuid.uuid4()
    for path in ("notes", "tasks", "projects", "wikis"):
        assert (await client.put(f"/api/{path}/{missing}", json={})).status_code == 404
        assert (await client.delete(f"/api/{path}/{missing}")).status_code == 404
        assert (await client.get(f"/api/{path}/{missing}")).status_code == 404
    assert (await client.delete(f"/api/documents/{missing}")).status_code == 404


async def test_task_create_update_delete(client):
    response = await client.post(
        "/api/tasks/",
        json={"title": "Ship it", "dueDate": "2026-03-10T17:00:00+02:00", "tags": ["release"]},
    )
    assert response.status_code == 201
    task = response.json()
    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["dueDate"] == "2026-03-10T15:00:00"

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"status": "in-progress", "priority": "high", "dueDate": None, "title": None},
    )
    updated = response.json()
    assert updated["status"] == "in-progress"
    assert updated["priority"] == "high"
    assert updated["dueDate"] is None
    assert updated["title"] == "Ship it"

    bad = await client.put(f"/api/tasks/{task['id']}", json={"status": "blocked"})
    assert bad.status_code == 422

    assert (await client.delete(f"/api/tasks/{task['id']}")).status_code == 204
    assert (await client.get("/api/tasks/")).json() == {"tasks": []}


async def test_project_create_update_delete(client):
    response = await client.post("/api/projects/", json={"name": "Migration", "startDate": "2026-04-01T00:00:00"})
    assert response.status_code == 201
    project = response.json()
    assert project["status"] == "active"
    assert project["startDate"] == "2026-04-01T00:00:00"

    response = await client.put(
        f"/api/projects/{project['id']}", json={"status": "completed", "description": "done early"}
    )
    updated = response.json()
    assert updated["status"] == "completed"
    assert updated["description"] == "done early"
    assert updated["name"] == "Migration"

    assert (await client.post("/api/projects/", json={"name": "x", "status": "dormant"})).status_code == 422
    assert (await client.delete(f"/api/projects/{project['id']}")).status_code == 204
    assert (await client.get(f"/api/projects/{project['id']}")).status_code == 404


async def test_wiki_create_update_delete(client):
    root = (await client.post("/api/wikis/", json={"title": "Handbook", "content": "root"})).json()
    response = await client.post("/api/wikis/", json={"title": "Onboarding", "parentId": root["id"]})
    assert response.status_code == 201
    child = response.json()
    assert child["parentId"] == root["id"]

    response = await client.put(f"/api/wikis/{child['id']}", json={"parentId": None, "content": "day one"})
    moved = response.json()
    assert moved["parentId"] is None
    assert moved["content"] == "day one"

    await client.put(f"/api/wikis/{child['id']}", json={"parentId": root["id"]})
    assert (await client.delete(f"/api/wikis/{root['id']}")).status_code == 204

    orphan = (await client.get(f"/api/wikis/{child['id']}")).json()
    assert orphan["parentId"] is None


async def test_wiki_parent_must_exist(client):
    response = await client.post("/api/wikis/", json={"title": "Lost", "parentId": str(uuid.uuid4())})
    assert response.status_code == 400
    assert response.json() == {"detail": "Parent wiki page not found"}

    page = (await client.post("/api/wikis/", json={"title": "Loop"})).json()
    response = await client.put(f"/api/wikis/{page['id']}", json={"parentId": page["id"]})
    assert response.status_code == 400


async def test_delete_document(client, seeded):
    doc_id = (await client.get("/api/documents/")).json()["documents"][0]["id"]

    assert (await client.delete(f"/api/documents/{doc_id}")).status_code == 204
    assert (await client.get(f"/api/documents/{doc_id}")).status_code == 404
    assert (await client.get("/api/search", params={"query": "a.pdf"})).json()["totalCount"] == 0
