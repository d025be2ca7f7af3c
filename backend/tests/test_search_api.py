"""Search endpoint tests."""

from datetime import datetime, timedelta

import pytest

from tasknet.models import Document, Note, Task
from tasknet.services.relevance import dump_tags

T0 = datetime(2026, 3, 1, 9, 30, 0)


@pytest.fixture
async def seeded(add_rows):
    await add_rows(
        Note(
            title="Budget 2026",
            content="Draft numbers for the budget",
            tags=dump_tags(["urgent", "finance"]),
            created_at=T0,
            updated_at=T0,
        ),
        Note(
            title="Offsite",
            content="venue has no budget left",
            tags=dump_tags(["urgent"]),
            created_at=T0,
            updated_at=T0 + timedelta(hours=1),
        ),
        Task(
            title="Approve budget",
            description="",
            tags=dump_tags(["urgent"]),
            status="todo",
            priority="high",
            due_date=T0 + timedelta(days=7),
            created_at=T0,
            updated_at=T0,
        ),
        Document(name="budget.pdf", path="uploads/budget.pdf", file_type="pdf", size=2048, created_at=T0),
    )


async def test_health(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize("params", [{}, {"query": ""}, {"query": "   "}])
async def test_blank_query_is_not_an_error(client, seeded, params):
    response = await client.get("/api/search", params=params)
    assert response.status_code == 200
    assert response.json() == {"results": [], "totalCount": 0, "facets": {"types": [], "tags": []}}


async def test_response_shape(client, seeded):
    response = await client.get("/api/search", params={"query": "budget"})
    assert response.status_code == 200
    data = response.json()

    assert data["totalCount"] == 4
    assert len(data["results"]) == 4
    assert {f["type"] for f in data["facets"]["types"]} == {"note", "task", "document"}
    assert {"tag": "urgent", "count": 3} in data["facets"]["tags"]

    task = next(r for r in data["results"] if r["type"] == "task")
    assert task["title"] == "Approve budget"
    assert task["score"] == 1.0
    assert task["metadata"]["status"] == "todo"
    assert task["metadata"]["priority"] == "high"
    assert task["metadata"]["dueDate"].startswith("2026-03-08")
    assert task["metadata"]["tags"] == ["urgent"]

    document = next(r for r in data["results"] if r["type"] == "document")
    assert document["metadata"] == {
        "fileType": "pdf",
        "size": 2048,
        "path": "uploads/budget.pdf",
        "createdAt": "2026-03-01T09:30:00",
    }
    assert document["content"] is None


async def test_score_ordering_over_http(client, seeded):
    data = (await client.get("/api/search", params={"query": "budget"})).json()
    scores = [r["score"] for r in data["results"]]
    assert scores == sorted(scores, reverse=True)
    assert data["results"][-1]["title"] == "Offsite"
    assert data["results"][-1]["excerpt"] == "venue has no budget left"


async def test_type_filter(client, seeded):
    data = (await client.get("/api/search", params={"query": "budget", "type": "notes"})).json()
    assert {r["type"] for r in data["results"]} == {"note"}
    assert data["facets"]["types"] == [{"type": "note", "count": 2}]


async def test_unknown_type_rejected(client, seeded):
    response = await client.get("/api/search", params={"query": "budget", "type": "emails"})
    assert response.status_code == 422


@pytest.mark.parametrize("limit, expected", [("1", 1), ("0", 1), ("-3", 1), ("abc", 4), ("999", 4)])
async def test_limit_is_clamped_not_rejected(client, seeded, limit, expected):
    response = await client.get("/api/search", params={"query": "budget", "limit": limit})
    assert response.status_code == 200
    data = response.json()
    assert len(data["results"]) == expected
    assert data["totalCount"] == 4


async def test_no_match(client, seeded):
    data = (await client.get("/api/search", params={"query": "zzzznomatch"})).json()
    assert data == {"results": [], "totalCount": 0, "facets": {"types": [], "tags": []}}


async def test_search_is_served_without_a_trailing_slash(client, seeded):
    response = await client.get("/api/search", params={"query": "budget"})
    assert response.status_code == 200
    assert "location" not in response.headers
    assert response.json()["totalCount"] == 4
