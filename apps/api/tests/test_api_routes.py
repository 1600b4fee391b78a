"""API tests for notification, sidebar and chat endpoints."""
from __future__ import annotations

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from realsync.core.config import settings
from realsync.main import app
from realsync.services.feed import NotificationFeedClient, get_feed_client

UNREAD = [
    {"id": "n1", "data": {"link": "/inquiries/1", "title": "New inquiry"}},
    {"id": "n2", "data": {"title": "New lead for Sunset Villa"}},
    {"id": "n3", "data": {"link": "/chat/4"}},
    {"id": "n4", "title": "tripping tomorrow"},
]


def override_feed(handler) -> list[httpx.Request]:
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    async def _client():
        transport = httpx.MockTransport(recording_handler)
        async with httpx.AsyncClient(transport=transport, base_url="http://backend.test") as client:
            yield NotificationFeedClient(client)

    app.dependency_overrides[get_feed_client] = _client
    return requests


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as api_client:
        yield api_client


@pytest.mark.asyncio
async def test_classify_endpoint(client) -> None:
    response = await client.post(
        "/api/notifications/classify",
        json={
            "notifications": [
                {"data": {"link": "/deals/9"}},
                {"title": "New message from agent"},
                {"title": "hello world"},
                {"data": {"link": "/inquiries-archive/5"}},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json() == {"buckets": ["deals", "chat", None, "inquiries"]}


@pytest.mark.asyncio
async def test_classify_endpoint_honours_segment_boundary(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "link_segment_boundary", True)

    response = await client.post(
        "/api/notifications/classify",
        json={"notifications": [{"data": {"link": "/inquiries-archive/5"}}]},
    )

    assert response.json() == {"buckets": [None]}


@pytest.mark.asyncio
async def test_counts_endpoint(client) -> None:
    response = await client.post(
        "/api/notifications/counts",
        json={"notifications": [{"data": {"link": "/chat/1"}}, {"title": "tripping tomorrow"}]},
    )

    assert response.status_code == 200
    assert response.json() == {"chat": 1, "inquiries": 0, "trippings": 1, "deals": 0}


@pytest.mark.asyncio
async def test_sidebar_badges_for_buyer(client) -> None:
    override_feed(lambda request: httpx.Response(200, json={"all": UNREAD, "unread": UNREAD}))

    response = await client.get("/api/sidebar/buyer")

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "buyer"
    assert body["app_name"] == "RealSync"
    assert body["app_description"] == "Buyer Dashboard"
    assert body["counts"] == {"chat": 1, "inquiries": 1, "trippings": 1, "deals": 0}
    assert body["unread_total"] == 4
    menus = {menu["path"]: menu for menu in body["menus"]}
    assert menus["/chat"]["badge"] == "1"
    assert menus["/chat"]["description"] == "Chat with agents & sellers"
    assert menus["/deals"]["badge"] is None


@pytest.mark.asyncio
async def test_sidebar_unknown_role_is_404(client) -> None:
    override_feed(lambda request: httpx.Response(200, json=[]))

    response = await client.get("/api/sidebar/landlord")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_sidebar_backend_failure_is_503(client) -> None:
    override_feed(lambda request: httpx.Response(502))

    response = await client.get("/api/sidebar/agent")

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_mark_path_read_marks_route_matches(client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"all": UNREAD, "unread": UNREAD})
        return httpx.Response(204)

    requests = override_feed(handler)

    response = await client.post("/api/sidebar/buyer/read", json={"path": "/inquiries"})

    assert response.status_code == 200
    assert response.json() == {"marked": ["n1", "n2"]}
    assert [request.url.path for request in requests if request.method == "POST"] == [
        "/notifications/n1/read",
        "/notifications/n2/read",
    ]


@pytest.mark.asyncio
async def test_mark_path_read_unknown_role_is_404(client) -> None:
    requests = override_feed(lambda request: httpx.Response(200, json=[]))

    response = await client.post("/api/sidebar/landlord/read", json={"path": "/inquiries"})

    assert response.status_code == 404
    assert requests == []


@pytest.mark.asyncio
async def test_mark_path_read_backend_failure_is_503(client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"all": UNREAD, "unread": UNREAD})
        return httpx.Response(500)

    override_feed(handler)

    response = await client.post("/api/sidebar/buyer/read", json={"path": "/inquiries"})

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_mark_all_read(client) -> None:
    requests = override_feed(lambda request: httpx.Response(204))

    response = await client.post("/api/sidebar/agent/read-all")

    assert response.status_code == 200
    assert response.json() == {"acknowledged": True}
    assert [(request.method, request.url.path) for request in requests] == [
        ("POST", "/notifications/read-all"),
    ]


@pytest.mark.asyncio
async def test_mark_all_read_unauthenticated_is_not_acknowledged(client) -> None:
    override_feed(lambda request: httpx.Response(401))

    response = await client.post("/api/sidebar/seller/read-all")

    assert response.status_code == 200
    assert response.json() == {"acknowledged": False}


@pytest.mark.asyncio
async def test_mark_page_read_forwards_url(client) -> None:
    requests = override_feed(lambda request: httpx.Response(204))

    response = await client.post("/api/sidebar/agent/read-page", json={"url": "/agents/trippings"})

    assert response.status_code == 200
    assert response.json() == {"acknowledged": True}
    assert requests[0].url.path == "/notifications/mark-page-read"
    assert json.loads(requests[0].content) == {"url": "/agents/trippings"}


@pytest.mark.asyncio
async def test_mark_page_read_errors(client) -> None:
    override_feed(lambda request: httpx.Response(503))

    missing_role = await client.post("/api/sidebar/landlord/read-page", json={"url": "/chat"})
    failure = await client.post("/api/sidebar/broker/read-page", json={"url": "/brokers/chat"})

    assert missing_role.status_code == 404
    assert failure.status_code == 503

@pytest.mark.asyncio
async def test_channel_title_and_filter(client) -> None:
    channel = {"id": 1, "members": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]}

    title = await client.post("/api/chat/channels/title", json={"channel": channel, "user_id": 1})
    filtered = await client.post(
        "/api/chat/channels/filter",
        json={"channels": [channel, {"id": 2, "members": [{"id": 3, "name": "Carol"}]}], "query": "BOB"},
    )

    assert title.json() == {"title": "Bob"}
    assert [item["id"] for item in filtered.json()["channels"]] == [1]


@pytest.mark.asyncio
async def test_chat_view(client) -> None:
    channels = [
        {
            "id": 1,
            "members": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}],
            "subject": {"title": "Sunset Villa", "description": "3BR"},
            "unread_count": 3,
        },
        {"id": 2, "members": [{"id": 1, "name": "Alice"}, {"id": 3, "name": "Carol"}]},
    ]

    response = await client.post(
        "/api/chat/view",
        json={"channels": channels, "channel": channels[0], "user_id": 1, "url": "/agents/chat", "query": "villa"},
    )

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["items"]] == [1]
    item = body["items"][0]
    assert item["title"] == "Bob"
    assert item["badge"] == "3"
    assert item["href"] == "/agents/chat/channels/1"
    assert item["is_active"] is True
    assert body["active"]["member_count"] == 2
    assert body["active"]["subject"]["title"] == "Sunset Villa"
