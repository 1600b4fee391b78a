"""Client for the marketplace backend's notification endpoints."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Mapping

import httpx
from fastapi import Request
from pydantic import ValidationError

from ..core.config import settings
from ..schemas.notifications import Notification

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "X-Requested-With": "XMLHttpRequest",
}
FORWARDED_HEADERS = ("cookie", "x-xsrf-token", "x-csrf-token")


class FeedUnavailableError(RuntimeError):
    """Raised when the backend notification feed cannot be reached."""


@dataclass(slots=True)
class NotificationFeed:
    all: list[Notification] = field(default_factory=list)
    unread: list[Notification] = field(default_factory=list)


def parse_feed(payload: Any) -> NotificationFeed:
    """Normalise a feed payload.

    Accepts ``{"all": [...], "unread": [...]}`` or a bare list. Without an
    ``unread`` list, every item lacking ``read_at`` is unread.
    """

    raw_all: list[Any] = []
    raw_unread: list[Any] | None = None
    if isinstance(payload, dict):
        if isinstance(payload.get("all"), list):
            raw_all = payload["all"]
        if isinstance(payload.get("unread"), list):
            raw_unread = payload["unread"]
    elif isinstance(payload, list):
        raw_all = payload

    all_items = _validate_items(raw_all)
    if raw_unread is not None:
        unread = _validate_items(raw_unread)
    else:
        unread = [item for item in all_items if item.read_at is None]
    return NotificationFeed(all=all_items, unread=unread)


def _validate_items(items: list[Any]) -> list[Notification]:
    notifications = []
    for item in items:
        try:
            notifications.append(Notification.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping malformed notification: %s", exc.errors()[:1])
    return notifications


def _safe_json(response: httpx.Response) -> Any | None:
    """Return the decoded body, or None for empty and non-JSON responses."""

    content_type = response.headers.get("content-type", "")
    if "application/json" not in content_type:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning("Backend returned unparseable JSON for %s", response.request.url)
        return None


def forwarded_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Pick the caller's session headers that the backend needs."""

    return {name: headers[name] for name in FORWARDED_HEADERS if name in headers}


def create_http_client(headers: Mapping[str, str] | None = None) -> httpx.AsyncClient:
    """Return an HTTP client bound to the configured backend."""

    return httpx.AsyncClient(
        base_url=settings.backend_base_url,
        timeout=settings.backend_timeout_seconds,
        headers={**DEFAULT_HEADERS, **(headers or {})},
    )


class NotificationFeedClient:
    """Read and acknowledge the viewer's notifications."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self) -> NotificationFeed:
        response = await self._request("GET", "/notifications")
        if response is None:
            return NotificationFeed()
        return parse_feed(_safe_json(response))

    async def mark_as_read(self, notification_id: str | int) -> bool:
        response = await self._request("POST", f"/notifications/{notification_id}/read", json={})
        return response is not None

    async def mark_all_as_read(self) -> bool:
        response = await self._request("POST", "/notifications/read-all", json={})
        return response is not None

    async def mark_page_as_read(self, url: str) -> bool:
        response = await self._request("POST", "/notifications/mark-page-read", json={"url": url})
        return response is not None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response | None:
        """Send a request; None means the viewer is not authenticated."""

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.exception("Notification backend request %s %s failed", method, path)
            raise FeedUnavailableError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.warning("Viewer not authenticated for %s %s", method, path)
            return None
        if response.is_error:
            logger.error("Notification backend %s %s returned %s", method, path, response.status_code)
            raise FeedUnavailableError(f"{method} {path} returned {response.status_code}")
        return response


async def get_feed_client(request: Request) -> AsyncIterator[NotificationFeedClient]:
    """FastAPI dependency forwarding the caller's session to the backend."""

    async with create_http_client(forwarded_headers(request.headers)) as client:
        yield NotificationFeedClient(client)
