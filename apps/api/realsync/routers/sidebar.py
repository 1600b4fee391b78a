"""Role sidebar badges backed by the marketplace notification feed."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.config import settings
from ..data.sidebars import SIDEBARS, SidebarConfig
from ..schemas import notifications as schemas
from ..services import notifications as notifications_service
from ..services import sidebar as sidebar_service
from ..services.feed import FeedUnavailableError, NotificationFeedClient, get_feed_client

router = APIRouter()

logger = logging.getLogger(__name__)


def _get_sidebar(role: str) -> SidebarConfig:
    config = SIDEBARS.get(role)
    if config is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown sidebar role")
    return config


@router.get("/{role}", response_model=schemas.SidebarResponse)
async def sidebar_badges(
    role: str,
    feed_client: NotificationFeedClient = Depends(get_feed_client),
) -> schemas.SidebarResponse:
    """Return unread counts and per-menu badges for a role dashboard."""

    config = _get_sidebar(role)
    try:
        feed = await feed_client.fetch()
    except FeedUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    counts = notifications_service.build_counts(feed.unread)
    menus = sidebar_service.menu_badges(
        config.main_menus,
        notifications_service.counts_by_path(counts),
        cap=settings.sidebar_badge_cap,
    )
    return schemas.SidebarResponse(
        role=config.role,
        app_name=config.app_name,
        app_description=config.app_description,
        counts=counts,
        menus=menus,
        unread_total=len(feed.unread),
    )


@router.post("/{role}/read", response_model=schemas.MarkPathReadResponse)
async def mark_path_read(
    role: str,
    payload: schemas.MarkPathReadRequest,
    feed_client: NotificationFeedClient = Depends(get_feed_client),
) -> schemas.MarkPathReadResponse:
    """Mark every unread notification that leads to ``payload.path`` as read."""

    _get_sidebar(role)
    try:
        feed = await feed_client.fetch()
        ids = notifications_service.unread_ids_for_path(
            feed.unread, payload.path, segment_boundary=settings.link_segment_boundary
        )
        marked = [notification_id for notification_id in ids if await feed_client.mark_as_read(notification_id)]
    except FeedUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    logger.info("Marked %d notifications read for %s on %s", len(marked), payload.path, role)
    return schemas.MarkPathReadResponse(marked=marked)


@router.post("/{role}/read-all", response_model=schemas.AcknowledgeResponse)
async def mark_all_read(
    role: str,
    feed_client: NotificationFeedClient = Depends(get_feed_client),
) -> schemas.AcknowledgeResponse:
    """Clear every unread notification for the viewer."""

    _get_sidebar(role)
    try:
        acknowledged = await feed_client.mark_all_as_read()
    except FeedUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return schemas.AcknowledgeResponse(acknowledged=acknowledged)


@router.post("/{role}/read-page", response_model=schemas.AcknowledgeResponse)
async def mark_page_read(
    role: str,
    payload: schemas.MarkPageReadRequest,
    feed_client: NotificationFeedClient = Depends(get_feed_client),
) -> schemas.AcknowledgeResponse:
    """Let the backend clear notifications tied to the page the viewer opened."""

    _get_sidebar(role)
    try:
        acknowledged = await feed_client.mark_page_as_read(payload.url)
    except FeedUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return schemas.AcknowledgeResponse(acknowledged=acknowledged)
