"""Notification classification endpoints."""
from __future__ import annotations

from fastapi import APIRouter

from ..core.config import settings
from ..schemas import notifications as schemas
from ..services import notifications as notifications_service

router = APIRouter()


@router.post("/classify", response_model=schemas.ClassifyResponse)
async def classify_notifications(payload: schemas.ClassifyRequest) -> schemas.ClassifyResponse:
    """Return the sidebar bucket each notification leads to."""

    classifier = notifications_service.RouteClassifier(segment_boundary=settings.link_segment_boundary)
    return schemas.ClassifyResponse(
        buckets=[classifier.classify(notification) for notification in payload.notifications]
    )


@router.post("/counts", response_model=schemas.UnreadCounts)
async def unread_counts(payload: schemas.CountsRequest) -> schemas.UnreadCounts:
    """Return unread badge counts for the tracked sidebar buckets."""

    return notifications_service.build_counts(payload.notifications)
