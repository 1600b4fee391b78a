"""Schemas for notification classification and sidebar badges."""
from __future__ import annotations

from datetime import datetime
import enum

from pydantic import BaseModel, ConfigDict, Field


class RouteBucket(str, enum.Enum):
    CHAT = "chat"
    INQUIRIES = "inquiries"
    TRIPPINGS = "trippings"
    DEALS = "deals"
    PROPERTIES = "properties"

    @property
    def path(self) -> str:
        return f"/{self.value}"


class NotificationData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    link: str | None = None
    title: str | None = None
    message: str | None = None


class Notification(BaseModel):
    """Notification record as delivered by the marketplace backend."""

    model_config = ConfigDict(extra="ignore")

    id: str | int | None = None
    read_at: datetime | None = None
    data: NotificationData | None = None
    title: str | None = None
    message: str | None = None


class UnreadCounts(BaseModel):
    chat: int = Field(default=0, ge=0)
    inquiries: int = Field(default=0, ge=0)
    trippings: int = Field(default=0, ge=0)
    deals: int = Field(default=0, ge=0)


class ClassifyRequest(BaseModel):
    notifications: list[Notification] = Field(default_factory=list)


class ClassifyResponse(BaseModel):
    buckets: list[RouteBucket | None]


class CountsRequest(BaseModel):
    notifications: list[Notification] = Field(default_factory=list)


class MenuBadge(BaseModel):
    name: str
    path: str
    description: str = ""
    count: int = Field(ge=0)
    badge: str | None = None


class SidebarResponse(BaseModel):
    role: str
    app_name: str
    app_description: str
    counts: UnreadCounts
    menus: list[MenuBadge]
    unread_total: int = Field(ge=0)


class MarkPathReadRequest(BaseModel):
    path: str = Field(..., min_length=1, description="Sidebar path, e.g. /inquiries")


class MarkPathReadResponse(BaseModel):
    marked: list[str | int]


class MarkPageReadRequest(BaseModel):
    url: str = Field(..., min_length=1, description="Page the viewer opened, e.g. /agents/trippings")


class AcknowledgeResponse(BaseModel):
    acknowledged: bool
