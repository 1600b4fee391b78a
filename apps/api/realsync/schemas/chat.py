"""Schemas for chat channels and live messages."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

UserId = int | str


class Member(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: UserId
    name: str = ""


class Subject(BaseModel):
    """Property the conversation is about."""

    model_config = ConfigDict(extra="ignore")

    id: UserId | None = None
    title: str = ""
    description: str = ""


class ChannelMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: UserId
    sender_id: UserId | None = None
    content: str = ""
    created_at: datetime | None = None


class Channel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: UserId
    members: list[Member] = Field(default_factory=list)
    subject: Subject | None = None
    messages: list[ChannelMessage] = Field(default_factory=list)
    unread_count: int = Field(default=0, ge=0)


class ChannelTitleRequest(BaseModel):
    channel: Channel
    user_id: UserId


class ChannelTitleResponse(BaseModel):
    title: str


class ChannelFilterRequest(BaseModel):
    channels: list[Channel] = Field(default_factory=list)
    query: str = ""


class ChannelFilterResponse(BaseModel):
    channels: list[Channel]


class ChannelListItem(BaseModel):
    id: UserId
    title: str
    initial: str
    subject_title: str | None = None
    unread_count: int = Field(ge=0)
    badge: str | None = None
    href: str
    is_active: bool = False


class ChannelHeader(BaseModel):
    id: UserId
    title: str
    member_count: int = Field(ge=0)
    subject: Subject | None = None
    messages: list[ChannelMessage] = Field(default_factory=list)


class ChatViewRequest(BaseModel):
    channels: list[Channel] = Field(default_factory=list)
    channel: Channel | None = None
    user_id: UserId
    url: str = "/"
    query: str = ""


class ChatViewResponse(BaseModel):
    items: list[ChannelListItem]
    active: ChannelHeader | None = None


class NewMessageRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    sender_id: UserId
    content: str = Field(..., min_length=1)
