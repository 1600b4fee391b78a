"""Chat channel view-model helpers.

All functions are pure: channels and messages are read, never mutated.
"""
from __future__ import annotations

from typing import Sequence

from ..schemas import chat as schemas
from .sidebar import format_badge

UNTITLED_CHANNEL = "Conversation"

ROLE_BASE_PATHS: tuple[tuple[str, str], ...] = (
    ("agents", "/agents/"),
    ("broker", "/brokers/"),
    ("seller", "/seller/"),
    ("buyer", "/"),
)


def title_for(channel: schemas.Channel, current_user_id: schemas.UserId) -> str:
    """Join the names of every member except the current user."""

    return ",".join(member.name for member in channel.members if member.id != current_user_id)


def filter_channels(channels: Sequence[schemas.Channel], query: str) -> list[schemas.Channel]:
    """Return channels whose member names or subject title contain ``query``.

    Matching is case-insensitive and considers every member, including the
    viewer. Only an empty query keeps all channels; surrounding whitespace is
    part of the query.
    """

    needle = (query or "").lower()
    if not needle:
        return list(channels)

    matches = []
    for channel in channels:
        names = " ".join(member.name for member in channel.members).lower()
        subject_title = (channel.subject.title if channel.subject else "").lower()
        if needle in names or needle in subject_title:
            matches.append(channel)
    return matches


def base_path_for(url: str) -> str:
    """Return the dashboard base path for the page the viewer is on."""

    for marker, base in ROLE_BASE_PATHS:
        if marker in url:
            return base
    return "/"


def channel_href(channel: schemas.Channel, url: str) -> str:
    return f"{base_path_for(url)}chat/channels/{channel.id}"


def channel_list(
    channels: Sequence[schemas.Channel],
    current_user_id: schemas.UserId,
    *,
    active_id: schemas.UserId | None = None,
    url: str = "/",
    badge_cap: int = 9,
) -> list[schemas.ChannelListItem]:
    """Build sidebar entries for the channel list."""

    items = []
    for channel in channels:
        title = title_for(channel, current_user_id)
        subject_title = channel.subject.title if channel.subject and channel.subject.title else None
        items.append(
            schemas.ChannelListItem(
                id=channel.id,
                title=title or UNTITLED_CHANNEL,
                initial=title[:1] or "?",
                subject_title=subject_title,
                unread_count=channel.unread_count,
                badge=format_badge(channel.unread_count, badge_cap),
                href=channel_href(channel, url),
                is_active=active_id is not None and channel.id == active_id,
            )
        )
    return items


def channel_header(channel: schemas.Channel, current_user_id: schemas.UserId) -> schemas.ChannelHeader:
    """Summarise the open channel for the conversation pane."""

    return schemas.ChannelHeader(
        id=channel.id,
        title=title_for(channel, current_user_id),
        member_count=len(channel.members),
        subject=channel.subject,
        messages=list(channel.messages),
    )


def topic_for(channel_id: schemas.UserId) -> str:
    """Return the broadcast topic for a channel's new messages."""

    return f"chat.channels.{channel_id}.new_message"
