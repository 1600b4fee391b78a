"""Chat channel view-model and live message endpoints."""
from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from fastapi import APIRouter, Response, WebSocket, WebSocketDisconnect, status

from ..core.config import settings
from ..schemas import chat as schemas
from ..services import channels as channels_service
from ..services.broadcast import NEW_MESSAGE_EVENT, Subscriber, broadcaster

router = APIRouter()


@router.post("/channels/title", response_model=schemas.ChannelTitleResponse)
async def channel_title(payload: schemas.ChannelTitleRequest) -> schemas.ChannelTitleResponse:
    """Return the display title of a channel for the viewer."""

    return schemas.ChannelTitleResponse(title=channels_service.title_for(payload.channel, payload.user_id))


@router.post("/channels/filter", response_model=schemas.ChannelFilterResponse)
async def filter_channels(payload: schemas.ChannelFilterRequest) -> schemas.ChannelFilterResponse:
    """Return channels matching a free-text query."""

    return schemas.ChannelFilterResponse(
        channels=channels_service.filter_channels(payload.channels, payload.query)
    )


@router.post("/view", response_model=schemas.ChatViewResponse)
async def chat_view(payload: schemas.ChatViewRequest) -> schemas.ChatViewResponse:
    """Build the channel list and the open conversation pane."""

    visible = channels_service.filter_channels(payload.channels, payload.query)
    active_id = payload.channel.id if payload.channel else None
    items = channels_service.channel_list(
        visible,
        payload.user_id,
        active_id=active_id,
        url=payload.url,
        badge_cap=settings.channel_badge_cap,
    )
    active = channels_service.channel_header(payload.channel, payload.user_id) if payload.channel else None
    return schemas.ChatViewResponse(items=items, active=active)


@router.post("/channels/{channel_id}/messages", status_code=status.HTTP_204_NO_CONTENT)
async def post_message(channel_id: str, payload: schemas.NewMessageRequest) -> Response:
    """Fan a new message out to the channel's live subscribers."""

    message = schemas.ChannelMessage(
        id=str(uuid4()),
        sender_id=payload.sender_id,
        content=payload.content,
        created_at=datetime.now(timezone.utc),
    )
    await broadcaster.publish(
        channels_service.topic_for(channel_id),
        {"event": NEW_MESSAGE_EVENT, "message": message.model_dump(mode="json")},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/channels/{channel_id}/ws")
async def channel_socket(websocket: WebSocket, channel_id: str) -> None:
    """Stream new messages posted to a channel."""

    # Connections reusing a client id must stay distinct subscribers.
    client_id = websocket.query_params.get("subscriber_id") or "viewer"
    subscriber_id = f"{client_id}-{uuid4().hex}"
    topic = channels_service.topic_for(channel_id)
    await websocket.accept()

    await broadcaster.subscribe(topic, Subscriber(subscriber_id=subscriber_id, send=websocket.send_json))
    await websocket.send_json({"type": "subscribed", "channel": topic, "subscriber_id": subscriber_id})

    try:
        while True:
            # Inbound frames only keep the connection alive.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await broadcaster.unsubscribe(topic, subscriber_id)
