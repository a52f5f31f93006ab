import asyncio
import logging

from fastapi import (
    APIRouter,
    Depends,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from halal_gains.api import deps
from halal_gains.db.session import get_db
from halal_gains.models.user import User
from halal_gains.realtime.feed import INSERT, ChangeEvent, LiveFeed
from halal_gains.schemas.chat import (
    ConversationOpen,
    ConversationPublic,
    ConversationSummary,
    LiveEnvelope,
    MarkReadResponse,
    MessageCreate,
    MessagePublic,
)
from halal_gains.services import chat as chat_service
from halal_gains.services.accounts import Viewer
from halal_gains.services.exceptions import ChatError, PermissionDenied

logger = logging.getLogger(__name__)

router = APIRouter()

POLICY_VIOLATION = 1008


@router.get("/conversations", response_model=list[ConversationSummary])
def list_conversations(
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> list[ConversationSummary]:
    return [
        ConversationSummary(**summary.__dict__)
        for summary in chat_service.list_conversations(db, viewer)
    ]


@router.post("/conversations", response_model=ConversationPublic)
def open_conversation(
    payload: ConversationOpen,
    response: Response,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(deps.get_viewer),
) -> ConversationPublic:
    if viewer.is_coach:
        raise PermissionDenied("Coaches cannot start conversations")
    conversation, created = chat_service.open_conversation(
        db, payload.coach_id, viewer.user.id
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return conversation


@router.get("/conversations/{conversation_id}/messages", response_model=list[MessagePublic])
def list_messages(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> list[MessagePublic]:
    chat_service.get_conversation_for(db, conversation_id, current_user.id)
    return chat_service.list_messages(db, conversation_id)


@router.post(
    "/conversations/{conversation_id}/messages",
    response_model=MessagePublic,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    conversation_id: int,
    payload: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
    feed: LiveFeed = Depends(deps.get_live_feed),
) -> MessagePublic:
    conversation = chat_service.get_conversation_for(db, conversation_id, current_user.id)
    return chat_service.send_message(
        db, conversation, current_user.id, payload.content, feed=feed
    )


@router.post("/conversations/{conversation_id}/read", response_model=MarkReadResponse)
def mark_read(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> MarkReadResponse:
    chat_service.get_conversation_for(db, conversation_id, current_user.id)
    updated = chat_service.mark_read(db, conversation_id, current_user.id)
    return MarkReadResponse(updated=updated)


@router.websocket("/conversations/{conversation_id}/live")
async def live_messages(
    websocket: WebSocket,
    conversation_id: int,
    token: str | None = Query(None),
) -> None:
    """Push every message inserted into the conversation to the connected participant."""
    with websocket.app.state.session_factory() as db:
        user = deps.user_from_token(db, token)
        if user is None:
            logger.warning("Live feed connection rejected: missing or invalid token")
            await websocket.close(code=POLICY_VIOLATION, reason="Missing authentication token")
            return
        try:
            chat_service.get_conversation_for(db, conversation_id, user.id)
        except ChatError as exc:
            logger.warning(
                "Live feed connection for user %s rejected: %s", user.id, exc.detail
            )
            await websocket.close(code=POLICY_VIOLATION, reason=exc.detail)
            return
        user_id = user.id

    await websocket.accept()
    loop = asyncio.get_running_loop()
    outbox: asyncio.Queue[dict] = asyncio.Queue()

    def on_insert(change: ChangeEvent) -> None:
        envelope = LiveEnvelope(type="message.created", data=change.new)
        loop.call_soon_threadsafe(outbox.put_nowait, envelope.dict())

    feed: LiveFeed = websocket.app.state.live_feed
    subscription = feed.subscribe(
        chat_service.MESSAGES_TABLE,
        on_insert,
        event=INSERT,
        filters={"conversation_id": conversation_id},
    )
    logger.info("User %s listening on conversation %s", user_id, conversation_id)
    # Queued ahead of any delivery, so the client knows it will not miss rows from here on
    outbox.put_nowait(
        LiveEnvelope(type="subscribed", data={"conversation_id": conversation_id}).dict()
    )

    async def forward() -> None:
        while True:
            await websocket.send_json(await outbox.get())

    forwarder = asyncio.create_task(forward())
    try:
        while True:
            try:
                frame = await websocket.receive_json()
            except ValueError:
                outbox.put_nowait(
                    LiveEnvelope(type="error", data={"detail": "Invalid JSON"}).dict()
                )
                continue
            if isinstance(frame, dict) and frame.get("type") == "ping":
                outbox.put_nowait(LiveEnvelope(type="pong").dict())
    except WebSocketDisconnect:
        logger.info("User %s left conversation %s", user_id, conversation_id)
    finally:
        subscription.close()
        forwarder.cancel()
        await asyncio.gather(forwarder, return_exceptions=True)
