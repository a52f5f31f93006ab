"""Client-side state for a single coach/client chat.

``ChatSession`` owns the transcript, the compose box and the live
subscription of one open chat. All I/O goes through a ``ChatGateway`` so the
same controller can run against the local services or a remote API.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum as PyEnum
from typing import Any, Callable, Protocol

from sqlalchemy.orm import Session, sessionmaker

from halal_gains.models.conversation import Conversation
from halal_gains.models.user import User
from halal_gains.realtime.feed import ChangeEvent, LiveFeed, Subscription
from halal_gains.services import chat
from halal_gains.services.accounts import resolve_viewer
from halal_gains.services.chat import MESSAGES_TABLE
from halal_gains.services.exceptions import AuthenticationRequired, PermissionDenied

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "Please log in to send messages"
LOAD_FAILED = "Failed to load chat. Please try again."
SEND_FAILED = "Failed to send message. Please try again."

MessageRow = dict[str, Any]


class ChatStatus(str, PyEnum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    UNAUTHENTICATED = "unauthenticated"


class ComposeState(str, PyEnum):
    IDLE = "idle"
    SENDING = "sending"


class Closeable(Protocol):
    def close(self) -> None: ...


class ChatGateway(Protocol):
    def current_user(self) -> int | None: ...

    def open_conversation(self, coach_id: int) -> dict[str, Any]: ...

    def load_conversation(self, conversation_id: int) -> dict[str, Any]: ...

    def load_messages(self, conversation_id: int) -> list[MessageRow]: ...

    def send_message(self, conversation_id: int, content: str) -> MessageRow: ...

    def subscribe(
        self, conversation_id: int, on_message: Callable[[MessageRow], None]
    ) -> Closeable: ...


class LocalChatGateway:
    """Gateway backed directly by the chat services and an in-process feed."""

    def __init__(
        self, session_factory: sessionmaker[Session], feed: LiveFeed, user_id: int | None
    ) -> None:
        self._session_factory = session_factory
        self._feed = feed
        self._user_id = user_id

    def current_user(self) -> int | None:
        return self._user_id

    def open_conversation(self, coach_id: int) -> dict[str, Any]:
        with self._session_factory() as db:
            user = db.get(User, self._user_id) if self._user_id is not None else None
            if user is None:
                raise AuthenticationRequired()
            if resolve_viewer(db, user).is_coach:
                raise PermissionDenied("Coaches cannot start conversations")
            conversation, _ = chat.open_conversation(db, coach_id, self._user_id)
            return _conversation_row(conversation)

    def load_conversation(self, conversation_id: int) -> dict[str, Any]:
        with self._session_factory() as db:
            conversation = chat.get_conversation_for(db, conversation_id, self._user_id)
            return _conversation_row(conversation)

    def load_messages(self, conversation_id: int) -> list[MessageRow]:
        with self._session_factory() as db:
            chat.get_conversation_for(db, conversation_id, self._user_id)
            return [m.to_row() for m in chat.list_messages(db, conversation_id)]

    def send_message(self, conversation_id: int, content: str) -> MessageRow:
        with self._session_factory() as db:
            conversation = chat.get_conversation_for(db, conversation_id, self._user_id)
            message = chat.send_message(db, conversation, self._user_id, content, feed=self._feed)
            return message.to_row()

    def subscribe(
        self, conversation_id: int, on_message: Callable[[MessageRow], None]
    ) -> Subscription:
        def forward(change: ChangeEvent) -> None:
            on_message(change.new)

        return self._feed.subscribe(
            MESSAGES_TABLE, forward, filters={"conversation_id": conversation_id}
        )


def _conversation_row(conversation: Conversation) -> dict[str, Any]:
    return {
        "id": conversation.id,
        "coach_id": conversation.coach_id,
        "client_id": conversation.client_id,
    }


def _sort_key(row: MessageRow) -> tuple:
    return (row.get("created_at") or "", row.get("id") or 0)


class ChatSession:
    def __init__(self, gateway: ChatGateway) -> None:
        self.gateway = gateway
        self.status = ChatStatus.LOADING
        self.compose_state = ComposeState.IDLE
        self.error: str | None = None
        self.send_error: str | None = None
        self.draft = ""
        self.conversation_id: int | None = None
        self.coach_id: int | None = None
        self.user_id: int | None = None
        self._messages: list[MessageRow] = []
        self._seen: set = set()
        self._lock = threading.Lock()
        self._subscription: Closeable | None = None
        self.closed = False

    @property
    def messages(self) -> list[MessageRow]:
        with self._lock:
            return list(self._messages)

    @property
    def can_compose(self) -> bool:
        return self.status is ChatStatus.READY and self.compose_state is ComposeState.IDLE

    def open(self, coach_id: int) -> ChatStatus:
        """Open (or create) the viewer's conversation with a coach. Clients only."""
        return self._start(coach_id, lambda: self.gateway.open_conversation(coach_id))

    def open_existing(self, conversation_id: int) -> ChatStatus:
        """Open a conversation the viewer already takes part in, coach or client."""
        return self._start(None, lambda: self.gateway.load_conversation(conversation_id))

    def _start(self, coach_id: int | None, fetch: Callable[[], dict[str, Any]]) -> ChatStatus:
        self._unsubscribe()
        self.closed = False
        self.coach_id = coach_id
        self.conversation_id = None
        self.status = ChatStatus.LOADING
        self.error = None
        self.send_error = None
        with self._lock:
            self._messages = []
            self._seen = set()

        self.user_id = self.gateway.current_user()
        if self.user_id is None:
            self.status = ChatStatus.UNAUTHENTICATED
            self.error = LOGIN_REQUIRED
            return self.status

        # Subscribe before reading history; rows arriving in between are merged by id.
        try:
            conversation = fetch()
            self.conversation_id = conversation["id"]
            self.coach_id = conversation.get("coach_id", coach_id)
            self._subscription = self.gateway.subscribe(self.conversation_id, self.receive)
            history = self.gateway.load_messages(self.conversation_id)
        except Exception:
            logger.exception(
                "Could not open chat (coach %s, conversation %s)", coach_id, self.conversation_id
            )
            self._unsubscribe()
            self.status = ChatStatus.ERROR
            self.error = LOAD_FAILED
            return self.status

        for row in history:
            self._merge(row)
        self.status = ChatStatus.READY
        return self.status

    def send(self, text: str | None = None) -> MessageRow | None:
        attempted = self.draft if text is None else text
        if not attempted or not attempted.strip():
            return None
        if self.status is not ChatStatus.READY or self.compose_state is ComposeState.SENDING:
            return None

        self.compose_state = ComposeState.SENDING
        self.send_error = None
        self.draft = ""
        try:
            row = self.gateway.send_message(self.conversation_id, attempted)
        except Exception:
            logger.warning("Sending to conversation %s failed", self.conversation_id, exc_info=True)
            self.draft = attempted
            self.send_error = SEND_FAILED
            return None
        finally:
            self.compose_state = ComposeState.IDLE
        self._merge(row)
        return row

    def receive(self, row: MessageRow) -> None:
        """Merge a message pushed by the live feed."""
        if self.closed:
            return
        if row.get("conversation_id") not in (None, self.conversation_id):
            return
        self._merge(row)

    def _merge(self, row: MessageRow) -> None:
        with self._lock:
            key = row.get("id")
            if key is not None and key in self._seen:
                return
            if key is not None:
                self._seen.add(key)
            self._messages.append(row)
            if len(self._messages) > 1 and _sort_key(self._messages[-2]) > _sort_key(row):
                self._messages.sort(key=_sort_key)

    def _unsubscribe(self) -> None:
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.close()

    def close(self) -> None:
        self.closed = True
        self._unsubscribe()

    def __enter__(self) -> ChatSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
