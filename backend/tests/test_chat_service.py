from datetime import datetime, timedelta

import pytest

from halal_gains.models.conversation import Conversation, Message
from halal_gains.realtime.feed import LiveFeed
from halal_gains.services import chat
from halal_gains.services.accounts import resolve_viewer
from halal_gains.services.exceptions import (
    CoachNotFound,
    ConversationNotFound,
    EmptyMessage,
    NotAParticipant,
)


@pytest.fixture
def pair(make_coach, make_client):
    coach = make_coach("Coach Yusuf", profile_photos=["https://example.com/yusuf.jpg"])
    client_profile = make_client("Amina Khan")
    return coach, client_profile


def test_open_conversation_creates_once(db, pair):
    coach, client_profile = pair
    first, created = chat.open_conversation(db, coach.id, client_profile.user_id)
    again, created_again = chat.open_conversation(db, coach.id, client_profile.user_id)

    assert created is True
    assert created_again is False
    assert first.id == again.id
    assert db.query(Conversation).count() == 1


def test_open_conversation_lost_race_returns_winner(db, pair, monkeypatch):
    coach, client_profile = pair
    winner, _ = chat.open_conversation(db, coach.id, client_profile.user_id)

    real_find = chat._find_conversation
    calls = []

    def stale_find(session, coach_id, client_id):
        calls.append(coach_id)
        # The first lookup happens before the other opener's insert is visible
        if len(calls) == 1:
            return None
        return real_find(session, coach_id, client_id)

    monkeypatch.setattr(chat, "_find_conversation", stale_find)
    conversation, created = chat.open_conversation(db, coach.id, client_profile.user_id)

    assert created is False
    assert conversation.id == winner.id
    assert db.query(Conversation).count() == 1


def test_open_conversation_unknown_coach(db, pair):
    _, client_profile = pair
    with pytest.raises(CoachNotFound):
        chat.open_conversation(db, 404, client_profile.user_id)


def test_participants_only(db, pair, make_client):
    coach, client_profile = pair
    outsider = make_client("Outsider")
    conversation, _ = chat.open_conversation(db, coach.id, client_profile.user_id)

    assert chat.get_conversation_for(db, conversation.id, client_profile.user_id).id == conversation.id
    assert chat.get_conversation_for(db, conversation.id, coach.user_id).id == conversation.id
    with pytest.raises(NotAParticipant):
        chat.get_conversation_for(db, conversation.id, outsider.user_id)
    with pytest.raises(ConversationNotFound):
        chat.get_conversation_for(db, 999, client_profile.user_id)


def test_messages_listed_in_creation_order(db, pair):
    coach, client_profile = pair
    conversation, _ = chat.open_conversation(db, coach.id, client_profile.user_id)
    base = datetime(2025, 3, 1, 18, 0)
    for offset, text in [(2, "third"), (0, "first"), (1, "second")]:
        db.add(
            Message(
                conversation_id=conversation.id,
                sender_id=client_profile.user_id,
                content=text,
                created_at=base + timedelta(minutes=offset),
            )
        )
    db.commit()

    rendered = chat.list_messages(db, conversation.id)
    assert [m.content for m in rendered] == ["first", "second", "third"]
    stamps = [m.created_at for m in rendered]
    assert stamps == sorted(stamps)


def test_send_message_bumps_conversation_and_publishes(db, pair):
    coach, client_profile = pair
    conversation, _ = chat.open_conversation(db, coach.id, client_profile.user_id)
    before = conversation.updated_at
    feed = LiveFeed()
    received = []
    feed.subscribe(
        chat.MESSAGES_TABLE,
        received.append,
        filters={"conversation_id": conversation.id},
    )

    message = chat.send_message(db, conversation, client_profile.user_id, "  Hello  ", feed=feed)

    assert message.content == "Hello"
    assert conversation.updated_at >= before
    assert conversation.updated_at == message.created_at
    assert [change.new["id"] for change in received] == [message.id]


def test_send_empty_message_touches_nothing(db, pair):
    coach, client_profile = pair
    conversation, _ = chat.open_conversation(db, coach.id, client_profile.user_id)
    with pytest.raises(EmptyMessage):
        chat.send_message(db, conversation, client_profile.user_id, "   \n\t")
    assert db.query(Message).count() == 0


def test_mark_read_only_flips_other_party(db, pair):
    coach, client_profile = pair
    conversation, _ = chat.open_conversation(db, coach.id, client_profile.user_id)
    chat.send_message(db, conversation, client_profile.user_id, "Salam")
    chat.send_message(db, conversation, coach.user_id, "Wa alaikum salam")
    chat.send_message(db, conversation, client_profile.user_id, "Ready for week one")

    assert chat.mark_read(db, conversation.id, coach.user_id) == 2
    assert chat.mark_read(db, conversation.id, coach.user_id) == 0
    db.expire_all()
    unread = db.query(Message).filter(Message.is_read.is_(False)).all()
    assert [m.sender_id for m in unread] == [coach.user_id]


def test_list_conversations_for_both_roles(db, pair, make_client):
    coach, client_profile = pair
    other = make_client("Bilal Ahmed")
    first, _ = chat.open_conversation(db, coach.id, client_profile.user_id)
    second, _ = chat.open_conversation(db, coach.id, other.user_id)
    chat.send_message(db, first, client_profile.user_id, "Hello")
    chat.send_message(db, second, other.user_id, "Assalamu alaikum")
    chat.send_message(db, second, coach.user_id, "Wa alaikum salam")

    coach_view = chat.list_conversations(db, resolve_viewer(db, coach.user))
    assert [s.id for s in coach_view] == [second.id, first.id]
    assert coach_view[0].other_user_name == "Bilal Ahmed"
    assert coach_view[0].last_message == "Wa alaikum salam"
    assert coach_view[0].unread_count == 1
    assert coach_view[1].unread_count == 1

    client_view = chat.list_conversations(db, resolve_viewer(db, client_profile.user))
    assert len(client_view) == 1
    assert client_view[0].other_user_name == "Coach Yusuf"
    assert client_view[0].other_user_photo == "https://example.com/yusuf.jpg"
    assert client_view[0].unread_count == 0


def test_client_without_profile_falls_back_to_account_name(db, make_coach, make_user):
    coach = make_coach()
    user = make_user("walkin@example.com", "Walk In")
    nameless = make_user("nameless@example.com")
    chat.open_conversation(db, coach.id, user.id)
    chat.open_conversation(db, coach.id, nameless.id)

    names = {s.other_user_name for s in chat.list_conversations(db, resolve_viewer(db, coach.user))}
    assert names == {"Walk In", "Client"}
