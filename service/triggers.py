"""Turns Cloud Functions Firestore events into notifier calls."""

from __future__ import annotations

from pydantic import ValidationError

from models.chat import ChatRoomRecord, MessageRecord
from models.results import DATA_ERROR, NO_ACTION, NotifyResult
from service.group_create_notifier import notify_group_created
from service.message_notifier import notify_new_message


def on_chat_room_created(event) -> NotifyResult:
    """Handles ``chatRooms/{chatRoomUid}`` creation."""
    snapshot = event.data
    if snapshot is None:
        return NotifyResult(status=NO_ACTION, detail="empty event")

    try:
        chat_room = ChatRoomRecord.from_snapshot(snapshot)
    except ValidationError as e:
        print(f"[group_create] Malformed chat room {event.params.get('chatRoomUid')}: {e}")
        return NotifyResult(status=DATA_ERROR, detail=str(e))

    result = notify_group_created(chat_room)
    print(f"[group_create] {event.params.get('chatRoomUid')}: {result.status}")
    return result


def on_message_created(event) -> NotifyResult:
    """Handles ``chatRooms/{chatRoomUid}/chatRoomMessages/{messageUid}`` creation."""
    snapshot = event.data
    if snapshot is None:
        return NotifyResult(status=NO_ACTION, detail="empty event")

    chat_room_uid = event.params["chatRoomUid"]
    try:
        message = MessageRecord.from_snapshot(snapshot)
    except ValidationError as e:
        print(f"[message] Malformed message {chat_room_uid}/{event.params.get('messageUid')}: {e}")
        return NotifyResult(status=DATA_ERROR, detail=str(e))

    result = notify_new_message(chat_room_uid, message)
    print(f"[message] {chat_room_uid}/{event.params.get('messageUid')}: {result.status}")
    return result
