"""
Notifies chat members about a new message.

One-to-one rooms push to the other participant only. Group rooms multicast
to every other member with a device token. In both cases a member who has
blocked the sender never gets a push.
"""

from __future__ import annotations

from typing import Optional

from models.chat import ChatRoomRecord, MessageRecord
from models.results import BLOCKED, DATA_ERROR, NO_ACTION, NotifyResult
from service import firestore_store, push_sender
from service.block_filter import is_blocked_by
from service.notification_builder import (
    MessageType,
    build_multicast,
    build_single,
    group_message_body,
)


def other_user_uid(chat_room_users: list[str], sender_uid: str) -> Optional[str]:
    """The participant of a two-person room who did not send the message."""
    if len(chat_room_users) < 2:
        return None
    if chat_room_users[0] == sender_uid:
        return chat_room_users[1]
    if chat_room_users[1] == sender_uid:
        return chat_room_users[0]
    return None


def notify_new_message(chat_room_uid: str, message: MessageRecord) -> NotifyResult:
    print(f"[message] New message detected in {chat_room_uid}")
    try:
        chat_room = firestore_store.get_chat_room(chat_room_uid)
    except firestore_store.READ_ERRORS as e:
        print(f"[message] Failed to load chat room {chat_room_uid}: {e}")
        return NotifyResult(status=DATA_ERROR, detail=str(e))

    if chat_room is None:
        print(f"[message] Chat room {chat_room_uid} does not exist")
        return NotifyResult(status=DATA_ERROR, detail="chat room not found")
    if not chat_room.chatRoomUsers:
        return NotifyResult(status=NO_ACTION, detail="chat room has no users")

    if chat_room.group:
        return _notify_group(chat_room, message)
    return _notify_one_to_one(chat_room, message)


def _notify_one_to_one(chat_room: ChatRoomRecord, message: MessageRecord) -> NotifyResult:
    recipient_uid = other_user_uid(chat_room.chatRoomUsers, message.senderUid)
    if recipient_uid is None:
        print(f"[message] Sender {message.senderUid} is not a participant of {chat_room.chatUid}")
        return NotifyResult(status=NO_ACTION, detail="sender not in chat room")

    try:
        recipient = firestore_store.get_user_by_uid(recipient_uid)
    except firestore_store.READ_ERRORS as e:
        print(f"[message] Failed to load user {recipient_uid}: {e}")
        return NotifyResult(status=DATA_ERROR, detail=str(e))

    if recipient is None:
        print(f"[message] User {recipient_uid} of chat room {chat_room.chatUid} does not exist")
        return NotifyResult(status=DATA_ERROR, detail="recipient not found")

    if is_blocked_by(recipient, message.senderUid):
        print(f"[message] {recipient_uid} blocked {message.senderUid}, not notifying")
        return NotifyResult(status=BLOCKED)

    notification = build_single(
        recipient.messageToken,
        chat_room.chatUid,
        message.senderName,
        message.messageText,
    )
    print(f"[message] One-to-one chat, sending FCM message to {recipient.displayName}")
    return NotifyResult.from_delivery(push_sender.send_single(notification))


def _notify_group(chat_room: ChatRoomRecord, message: MessageRecord) -> NotifyResult:
    try:
        members = firestore_store.get_users_by_uid(chat_room.chatRoomUsers)
    except firestore_store.READ_ERRORS as e:
        print(f"[message] Failed to load members of {chat_room.chatUid}: {e}")
        return NotifyResult(status=DATA_ERROR, detail=str(e))

    if not members:
        print(f"[message] No user documents found for group {chat_room.chatUid}")
        return NotifyResult(status=DATA_ERROR, detail="no members found")

    # The sender's own document is authoritative for the name shown to others.
    sender_name = message.senderName
    tokens: list[str] = []
    for member in members:
        if member.uid == message.senderUid:
            sender_name = member.displayName or message.senderName
            continue
        if is_blocked_by(member, message.senderUid):
            continue
        if member.messageToken:
            tokens.append(member.messageToken)

    notification = build_multicast(
        tokens,
        chat_room.chatUid,
        chat_room.chatRoomName,
        group_message_body(sender_name, message.messageText),
        MessageType.NEW_MESSAGE,
    )
    print(f"[message] Group chat, collected {len(tokens)} other members who will receive FCM message")
    return NotifyResult.from_delivery(push_sender.send_multicast(notification))
