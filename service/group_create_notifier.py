"""
Notifies members of a freshly created group chat that they were added.

Flow:
- Skip anything that is not a group with members
- Batch-load the member user documents
- The admin's document only provides the admin's display name
- Members who blocked the admin are dropped
- One multicast to everyone left
"""

from __future__ import annotations

from models.chat import ChatRoomRecord
from models.results import DATA_ERROR, NO_ACTION, NotifyResult
from service import firestore_store, push_sender
from service.block_filter import is_blocked_by
from service.notification_builder import (
    MessageType,
    build_multicast,
    group_created_body,
    group_created_title,
    unknown_user_name,
)


def notify_group_created(chat_room: ChatRoomRecord) -> NotifyResult:
    if not chat_room.group or not chat_room.chatRoomUsers:
        return NotifyResult(status=NO_ACTION, detail="not a group chat room")

    print(f"[group_create] New group {chat_room.chatUid} with {len(chat_room.chatRoomUsers)} members")

    try:
        members = firestore_store.get_users_by_uid(chat_room.chatRoomUsers)
    except firestore_store.READ_ERRORS as e:
        print(f"[group_create] Failed to load members of {chat_room.chatUid}: {e}")
        return NotifyResult(status=DATA_ERROR, detail=str(e))

    if not members:
        print(f"[group_create] No user documents found for group {chat_room.chatUid}")
        return NotifyResult(status=DATA_ERROR, detail="no members found")

    admin_name = None
    tokens: list[str] = []
    for member in members:
        if member.uid == chat_room.admin:
            admin_name = member.displayName or None
            continue
        if is_blocked_by(member, chat_room.admin):
            print(f"[group_create] {member.uid} blocked the admin, not notifying")
            continue
        tokens.append(member.messageToken)

    if admin_name is None:
        admin_name = unknown_user_name()

    notification = build_multicast(
        tokens,
        chat_room.chatUid,
        group_created_title(chat_room.chatRoomName),
        group_created_body(admin_name),
        MessageType.NEW_GROUP,
    )
    print(f"[group_create] Sending new group notification to {len(tokens)} members")
    delivery = push_sender.send_multicast(notification)
    return NotifyResult.from_delivery(delivery)
