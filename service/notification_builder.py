"""
Builds the FCM payloads sent to chat members.

Every payload carries ``chatRoomUid`` and ``messageType`` in its data block.
The Android client opens the chat room from ``chatRoomUid`` on tap, and
refreshes its group list when ``messageType`` is ``new_group``.
"""

from __future__ import annotations

import os

from firebase_admin import messaging


class MessageType:
    NEW_MESSAGE = "new_message"
    NEW_GROUP = "new_group"


DEFAULT_LANGUAGE = "en"

NOTIFICATION_STRINGS: dict[str, dict[str, str]] = {
    "en": {
        "group_created_title": "New group: {chat_room_name}",
        "group_created_body": "{admin_name} added you to this group",
        "unknown_user": "Someone",
    },
    "hu": {
        "group_created_title": "Új csoport: {chat_room_name}",
        "group_created_body": "{admin_name} hozzáadott ehhez a csoporthoz",
        "unknown_user": "Valaki",
    },
}


def _strings() -> dict[str, str]:
    language = (os.getenv("NOTIFICATION_LANGUAGE") or DEFAULT_LANGUAGE).lower()
    return NOTIFICATION_STRINGS.get(language, NOTIFICATION_STRINGS[DEFAULT_LANGUAGE])


def group_created_title(chat_room_name: str) -> str:
    return _strings()["group_created_title"].format(chat_room_name=chat_room_name)


def group_created_body(admin_name: str) -> str:
    return _strings()["group_created_body"].format(admin_name=admin_name)


def unknown_user_name() -> str:
    return _strings()["unknown_user"]


def group_message_body(sender_name: str, message_text: str) -> str:
    return f"{sender_name}: {message_text}"


def _data(chat_room_uid: str, message_type: str) -> dict[str, str]:
    # FCM data values must be strings
    return {"chatRoomUid": chat_room_uid, "messageType": message_type}


def build_single(token: str, chat_room_uid: str, title: str, body: str) -> messaging.Message:
    """Payload for a one-to-one message. The token is not validated."""
    return messaging.Message(
        notification=messaging.Notification(title=title, body=body),
        data=_data(chat_room_uid, MessageType.NEW_MESSAGE),
        token=token,
    )


def build_multicast(
    tokens: list[str],
    chat_room_uid: str,
    title: str,
    body: str,
    message_type: str,
) -> messaging.MulticastMessage:
    """Payload for several devices at once (group messages, new groups)."""
    return messaging.MulticastMessage(
        tokens=list(tokens),
        notification=messaging.Notification(title=title, body=body),
        data=_data(chat_room_uid, message_type),
    )
