"""Firestore records read by the notification functions.

Attribute names match the document fields written by the Android client, so
documents can be validated straight from ``snapshot.to_dict()``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


def _document_data(snapshot) -> dict:
    # Null fields take the model default.
    data = snapshot.to_dict() or {}
    return {key: value for key, value in data.items() if value is not None}


class UserRecord(BaseModel):
    uid: str
    displayName: str = ""
    # Stored as a list in Firestore, only membership matters.
    blockedUsers: set[str] = set()
    # Empty when the user has no registered device.
    messageToken: str = ""

    @classmethod
    def from_snapshot(cls, snapshot) -> "UserRecord":
        data = _document_data(snapshot)
        data.setdefault("uid", snapshot.id)
        return cls.model_validate(data)


class ChatRoomRecord(BaseModel):
    chatUid: str
    chatRoomName: str = ""
    chatRoomUsers: list[str] = []
    group: bool = False
    admin: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot) -> "ChatRoomRecord":
        data = _document_data(snapshot)
        data.setdefault("chatUid", snapshot.id)
        return cls.model_validate(data)


class MessageRecord(BaseModel):
    messageUid: str = ""
    messageText: str = ""
    senderUid: str = ""
    senderName: str = ""
    sendTime: Optional[datetime] = None
    deleted: bool = False

    @classmethod
    def from_snapshot(cls, snapshot) -> "MessageRecord":
        data = _document_data(snapshot)
        data.setdefault("messageUid", snapshot.id)
        return cls.model_validate(data)
