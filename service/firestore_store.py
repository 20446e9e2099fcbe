"""
Read-only access to the chat documents maintained by the Android client.

Collections:
  users/{uid}
  chatRooms/{chatUid}
  chatRooms/{chatUid}/chatRoomMessages/{messageUid}

Nothing in this module writes to Firestore.
"""

from __future__ import annotations

from typing import Iterable, Optional

from firebase_admin import exceptions
from google.api_core.exceptions import GoogleAPICallError
from google.cloud.firestore_v1.base_query import FieldFilter
from pydantic import ValidationError

from models.chat import ChatRoomRecord, MessageRecord, UserRecord
from service.firebase_app import get_db

USER_COLLECTION = "users"
CHAT_ROOM_COLLECTION = "chatRooms"
CHAT_ROOM_MESSAGES = "chatRoomMessages"

# Firestore caps "in" filters; the client also caps groups at this size.
IN_QUERY_LIMIT = 10

# Errors a lookup can raise, malformed documents included. Handlers turn them
# into a data_error result.
READ_ERRORS = (GoogleAPICallError, exceptions.FirebaseError, ValidationError)


def _chunks(values: list[str], size: int) -> Iterable[list[str]]:
    for start in range(0, len(values), size):
        yield values[start:start + size]


def get_user_by_uid(uid: str) -> Optional[UserRecord]:
    db = get_db()
    doc = db.collection(USER_COLLECTION).document(uid).get()
    if not doc.exists:
        return None
    return UserRecord.from_snapshot(doc)


def get_users_by_uid(uids: list[str]) -> list[UserRecord]:
    """
    Batch lookup of user documents by their ``uid`` field.

    Uids are de-duplicated (order kept) and queried in chunks of
    IN_QUERY_LIMIT. Uids with no document are simply absent from the result.
    """
    unique_uids = list(dict.fromkeys(uids))
    if not unique_uids:
        return []

    db = get_db()
    users: list[UserRecord] = []
    for chunk in _chunks(unique_uids, IN_QUERY_LIMIT):
        query = db.collection(USER_COLLECTION).where(filter=FieldFilter("uid", "in", chunk))
        for doc in query.stream():
            users.append(UserRecord.from_snapshot(doc))
    print(f"  [firestore] Loaded {len(users)} of {len(unique_uids)} users")
    return users


def get_chat_room(chat_uid: str) -> Optional[ChatRoomRecord]:
    db = get_db()
    doc = db.collection(CHAT_ROOM_COLLECTION).document(chat_uid).get()
    if not doc.exists:
        return None
    return ChatRoomRecord.from_snapshot(doc)


def get_message(chat_uid: str, message_uid: str) -> Optional[MessageRecord]:
    db = get_db()
    doc = (
        db.collection(CHAT_ROOM_COLLECTION)
        .document(chat_uid)
        .collection(CHAT_ROOM_MESSAGES)
        .document(message_uid)
        .get()
    )
    if not doc.exists:
        return None
    return MessageRecord.from_snapshot(doc)
