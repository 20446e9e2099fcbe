"""
Cloud Functions (2nd gen) entry point for chat push notifications.

Triggers:
  chatRooms/{chatRoomUid}                                   -> new group notification
  chatRooms/{chatRoomUid}/chatRoomMessages/{messageUid}     -> new message notification

Deploy with `firebase deploy --only functions` from the repository root.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

dotenv_path = os.getenv("DOTENV_PATH")
if dotenv_path and os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
else:
    load_dotenv()

from firebase_functions import firestore_fn, options

from service.triggers import on_chat_room_created, on_message_created

options.set_global_options(region=os.getenv("FUNCTION_REGION", "europe-west1"))


@firestore_fn.on_document_created(document="chatRooms/{chatRoomUid}")
def chat_room_created(event: firestore_fn.Event[firestore_fn.DocumentSnapshot | None]) -> None:
    on_chat_room_created(event)


@firestore_fn.on_document_created(document="chatRooms/{chatRoomUid}/chatRoomMessages/{messageUid}")
def chat_room_new_message(event: firestore_fn.Event[firestore_fn.DocumentSnapshot | None]) -> None:
    on_message_created(event)
