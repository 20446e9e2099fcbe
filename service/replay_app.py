"""
Manual replay of chat notifications for stored documents.

Re-runs the same fan-out the Firestore triggers run, for an existing chat
room or message. Useful against the emulator, or to resend after an FCM
outage. Run with `uvicorn service.replay_app:app`.
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Header, HTTPException, Request
from starlette.middleware.base import BaseHTTPMiddleware

from service import firestore_store
from service.group_create_notifier import notify_group_created
from service.message_notifier import notify_new_message

app = FastAPI(title="Chat notification replay", version="1.0.0")


class SimpleLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        method = request.method
        try:
            response = await call_next(request)
            print(f"[replay] {method} {path} -> {response.status_code}")
            return response
        except Exception as e:
            print(f"[replay] {method} {path} -> error: {e}")
            raise


app.add_middleware(SimpleLoggingMiddleware)


def _check_secret(authorization: Optional[str]) -> None:
    replay_secret = os.getenv("CHAT_NOTIFY_REPLAY_SECRET", "")
    if not replay_secret:
        return
    token = (authorization or "").replace("Bearer ", "", 1).strip()
    if token != replay_secret:
        raise HTTPException(status_code=403, detail="Invalid replay secret")


@app.get("/")
def health():
    return {"status": "ok", "service": "chat_notify_replay"}


@app.post("/replay/chat_rooms/{chat_room_uid}")
def replay_group_created(chat_room_uid: str, authorization: Optional[str] = Header(default=None)):
    _check_secret(authorization)
    try:
        chat_room = firestore_store.get_chat_room(chat_room_uid)
    except firestore_store.READ_ERRORS as e:
        raise HTTPException(status_code=502, detail=str(e))
    if chat_room is None:
        raise HTTPException(status_code=404, detail="Chat room not found")

    return notify_group_created(chat_room).to_dict()


@app.post("/replay/chat_rooms/{chat_room_uid}/messages/{message_uid}")
def replay_new_message(
    chat_room_uid: str,
    message_uid: str,
    authorization: Optional[str] = Header(default=None),
):
    _check_secret(authorization)
    try:
        message = firestore_store.get_message(chat_room_uid, message_uid)
    except firestore_store.READ_ERRORS as e:
        raise HTTPException(status_code=502, detail=str(e))
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")

    return notify_new_message(chat_room_uid, message).to_dict()
