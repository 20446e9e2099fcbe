"""Lazy Firebase Admin initialization shared by the Firestore reads and FCM sends."""

from __future__ import annotations

import os

import firebase_admin
from firebase_admin import credentials, firestore

_db = None


def initialize_firebase_if_needed() -> None:
    if firebase_admin._apps:  # type: ignore[attr-defined]
        return

    service_account_path = os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH", "serviceAccount.json")
    project_id = os.getenv("FIREBASE_PROJECT_ID") or os.getenv("GOOGLE_CLOUD_PROJECT")
    options = {"projectId": project_id} if project_id else None

    if service_account_path and os.path.exists(service_account_path):
        cred = credentials.Certificate(service_account_path)
        firebase_admin.initialize_app(cred, options)
    else:
        # Cloud Functions runtime: Application Default Credentials
        firebase_admin.initialize_app(options=options)


def get_db():
    global _db
    if _db is not None:
        return _db
    initialize_firebase_if_needed()
    _db = firestore.client()
    return _db
