"""
FCM delivery for the chat notifications.

Send errors never propagate: they are logged and returned as a failed
DeliveryResult. Nothing is retried here beyond what FCM does itself.
"""

from __future__ import annotations

from firebase_admin import exceptions, messaging

from models.results import DeliveryResult
from service.firebase_app import initialize_firebase_if_needed


def send_single(message: messaging.Message) -> DeliveryResult:
    initialize_firebase_if_needed()
    try:
        # response is the FCM message id
        message_id = messaging.send(message)
    except (exceptions.FirebaseError, ValueError) as e:
        print(f"  [fcm] Failed to deliver FCM message: {e}")
        return DeliveryResult(failure_count=1, error=str(e))

    print(f"  [fcm] Delivered FCM message {message_id}")
    return DeliveryResult(success_count=1, message_id=message_id)


def send_multicast(message: messaging.MulticastMessage) -> DeliveryResult:
    # An empty token fails encoding for the whole batch.
    tokens = [token for token in message.tokens or [] if token]
    skipped = len(message.tokens or []) - len(tokens)
    if skipped:
        print(f"  [fcm] Skipping {skipped} empty tokens")
    if not tokens:
        print("  [fcm] No tokens to send to, skipping multicast")
        return DeliveryResult()

    batch = messaging.MulticastMessage(
        tokens=tokens,
        data=message.data,
        notification=message.notification,
        android=message.android,
        webpush=message.webpush,
        apns=message.apns,
        fcm_options=message.fcm_options,
    )
    initialize_firebase_if_needed()
    try:
        response = messaging.send_each_for_multicast(batch)
    except (exceptions.FirebaseError, ValueError) as e:
        print(f"  [fcm] Multicast to {len(tokens)} tokens failed: {e}")
        return DeliveryResult(failure_count=len(tokens), error=str(e))

    for token, send_response in zip(tokens, response.responses):
        if not send_response.success:
            print(f"  [fcm] FCM send failed for token {token[:8]}...: {send_response.exception}")

    print(f"  [fcm] {response.success_count} messages were sent successfully, {response.failure_count} failed")
    return DeliveryResult(
        success_count=response.success_count,
        failure_count=response.failure_count,
    )
