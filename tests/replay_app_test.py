import os
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from models.chat import ChatRoomRecord, MessageRecord
from models.results import DELIVERED, NotifyResult
from service.replay_app import app


class TestReplayApp(unittest.TestCase):
    """Test the manual replay endpoints."""

    def setUp(self):
        self.client = TestClient(app)
        env = patch.dict(os.environ, {"CHAT_NOTIFY_REPLAY_SECRET": ""})
        env.start()
        self.addCleanup(env.stop)

    def test_health(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    @patch("service.replay_app.notify_group_created")
    @patch("service.firestore_store.get_chat_room")
    def test_replay_group_created(self, mock_room, mock_notify):
        chat_room = ChatRoomRecord(chatUid="g1", group=True, admin="A", chatRoomUsers=["A", "B"])
        mock_room.return_value = chat_room
        mock_notify.return_value = NotifyResult(status=DELIVERED, success_count=1)

        response = self.client.post("/replay/chat_rooms/g1")

        self.assertEqual(response.status_code, 200)
        mock_notify.assert_called_once_with(chat_room)
        body = response.json()
        self.assertEqual(body["status"], "delivered")
        self.assertTrue(body["did_work"])

    @patch("service.firestore_store.get_chat_room")
    def test_replay_missing_chat_room(self, mock_room):
        mock_room.return_value = None

        response = self.client.post("/replay/chat_rooms/nope")

        self.assertEqual(response.status_code, 404)

    @patch("service.replay_app.notify_new_message")
    @patch("service.firestore_store.get_message")
    def test_replay_message(self, mock_message, mock_notify):
        message = MessageRecord(messageUid="m1", senderUid="A", messageText="hi")
        mock_message.return_value = message
        mock_notify.return_value = NotifyResult(status="blocked")

        response = self.client.post("/replay/chat_rooms/u1/messages/m1")

        self.assertEqual(response.status_code, 200)
        mock_message.assert_called_once_with("u1", "m1")
        mock_notify.assert_called_once_with("u1", message)
        self.assertEqual(response.json()["status"], "blocked")
        self.assertFalse(response.json()["did_work"])

    @patch("service.firestore_store.get_message")
    def test_replay_missing_message(self, mock_message):
        mock_message.return_value = None

        response = self.client.post("/replay/chat_rooms/u1/messages/m1")

        self.assertEqual(response.status_code, 404)

    @patch("service.firestore_store.get_chat_room")
    def test_secret_required_when_configured(self, mock_room):
        with patch.dict(os.environ, {"CHAT_NOTIFY_REPLAY_SECRET": "s3cret"}):
            denied = self.client.post("/replay/chat_rooms/g1")
            mock_room.return_value = None
            allowed = self.client.post("/replay/chat_rooms/g1", headers={"Authorization": "Bearer s3cret"})

        self.assertEqual(denied.status_code, 403)
        self.assertEqual(allowed.status_code, 404)


if __name__ == "__main__":
    unittest.main()
