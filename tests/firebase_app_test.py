import os
import unittest
from unittest.mock import MagicMock, patch

import service.firebase_app as firebase_app


class TestInitializeFirebase(unittest.TestCase):
    """Test lazy Firebase Admin initialization."""

    def setUp(self):
        firebase_app._db = None
        self.addCleanup(setattr, firebase_app, "_db", None)

    @patch("service.firebase_app.firebase_admin.initialize_app")
    @patch("service.firebase_app.firebase_admin._apps", {"[DEFAULT]": MagicMock()})
    def test_already_initialized(self, mock_init):
        firebase_app.initialize_firebase_if_needed()
        mock_init.assert_not_called()

    @patch("service.firebase_app.credentials.Certificate")
    @patch("service.firebase_app.firebase_admin.initialize_app")
    @patch("service.firebase_app.firebase_admin._apps", {})
    def test_service_account_file(self, mock_init, mock_cert):
        env = {"FIREBASE_SERVICE_ACCOUNT_PATH": "/tmp/sa.json", "FIREBASE_PROJECT_ID": "chat-project"}
        with patch.dict(os.environ, env), patch("service.firebase_app.os.path.exists", return_value=True):
            firebase_app.initialize_firebase_if_needed()

        mock_cert.assert_called_once_with("/tmp/sa.json")
        mock_init.assert_called_once_with(mock_cert.return_value, {"projectId": "chat-project"})

    @patch("service.firebase_app.firebase_admin.initialize_app")
    @patch("service.firebase_app.firebase_admin._apps", {})
    def test_application_default_credentials(self, mock_init):
        env = {"FIREBASE_SERVICE_ACCOUNT_PATH": "/nonexistent/sa.json", "FIREBASE_PROJECT_ID": "", "GOOGLE_CLOUD_PROJECT": ""}
        with patch.dict(os.environ, env), patch("service.firebase_app.os.path.exists", return_value=False):
            firebase_app.initialize_firebase_if_needed()

        mock_init.assert_called_once_with(options=None)

    @patch("service.firebase_app.firestore.client")
    @patch("service.firebase_app.initialize_firebase_if_needed")
    def test_get_db_is_cached(self, mock_init, mock_client):
        first = firebase_app.get_db()
        second = firebase_app.get_db()

        self.assertIs(first, second)
        mock_client.assert_called_once()
        mock_init.assert_called_once()


if __name__ == "__main__":
    unittest.main()
