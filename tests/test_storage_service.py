import base64
from unittest import TestCase
from unittest.mock import Mock, patch

import requests

from inventory.services.storage_service import StorageService


def _response(body, status=200):
    res = Mock()
    res.json.return_value = body
    if status >= 400:
        res.raise_for_status.side_effect = requests.HTTPError(f"{status}")
    return res


class StorageServiceTests(TestCase):
    def setUp(self):
        self.storage = StorageService("http://storage/upload", "http://resize/fn", timeout=5)

    @patch("inventory.services.storage_service.requests.post")
    def test_upload_returns_url(self, mock_post):
        mock_post.return_value = _response({"url": "http://storage/bucket/photo.jpg"})
        url = self.storage.upload(b"data", "photo.jpg", "image/jpeg")

        self.assertEqual(url, "http://storage/bucket/photo.jpg")
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "http://storage/upload")
        self.assertEqual(kwargs["files"]["file"], ("photo.jpg", b"data", "image/jpeg"))
        self.assertEqual(kwargs["timeout"], 5)

    @patch("inventory.services.storage_service.requests.post")
    def test_upload_errors_propagate(self, mock_post):
        mock_post.return_value = _response({"error": "Aucun fichier reçu"}, status=400)
        with self.assertRaises(requests.RequestException):
            self.storage.upload(b"data", "photo.jpg")

        mock_post.return_value = _response({})
        with self.assertRaises(requests.RequestException):
            self.storage.upload(b"data", "photo.jpg")

    @patch("inventory.services.storage_service.requests.post")
    def test_resize_sends_base64_payload(self, mock_post):
        mock_post.return_value = _response({"success": True, "url": "http://resize/out.webp"})
        url = self.storage.resize(b"\x89PNG", 800, 600, fmt="webp", quality=70)

        self.assertEqual(url, "http://resize/out.webp")
        payload = mock_post.call_args[1]["json"]
        self.assertEqual(base64.b64decode(payload["image"]), b"\x89PNG")
        self.assertEqual((payload["width"], payload["height"]), (800, 600))
        self.assertEqual((payload["format"], payload["quality"]), ("webp", 70))

    @patch("inventory.services.storage_service.requests.post")
    def test_resize_failure_envelope(self, mock_post):
        mock_post.return_value = _response({"success": False, "message": "too big"})
        self.assertIsNone(self.storage.resize(b"x", 800, 600))

    @patch("inventory.services.storage_service.requests.post")
    def test_resize_without_function_configured(self, mock_post):
        storage = StorageService("http://storage/upload")
        self.assertIsNone(storage.resize(b"x", 800, 600))
        mock_post.assert_not_called()

    def test_from_config(self):
        storage = StorageService.from_config({
            "STORAGE_UPLOAD_URL": "http://s/u", "IMAGE_RESIZE_URL": "", "REMOTE_TIMEOUT": 7,
        })
        self.assertEqual(storage.upload_url, "http://s/u")
        self.assertIsNone(storage.resize_url)
        self.assertEqual(storage.timeout, 7)
