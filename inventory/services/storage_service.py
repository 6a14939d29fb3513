# inventory/services/storage_service.py
from __future__ import annotations

import base64

import requests


class StorageService:
    """
    Thin client for the object storage upload endpoint and the
    image-resize function. Network errors are left to the caller.
    """

    def __init__(self, upload_url: str, resize_url: str | None = None, timeout: int = 30):
        self.upload_url = upload_url
        self.resize_url = resize_url
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "StorageService":
        return cls(
            upload_url=config["STORAGE_UPLOAD_URL"],
            resize_url=config.get("IMAGE_RESIZE_URL") or None,
            timeout=config.get("REMOTE_TIMEOUT", 30),
        )

    def upload(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        response = requests.post(
            self.upload_url,
            files={"file": (filename, data, content_type or "application/octet-stream")},
            timeout=self.timeout,
        )
        response.raise_for_status()
        url = (response.json() or {}).get("url")
        if not url:
            raise requests.RequestException("Réponse d'upload sans url")
        return url

    def resize(self, data: bytes, width: int, height: int, fmt: str = "jpeg", quality: int = 80) -> str | None:
        """
        return: url of the resized artifact, or None when the function
        reports a failure (``{"success": false, ...}``)
        """
        if not self.resize_url:
            return None

        payload = {
            "image": base64.b64encode(data).decode("ascii"),
            "width": width,
            "height": height,
            "format": fmt,
            "quality": quality,
        }
        response = requests.post(self.resize_url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        body = response.json() or {}

        if body.get("success") is False or body.get("error"):
            return None
        return body.get("url")
