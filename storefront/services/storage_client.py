# storefront/services/storage_client.py
import re
import time
import unicodedata

import requests

from storefront.domain.errors import BlobStoreError, StorageNotConfigured
from storefront.utils import settings
from storefront.utils.logging import get_logger
from storefront.utils.retry import http_retry

logger = get_logger(__name__)


def sanitize_file_name(file_name: str) -> str:
    # bez diakrytykow, znaki spoza [a-zA-Z0-9.-] na myslniki
    normalized = unicodedata.normalize("NFD", file_name)
    stripped = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    dashed = re.sub(r"[^a-zA-Z0-9.-]", "-", stripped)
    dashed = re.sub(r"-{2,}", "-", dashed)
    return dashed.strip("-")


class StorageClient:
    """Klient blob store (Supabase Storage REST API)."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        bucket: str | None = None,
        timeout: int | None = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.SUPABASE_ANON_KEY
        self.bucket = bucket or settings.STORAGE_BUCKET
        self.timeout = timeout or settings.STORAGE_TIMEOUT_SECONDS

        if not self.configured:
            logger.warning("Storage configuration is missing, file upload will not work")

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    def _headers(self, **extra) -> dict:
        return {"Authorization": f"Bearer {self.api_key}", "apikey": self.api_key, **extra}

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path}"

    def object_path(self, url: str) -> str:
        marker = f"/object/public/{self.bucket}/"
        start = url.find(marker)
        if start == -1:
            raise BlobStoreError(f"URL does not point into bucket {self.bucket}: {url}")
        return url[start + len(marker):]

    def upload(self, data: bytes, mime_type: str, folder: str, file_name: str = "file") -> str:
        if not self.configured:
            raise StorageNotConfigured()
        if not data:
            raise BlobStoreError("File buffer is empty or invalid")

        path = f"{folder}/{int(time.time() * 1000)}-{sanitize_file_name(file_name)}"
        self._post_object(path, data, mime_type or "application/octet-stream")
        return self.public_url(path)

    def delete(self, url: str) -> None:
        if not self.configured:
            raise StorageNotConfigured()
        self._delete_objects([self.object_path(url)])

    @http_retry()
    def _post_object(self, path: str, data: bytes, mime_type: str) -> None:
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{path}"
        logger.info(f"StorageClient POST {url}")

        resp = requests.post(
            url,
            data=data,
            headers=self._headers(**{"Content-Type": mime_type, "cache-control": "3600", "x-upsert": "false"}),
            timeout=self.timeout,
        )
        resp.raise_for_status()

    @http_retry()
    def _delete_objects(self, paths: list) -> None:
        url = f"{self.base_url}/storage/v1/object/{self.bucket}"
        logger.info(f"StorageClient DELETE {url} {paths}")

        resp = requests.delete(url, json={"prefixes": paths}, headers=self._headers(), timeout=self.timeout)
        resp.raise_for_status()
