"""Artisan Connect — Object Storage Client.

Thin async wrapper over the hosted storage REST API: upload, public URL,
delete. Every call is attempted once.
"""

import random
import string
import time
from typing import Any, Dict, List, Optional

import httpx

from artisan_connect.config import settings
from artisan_connect.core.logging import get_logger

logger = get_logger("storage.client")

IMAGE_FOLDERS = {"profiles", "portfolios"}

_BASE36 = string.digits + string.ascii_lowercase


class StorageError(Exception):
    """Raised when the storage service rejects a request."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)


def random_object_name(filename: str) -> str:
    """<random>-<epoch-ms>.<ext>, keeping the uploaded file's extension."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    token = "".join(random.choices(_BASE36, k=11))
    return f"{token}-{int(time.time() * 1000)}.{ext}"


class StorageClient:
    """Async HTTP client for the object storage bucket."""

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        bucket: str | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.storage_url).rstrip("/")
        self.service_key = service_key or settings.storage_service_key or ""
        self.bucket = bucket or settings.storage_bucket
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=30.0, transport=self._transport)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }

    async def _request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        client = await self._get_client()
        try:
            resp = await client.request(
                method, url, headers={**self._headers(), **(headers or {})}, **kwargs
            )
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as e:
            body = (
                e.response.json()
                if e.response.headers.get("content-type", "").startswith(
                    "application/json"
                )
                else {}
            )
            message = body.get("message") or body.get("error") or str(e)
            raise StorageError(message, e.response.status_code) from e
        except httpx.RequestError as e:
            raise StorageError(f"Storage request failed: {e}") from e

    # ── Objects ──

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path}"

    async def upload(
        self, path: str, content: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        """Upload bytes to `path` in the bucket. Returns the public URL."""
        url = f"{self.base_url}/storage/v1/object/{self.bucket}/{path}"
        await self._request(
            "POST",
            url,
            headers={
                "Content-Type": content_type,
                "Cache-Control": f"max-age={settings.storage_cache_control}",
                "x-upsert": "false",
            },
            content=content,
        )
        return self.public_url(path)

    async def remove(self, paths: List[str]) -> None:
        url = f"{self.base_url}/storage/v1/object/{self.bucket}"
        await self._request("DELETE", url, json={"prefixes": paths})
