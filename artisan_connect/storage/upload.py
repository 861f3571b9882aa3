"""Artisan Connect — Image Uploads.

Profile and portfolio images go to the `artisan-images` bucket under
`profiles/` or `portfolios/`. Failures come back as `error` strings.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel

from artisan_connect.config import settings
from artisan_connect.storage.client import (
    IMAGE_FOLDERS,
    StorageClient,
    StorageError,
    random_object_name,
)
from artisan_connect.core.logging import get_logger

logger = get_logger("storage.upload")


class UploadResult(BaseModel):
    url: Optional[str] = None
    error: Optional[str] = None


class MultiUploadResult(BaseModel):
    urls: List[str] = []
    errors: List[str] = []


class DeleteResult(BaseModel):
    error: Optional[str] = None


def _validate(folder: str, content: bytes, content_type: str) -> Optional[str]:
    if folder not in IMAGE_FOLDERS:
        return f"Unknown image folder: {folder}"
    if not content_type.startswith("image/"):
        return "Only image files can be uploaded"
    if len(content) > settings.max_upload_bytes:
        return "Image is too large"
    return None


async def upload_image(
    client: StorageClient,
    filename: str,
    content: bytes,
    content_type: str,
    folder: str,
) -> UploadResult:
    error = _validate(folder, content, content_type)
    if error:
        return UploadResult(error=error)

    path = f"{folder}/{random_object_name(filename)}"
    try:
        url = await client.upload(path, content, content_type)
    except StorageError as e:
        logger.error(f"Upload failed for {path}: {e}")
        return UploadResult(error=str(e) or "Failed to upload image")

    logger.info(f"Uploaded image to {path}")
    return UploadResult(url=url)


async def upload_multiple_images(
    client: StorageClient,
    files: List[Tuple[str, bytes, str]],
    folder: str,
) -> MultiUploadResult:
    """Upload (filename, content, content_type) triples one by one, collecting outcomes."""
    result = MultiUploadResult()
    for filename, content, content_type in files:
        outcome = await upload_image(client, filename, content, content_type, folder)
        if outcome.url:
            result.urls.append(outcome.url)
        elif outcome.error:
            result.errors.append(outcome.error)
    return result


async def delete_image(client: StorageClient, path: str) -> DeleteResult:
    try:
        await client.remove([path])
    except StorageError as e:
        logger.error(f"Delete failed for {path}: {e}")
        return DeleteResult(error=str(e) or "Failed to delete image")
    return DeleteResult()
