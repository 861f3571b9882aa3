"""Artisan Connect — Image Upload Routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from artisan_connect.api.deps import get_storage_client
from artisan_connect.config import settings
from artisan_connect.core.identity import Identity, get_identity
from artisan_connect.storage.client import IMAGE_FOLDERS, StorageClient
from artisan_connect.storage.upload import (
    DeleteResult,
    MultiUploadResult,
    UploadResult,
    delete_image,
    upload_image,
    upload_multiple_images,
)
from artisan_connect.core.logging import get_logger

logger = get_logger("api.uploads")

router = APIRouter(prefix="/uploads", tags=["Uploads"])


def _check(identity: Optional[Identity], folder: str) -> None:
    if identity is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if folder not in IMAGE_FOLDERS:
        raise HTTPException(status_code=404, detail=f"Unknown image folder: {folder}")
    if not settings.storage_enabled:
        raise HTTPException(status_code=503, detail="Object storage is not configured")


@router.post("/{folder}", response_model=UploadResult)
async def upload(
    folder: str,
    file: UploadFile = File(...),
    identity: Optional[Identity] = Depends(get_identity),
    client: StorageClient = Depends(get_storage_client),
):
    """Upload one profile or portfolio image."""
    _check(identity, folder)
    content = await file.read()
    return await upload_image(
        client,
        file.filename or "upload",
        content,
        file.content_type or "application/octet-stream",
        folder,
    )


@router.post("/{folder}/batch", response_model=MultiUploadResult)
async def upload_batch(
    folder: str,
    files: List[UploadFile] = File(...),
    identity: Optional[Identity] = Depends(get_identity),
    client: StorageClient = Depends(get_storage_client),
):
    _check(identity, folder)
    payload = [
        (f.filename or "upload", await f.read(), f.content_type or "application/octet-stream")
        for f in files
    ]
    return await upload_multiple_images(client, payload, folder)


@router.delete("/{folder}/{name}", response_model=DeleteResult)
async def delete(
    folder: str,
    name: str,
    identity: Optional[Identity] = Depends(get_identity),
    client: StorageClient = Depends(get_storage_client),
):
    _check(identity, folder)
    return await delete_image(client, f"{folder}/{name}")
