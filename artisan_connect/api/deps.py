"""Artisan Connect — Shared FastAPI Dependencies."""

from typing import AsyncGenerator

from fastapi import Depends
from sqlmodel import Session

from artisan_connect.database import get_session
from artisan_connect.core.store import EventStore
from artisan_connect.storage.client import StorageClient


def get_store(session: Session = Depends(get_session)) -> EventStore:
    return EventStore(session)


async def get_storage_client() -> AsyncGenerator[StorageClient, None]:
    client = StorageClient()
    try:
        yield client
    finally:
        await client.close()
