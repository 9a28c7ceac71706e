from typing import Optional

from fastapi import Request

from .. import config
from .base import Storage
from .memory import MemStorage
from .sql import SqlStorage

__all__ = ["Storage", "MemStorage", "SqlStorage", "build_storage", "get_storage"]


def build_storage(backend: Optional[str] = None, database_url: Optional[str] = None) -> Storage:
    """Construct the configured storage backend (not yet initialized)"""
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemStorage()
    if backend == "sql":
        return SqlStorage(database_url or config.DATABASE_URL)
    raise ValueError(f"Unknown storage backend: {backend}")


def get_storage(request: Request) -> Storage:
    """Dependency injection for the application's store"""
    return request.app.state.storage
