"""Object storage backends for S3-compatible services."""

from .backend import (
    ObjectMeta,
    ObjectPage,
    ObjectStorageBackend,
    ObjectSummary,
    PutHandle,
    S3ObjectBackend,
)
from .clients import S3ClientManager
from .listing import PageResult, PaginatedLister

__all__ = [
    "ObjectMeta",
    "ObjectPage",
    "ObjectStorageBackend",
    "ObjectSummary",
    "PutHandle",
    "S3ObjectBackend",
    "S3ClientManager",
    "PageResult",
    "PaginatedLister",
]
