"""Core utilities and shared components for bucketfs."""

from .config import settings
from .exceptions import BackendFault, BucketFSError, ValidationError
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "BackendFault",
    "BucketFSError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]
