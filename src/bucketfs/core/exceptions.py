"""Exception hierarchy for bucketfs."""

from typing import Optional


class BucketFSError(Exception):
    """Base exception for all bucketfs errors."""

    pass


class ValidationError(BucketFSError):
    """Raised when validation fails."""

    pass


class BackendFault(BucketFSError):
    """Raised when the object storage backend fails a call.

    Attributes:
        operation: Backend operation that failed (e.g. ``put``, ``list_objects``)
        key: Object key or prefix the operation targeted, if any
    """

    def __init__(
        self, message: str, operation: str, key: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.key = key
