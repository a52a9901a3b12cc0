"""Object storage backend contract and its S3 implementation.

The facade only ever talks to an ``ObjectStorageBackend``. Backends report
"not found" as ``None`` (or ``False`` for streamed reads) and raise
``BackendFault`` for every other failure.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import IO, Any, Optional, Protocol, Union

from botocore.exceptions import BotoCoreError, ClientError

from bucketfs.core import get_logger
from bucketfs.core.exceptions import BackendFault
from bucketfs.objectstorage.clients import S3ClientManager

logger = get_logger(__name__)

NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})

ObjectData = Union[bytes, str, IO[bytes]]


@dataclass(frozen=True)
class ObjectSummary:
    """An object as reported by a listing page."""

    key: str
    size: int
    last_modified: datetime


@dataclass(frozen=True)
class ObjectPage:
    """One page of a delimiter listing.

    Attributes:
        objects: Objects directly under the prefix
        prefixes: Common prefixes (grouping keys ending in the delimiter)
        next_marker: Token for the following page, empty when exhausted
    """

    objects: list[ObjectSummary] = field(default_factory=list)
    prefixes: list[str] = field(default_factory=list)
    next_marker: str = ""


@dataclass(frozen=True)
class ObjectMeta:
    """Metadata of a stored object."""

    key: str
    size: int
    last_modified: datetime
    content_type: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PutHandle:
    """Handle returned for a stored object."""

    key: str
    etag: Optional[str] = None


class ObjectStorageBackend(Protocol):
    """Flat key/value object store the facade is built on."""

    def put(
        self,
        bucket: str,
        key: str,
        data: ObjectData,
        content_md5: Optional[str] = None,
        metadata: Optional[dict[str, str]] = None,
    ) -> Optional[PutHandle]: ...

    def get(self, bucket: str, key: str) -> Optional[bytes]: ...

    def get_into(self, bucket: str, key: str, sink: IO[bytes]) -> bool: ...

    def delete_object(self, bucket: str, key: str) -> Optional[dict[str, Any]]: ...

    def get_object_meta(self, bucket: str, key: str) -> Optional[ObjectMeta]: ...

    def create_object_dir(self, bucket: str, key: str) -> Optional[PutHandle]: ...

    def list_objects(
        self,
        bucket: str,
        prefix: str,
        delimiter: str,
        max_keys: int,
        marker: str = "",
    ) -> ObjectPage: ...


def _is_not_found(error: Exception) -> bool:
    if not isinstance(error, ClientError):
        return False
    return error.response.get("Error", {}).get("Code") in NOT_FOUND_CODES


def _fault(operation: str, bucket: str, key: str, error: Exception) -> BackendFault:
    message = f"Backend {operation} failed for '{bucket}/{key}': {error}"
    logger.error(message, operation=operation, bucket=bucket, key=key)
    return BackendFault(message, operation=operation, key=key)


class S3ObjectBackend:
    """ObjectStorageBackend over any S3-compatible service via boto3."""

    def __init__(self, client_manager: S3ClientManager):
        """Initialize the backend.

        Args:
            client_manager: Provides the boto3 client, created on first use
        """
        self.client_manager = client_manager

    @property
    def client(self):
        return self.client_manager.client

    def put(
        self,
        bucket: str,
        key: str,
        data: ObjectData,
        content_md5: Optional[str] = None,
        metadata: Optional[dict[str, str]] = None,
    ) -> Optional[PutHandle]:
        if isinstance(data, str):
            data = data.encode("utf-8")

        kwargs: dict[str, Any] = {"Bucket": bucket, "Key": key, "Body": data}
        if content_md5:
            kwargs["ContentMD5"] = content_md5
        if metadata:
            kwargs["Metadata"] = metadata

        try:
            response = self.client.put_object(**kwargs)
        except (BotoCoreError, ClientError) as e:
            raise _fault("put", bucket, key, e) from e

        logger.debug("Object stored", bucket=bucket, key=key)
        return PutHandle(key=key, etag=response.get("ETag"))

    def get(self, bucket: str, key: str) -> Optional[bytes]:
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (BotoCoreError, ClientError) as e:
            if _is_not_found(e):
                return None
            raise _fault("get", bucket, key, e) from e

    def get_into(self, bucket: str, key: str, sink: IO[bytes]) -> bool:
        """Stream an object into ``sink``; False when it does not exist."""
        try:
            self.client.download_fileobj(bucket, key, sink)
        except (BotoCoreError, ClientError) as e:
            if _is_not_found(e):
                return False
            raise _fault("get", bucket, key, e) from e
        return True

    def delete_object(self, bucket: str, key: str) -> Optional[dict[str, Any]]:
        try:
            response = self.client.delete_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise _fault("delete", bucket, key, e) from e

        logger.debug("Object deleted", bucket=bucket, key=key)
        return response

    def get_object_meta(self, bucket: str, key: str) -> Optional[ObjectMeta]:
        try:
            response = self.client.head_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            if _is_not_found(e):
                return None
            raise _fault("stat", bucket, key, e) from e

        return ObjectMeta(
            key=key,
            size=response.get("ContentLength", 0),
            last_modified=response["LastModified"],
            content_type=response.get("ContentType"),
            metadata=dict(response.get("Metadata", {})),
        )

    def create_object_dir(self, bucket: str, key: str) -> Optional[PutHandle]:
        """Store the zero-byte marker object for directory ``key``."""
        return self.put(bucket, key, b"")

    def list_objects(
        self,
        bucket: str,
        prefix: str,
        delimiter: str,
        max_keys: int,
        marker: str = "",
    ) -> ObjectPage:
        kwargs: dict[str, Any] = {
            "Bucket": bucket,
            "Prefix": prefix,
            "Delimiter": delimiter,
            "MaxKeys": max_keys,
        }
        if marker:
            kwargs["ContinuationToken"] = marker

        try:
            response = self.client.list_objects_v2(**kwargs)
        except (BotoCoreError, ClientError) as e:
            raise _fault("list_objects", bucket, prefix, e) from e

        objects = [
            ObjectSummary(
                key=obj["Key"],
                size=obj.get("Size", 0),
                last_modified=obj["LastModified"],
            )
            for obj in response.get("Contents", [])
        ]
        prefixes = [entry["Prefix"] for entry in response.get("CommonPrefixes", [])]

        next_marker = ""
        if response.get("IsTruncated"):
            next_marker = response.get("NextContinuationToken", "")

        return ObjectPage(objects=objects, prefixes=prefixes, next_marker=next_marker)
