"""Filesystem-style operations on top of a flat object store.

``HierarchicalStorageFacade`` maps files, directories, metadata and listings
onto a bucket addressed only by string keys. Every operation normalizes its
path (``/photos/cat.jpg`` becomes the key ``photos/cat.jpg``), calls the
backend and translates the result into bucketfs types.

Directories are zero-byte marker objects whose key ends in ``/``. Listing
groups keys by that delimiter, so a directory also shows up when only its
children exist.
"""

import threading
from typing import IO, Callable, Optional, Union

from bucketfs import __version__
from bucketfs.core import get_logger
from bucketfs.core.exceptions import BackendFault
from bucketfs.objectstorage.backend import (
    ObjectData,
    ObjectStorageBackend,
    S3ObjectBackend,
)
from bucketfs.objectstorage.clients import S3ClientManager
from bucketfs.objectstorage.listing import PaginatedLister
from bucketfs.path import DELIMITER, directory_key, normalize_path
from bucketfs.schemas import FacadeConfig, FileInfo, ListingResult, WriteResult

logger = get_logger(__name__)

# Object metadata reported back after uploads to an image namespace
WRITE_INFO_KEYS = ("width", "height", "frames", "file-type")

FILE_SECRET_METADATA_KEY = "file-secret"


class HierarchicalStorageFacade:
    """Files and directories over a single bucket."""

    def __init__(
        self,
        bucket_name: str,
        access_id: Optional[str],
        access_secret: Optional[str],
        endpoint_domain: str,
        *,
        backend: Optional[ObjectStorageBackend] = None,
        **options,
    ):
        """Initialize the facade.

        Args:
            bucket_name: Bucket holding the namespace
            access_id: Access key ID
            access_secret: Secret access key
            endpoint_domain: Endpoint domain (or URL) of the storage service
            backend: Backend to use instead of one built from the config
            **options: Further FacadeConfig fields (timeout, debug, ...)
        """
        config = FacadeConfig(
            bucket_name=bucket_name,
            access_id=access_id,
            access_secret=access_secret,
            endpoint_domain=endpoint_domain,
            **options,
        )
        self._lock = threading.Lock()
        self._config = config
        self._injected_backend = backend
        self._backend: Optional[ObjectStorageBackend] = backend
        self._last_write_info: dict[str, str] = {}

    @classmethod
    def from_config(
        cls, config: FacadeConfig, backend: Optional[ObjectStorageBackend] = None
    ) -> "HierarchicalStorageFacade":
        """Build a facade from an existing configuration."""
        connection = ("bucket_name", "access_id", "access_secret", "endpoint_domain")
        return cls(
            *(getattr(config, name) for name in connection),
            backend=backend,
            **config.model_dump(exclude=set(connection)),
        )

    @staticmethod
    def version() -> str:
        return __version__

    @property
    def config(self) -> FacadeConfig:
        return self._config

    @property
    def backend(self) -> ObjectStorageBackend:
        """Backend for the current configuration, built on first use."""
        with self._lock:
            if self._backend is None:
                self._backend = S3ObjectBackend(S3ClientManager(self._config))
            return self._backend

    def _replace_config(self, update: Callable[[FacadeConfig], FacadeConfig]) -> None:
        with self._lock:
            self._config = update(self._config)
            # A built client is bound to the old endpoint and timeout
            self._backend = self._injected_backend

    # Setters

    def set_api_domain(self, domain: str) -> None:
        self._replace_config(lambda config: config.with_endpoint_domain(domain))

    def set_timeout(self, timeout: int) -> None:
        self._replace_config(lambda config: config.with_timeout(timeout))

    def set_content_md5(self, content_md5: Optional[str]) -> None:
        """Set the Content-MD5 sent with uploads; a mismatch fails the upload."""
        self._replace_config(lambda config: config.with_content_md5(content_md5))

    def set_file_secret(self, file_secret: Optional[str]) -> None:
        """Set the access secret stored alongside uploaded objects."""
        self._replace_config(lambda config: config.with_file_secret(file_secret))

    # Usage reporting

    def get_bucket_usage(self) -> float:
        """Usage of the whole bucket. Not supported: always 0.0."""
        return self.get_folder_usage(DELIMITER)

    def get_folder_usage(self, path: str) -> float:
        """Usage of a directory. Not supported: always 0.0."""
        logger.debug("Usage reporting is not supported", path=path)
        return 0.0

    # Files

    def write_file(
        self, path: str, data: ObjectData, auto_mkdir: bool = False
    ) -> WriteResult:
        """Upload an object.

        Args:
            path: Destination path, including the file name
            data: Content as bytes or str, or a binary file object
            auto_mkdir: Accepted for compatibility; parent directories are
                never created since object stores do not need them

        Returns:
            WriteResult, truthy when the backend stored the object. Its
            ``info`` carries image metadata for image namespaces.
        """
        config = self._config
        key = normalize_path(path)
        metadata = None
        if config.file_secret:
            metadata = {FILE_SECRET_METADATA_KEY: config.file_secret}

        with self._lock:
            self._last_write_info = {}

        handle = self.backend.put(
            config.bucket_name,
            key,
            data,
            content_md5=config.content_md5,
            metadata=metadata,
        )
        if handle is None:
            return WriteResult(success=False)

        info: dict[str, str] = {}
        if config.image_namespace:
            meta = self.backend.get_object_meta(config.bucket_name, key)
            if meta is not None:
                info = {
                    k: meta.metadata[k] for k in WRITE_INFO_KEYS if k in meta.metadata
                }

        with self._lock:
            self._last_write_info = info

        logger.info("File written", bucket=config.bucket_name, key=key)
        return WriteResult(success=True, info=info)

    def get_written_file_info(self, key: str) -> Optional[str]:
        """Look up a field of the most recent write's info, if any."""
        with self._lock:
            return self._last_write_info.get(key)

    def read_file(
        self, path: str, output: Optional[IO[bytes]] = None
    ) -> Union[bytes, bool, None]:
        """Read an object.

        Args:
            path: Path of the file
            output: Optional binary sink the content is streamed into

        Returns:
            The content (None if absent), or, when ``output`` is given,
            whether the object was found and written to it
        """
        key = normalize_path(path)
        if output is not None:
            return self.backend.get_into(self._config.bucket_name, key, output)
        return self.backend.get(self._config.bucket_name, key)

    def get_file_info(self, path: str) -> Optional[FileInfo]:
        """Stat a file or directory.

        A path naming a directory is resolved through its marker object,
        so ``/photos`` and ``/photos/`` both report the directory. The root
        has no marker and stats as None.
        """
        bucket = self._config.bucket_name
        key = normalize_path(path)
        if not key:
            # The root has no object of its own to stat
            return None

        meta = self.backend.get_object_meta(bucket, key)
        if meta is None and key and not key.endswith(DELIMITER):
            meta = self.backend.get_object_meta(bucket, directory_key(key))
        if meta is None:
            return None

        return FileInfo(
            type="folder" if meta.key.endswith(DELIMITER) else "file",
            size=meta.size,
            modified_time=meta.last_modified,
        )

    def delete_file(self, path: str) -> bool:
        key = normalize_path(path)
        result = self.backend.delete_object(self._config.bucket_name, key)
        logger.info("File deleted", bucket=self._config.bucket_name, key=key)
        return result is not None

    # Directories

    def mkdir(self, path: str, auto_mkdir: bool = False) -> bool:
        """Create a directory marker.

        ``auto_mkdir`` is accepted for compatibility and has no effect.
        """
        key = directory_key(normalize_path(path))
        if not key:
            # The root always exists
            return True

        handle = self.backend.create_object_dir(self._config.bucket_name, key)
        logger.info("Directory created", bucket=self._config.bucket_name, key=key)
        return handle is not None

    def rmdir(self, path: str) -> bool:
        """Remove a directory marker.

        Always reports success, whether or not the directory existed and
        even when the backend fails to remove the marker.
        Objects under the directory are left in place, so a non-empty
        directory keeps appearing in listings of its parent.
        """
        key = directory_key(normalize_path(path))
        if not key:
            return True

        try:
            self.backend.delete_object(self._config.bucket_name, key)
        except BackendFault as e:
            logger.warning(
                "Directory marker not removed",
                bucket=self._config.bucket_name,
                key=key,
                error=str(e),
            )
        return True

    def read_dir(self, path: str) -> ListingResult:
        """List files and subdirectories directly under ``path``.

        Listing never raises for backend failures; a failed listing is
        indistinguishable from an empty directory.
        """
        config = self._config
        prefix = directory_key(normalize_path(path))
        lister = PaginatedLister(
            self.backend,
            config.bucket_name,
            max_keys=config.list_max_keys,
            first_page_only=config.first_page_only,
        )
        return lister.list_prefix(prefix)
