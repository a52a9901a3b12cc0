"""Filesystem-style access to flat object storage buckets.

This package presents files, directories, metadata and listings on top of an
S3-compatible object store that only knows flat string keys. Directories are
modelled as zero-byte marker objects and as common key prefixes.

Key Features:
    - Path normalization between ``/dir/file`` paths and object keys
    - Paginated directory listing classified into files and directories
    - Read, write, stat and delete of files; mkdir and rmdir of directories
    - CLI interface

Usage:
    >>> from bucketfs import HierarchicalStorageFacade
    >>> fs = HierarchicalStorageFacade(
    ...     "assets", "ACCESS_ID", "ACCESS_SECRET", "s3.amazonaws.com"
    ... )
    >>> fs.write_file("/docs/readme.txt", b"hello")
    >>> listing = fs.read_dir("/docs")
"""

__version__ = "1.0.1"

from .core.exceptions import BackendFault, BucketFSError, ValidationError
from .facade import HierarchicalStorageFacade
from .objectstorage import ObjectStorageBackend, S3ObjectBackend
from .path import normalize_path
from .schemas import (
    DirectoryEntry,
    FacadeConfig,
    FileEntry,
    FileInfo,
    ListingResult,
    WriteResult,
)

__all__ = [
    # Facade
    "HierarchicalStorageFacade",
    "FacadeConfig",
    "normalize_path",
    # Results
    "DirectoryEntry",
    "FileEntry",
    "FileInfo",
    "ListingResult",
    "WriteResult",
    # Backends
    "ObjectStorageBackend",
    "S3ObjectBackend",
    # Errors
    "BackendFault",
    "BucketFSError",
    "ValidationError",
]
