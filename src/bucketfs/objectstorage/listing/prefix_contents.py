"""Paginated directory listing over a flat object namespace."""

from dataclasses import dataclass
from typing import Optional

from bucketfs.core import get_logger, get_tracer
from bucketfs.core.exceptions import BackendFault
from bucketfs.objectstorage.backend import (
    ObjectPage,
    ObjectStorageBackend,
    ObjectSummary,
)
from bucketfs.path import DELIMITER
from bucketfs.schemas import DirectoryEntry, FileEntry, ListingResult

logger = get_logger(__name__)
tracer = get_tracer(__name__)


@dataclass(frozen=True)
class PageResult:
    """Either a fetched page or the fault that prevented fetching it."""

    page: Optional[ObjectPage] = None
    fault: Optional[BackendFault] = None

    @property
    def ok(self) -> bool:
        return self.fault is None and self.page is not None


def to_file_entry(obj: ObjectSummary) -> FileEntry:
    return FileEntry(name=obj.key, size=obj.size, updated_at=obj.last_modified)


def to_directory_entry(prefix: str) -> DirectoryEntry:
    return DirectoryEntry(path=prefix)


class PaginatedLister:
    """Lists objects and first-level prefixes under a key prefix.

    Pages are requested one after another until the backend stops handing
    out a marker. A fault on any page fails the whole listing: it is logged
    and an empty result is returned, discarding pages already fetched.

    The marker object of the listed directory itself (the key equal to the
    prefix, as created by mkdir) is left out of ``files``; every other
    object on a retained page is reported.
    """

    def __init__(
        self,
        backend: ObjectStorageBackend,
        bucket: str,
        max_keys: int = 30,
        delimiter: str = DELIMITER,
        first_page_only: bool = False,
    ):
        """Initialize the lister.

        Args:
            backend: Object storage backend to page through
            bucket: Bucket to list
            max_keys: Maximum entries requested per page
            delimiter: Grouping delimiter for common prefixes
            first_page_only: Classify only the first page; later pages are
                still fetched. Kept for callers relying on the old truncated
                listings.
        """
        self.backend = backend
        self.bucket = bucket
        self.max_keys = max_keys
        self.delimiter = delimiter
        self.first_page_only = first_page_only

    def fetch_page(self, prefix: str, marker: str) -> PageResult:
        """Request a single page, capturing a backend fault as a result."""
        try:
            page = self.backend.list_objects(
                self.bucket,
                prefix=prefix,
                delimiter=self.delimiter,
                max_keys=self.max_keys,
                marker=marker,
            )
        except BackendFault as e:
            return PageResult(fault=e)
        return PageResult(page=page)

    def list_prefix(self, prefix: str) -> ListingResult:
        """List a prefix.

        Args:
            prefix: Normalized key prefix, empty for the bucket root

        Returns:
            ListingResult with files and dirs in enumeration order, or an
            empty ListingResult if any page failed
        """
        with tracer.start_as_current_span("bucketfs.list_prefix") as span:
            span.set_attribute("bucketfs.bucket", self.bucket)
            span.set_attribute("bucketfs.prefix", prefix)

            file_pages: list[list[ObjectSummary]] = []
            dir_pages: list[list[str]] = []
            marker = ""

            while True:
                result = self.fetch_page(prefix, marker)
                page = result.page
                if not result.ok or page is None:
                    logger.error(
                        "Listing failed, returning empty result",
                        bucket=self.bucket,
                        prefix=prefix,
                        pages_discarded=len(file_pages),
                        error=str(result.fault),
                    )
                    span.set_attribute("bucketfs.failed", True)
                    return ListingResult.empty()

                file_pages.append(page.objects)
                dir_pages.append(page.prefixes)

                if page.next_marker == "":
                    break
                if page.next_marker == marker:
                    logger.warning(
                        "Backend repeated listing marker, stopping",
                        bucket=self.bucket,
                        prefix=prefix,
                        marker=marker,
                    )
                    break
                marker = page.next_marker

            span.set_attribute("bucketfs.pages", len(file_pages))
            if self.first_page_only:
                file_pages, dir_pages = file_pages[:1], dir_pages[:1]

            files = [
                to_file_entry(obj)
                for objects in file_pages
                for obj in objects
                # The directory's own marker object is not a file in it
                if not (prefix and obj.key == prefix)
            ]
            dirs = [to_directory_entry(p) for prefixes in dir_pages for p in prefixes]

            logger.info(
                "Prefix listed",
                bucket=self.bucket,
                prefix=prefix,
                file_count=len(files),
                dir_count=len(dirs),
            )
            return ListingResult(files=files, dirs=dirs)
