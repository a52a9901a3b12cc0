"""Directory listing over object storage."""

from .prefix_contents import PageResult, PaginatedLister

__all__ = ["PageResult", "PaginatedLister"]
