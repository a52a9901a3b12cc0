"""Test configuration and fixtures for bucketfs."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

from bucketfs.facade import HierarchicalStorageFacade
from bucketfs.objectstorage.backend import ObjectPage, ObjectSummary

BUCKET = "test-bucket"
ENDPOINT = "s3.amazonaws.com"
MODIFIED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def summary(key: str, size: int = 1) -> ObjectSummary:
    """Build a listing entry with a fixed modification time."""
    return ObjectSummary(key=key, size=size, last_modified=MODIFIED)


def page(keys, prefixes=(), next_marker: str = "") -> ObjectPage:
    """Build a listing page from object keys and common prefixes."""
    return ObjectPage(
        objects=[summary(key) for key in keys],
        prefixes=list(prefixes),
        next_marker=next_marker,
    )


@pytest.fixture
def s3_client():
    """Mocked S3 with an empty test bucket."""
    with mock_aws():
        client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def facade(s3_client):
    """Facade bound to the mocked bucket."""
    return HierarchicalStorageFacade(
        BUCKET, "test_key", "test_secret", ENDPOINT, region_name="us-east-1"
    )


@pytest.fixture
def mock_backend():
    """Scripted backend for exercising facade logic without S3."""
    return MagicMock()
