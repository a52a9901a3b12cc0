"""Tests for the S3 object storage backend."""

import io

import boto3
import pytest
from moto import mock_aws

from bucketfs.core.exceptions import BackendFault
from bucketfs.objectstorage.backend import S3ObjectBackend
from bucketfs.objectstorage.clients import S3ClientManager
from bucketfs.schemas import FacadeConfig


@mock_aws
class TestS3ObjectBackend:
    """Test the boto3 backend with mocked S3."""

    def setup_method(self, method):
        """Set up test environment."""

        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket="test-bucket")
        self.s3_client.put_object(
            Bucket="test-bucket", Key="data/file1.txt", Body=b"content1"
        )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="data/sub/file2.txt", Body=b"content2"
        )

        config = FacadeConfig(
            bucket_name="test-bucket",
            access_id="test_key",
            access_secret="test_secret",
            endpoint_domain="s3.amazonaws.com",
            region_name="us-east-1",
        )
        self.backend = S3ObjectBackend(S3ClientManager(config))

    def test_put_returns_handle(self):
        handle = self.backend.put("test-bucket", "new.txt", b"new")

        assert handle is not None
        assert handle.key == "new.txt"
        assert handle.etag

    def test_get(self):
        assert self.backend.get("test-bucket", "data/file1.txt") == b"content1"

    def test_get_missing(self):
        assert self.backend.get("test-bucket", "missing.txt") is None

    def test_get_into(self):
        sink = io.BytesIO()

        assert self.backend.get_into("test-bucket", "data/file1.txt", sink) is True
        assert sink.getvalue() == b"content1"

    def test_get_into_missing(self):
        assert self.backend.get_into("test-bucket", "missing.txt", io.BytesIO()) is False

    def test_get_object_meta(self):
        meta = self.backend.get_object_meta("test-bucket", "data/file1.txt")

        assert meta is not None
        assert meta.key == "data/file1.txt"
        assert meta.size == 8

    def test_get_object_meta_missing(self):
        assert self.backend.get_object_meta("test-bucket", "missing.txt") is None

    def test_create_object_dir(self):
        assert self.backend.create_object_dir("test-bucket", "photos/") is not None

        head = self.s3_client.head_object(Bucket="test-bucket", Key="photos/")
        assert head["ContentLength"] == 0

    def test_delete_object(self):
        assert self.backend.delete_object("test-bucket", "data/file1.txt") is not None
        assert self.backend.get("test-bucket", "data/file1.txt") is None

    def test_list_objects(self):
        """Test a delimiter listing separates objects from prefixes."""
        result = self.backend.list_objects(
            "test-bucket", prefix="data/", delimiter="/", max_keys=30
        )

        assert [obj.key for obj in result.objects] == ["data/file1.txt"]
        assert result.objects[0].size == 8
        assert result.prefixes == ["data/sub/"]
        assert result.next_marker == ""

    def test_list_objects_pages(self):
        """Test a truncated page hands out a marker for the next one."""
        for i in range(3):
            self.s3_client.put_object(
                Bucket="test-bucket", Key=f"flat/file{i}.txt", Body=b"x"
            )

        first = self.backend.list_objects(
            "test-bucket", prefix="flat/", delimiter="/", max_keys=2
        )
        second = self.backend.list_objects(
            "test-bucket",
            prefix="flat/",
            delimiter="/",
            max_keys=2,
            marker=first.next_marker,
        )

        assert len(first.objects) == 2
        assert first.next_marker
        assert [obj.key for obj in second.objects] == ["flat/file2.txt"]
        assert second.next_marker == ""

    def test_list_missing_bucket_faults(self):
        with pytest.raises(BackendFault) as exc_info:
            self.backend.list_objects(
                "no-such-bucket", prefix="", delimiter="/", max_keys=30
            )

        assert exc_info.value.operation == "list_objects"

    def test_put_missing_bucket_faults(self):
        with pytest.raises(BackendFault) as exc_info:
            self.backend.put("no-such-bucket", "a.txt", b"a")

        assert exc_info.value.operation == "put"
        assert exc_info.value.key == "a.txt"
        assert exc_info.value.__cause__ is not None
