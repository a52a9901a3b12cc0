"""S3 client construction for bucketfs.

The S3ClientManager builds a boto3 client from a FacadeConfig. The client is
created lazily on first use and is tied to the configuration it was built
from; a facade that swaps its configuration builds a new manager.

S3-Compatible Services:
    Any service reachable through the S3 API works, including Aliyun OSS,
    MinIO and DigitalOcean Spaces, by pointing ``endpoint_domain`` at it.
"""

import logging
from typing import Any, Dict

import boto3
from botocore.config import Config

from bucketfs.core import get_logger
from bucketfs.schemas import FacadeConfig

logger = get_logger(__name__)


class S3ClientManager:
    """Manages the S3 client for one facade configuration."""

    def __init__(self, config: FacadeConfig):
        """Initialize S3 client manager.

        Args:
            config: Facade configuration the client is built from
        """
        self.config = config
        self._client = None
        logger.info(
            "S3 client manager initialized",
            bucket=config.bucket_name,
            endpoint=config.endpoint_url,
        )

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region_name,
            "endpoint_url": self.config.endpoint_url,
            "config": Config(
                connect_timeout=self.config.timeout,
                read_timeout=self.config.timeout,
            ),
        }

        if self.config.debug:
            boto3.set_stream_logger("botocore", logging.DEBUG)

        if self.config.access_id and self.config.access_secret:
            kwargs.update(
                {
                    "aws_access_key_id": self.config.access_id,
                    "aws_secret_access_key": self.config.access_secret,
                }
            )
            logger.info("S3 client created with explicit credentials")
        else:
            logger.info("S3 client created with default credential chain")

        return boto3.client("s3", **kwargs)  # type: ignore
