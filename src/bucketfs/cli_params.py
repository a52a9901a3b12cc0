"""Shared CLI parameter definitions.

Every command connects to a bucket the same way, so the connection options
live here once. Each function returns a Typer option for use inside
``Annotated`` in a command signature; each option can also be supplied via
a ``BUCKETFS_*`` environment variable.

Usage:
    @app.command()
    def my_command(
        bucket: Annotated[str, bucket_option()],
        timeout: Annotated[int, timeout_option()] = 300,
    ):
        pass
"""

from typing import Annotated, Optional

import typer


def bucket_option() -> Annotated[str, typer.Option]:
    """Bucket option."""
    return typer.Option("--bucket", "-b", envvar="BUCKETFS_BUCKET", help="Bucket name")


def access_id_option() -> Annotated[Optional[str], typer.Option]:
    """Access key ID option."""
    return typer.Option("--access-id", envvar="BUCKETFS_ACCESS_ID", help="Access key ID")


def access_secret_option() -> Annotated[Optional[str], typer.Option]:
    """Secret access key option."""
    return typer.Option(
        "--access-secret", envvar="BUCKETFS_ACCESS_SECRET", help="Secret access key"
    )


def endpoint_option() -> Annotated[str, typer.Option]:
    """Endpoint domain option."""
    return typer.Option(
        "--endpoint",
        envvar="BUCKETFS_ENDPOINT_DOMAIN",
        help="Endpoint domain or URL of the storage service",
    )


def region_option() -> Annotated[str, typer.Option]:
    """Region option."""
    return typer.Option("--region", envvar="BUCKETFS_REGION_NAME", help="Region name")


def timeout_option() -> Annotated[int, typer.Option]:
    """Timeout option."""
    return typer.Option(
        "--timeout", envvar="BUCKETFS_TIMEOUT", help="Request timeout in seconds"
    )
