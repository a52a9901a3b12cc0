"""Command-line interface for bucketfs.

Commands:
    - ls: List files and subdirectories of a directory
    - cat: Print a file to stdout
    - put: Upload a local file
    - stat: Show file or directory metadata
    - rm: Delete a file
    - mkdir / rmdir: Create or remove a directory marker
    - usage: Report bucket or directory usage (unsupported, always 0)

Connection options go before the command, e.g.
``bucketfs --bucket assets --endpoint s3.amazonaws.com ls /photos``.
"""

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .core import settings
from .core.exceptions import ValidationError
from .cli_params import (
    access_id_option,
    access_secret_option,
    bucket_option,
    endpoint_option,
    region_option,
    timeout_option,
)
from .facade import HierarchicalStorageFacade

app = typer.Typer(
    name="bucketfs",
    help="Filesystem-style access to object storage buckets.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucketfs {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    bucket: Annotated[Optional[str], bucket_option()] = None,
    access_id: Annotated[Optional[str], access_id_option()] = None,
    access_secret: Annotated[Optional[str], access_secret_option()] = None,
    endpoint: Annotated[str, endpoint_option()] = settings.endpoint_domain,
    region: Annotated[str, region_option()] = settings.region_name,
    timeout: Annotated[int, timeout_option()] = settings.timeout,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version."
        ),
    ] = None,
) -> None:
    """
    BucketFS: files and directories on top of a flat object store.
    """
    ctx.obj = {
        "bucket": bucket,
        "access_id": access_id,
        "access_secret": access_secret,
        "endpoint": endpoint,
        "region": region,
        "timeout": timeout,
    }


def _create_facade(ctx: typer.Context) -> HierarchicalStorageFacade:
    """Create the facade from the connection options of the invocation."""
    options = ctx.obj
    if not options["bucket"]:
        raise ValidationError("A bucket is required: pass --bucket or BUCKETFS_BUCKET")

    return HierarchicalStorageFacade(
        options["bucket"],
        options["access_id"],
        options["access_secret"],
        options["endpoint"],
        region_name=options["region"],
        timeout=options["timeout"],
    )


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


@app.command("ls")
def ls_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to list")] = "/",
) -> None:
    """
    List files and subdirectories directly under a directory.

    Example:
        bucketfs --bucket assets ls /photos
    """
    try:
        listing = _create_facade(ctx).read_dir(path)
    except Exception as e:
        raise _fail(e)

    if not listing.files and not listing.dirs:
        typer.echo("No entries found.")
        return

    for directory in listing.dirs:
        typer.echo(f"d  {directory.path}")
    for entry in listing.files:
        typer.echo(f"-  {entry.size:>12,}  {entry.updated_at.isoformat()}  {entry.name}")


@app.command("cat")
def cat_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to print")],
) -> None:
    """Write the content of a file to stdout."""
    try:
        content = _create_facade(ctx).read_file(path)
    except Exception as e:
        raise _fail(e)

    if content is None:
        raise _fail(FileNotFoundError(f"No such file: {path}"))
    sys.stdout.buffer.write(content)
    sys.stdout.flush()


@app.command("put")
def put_cmd(
    ctx: typer.Context,
    source: Annotated[
        Path, typer.Argument(help="Local file to upload", exists=True, dir_okay=False)
    ],
    path: Annotated[str, typer.Argument(help="Destination path in the bucket")],
) -> None:
    """
    Upload a local file.

    Example:
        bucketfs --bucket assets put ./cat.jpg /photos/cat.jpg
    """
    try:
        with source.open("rb") as fh:
            result = _create_facade(ctx).write_file(path, fh)
    except Exception as e:
        raise _fail(e)

    if not result:
        raise _fail(RuntimeError(f"Upload of {source} to {path} was rejected"))
    typer.echo(f"Uploaded {source} to {path}")
    for key, value in result.info.items():
        typer.echo(f"  {key}: {value}")


@app.command("stat")
def stat_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory")],
) -> None:
    """Show type, size and modification time of a file or directory."""
    try:
        info = _create_facade(ctx).get_file_info(path)
    except Exception as e:
        raise _fail(e)

    if info is None:
        raise _fail(FileNotFoundError(f"No such file or directory: {path}"))
    typer.echo(f"Path: {path}")
    typer.echo(f"Type: {info.type}")
    typer.echo(f"Size: {info.size:,} bytes")
    typer.echo(f"Modified: {info.modified_time.isoformat()}")


@app.command("rm")
def rm_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to delete")],
) -> None:
    """Delete a file."""
    try:
        deleted = _create_facade(ctx).delete_file(path)
    except Exception as e:
        raise _fail(e)

    if not deleted:
        raise _fail(RuntimeError(f"Could not delete {path}"))
    typer.echo(f"Deleted {path}")


@app.command("mkdir")
def mkdir_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to create")],
) -> None:
    """Create a directory."""
    try:
        created = _create_facade(ctx).mkdir(path)
    except Exception as e:
        raise _fail(e)

    if not created:
        raise _fail(RuntimeError(f"Could not create {path}"))
    typer.echo(f"Created {path}")


@app.command("rmdir")
def rmdir_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to remove")],
) -> None:
    """
    Remove a directory marker.

    Files under the directory are not deleted.
    """
    try:
        _create_facade(ctx).rmdir(path)
    except Exception as e:
        raise _fail(e)
    typer.echo(f"Removed {path}")


@app.command("usage")
def usage_cmd(
    ctx: typer.Context,
    path: Annotated[
        Optional[str], typer.Argument(help="Directory; the whole bucket if omitted")
    ] = None,
) -> None:
    """Report storage usage. Not supported by this backend; always 0."""
    try:
        facade = _create_facade(ctx)
        usage = facade.get_folder_usage(path) if path else facade.get_bucket_usage()
    except Exception as e:
        raise _fail(e)
    typer.echo(f"Usage: {usage} bytes (usage reporting is not supported)")


if __name__ == "__main__":
    app()
