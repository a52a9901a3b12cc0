"""Translation between filesystem-style paths and object keys."""

from bucketfs.core.exceptions import ValidationError

DELIMITER = "/"


def normalize_path(path: str) -> str:
    """Turn an external path into a backend key.

    External paths always carry a leading separator while object keys never
    do. Exactly one character is stripped, so ``"//a"`` becomes ``"/a"``.

    Args:
        path: Filesystem-style path such as ``/photos/cat.jpg``

    Returns:
        The object key (``photos/cat.jpg``); ``/`` maps to the empty root key

    Raises:
        ValidationError: If the path does not start with the separator
    """
    if not path.startswith(DELIMITER):
        raise ValidationError(f"Path must start with '{DELIMITER}': {path!r}")
    return path[1:]


def directory_key(key: str) -> str:
    """Return ``key`` as a directory key ending in the delimiter.

    The root key stays empty.
    """
    if key and not key.endswith(DELIMITER):
        return key + DELIMITER
    return key
