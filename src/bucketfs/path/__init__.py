from .normalize import DELIMITER, directory_key, normalize_path

__all__ = [
    "DELIMITER",
    "directory_key",
    "normalize_path",
]
