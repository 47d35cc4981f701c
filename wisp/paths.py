"""Conversions between filesystem paths and file:// URLs."""

import os
import re
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from .errors import InvalidReferenceError

FILE_SCHEME = "file://"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def is_url(value: str) -> bool:
    """Check whether a string is a fully-qualified URL (scheme://...)."""
    return bool(_SCHEME_RE.match(value))


def is_file_url(value: str) -> bool:
    return value.startswith(FILE_SCHEME)


def path_to_url(path: str | os.PathLike) -> str:
    """Convert an absolute filesystem path to a file:// URL."""
    return Path(os.path.abspath(path)).as_uri()


def url_to_path(url: str) -> str:
    """Convert a file:// URL to a filesystem path.

    Raises:
        InvalidReferenceError: URL does not use the file scheme
    """
    parsed = urlparse(url)
    if parsed.scheme != "file":
        raise InvalidReferenceError(f"not a file URL: {url}")
    # file://host/share paths only exist on Windows (UNC)
    if parsed.netloc and parsed.netloc != "localhost":
        return url2pathname(f"//{parsed.netloc}{parsed.path}")
    return url2pathname(parsed.path)


def to_fs_path(value: object) -> str | None:
    """Map a frame location or reference to a filesystem path.

    file:// URLs are converted, other strings pass through unchanged and
    empty values map to None.

    Examples:
        >>> to_fs_path("file:///project/config.json")
        '/project/config.json'
        >>> to_fs_path("/project/config.json")
        '/project/config.json'
        >>> to_fs_path("") is None
        True
    """
    if not value:
        return None
    text = str(value)
    if is_file_url(text):
        return url_to_path(text)
    return text
