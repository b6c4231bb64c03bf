"""File URIs for spans.

Spans identify their file by a ``file://`` URI so they can leave the
process. Only the path is converted; nothing here touches the file system
beyond making a relative path absolute.
"""

from __future__ import annotations

import os
from urllib.parse import quote, unquote, urlsplit

FILE_SCHEME = "file"


def is_uri(value: str) -> bool:
    """Return True if ``value`` already looks like a file URI."""
    return value.startswith(f"{FILE_SCHEME}://")


def uri_from_path(path: str) -> str:
    """Convert a filesystem path to a ``file://`` URI.

    An empty path gives an empty URI; a value that is already a file URI is
    returned unchanged.

    Example:
        >>> uri_from_path("/src/a b.go")
        'file:///src/a%20b.go'

    """
    if not path:
        return ""
    if is_uri(path):
        return path
    path = os.path.abspath(path)
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    if not path.startswith("/"):
        # drive-letter paths
        path = "/" + path
    return f"{FILE_SCHEME}://{quote(path, safe='/:')}"


def uri_to_path(uri: str) -> str:
    """Convert a ``file://`` URI back to a path.

    Raises:
        ValueError: if ``uri`` is not a file URI

    """
    if not uri:
        return ""
    parts = urlsplit(uri)
    if parts.scheme != FILE_SCHEME:
        msg = f"only file URIs are supported, got {uri!r}"
        raise ValueError(msg)
    path = unquote(parts.path)
    if len(path) >= 3 and path[0] == "/" and path[2] == ":":
        # /C:/dir -> C:/dir
        path = path[1:]
    return path


__all__ = [
    "FILE_SCHEME",
    "is_uri",
    "uri_from_path",
    "uri_to_path",
]
