"""S3 path helpers."""

import re

_EXTENSION_RE = re.compile(r"\.[^/]+$")


def strip_extension(path: str) -> str:
    """Remove the file extension from a path, keeping the file name.

    Only a trailing ``.suffix`` without a ``/`` in it is removed, so dots
    in folder names are left alone.

    Example:
        >>> strip_extension("folder/video.mp4")
        'folder/video'
        >>> strip_extension("folder/video")
        'folder/video'
    """
    return _EXTENSION_RE.sub("", path)


def base_name(path: str) -> str:
    """Return the last ``/``-delimited segment of a path.

    Example:
        >>> base_name("s3://bucket/a/b/c.mp4")
        'c.mp4'
    """
    return path.split("/")[-1]
