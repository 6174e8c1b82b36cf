"""Tar archive detection by content.

This module decides whether a file holds a tar archive, plain or gzip
compressed, by looking at its bytes. File names and extensions are never
consulted.
"""

import enum
import logging
import zlib

from tarsniff.header import TarHeader
from tarsniff.stream import GZIP_MAGIC, is_gzip_file, open_byte_stream

log = logging.getLogger(__name__)

__all__ = [
    "ArchiveType",
    "GZIP_MAGIC",
    "guess_archive_type",
    "is_gzip_file",
    "is_local_tar_archive",
    "sniff_archive",
]

# Everything that means "this is not a readable tar stream",
# ValueError covers TarHeaderError and unopenable paths such as embedded NULs
DETECTION_ERRORS = (OSError, EOFError, zlib.error, ValueError)


class ArchiveType(enum.Enum):
    """What a probed file turned out to contain."""

    NONE = "none"
    TAR = "tar"
    GZIP_TAR = "gzip-tar"


def guess_archive_type(file_handle):
    """Guess the archive type from file content.

    Reads at most one tar header block from the start of the handle,
    decompressing it first when the handle begins with the gzip magic
    number. The handle is not closed.

    Args:
        file_handle: Binary file-like object positioned at the start of
            the candidate content, need not be seekable

    Returns:
        ArchiveType: TAR or GZIP_TAR

    Raises:
        TarHeaderError: If the stream is truncated or the first block is
            not a valid tar header
        OSError, EOFError, zlib.error: If the gzip layer is corrupt
            (gzip.BadGzipFile is an OSError)
    """
    with open_byte_stream(file_handle=file_handle) as stream:
        header = TarHeader.from_block(stream.read_block())
        log.debug("found tar header %r", header)
        if stream.compressed:
            return ArchiveType.GZIP_TAR
        return ArchiveType.TAR


def sniff_archive(path):
    """Return the ArchiveType of the file at path.

    Any failure, including a missing or unreadable file, is reported as
    ArchiveType.NONE rather than raised.
    """
    try:
        with open(path, "rb") as fh:
            return guess_archive_type(fh)
    except DETECTION_ERRORS as e:
        log.debug("%s is not a tar archive: %s", path, e)
        return ArchiveType.NONE


def is_local_tar_archive(path):
    """Check whether the file at path is a tar archive, with or without a
    gzip wrapper.

    Args:
        path: Filesystem path (str or os.PathLike)

    Returns:
        bool: True if the content begins with a valid tar header
    """
    return sniff_archive(path) is not ArchiveType.NONE
