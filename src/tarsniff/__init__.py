"""tarsniff - tell tar archives from other files by their content.

Tar Format Specification References:
- POSIX ustar interchange format: https://pubs.opengroup.org/onlinepubs/9699919799/utilities/pax.html#tag_20_92_13_06
"""

from . import archive_detect, header, stream
from .archive_detect import (
    ArchiveType,
    guess_archive_type,
    is_gzip_file,
    is_local_tar_archive,
    sniff_archive,
)
from .header import ChecksumError, TarHeader, TarHeaderError, TruncatedStreamError
from .stream import ByteStream, open_byte_stream

__all__ = [
    "ArchiveType",
    "ByteStream",
    "ChecksumError",
    "TarHeader",
    "TarHeaderError",
    "TruncatedStreamError",
    "archive_detect",
    "guess_archive_type",
    "header",
    "is_gzip_file",
    "is_local_tar_archive",
    "open_byte_stream",
    "sniff_archive",
    "stream",
]
