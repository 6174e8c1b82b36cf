"""Read bytes from a normal file or a gzip compressed file

The stream never seeks: bytes looked at to detect compression are kept and
replayed to the next reader, so pipes and other non-seekable handles work.

Format References:
- GZIP file format (RFC 1952): https://www.rfc-editor.org/rfc/rfc1952#section-2.3.1
"""

import gzip
import logging

from tarsniff.header import BLOCK_SIZE, TruncatedStreamError

log = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"  # RFC 1952 ID1 ID2


def is_gzip_file(file_handle):
    """Check if a file handle points to a gzip-compressed stream.

    Detects gzip by peeking at the magic number (0x1f 0x8b). Nothing is
    consumed, the next read still starts at the first byte.

    Args:
        file_handle: Object with a peek(count) method, such as
            io.BufferedReader or PeekableReader

    Returns:
        bool: True if the stream appears to be gzip-compressed
    """
    return file_handle.peek(len(GZIP_MAGIC))[: len(GZIP_MAGIC)] == GZIP_MAGIC


class PeekableReader:
    """Wraps a binary file handle so its leading bytes can be inspected
    without being consumed. Peeked bytes are returned again by read()."""

    def __init__(self, file_handle):
        self.fh = file_handle
        self._peeked = b""

    def readable(self):
        return True

    def peek(self, count):
        """Return up to count bytes from the current position, fewer only
        at end of stream."""
        while len(self._peeked) < count:
            chunk = self.fh.read(count - len(self._peeked))
            if not chunk:
                break
            self._peeked += chunk
        return self._peeked[:count]

    def read(self, count=-1):
        if count is None or count < 0:
            result = self._peeked + self.fh.read()
            self._peeked = b""
            return result

        if self._peeked:
            result = self._peeked[:count]
            self._peeked = self._peeked[count:]
            return result

        return self.fh.read(count)


def open_byte_stream(filename=None, file_handle=None, gzip="auto"):
    """Open a file and return a ByteStream reading it from the start.

    Args:
        filename: Path to the file, ignored when file_handle is given
        file_handle: Optional binary file-like object, it is left open
            when the stream is closed
        gzip: Compression mode - "auto" (detect by magic number),
              True (always decompress), or None (read raw bytes)

    Returns:
        ByteStream: Stream for reading the (decompressed) bytes

    Raises:
        OSError: If the file cannot be opened
    """
    owns_handle = file_handle is None
    if owns_handle:
        file_handle = open(filename, "rb")

    try:
        return ByteStream(file_handle, gzip=gzip, owns_handle=owns_handle)
    except Exception:
        if owns_handle:
            file_handle.close()
        raise


class ByteStream:
    """A readable stream of bytes, optionally decompressed from gzip.

    Can be used as a context manager. Closing the stream closes the
    underlying file handle only if the stream opened it.
    """

    def __init__(self, file_handle, gzip="auto", owns_handle=False):
        self.raw_fh = file_handle
        self.owns_handle = owns_handle
        self.peekable = PeekableReader(file_handle)

        if gzip == "auto":
            gzip = is_gzip_file(self.peekable)

        self.compressed = bool(gzip)
        if self.compressed:
            self.fh = GzipReader(self.peekable)
        else:
            self.fh = self.peekable

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def peek(self, count):
        """Peek at raw bytes not yet consumed, before any decompression."""
        return self.peekable.peek(count)

    def read(self, count=-1):
        return self.fh.read(count)

    def read_block(self, size=BLOCK_SIZE):
        """Read exactly size bytes.

        Raises:
            TruncatedStreamError: If the stream ends first
        """
        buf = b""
        while len(buf) < size:
            chunk = self.fh.read(size - len(buf))
            if not chunk:
                raise TruncatedStreamError(f"expected {size} bytes but only read {len(buf)}")
            buf += chunk
        return buf

    def close(self):
        """Close the decompressor, and the file handle if we opened it."""
        try:
            if self.fh is not self.peekable:
                self.fh.close()
        finally:
            if self.owns_handle:
                self.raw_fh.close()


class GzipReader(gzip.GzipFile):
    """gzip.GzipFile over a PeekableReader. Closing it leaves the
    underlying reader alone, as GzipFile does for any fileobj."""

    def __init__(self, reader):
        gzip.GzipFile.__init__(self, fileobj=reader, mode="rb")
        log.debug("reading gzip compressed stream")
