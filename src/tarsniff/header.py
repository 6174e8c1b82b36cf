"""An object to represent a tar header record, parsed from a single block.

Tar Format Specification References:
- POSIX ustar interchange format: https://pubs.opengroup.org/onlinepubs/9699919799/utilities/pax.html#tag_20_92_13_06
- GNU tar header layout: https://www.gnu.org/software/tar/manual/html_node/Standard.html
"""

import struct

BLOCK_SIZE = 512  # every tar header occupies exactly one block

NUL = b"\x00"
SPACE = b" "

# Magic/version pairs - See POSIX ustar "magic" and "version" fields
USTAR_MAGIC = b"ustar\x00"
USTAR_VERSION = b"00"
GNU_MAGIC = b"ustar "
GNU_VERSION = b" \x00"

FORMAT_V7 = "v7"
FORMAT_USTAR = "ustar"
FORMAT_GNU = "gnu"


def _field(offset, length):
    return slice(offset, offset + length)


# Header field layout (offset, length) - See POSIX ustar "Header Block"
NAME = _field(0, 100)
MODE = _field(100, 8)
UID = _field(108, 8)
GID = _field(116, 8)
SIZE = _field(124, 12)
MTIME = _field(136, 12)
CHKSUM = _field(148, 8)  # summed as eight spaces
TYPEFLAG = _field(156, 1)
LINKNAME = _field(157, 100)
MAGIC = _field(257, 6)
VERSION = _field(263, 2)
UNAME = _field(265, 32)
GNAME = _field(297, 32)
DEVMAJOR = _field(329, 8)
DEVMINOR = _field(337, 8)
PREFIX = _field(345, 155)  # ustar only


class TarHeaderError(ValueError):
    """Raised when a block cannot be read as a tar header."""


class ChecksumError(TarHeaderError):
    """Raised when the recorded checksum does not match the block's bytes."""


class TruncatedStreamError(TarHeaderError):
    """Raised when the stream ends before a full header block was read."""


def parse_string(field):
    """Decode a NUL terminated string field."""
    return field.split(NUL, 1)[0].decode("utf-8", "surrogateescape")


def parse_numeric(field):
    """Decode a numeric header field.

    Fields are normally octal ASCII digits, padded with spaces and/or NULs.
    GNU tar stores values too large for octal in base-256: the first byte
    is 0x80 for positive and 0xff for negative numbers, and the remaining
    bytes are a big-endian integer.

    Args:
        field: Raw bytes of the field

    Returns:
        int: The decoded value, 0 for an empty field

    Raises:
        TarHeaderError: If the field holds something other than a number
    """
    if field and field[0] in (0o200, 0o377):
        value = int.from_bytes(field[1:], "big")
        if field[0] == 0o377:
            value = -(256 ** (len(field) - 1) - value)
        return value

    return parse_octal(field)


def parse_octal(field):
    """Decode an octal ASCII field, padded with spaces and/or NULs.

    The checksum field is always octal, base-256 is not accepted there.

    Raises:
        TarHeaderError: If the field holds anything but octal digits
    """
    digits = field.split(NUL, 1)[0].strip(SPACE + NUL)
    if not digits:
        return 0
    if digits.strip(b"01234567"):
        raise TarHeaderError(f"invalid octal field {bytes(field)!r}")
    return int(digits, 8)


def compute_checksums(block):
    """Return the (unsigned, signed) byte sums of a header block.

    The checksum field itself is counted as eight ASCII spaces. Some old
    tar implementations summed signed chars, so both sums are computed.
    """
    unsigned = 256 + sum(block[:148]) + sum(block[156:BLOCK_SIZE])
    signed = 256 + sum(struct.unpack_from("148b8x356b", block))
    return unsigned, signed


def is_zero_block(block):
    """An all-NUL block marks the end of an archive rather than a member."""
    return not block.strip(NUL)


class TarHeader:
    """A tar header record, decoded from one BLOCK_SIZE block.

    Only the header is decoded; the member's data that follows it in the
    archive is never read.
    """

    def __init__(
        self,
        name="",
        mode=0,
        uid=0,
        gid=0,
        size=0,
        mtime=0,
        chksum=0,
        typeflag=b"0",
        linkname="",
        uname="",
        gname="",
        devmajor=0,
        devminor=0,
        format=FORMAT_V7,
    ):
        self.name = name
        self.mode = mode
        self.uid = uid
        self.gid = gid
        self.size = size
        self.mtime = mtime
        self.chksum = chksum
        self.typeflag = typeflag
        self.linkname = linkname
        self.uname = uname
        self.gname = gname
        self.devmajor = devmajor
        self.devminor = devminor
        self.format = format

    def __repr__(self):
        return f"<TarHeader {self.name!r} size={self.size} format={self.format}>"

    @classmethod
    def from_block(cls, block):
        """Parse and validate a header block.

        Args:
            block: Exactly BLOCK_SIZE bytes

        Returns:
            TarHeader: The decoded header

        Raises:
            TruncatedStreamError: If block is shorter than BLOCK_SIZE
            TarHeaderError: If block is an end-of-archive marker or a
                numeric field is malformed
            ChecksumError: If the recorded checksum does not match
        """
        if len(block) < BLOCK_SIZE:
            raise TruncatedStreamError(f"expected {BLOCK_SIZE} bytes but only read {len(block)}")
        if len(block) > BLOCK_SIZE:
            raise TarHeaderError(f"header block is {len(block)} bytes, not {BLOCK_SIZE}")

        if is_zero_block(block):
            raise TarHeaderError("end of archive marker where a header was expected")

        chksum = parse_octal(block[CHKSUM])
        if chksum not in compute_checksums(block):
            raise ChecksumError(f"header checksum {chksum:o} does not match block")

        magic, version = block[MAGIC], block[VERSION]
        if magic == USTAR_MAGIC and version == USTAR_VERSION:
            format = FORMAT_USTAR
        elif magic == GNU_MAGIC and version == GNU_VERSION:
            format = FORMAT_GNU
        else:
            format = FORMAT_V7

        name = parse_string(block[NAME])
        if format == FORMAT_USTAR:
            prefix = parse_string(block[PREFIX])
            if prefix:
                name = f"{prefix}/{name}"

        size = parse_numeric(block[SIZE])
        if size < 0:
            raise TarHeaderError(f"negative member size {size}")

        header = cls(
            name=name,
            mode=parse_numeric(block[MODE]),
            uid=parse_numeric(block[UID]),
            gid=parse_numeric(block[GID]),
            size=size,
            mtime=parse_numeric(block[MTIME]),
            chksum=chksum,
            typeflag=bytes(block[TYPEFLAG]),
            linkname=parse_string(block[LINKNAME]),
            format=format,
        )

        # v7 headers end at linkname, the rest of the block is padding
        if format != FORMAT_V7:
            header.uname = parse_string(block[UNAME])
            header.gname = parse_string(block[GNAME])
            header.devmajor = parse_numeric(block[DEVMAJOR])
            header.devminor = parse_numeric(block[DEVMINOR])

        return header
