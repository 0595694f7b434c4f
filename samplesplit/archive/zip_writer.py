"""Minimal stored (uncompressed) ZIP writer."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from typing import Iterable

from ..errors import ArchiveTooLarge
from .crc import crc32

LOGGER = logging.getLogger("samplesplit.zip")

LOCAL_FILE_HEADER = struct.Struct("<IHHHHHIIIHH")
CENTRAL_DIRECTORY_HEADER = struct.Struct("<IHHHHHHIIIHHHHHII")
END_OF_CENTRAL_DIRECTORY = struct.Struct("<IHHHHIIH")

LOCAL_FILE_SIGNATURE = 0x04034B50
CENTRAL_DIRECTORY_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIRECTORY_SIGNATURE = 0x06054B50

ZIP_VERSION = 20
METHOD_STORED = 0
FLAG_UTF8_NAME = 0x0800

MAX_U16 = 0xFFFF
MAX_U32 = 0xFFFFFFFF


@dataclass(slots=True, frozen=True)
class ArchiveEntry:
    name: str
    data: bytes = field(repr=False)


def _check_u32(what: str, value: int) -> int:
    if value > MAX_U32:
        raise ArchiveTooLarge(f"{what} of {value} bytes exceeds the 32-bit ZIP limit")
    return value


def _check_u16(what: str, value: int) -> int:
    if value > MAX_U16:
        raise ArchiveTooLarge(f"{what} of {value} exceeds the 16-bit ZIP limit")
    return value


def pack(entries: Iterable[ArchiveEntry]) -> bytes:
    """Lay out local records, the central directory and the end record in entry order."""

    body = bytearray()
    central = bytearray()
    count = 0
    for entry in entries:
        name = entry.name.encode("utf-8")
        data = bytes(entry.data)
        flags = 0 if name.isascii() else FLAG_UTF8_NAME
        name_len = _check_u16(f"Filename length for {entry.name!r}", len(name))
        size = _check_u32(f"Entry {entry.name!r}", len(data))
        offset = _check_u32("Local header offset", len(body))
        checksum = crc32(data)

        body += LOCAL_FILE_HEADER.pack(
            LOCAL_FILE_SIGNATURE,
            ZIP_VERSION,
            flags,
            METHOD_STORED,
            0,  # mod time
            0,  # mod date
            checksum,
            size,
            size,
            name_len,
            0,  # extra length
        )
        body += name
        body += data

        central += CENTRAL_DIRECTORY_HEADER.pack(
            CENTRAL_DIRECTORY_SIGNATURE,
            ZIP_VERSION,  # made by
            ZIP_VERSION,  # needed to extract
            flags,
            METHOD_STORED,
            0,
            0,
            checksum,
            size,
            size,
            name_len,
            0,  # extra length
            0,  # comment length
            0,  # disk number start
            0,  # internal attributes
            0,  # external attributes
            offset,
        )
        central += name
        count += 1

    total = _check_u16("Entry count", count)
    directory_offset = _check_u32("Central directory offset", len(body))
    directory_size = _check_u32("Central directory", len(central))
    end = END_OF_CENTRAL_DIRECTORY.pack(
        END_OF_CENTRAL_DIRECTORY_SIGNATURE,
        0,
        0,
        total,
        total,
        directory_size,
        directory_offset,
        0,
    )
    LOGGER.debug("Packed %d entr%s into %d bytes", total, "y" if total == 1 else "ies", len(body) + len(central) + len(end))
    return bytes(body + central + end)


__all__ = ["ArchiveEntry", "pack"]
