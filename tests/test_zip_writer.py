import io
import struct
import zipfile
import zlib

import pytest

from samplesplit.archive import zip_writer
from samplesplit.archive.zip_writer import ArchiveEntry, pack
from samplesplit.errors import ArchiveTooLarge


def test_empty_archive_is_a_bare_end_record():
    payload = pack([])
    assert payload == b"PK\x05\x06" + b"\x00" * 18
    with zipfile.ZipFile(io.BytesIO(payload)) as archive:
        assert archive.namelist() == []


def test_two_entries_round_trip_through_zipfile():
    first = bytes(range(10))
    second = bytes(range(100, 120))
    entries = [ArchiveEntry("a.bin", first), ArchiveEntry("bb.bin", second)]
    payload = pack(entries)

    local = (30 + 5) + (30 + 6) + len(first) + len(second)
    central = (46 + 5) + (46 + 6)
    assert len(payload) == local + central + 22

    with zipfile.ZipFile(io.BytesIO(payload)) as archive:
        assert archive.testzip() is None
        assert archive.namelist() == ["a.bin", "bb.bin"]
        assert archive.read("a.bin") == first
        assert archive.read("bb.bin") == second
        infos = archive.infolist()
        assert [info.compress_type for info in infos] == [zipfile.ZIP_STORED] * 2
        assert [info.header_offset for info in infos] == [0, 30 + 5 + len(first)]
        assert [info.CRC for info in infos] == [zlib.crc32(first), zlib.crc32(second)]


def test_local_header_fields():
    data = b"hello world"
    payload = pack([ArchiveEntry("x.txt", data)])
    fields = struct.unpack_from("<IHHHHHIIIHH", payload, 0)
    signature, version, flags, method, _time, _date, crc, csize, usize, name_len, extra = fields
    assert signature == 0x04034B50
    assert (version, flags, method) == (20, 0, 0)
    assert crc == zlib.crc32(data)
    assert csize == usize == len(data)
    assert (name_len, extra) == (5, 0)
    assert payload[30:35] == b"x.txt"
    assert payload[35 : 35 + len(data)] == data


def test_end_record_points_at_central_directory():
    entries = [ArchiveEntry(f"sample_{i}.wav", b"\x01" * i) for i in range(1, 4)]
    payload = pack(entries)
    signature, disk, cd_disk, here, total, cd_size, cd_offset, comment = struct.unpack(
        "<IHHHHIIH", payload[-22:]
    )
    assert signature == 0x06054B50
    assert (disk, cd_disk, comment) == (0, 0, 0)
    assert here == total == 3
    assert cd_offset + cd_size == len(payload) - 22
    assert payload[cd_offset : cd_offset + 4] == b"PK\x01\x02"


def test_non_ascii_names_set_utf8_flag():
    payload = pack([ArchiveEntry("kick_é.wav", b"abc")])
    flags = struct.unpack_from("<H", payload, 6)[0]
    assert flags & 0x0800
    with zipfile.ZipFile(io.BytesIO(payload)) as archive:
        assert archive.namelist() == ["kick_é.wav"]


def test_entry_size_overflow_is_reported(monkeypatch):
    monkeypatch.setattr(zip_writer, "MAX_U32", 15)
    with pytest.raises(ArchiveTooLarge):
        pack([ArchiveEntry("a", b"x" * 20)])


def test_offset_overflow_is_reported(monkeypatch):
    monkeypatch.setattr(zip_writer, "MAX_U32", 40)
    with pytest.raises(ArchiveTooLarge):
        pack([ArchiveEntry("a", b"12345"), ArchiveEntry("b", b"12345")])


def test_entry_count_overflow_is_reported(monkeypatch):
    monkeypatch.setattr(zip_writer, "MAX_U16", 1)
    with pytest.raises(ArchiveTooLarge):
        pack([ArchiveEntry("a", b""), ArchiveEntry("b", b"")])
