"""Files and floors (directories) on a mounted disk, with a small file API."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from enum import IntEnum, IntFlag
from typing import BinaryIO, List, Optional, TextIO, Tuple, Union

from tinydesk.memtree import DT_DIR, DT_REG

logger = logging.getLogger(__name__)

ByteLike = Union[bytes, bytearray, str, int]


class FileType(IntFlag):
    """Kinds of directory entries, usable as a mask."""

    FILE = DT_REG
    FLOOR = DT_DIR
    BOTH = DT_REG | DT_DIR


class OffsetMode(IntEnum):
    """Where a seek offset is measured from."""

    BEGIN = os.SEEK_SET
    CURRENT = os.SEEK_CUR
    END = os.SEEK_END


def _one_byte(ch: ByteLike) -> bytes:
    if isinstance(ch, int):
        return bytes([ch])
    if isinstance(ch, str):
        ch = ch.encode("latin-1")
    if len(ch) != 1:
        raise ValueError(f"expected a single byte, got {ch!r}")
    return bytes(ch)


def new_file(path: str) -> bool:
    """Create an empty file; False if it already exists or cannot be made."""
    if test_file(path):
        return False
    try:
        with open(path, "wb"):
            return True
    except OSError:
        return False


def test_file(path: str) -> bool:
    """Return True if ``path`` can be opened as a file for reading."""
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


def move_file(old_path: str, new_path: str) -> bool:
    try:
        os.rename(old_path, new_path)
    except OSError:
        return False
    return True


def remove_file(path: str) -> bool:
    try:
        os.remove(path)
    except OSError:
        return False
    return True


def new_floor(path: str) -> bool:
    try:
        os.mkdir(path, 0o777)
    except OSError:
        return False
    return True


def test_floor(path: str) -> bool:
    """Return True if ``path`` can be opened as a floor."""
    floor = Floor()
    if floor.open(path):
        floor.close()
        return True
    return False


def remove_floor(path: str) -> bool:
    """Remove an empty floor; False if it is missing or not empty."""
    try:
        os.rmdir(path)
    except OSError:
        return False
    return True


def get_space(path: str = ".") -> Tuple[int, int]:
    """Free and total bytes of the disk holding ``path``."""
    usage = shutil.disk_usage(path)
    return usage.free, usage.total


def get_free_space(path: str = ".") -> int:
    return shutil.disk_usage(path).free


def get_total_space(path: str = ".") -> int:
    return shutil.disk_usage(path).total


def tree(path: str, max_offset: int = 10, offset: int = 0, out: Optional[TextIO] = None) -> bool:
    """Print the floors and files below ``path``; False on failure or when too deep."""
    out = sys.stdout if out is None else out
    if offset >= max_offset:
        out.write(f"tree offset {offset}, which is touched the max, in {path}\n")
        return False
    if offset == 0:
        out.write(f"tree at {path}:\n")

    bars = "|" * (offset + 1)
    floor = Floor()
    if not floor.open(path):
        out.write(f"{bars}-tree: fail in open {path}\n")
        return False

    while (sub := floor.read(FileType.FLOOR)) is not None:
        out.write(f"{bars}-dir: {sub}\n")
        if not tree(f"{floor.path}/{sub}", max_offset, offset + 1, out):
            return False

    floor.back_to_begin()
    while (sub := floor.read(FileType.FILE)) is not None:
        out.write(f"{bars}-file:{sub}\n")
    floor.close()
    return True


class FileBase:
    """An open binary file with a remembered size."""

    def __init__(self) -> None:
        self._file: Optional[BinaryIO] = None
        self.size = 0
        self._eof = False

    def _open(self, path: str, mode: str) -> bool:
        self.close()
        self.size = 0
        self._eof = False
        try:
            self._file = open(path, mode)
        except OSError:
            self._file = None
            return False
        return True

    def _handle(self) -> BinaryIO:
        if self._file is None:
            raise ValueError("file is not open")
        return self._file

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def is_open(self) -> bool:
        return self._file is not None

    def tell(self) -> int:
        return self._handle().tell()

    def seek(self, offset: int, mode: OffsetMode = OffsetMode.BEGIN) -> None:
        self._handle().seek(offset, int(mode))
        self._eof = False

    def re_get_size(self) -> int:
        """Measure the file's size again, keeping the current position."""
        handle = self._handle()
        origin = handle.tell()
        handle.seek(0, os.SEEK_END)
        self.size = handle.tell()
        handle.seek(origin)
        return self.size

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class IFile(FileBase):
    """A file opened for reading."""

    def open(self, path: str) -> bool:
        return self._open(path, "rb")

    def get(self) -> bytes:
        """Take one byte; b"" at the end of the file."""
        ch = self._handle().read(1)
        if not ch:
            self._eof = True
        return ch

    def getline(self, size: int, end: ByteLike = b"\n") -> bytes:
        """Take up to ``size`` bytes, stopping at ``end`` (consumed, not returned)."""
        marker = _one_byte(end)
        line = bytearray()
        while len(line) < size:
            ch = self.get()
            if ch == marker or self.eof():
                break
            line += ch
        return bytes(line)

    def read(self, size: int) -> bytes:
        data = self._handle().read(size)
        if len(data) < size:
            self._eof = True
        return data

    def eof(self) -> bool:
        """True once a read has run into the end of the file."""
        return self._eof


class OFile(FileBase):
    """An existing file opened for writing in place."""

    def open(self, path: str) -> bool:
        return self._open(path, "r+b")

    def put(self, ch: ByteLike) -> bool:
        return self._handle().write(_one_byte(ch)) == 1

    def write(self, data: Union[bytes, bytearray, str]) -> int:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return self._handle().write(bytes(data))


class IOFile(IFile, OFile):
    """An existing file opened for both reading and writing."""

    def open(self, path: str) -> bool:
        return self._open(path, "r+b")


def _entry_type(entry: os.DirEntry) -> int:
    if entry.is_dir(follow_symlinks=False):
        return int(FileType.FLOOR)
    if entry.is_file(follow_symlinks=False):
        return int(FileType.FILE)
    return 0


def _scan(path: str) -> Optional[List[Tuple[str, int]]]:
    try:
        with os.scandir(path) as entries:
            return sorted((entry.name, _entry_type(entry)) for entry in entries)
    except OSError:
        return None


class Floor:
    """An open listing of one floor, read entry by entry in name order."""

    def __init__(self) -> None:
        self.path: Optional[str] = None
        self._entries: Optional[List[Tuple[str, int]]] = None
        self._cursor = 0
        self._counts = {FileType.FILE: 0, FileType.FLOOR: 0}

    def open(self, path: str) -> bool:
        self.path = path
        self._entries = _scan(path)
        self._cursor = 0
        self._counts = {FileType.FILE: 0, FileType.FLOOR: 0}
        return self._entries is not None

    def close(self) -> None:
        self._entries = None
        self.path = None
        self._cursor = 0

    def open_floor(self, name: str) -> bool:
        """Switch the listing to the child floor ``name``; False if it cannot be opened."""
        if self.path is None:
            return False
        target = f"{self.path}/{name}"
        entries = _scan(target)
        if entries is None:
            return False
        self.path = target
        self._entries = entries
        self._cursor = 0
        return True

    def open_file(self, name: str, file: FileBase) -> bool:
        """Open the child file ``name`` with ``file``."""
        if self.path is None:
            return False
        return file.open(f"{self.path}/{name}")

    def read(self, kind: FileType) -> Optional[str]:
        """Name of the next entry of the given kind, or None when there are no more."""
        if self._entries is None:
            return None
        while self._cursor < len(self._entries):
            name, entry_type = self._entries[self._cursor]
            self._cursor += 1
            if entry_type & int(kind):
                return name
        return None

    def back_to_begin(self) -> None:
        if self._entries is not None and self.path is not None:
            self._entries = _scan(self.path) or []
            self._cursor = 0

    def recount(self) -> None:
        """Count the files and floors of the listing."""
        if self._entries is None:
            return
        self.back_to_begin()
        self._counts = {FileType.FILE: 0, FileType.FLOOR: 0}
        for name, entry_type in self._entries:
            if entry_type == FileType.FILE:
                self._counts[FileType.FILE] += 1
            elif entry_type == FileType.FLOOR:
                self._counts[FileType.FLOOR] += 1
            else:
                logger.warning("Floor.recount: unknown entry %s in %s", name, self.path)
        self.back_to_begin()

    def count(self, kind: FileType) -> int:
        """Counts found by the last ``recount``."""
        if kind == FileType.BOTH:
            return self._counts[FileType.FILE] + self._counts[FileType.FLOOR]
        return self._counts.get(kind, 0)

    def __enter__(self) -> Floor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()