"""A file system kept wholly in memory, addressed through file descriptors."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from tinydesk.memtree import (
    MAX_FILE_DESCRIPTION_COUNT,
    MemError,
    MemFileHead,
    MemFileSystemError,
    MemFloorHead,
)

Entry = Union[MemFloorHead, MemFileHead]


@dataclass(frozen=True)
class MemStat:
    """What ``fstat`` reports about an open file."""

    st_size: int


class MemDir:
    """An open listing of one floor: child floors first, then files."""

    def __init__(self, floor: MemFloorHead):
        self.floor = floor
        self._floor_index = 0
        self._file_index = 0
        self._count = 0
        self._closed = False

    def read(self) -> Optional[Entry]:
        """The next entry, or None when the listing is exhausted or closed."""
        if self._closed:
            return None
        if self._floor_index < len(self.floor.floors):
            child = self.floor.floors[self._floor_index]
            if child.parent is self.floor:
                self._floor_index += 1
                self._count += 1
                return child
        if self._file_index < len(self.floor.files):
            file = self.floor.files[self._file_index]
            if file.parent is self.floor:
                self._file_index += 1
                self._count += 1
                return file
        return None

    def tell(self) -> int:
        """How many entries have been read."""
        return self._count

    def seek(self, offset: int) -> None:
        """Restart the listing and skip ``offset`` entries."""
        self._floor_index = 0
        self._file_index = 0
        self._count = 0
        for _ in range(offset):
            if self.read() is None:
                break

    def close(self) -> None:
        self._closed = True

    def __iter__(self) -> Iterator[Entry]:
        while True:
            entry = self.read()
            if entry is None:
                return
            yield entry

    def __enter__(self) -> MemDir:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class MemFileSystem:
    """Files and floors held in memory, with a small table of descriptors."""

    def __init__(self) -> None:
        self.root = MemFloorHead()
        self._descriptions: List[Optional[MemFileHead]] = [None] * MAX_FILE_DESCRIPTION_COUNT
        self._lock = threading.Lock()

    def _file(self, fd: int) -> MemFileHead:
        if not 0 <= fd < len(self._descriptions) or self._descriptions[fd] is None:
            raise MemError(MemFileSystemError.NOT_OPENED_FILE_DESCRIPTION)
        return self._descriptions[fd]

    def open(self, path: str, flags: int = 0, mode: int = 0o666) -> int:
        """Open the file at ``path``, creating it if missing; return a descriptor.

        The file's position is moved back to its start.
        """
        file = self.root.find_file(path)
        if file is None:
            if not self.root.make_file(path):
                raise MemError(MemFileSystemError.ERROR, f"cannot create {path!r}")
            file = self.root.find_file(path)
        file.pointer = 0
        with self._lock:
            for fd, held in enumerate(self._descriptions):
                if held is None:
                    self._descriptions[fd] = file
                    return fd
        raise MemError(MemFileSystemError.NO_AVAILABLE_DESCRIPTION)

    def fstat(self, fd: int) -> MemStat:
        return MemStat(st_size=self._file(fd).size)

    def write(self, fd: int, data: bytes) -> int:
        return self._file(fd).write(data)

    def read(self, fd: int, size: int) -> bytes:
        return self._file(fd).read(size)

    def close(self, fd: int) -> None:
        self._file(fd)
        with self._lock:
            self._descriptions[fd] = None

    def seek(self, fd: int, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the file position, kept within the file; return the new position.

        An unknown ``whence`` counts as relative to the current position.
        """
        file = self._file(fd)
        if whence == os.SEEK_SET:
            position = offset
        elif whence == os.SEEK_END:
            position = offset + file.size
        else:
            position = file.pointer + offset
        file.pointer = min(max(position, 0), file.size)
        return file.pointer

    def rename(self, src: str, dst: str) -> None:
        raise MemError(MemFileSystemError.UNSUPPORTED_OPERATION)

    def unlink(self, path: str) -> None:
        """Remove a file, or an empty floor when ``path`` ends with a slash."""
        if path.endswith("/"):
            removed = self.root.remove_floor(path)
        else:
            removed = self.root.remove_file(path)
        if not removed:
            raise MemError(MemFileSystemError.ERROR, f"cannot remove {path!r}")

    def opendir(self, path: str) -> MemDir:
        floor = self.root.find_floor(path)
        if floor is None:
            raise MemError(MemFileSystemError.UNREACHABLE_PATH, f"no floor {path!r}")
        return MemDir(floor)

    def makedir(self, path: str) -> None:
        if not self.root.make_floor(path):
            raise MemError(MemFileSystemError.ERROR, f"cannot make {path!r}")

    def removedir(self, path: str) -> None:
        if not self.root.remove_floor(path):
            raise MemError(MemFileSystemError.ERROR, f"cannot remove {path!r}")