from __future__ import annotations

import mmap
import os
import weakref
from typing import BinaryIO

from .target import Target

__all__ = [ 'MMapTarget', ]


class MMapTarget(Target):
    """Read-only memory mapped window of a file, normally /dev/mem.

    Addresses are absolute, i.e. file offsets. The window covers
    [offset, offset + length).
    """

    def __init__(self, file: str | BinaryIO, offset: int, length: int) -> None:
        if length <= 0:
            raise ValueError(f'Length must be positive, got {length}')

        self.offset = offset
        self.length = length

        if isinstance(file, str):
            # XXX It is not clear if os.O_SYNC affects mmap
            fd = os.open(file, os.O_RDONLY | os.O_SYNC)
        else:
            # mmap will (apparently?) close its fd, so duplicate it first
            fd = os.dup(file.fileno())

        try:
            pagesize = mmap.ALLOCATIONGRANULARITY
            pagemask = pagesize - 1

            mmap_offset = offset & ~pagemask
            mmap_len = length + (offset - mmap_offset)

            self.mmap_offset = mmap_offset
            self.mmap_len = mmap_len

            self._map = mmap.mmap(fd, mmap_len, mmap.MAP_SHARED, mmap.PROT_READ, offset=mmap_offset)
        finally:
            os.close(fd)

        weakref.finalize(self, MMapTarget.cleanup, self._map)

    @staticmethod
    def cleanup(m):
        # It is ok to call close() multiple times
        m.close()

    def close(self):
        self._map.close()

    def _check_access(self, addr: int):
        if addr < self.offset:
            raise RuntimeError(f'Access outside mmap area: {addr:#x} < {self.offset:#x}')

        if addr + 4 > self.offset + self.length:
            raise RuntimeError(f'Access outside mmap area: {addr + 4:#x} > {self.offset + self.length:#x}')

    def read32(self, addr: int) -> int:
        self._check_access(addr)

        addr -= self.mmap_offset

        v = self._map[addr:addr + 4]

        # Device registers are little endian
        return int.from_bytes(v, 'little', signed=False)
