"""Shared test data: definition file directory and a simulated register BAR."""

import os
import tempfile

from dcnregdump.target import Target

DATA_DIR = os.path.dirname(os.path.abspath(__file__)) + '/data'

MEM_SIZE = 0x20000

# Register values of the simulated BAR, addresses computed from the
# DCN 3.2.1 test definitions with a device base of 0
MEM_VALUES = {
    0x11bd0: 0x20000037,    # regHDMI_CONTROL
    0x11bd4: 0x00010000,    # regHDMI_STATUS
    0x00400: 0x00000001,    # regHDMICHARCLK0_CLOCK_CNTL
    0x15300: 0x00000025,    # regDIG0_FE_CNTL
    0x00700: 0x00000031,    # regPHYASYMCLK_CLOCK_CNTL
}


def make_memory_file(values=None, size=MEM_SIZE) -> str:
    """Create a temporary file with little endian 32-bit values at the given offsets."""
    if values is None:
        values = MEM_VALUES

    data = bytearray(size)
    for addr, v in values.items():
        data[addr:addr + 4] = v.to_bytes(4, 'little')

    fd, path = tempfile.mkstemp(suffix='.bin')
    with os.fdopen(fd, 'wb') as f:
        f.write(data)
    return path


class RecordingTarget(Target):
    """In-memory target that records every read address."""

    def __init__(self, values=None) -> None:
        self.values = MEM_VALUES if values is None else values
        self.reads = []

    def read32(self, addr: int) -> int:
        self.reads.append(addr)
        return self.values.get(addr, 0)

    def close(self):
        pass
