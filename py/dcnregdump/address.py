from __future__ import annotations

from collections.abc import Mapping

from .errors import UndefinedRegister
from .regdb import RegisterRecord

__all__ = [ 'DCN_BASE_TABLE', 'resolve_address', ]

# DCN MMIO base table indexed by BASE_IDX. Valid for RDNA3/4 hardware
# (DCN 3.2.x and 4.x.x); older generations use different values.
DCN_BASE_TABLE: Mapping[int, int] = {
    1: 0xc0,
    2: 0x34c0,
    3: 0x9000,
}


def resolve_address(record: RegisterRecord, device_base: int,
                    table: Mapping[int, int] = DCN_BASE_TABLE) -> int:
    """Absolute byte address of a register.

    Offsets and base table entries count 32-bit words from the device base.
    """
    if record.offset is None or record.base_index is None:
        raise UndefinedRegister(record.name)

    base = table.get(record.base_index)
    if base is None:
        raise UndefinedRegister(record.name)

    return device_base + 4 * (base + record.offset)
