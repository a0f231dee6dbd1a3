"""Locate the AMD display device and its register BAR through sysfs."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import NoDeviceFound

__all__ = [ 'AMD_VENDOR_ID', 'PciDevice', 'find_amd_display_device', 'read_bars', ]

logger = logging.getLogger(__name__)

AMD_VENDOR_ID = 0x1002
PCI_CLASS_DISPLAY = 0x03
NUM_BARS = 6


@dataclass(frozen=True)
class PciDevice:
    bdf: str
    bar_index: int
    bar_start: int
    bar_size: int


def _read_hex(path: str) -> int:
    with open(path) as f:
        return int(f.read().strip(), 16)


def read_bars(resource_path: str) -> list[tuple[int, int, int]]:
    """(index, start, size) of the populated BARs in a sysfs resource file."""
    bars = []

    with open(resource_path) as f:
        for idx, line in enumerate(f):
            if idx >= NUM_BARS:
                break
            start, end, _flags = (int(v, 16) for v in line.split())
            if start == 0 and end == 0:
                continue
            bars.append((idx, start, end - start + 1))

    return bars


def find_amd_display_device(sysfs_root: str = '/sys/bus/pci/devices') -> PciDevice:
    """Find the first AMD VGA/3D/display controller.

    The last populated BAR holds the MMIO registers.
    """
    try:
        bdfs = sorted(os.listdir(sysfs_root))
    except FileNotFoundError:
        raise NoDeviceFound(f'PCI sysfs directory {sysfs_root} not found') from None

    for bdf in bdfs:
        devdir = os.path.join(sysfs_root, bdf)
        try:
            vendor = _read_hex(os.path.join(devdir, 'vendor'))
            pci_class = _read_hex(os.path.join(devdir, 'class'))
        except (OSError, ValueError):
            continue

        if vendor != AMD_VENDOR_ID or pci_class >> 16 != PCI_CLASS_DISPLAY:
            continue

        resource_path = os.path.join(devdir, 'resource')
        if not os.path.isfile(resource_path):
            raise NoDeviceFound(f'Resource file not found at {resource_path}')

        bars = read_bars(resource_path)
        if not bars:
            raise NoDeviceFound(f'No memory BARs on {bdf}')

        idx, start, size = bars[-1]
        logger.info('Found AMD GPU at %s, using BAR%d at %#x', bdf, idx, start)

        return PciDevice(bdf, idx, start, size)

    raise NoDeviceFound('No AMD GPU found on this system')
