"""Default configuration, overridable through the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class DumpConfig:
    # Directory with dcnXYZ_*.txt files and the dcn_reg/ header directory
    defs_dir: str = field(default_factory=lambda: os.getenv('DCNREGDUMP_DEFS_DIR', os.getcwd()))
    mem_path: str = field(default_factory=lambda: os.getenv('DCNREGDUMP_MEM', '/dev/mem'))
    sysfs_pci_root: str = field(default_factory=lambda: os.getenv('DCNREGDUMP_SYSFS_PCI', '/sys/bus/pci/devices'))
