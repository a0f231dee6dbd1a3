"""Section discovery and register dumping."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from .address import DCN_BASE_TABLE, resolve_address
from .decoder import DecodedField, decode_fields
from .errors import RegisterSkipped, UndefinedRegister, UnreadableRegister
from .regdb import RegisterDatabase
from .sections import DEFAULT_SECTIONS, SectionSpec
from .target import Target

__all__ = [ 'RegisterDumper', 'RegisterReport', 'SectionReport', ]

logger = logging.getLogger(__name__)


@dataclass
class RegisterReport:
    name: str
    base_name: str
    address: int | None = None
    value: int | None = None
    fields: list[DecodedField] = field(default_factory=list)
    error: RegisterSkipped | None = None

    @property
    def skipped(self) -> bool:
        return self.error is not None


@dataclass
class SectionReport:
    section: SectionSpec
    registers: list[RegisterReport] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.section.title


class RegisterDumper:
    def __init__(self, db: RegisterDatabase, target: Target, device_base: int,
                 table: Mapping[int, int] = DCN_BASE_TABLE) -> None:
        self.db = db
        self.target = target
        self.device_base = device_base
        self.table = table

    def registers_matching(self, pattern: str) -> list[str]:
        return self.db.find(pattern)

    def read_register(self, name: str) -> RegisterReport:
        """Read and decode one register.

        Undefined and unreadable registers are reported, not raised.
        """
        base_name = self.db.base_name(name)
        report = RegisterReport(name, base_name)

        try:
            report.address = resolve_address(self.db[name], self.device_base, self.table)
        except UndefinedRegister as e:
            logger.debug('%s: not defined, skipped', name)
            report.error = e
            return report

        try:
            report.value = self.target.read32(report.address)
        except (OSError, RuntimeError, ValueError) as e:
            logger.debug('%s: read at %#x failed: %s', name, report.address, e)
            report.error = UnreadableRegister(name, report.address, str(e))
            return report

        report.fields = decode_fields(self.db, base_name, report.value)

        return report

    def dump_section(self, section: SectionSpec) -> SectionReport | None:
        """Dump all registers of a section, or None if no register matches."""
        names = self.registers_matching(section.pattern)
        if not names:
            logger.debug('Section %s: no matching registers', section.title)
            return None

        return SectionReport(section, [self.read_register(n) for n in names])

    def dump(self, sections: Iterable[SectionSpec] = DEFAULT_SECTIONS) -> Iterator[SectionReport]:
        for section in sections:
            report = self.dump_section(section)
            if report is not None:
                yield report
