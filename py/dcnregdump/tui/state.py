"""Runtime state for the dump browser."""

from __future__ import annotations

from dcnregdump.dump import RegisterReport, SectionReport
from dcnregdump.sections import SectionSpec

from .types import ValueFormat


class AppState:
    """Application-level state."""

    def __init__(self, source_str: str = '') -> None:
        self.source_str = source_str
        self.sections: list[SectionReport] = []
        self.value_format: ValueFormat = ValueFormat.HEX

    def find_section(self, section: SectionSpec) -> SectionReport | None:
        for s in self.sections:
            if s.section == section:
                return s
        return None

    def get_report(self, section: SectionSpec, reg_name: str) -> RegisterReport | None:
        s = self.find_section(section)
        if s is None:
            return None
        for r in s.registers:
            if r.name == reg_name:
                return r
        return None

    def set_report(self, section: SectionSpec, report: RegisterReport) -> None:
        s = self.find_section(section)
        if s is None:
            return
        for idx, r in enumerate(s.registers):
            if r.name == report.name:
                s.registers[idx] = report
                return
