"""Rendering of dump reports."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

import tabulate

from .dump import RegisterReport, SectionReport

__all__ = [ 'format_register', 'print_table_report', 'print_text_report', ]

tabulate.PRESERVE_WHITESPACE = True


def format_register(r: RegisterReport) -> list[str]:
    if r.error is not None:
        return [f'{r.name}: SKIP ({r.error.reason})']

    lines = [f'{r.name}: 0x{r.value:08x}']
    lines += [f'    {f.label}: {f.value}' for f in r.fields]
    return lines


def print_text_report(sections: Iterable[SectionReport], file: TextIO | None = None):
    out = file or sys.stdout

    for s in sections:
        print(f'\n===={s.title}====', file=out)
        for r in s.registers:
            for line in format_register(r):
                print(line, file=out)
        out.flush()


def _table_rows(r: RegisterReport) -> list[tuple]:
    if r.error is not None:
        addr = f'0x{r.address:x}' if r.address is not None else '-'
        return [(r.name, addr, 'SKIP', r.error.reason, '')]

    rows = [(r.name, f'0x{r.address:x}', f'0x{r.value:08x}', '', '')]
    rows += [('', '', '', '    ' + f.label, f.value) for f in r.fields]
    return rows


def print_table_report(sections: Iterable[SectionReport], file: TextIO | None = None):
    out = file or sys.stdout

    for s in sections:
        table = []
        for r in s.registers:
            table += _table_rows(r)

        print(f'\n===={s.title}====', file=out)
        print(tabulate.tabulate(table, ['Register', 'Address', 'Value', 'Field', 'Field value']), file=out)
        out.flush()
