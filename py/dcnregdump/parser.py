"""Register definition parsers.

Two on-disk forms describe the same registers:

- flat: pre-processed 'name=value' lines (dcnXYZ_regs.txt / dcnXYZ_sh_mask.txt)
- header: the kernel driver's '#define' headers (dcn_X_Y_Z_offset.h / _sh_mask.h)

Both are parsed into the same RegisterDatabase.
"""

from __future__ import annotations

import logging
import os
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator

from .enums import DefinitionFormat
from .errors import IncompleteDefinitionPair, MalformedDefinition
from .helpers import parse_int_literal
from .regdb import BASE_IDX_SUFFIX, BitFieldRecord, RegisterDatabase, RegisterRecord

__all__ = [
    'DefinitionParser',
    'FlatDefinitionParser',
    'HeaderDefinitionParser',
    'parser_for',
]

logger = logging.getLogger(__name__)

MASK_SUFFIX = '_MASK'
SHIFT_SUFFIX = '__SHIFT'

# (lineno, line, name, value), value is '' when the entry has no value
Entry = tuple[int, str, str, str]


class DefinitionParser(ABC):
    format: DefinitionFormat

    @abstractmethod
    def offset_entries(self, path: str) -> Iterator[Entry]: ...

    @abstractmethod
    def mask_entries(self, path: str) -> Iterator[Entry]: ...

    def load(self, offset_path: str, mask_path: str, name: str = '') -> RegisterDatabase:
        for path in (offset_path, mask_path):
            if not os.path.isfile(path):
                raise IncompleteDefinitionPair(path)

        logger.debug('Parsing %s definitions from %s and %s',
                     self.format.value, offset_path, mask_path)

        registers = self.parse_offsets(offset_path)
        bitfields = self.parse_masks(mask_path)

        db = RegisterDatabase(registers, bitfields, name=name)

        logger.debug('Loaded %d registers, %d bit-fields, prefix "%s"',
                     len(db), len(db.bitfields), db.prefix.value)

        return db

    def parse_offsets(self, path: str) -> list[RegisterRecord]:
        offsets: dict[str, int | None] = {}
        base_indices: dict[str, int | None] = {}

        for lineno, line, name, value in self.offset_entries(path):
            num = _parse_value(path, lineno, line, value)
            if name.endswith(BASE_IDX_SUFFIX):
                base_indices[name[:-len(BASE_IDX_SUFFIX)]] = num
            else:
                offsets[name] = num

        return [RegisterRecord(name, offset, base_indices.get(name))
                for name, offset in offsets.items()]

    def parse_masks(self, path: str) -> list[BitFieldRecord]:
        masks: dict[str, int | None] = {}
        shifts: dict[str, int | None] = {}
        order: dict[str, None] = {}

        for lineno, line, name, value in self.mask_entries(path):
            # '__SHIFT' has to be checked first, a field itself may end in '_MASK'
            if name.endswith(SHIFT_SUFFIX):
                full_name = name[:-len(SHIFT_SUFFIX)]
                shifts[full_name] = _parse_value(path, lineno, line, value)
            elif name.endswith(MASK_SUFFIX):
                full_name = name[:-len(MASK_SUFFIX)]
                masks[full_name] = _parse_value(path, lineno, line, value)
            else:
                continue

            order.setdefault(full_name)

        return [BitFieldRecord(n, masks.get(n), shifts.get(n)) for n in order]


def _parse_value(path: str, lineno: int, line: str, value: str) -> int | None:
    if not value:
        return None
    try:
        return parse_int_literal(value)
    except ValueError:
        raise MalformedDefinition(path, lineno, line) from None


def _read_lines(path: str) -> Iterator[tuple[int, str]]:
    with open(path, encoding='utf-8', errors='replace') as f:
        for lineno, line in enumerate(f, start=1):
            yield lineno, line.rstrip('\n')


class FlatDefinitionParser(DefinitionParser):
    format = DefinitionFormat.Flat

    _NAME_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

    def _entries(self, path: str) -> Iterator[Entry]:
        for lineno, line in _read_lines(path):
            s = line.strip()
            if not s or s.startswith('#'):
                continue

            name, sep, value = s.partition('=')
            name = name.strip()
            if not sep or not self._NAME_RE.match(name):
                raise MalformedDefinition(path, lineno, line)

            yield lineno, line, name, value.strip().strip('"\'')

    def offset_entries(self, path: str) -> Iterator[Entry]:
        return self._entries(path)

    def mask_entries(self, path: str) -> Iterator[Entry]:
        return self._entries(path)


class HeaderDefinitionParser(DefinitionParser):
    format = DefinitionFormat.Header

    _OFFSET_RE = re.compile(r'^#define\s+((?:reg|mm)[A-Za-z0-9_]+)(?:\s+(.*))?$')
    _MASK_RE = re.compile(r'^#define\s+([A-Za-z0-9_]+(?:_MASK|__SHIFT))(?:\s+(.*))?$')

    @staticmethod
    def _strip_comment(value: str) -> str:
        for marker in ('//', '/*'):
            value = value.split(marker, 1)[0]
        return value.strip()

    def _entries(self, path: str, rx: re.Pattern) -> Iterator[Entry]:
        for lineno, line in _read_lines(path):
            m = rx.match(line.strip())
            if not m:
                continue
            yield lineno, line, m.group(1), self._strip_comment(m.group(2) or '')

    def offset_entries(self, path: str) -> Iterator[Entry]:
        return self._entries(path, self._OFFSET_RE)

    def mask_entries(self, path: str) -> Iterator[Entry]:
        return self._entries(path, self._MASK_RE)


_PARSERS: dict[DefinitionFormat, type[DefinitionParser]] = {
    DefinitionFormat.Flat: FlatDefinitionParser,
    DefinitionFormat.Header: HeaderDefinitionParser,
}


def parser_for(fmt: DefinitionFormat) -> DefinitionParser:
    return _PARSERS[fmt]()
