"""In-memory register database built from a definition source."""

from __future__ import annotations

import collections.abc
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from .enums import RegPrefix
from .helpers import strip_prefix

__all__ = [
    'BASE_IDX_SUFFIX',
    'FIELD_SEPARATOR',
    'BitFieldRecord',
    'RegisterDatabase',
    'RegisterRecord',
    'resolve_prefix',
]

BASE_IDX_SUFFIX = '_BASE_IDX'
FIELD_SEPARATOR = '__'

_REG_PREFIX_RE = re.compile(r'^reg[A-Za-z]')
_ANY_PREFIX_RE = re.compile(r'^(?:reg|mm)(?=[A-Z0-9_])')


@dataclass(frozen=True)
class RegisterRecord:
    name: str
    offset: int | None = None
    base_index: int | None = None

    @property
    def is_defined(self) -> bool:
        return self.offset is not None and self.base_index is not None


@dataclass(frozen=True)
class BitFieldRecord:
    full_name: str
    mask: int | None = None
    shift: int | None = None

    @property
    def is_complete(self) -> bool:
        return self.mask is not None and self.shift is not None


def resolve_prefix(names: Iterable[str]) -> RegPrefix:
    """Detect the register naming convention.

    DCN 3.1.2 and newer name registers 'regFOO', older generations 'mmFOO'.
    """
    for name in names:
        if _REG_PREFIX_RE.match(name):
            return RegPrefix.Reg
    return RegPrefix.Mm


class RegisterDatabase(collections.abc.Mapping):
    """Register name to RegisterRecord mapping, plus the bit-field records.

    Both mappings keep declaration order.
    """

    def __init__(self, registers: Iterable[RegisterRecord],
                 bitfields: Iterable[BitFieldRecord] = (),
                 name: str = '') -> None:
        self.name = name
        self._registers: dict[str, RegisterRecord] = {}
        for r in registers:
            if r.name.endswith(BASE_IDX_SUFFIX):
                raise ValueError(f'{r.name}: base index entries are not registers')
            if r.name in self._registers:
                raise ValueError(f'Duplicate register {r.name}')
            self._registers[r.name] = r

        self._bitfields: dict[str, BitFieldRecord] = {bf.full_name: bf for bf in bitfields}

        # owner name -> [(field label, record)], in declaration order
        self._fields_by_owner: dict[str, list[tuple[str, BitFieldRecord]]] = {}
        for bf in self._bitfields.values():
            owner, sep, label = bf.full_name.partition(FIELD_SEPARATOR)
            if not sep or not label:
                continue
            self._fields_by_owner.setdefault(owner, []).append((label, bf))
            unprefixed = _ANY_PREFIX_RE.sub('', owner, count=1)
            if unprefixed != owner:
                self._fields_by_owner.setdefault(unprefixed, []).append((label, bf))

        self.prefix = resolve_prefix(self._registers)

    def __getitem__(self, key: str) -> RegisterRecord:
        if key not in self._registers:
            raise KeyError(f'Register "{key}" not found')
        return self._registers[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._registers)

    def __len__(self) -> int:
        return len(self._registers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegisterDatabase):
            return NotImplemented
        return (list(self._registers.values()) == list(other._registers.values())
                and list(self._bitfields.values()) == list(other._bitfields.values()))

    @property
    def bitfields(self) -> Mapping[str, BitFieldRecord]:
        return self._bitfields

    def base_name(self, name: str) -> str:
        """Register name without the naming convention prefix."""
        base = strip_prefix(name, self.prefix.value)
        return base if base is not None else name

    def find(self, pattern: str) -> list[str]:
        """Names of registers whose prefixed name matches pattern at the start.

        The pattern is given without the 'reg'/'mm' prefix.
        """
        rx = re.compile(self.prefix.value + pattern)
        return [name for name in self._registers if rx.match(name)]

    def fields_of(self, base_name: str) -> list[tuple[str, BitFieldRecord]]:
        """Bit-fields owned by a register, as (field label, record) pairs.

        The owner is the part of the field's full name before the first '__'.
        A 'reg'/'mm' prefix on the full name itself is tolerated.
        """
        return list(self._fields_by_owner.get(base_name, ()))
