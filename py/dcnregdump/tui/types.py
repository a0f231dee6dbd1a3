"""Leaf-level data types and formatting helpers for the dump browser."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dcnregdump.decoder import DecodedField
from dcnregdump.sections import SectionSpec


@dataclass
class SectionNodeData:
    section: SectionSpec


@dataclass
class RegisterNodeData:
    section: SectionSpec
    reg_name: str


@dataclass
class FieldNodeData:
    section: SectionSpec
    reg_name: str
    label: str


class ValueFormat(enum.Enum):
    HEX = 'hex'
    DEC = 'dec'
    BIN = 'bin'


def format_value(value: int, fmt: ValueFormat, width_bits: int) -> str:
    if fmt == ValueFormat.HEX:
        nchars = (width_bits + 3) // 4
        return f'0x{value:0{nchars}X}'
    elif fmt == ValueFormat.DEC:
        return str(value)
    elif fmt == ValueFormat.BIN:
        return f'0b{value:0{width_bits}b}'
    return hex(value)


def field_bits(f: DecodedField) -> tuple[int, int]:
    """(high, low) bit positions covered by a field's mask."""
    if f.mask == 0:
        return f.shift, f.shift
    return f.mask.bit_length() - 1, f.shift


def field_width(f: DecodedField) -> int:
    return max((f.mask >> f.shift).bit_length(), 1)


# Field colors for bit diagram
FIELD_COLORS = [
    'cyan',
    'magenta',
    'green',
    'yellow',
    'blue',
    'red',
    'bright_cyan',
    'bright_magenta',
]
