from __future__ import annotations

import re

_INT_SUFFIX_RE = re.compile(r'[uUlL]+$')
_INT_LITERAL_RE = re.compile(r'^(?:0[xX][0-9a-fA-F]+|[0-9]+)$')

WORD_MASK = 0xffffffff


def parse_int_literal(s: str) -> int:
    """Parse a C style integer literal, e.g. '0x00000010L' or '4'.

    Raises ValueError if the literal is not a valid hex or decimal number.
    """
    s = s.strip()
    while s.startswith('(') and s.endswith(')'):
        s = s[1:-1].strip()

    s = _INT_SUFFIX_RE.sub('', s)

    # Plain digits only, int() would also take signs and underscores
    if not _INT_LITERAL_RE.match(s):
        raise ValueError(f'invalid integer literal: {s!r}')

    if s[:2] in ('0x', '0X'):
        return int(s[2:], 16)

    # int(s, 0) rejects decimals with leading zeros
    return int(s, 10)


def get_field_value(r_val: int, mask: int, shift: int):
    return ((r_val & WORD_MASK) & mask) >> shift


def strip_prefix(name: str, prefix: str) -> str | None:
    """Return name without prefix, or None if name does not start with it."""
    if not name.startswith(prefix):
        return None
    return name[len(prefix):]
