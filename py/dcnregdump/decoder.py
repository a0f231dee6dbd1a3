from __future__ import annotations

import logging
from typing import NamedTuple

from .helpers import get_field_value
from .regdb import RegisterDatabase

__all__ = [ 'DecodedField', 'decode_fields', ]

logger = logging.getLogger(__name__)


class DecodedField(NamedTuple):
    label: str
    value: int
    mask: int
    shift: int


def decode_fields(db: RegisterDatabase, base_name: str, raw: int) -> list[DecodedField]:
    """Split a raw register value into the register's bit-fields.

    Fields are returned in declaration order. Fields lacking a mask or a
    shift are skipped.
    """
    ret = []

    for label, bf in db.fields_of(base_name):
        if bf.mask is None or bf.shift is None:
            logger.debug('%s: incomplete bit-field declaration, skipped', bf.full_name)
            continue

        ret.append(DecodedField(label, get_field_value(raw, bf.mask, bf.shift), bf.mask, bf.shift))

    return ret
