"""Conversion of a RegisterDatabase to the flat definition form."""

from __future__ import annotations

from .regdb import BASE_IDX_SUFFIX, RegisterDatabase


def flat_offset_lines(db: RegisterDatabase) -> list[str]:
    lines = []

    for name, r in db.items():
        lines.append(f'{name}=' + (f'0x{r.offset:04x}' if r.offset is not None else ''))
        if r.base_index is not None:
            lines.append(f'{name}{BASE_IDX_SUFFIX}={r.base_index}')

    return lines


def flat_mask_lines(db: RegisterDatabase) -> list[str]:
    lines = []

    for full_name, bf in db.bitfields.items():
        if bf.shift is not None:
            lines.append(f'{full_name}__SHIFT=0x{bf.shift:x}')
        if bf.mask is not None:
            lines.append(f'{full_name}_MASK=0x{bf.mask:08x}')

    return lines


def write_flat(db: RegisterDatabase, regs_path: str, mask_path: str):
    """Write db as a dcnXYZ_regs.txt / dcnXYZ_sh_mask.txt pair.

    Loading the written pair gives back an equal database.
    """
    for path, lines in ((regs_path, flat_offset_lines(db)), (mask_path, flat_mask_lines(db))):
        with open(path, 'w', encoding='utf-8') as f:
            f.write(f'# {db.name}\n' if db.name else '')
            for line in lines:
                f.write(line + '\n')
