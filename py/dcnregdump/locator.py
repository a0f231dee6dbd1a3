"""Locate the register definition files for a DCN version."""

from __future__ import annotations

import glob
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .enums import DefinitionFormat
from .errors import DefinitionsNotFound
from .parser import parser_for
from .regdb import RegisterDatabase

__all__ = [
    'HEADER_SUBDIR',
    'VERSION_ALIASES',
    'DefinitionSource',
    'available_versions',
    'find_definition_source',
]

logger = logging.getLogger(__name__)

HEADER_SUBDIR = 'dcn_reg'

# The driver's version string does not always match the header file naming.
# Maps the detected version to the underscored file version.
VERSION_ALIASES: dict[str, str] = {
    '4.0.1': '4_1_0',   # DCN 4.0.1 hardware uses dcn_4_1_0 headers
}


@dataclass(frozen=True)
class DefinitionSource:
    version: str
    offset_path: str
    mask_path: str
    format: DefinitionFormat

    def load(self) -> RegisterDatabase:
        return parser_for(self.format).load(self.offset_path, self.mask_path,
                                            name=f'DCN {self.version}')


def flat_paths(defs_dir: str, compact: str) -> tuple[str, str]:
    return (os.path.join(defs_dir, f'dcn{compact}_regs.txt'),
            os.path.join(defs_dir, f'dcn{compact}_sh_mask.txt'))


def header_paths(defs_dir: str, underscored: str) -> tuple[str, str]:
    hdir = os.path.join(defs_dir, HEADER_SUBDIR)
    return (os.path.join(hdir, f'dcn_{underscored}_offset.h'),
            os.path.join(hdir, f'dcn_{underscored}_sh_mask.h'))


def _find(version: str, defs_dir: str, compact: str, underscored: str) -> DefinitionSource | None:
    offset_path, mask_path = flat_paths(defs_dir, compact)
    if os.path.isfile(offset_path) and os.path.isfile(mask_path):
        return DefinitionSource(version, offset_path, mask_path, DefinitionFormat.Flat)

    # The sh_mask header is expected next to the offset header. If it is
    # missing, loading fails with IncompleteDefinitionPair.
    offset_path, mask_path = header_paths(defs_dir, underscored)
    if os.path.isfile(offset_path):
        return DefinitionSource(version, offset_path, mask_path, DefinitionFormat.Header)

    return None


def find_definition_source(version: str, defs_dir: str,
                           aliases: Mapping[str, str] = VERSION_ALIASES) -> DefinitionSource:
    """Find the definition files for a dotted DCN version, e.g. '3.2.1'.

    Pre-processed flat files are preferred over headers. If nothing exists
    for the version itself, an alias from the alias table is tried.
    """
    src = _find(version, defs_dir, version.replace('.', ''), version.replace('.', '_'))

    if src is None and version in aliases:
        alias = aliases[version]
        logger.debug('No definitions for DCN %s, trying alias %s', version, alias)
        src = _find(version, defs_dir, alias.replace('_', ''), alias)

    if src is None:
        raise DefinitionsNotFound(version, available_versions(defs_dir))

    logger.info('Using %s definitions %s', src.format.value, src.offset_path)

    return src


def available_versions(defs_dir: str) -> list[str]:
    """Dotted versions for which a header file exists."""
    pattern = os.path.join(glob.escape(os.path.join(defs_dir, HEADER_SUBDIR)), 'dcn_*_offset.h')

    versions = []
    for path in glob.glob(pattern):
        fname = os.path.basename(path)
        versions.append(fname[len('dcn_'):-len('_offset.h')].replace('_', '.'))

    return sorted(versions)
