from __future__ import annotations

from enum import Enum

__all__ = [ 'DefinitionFormat', 'RegPrefix', ]


class DefinitionFormat(Enum):
    Flat = 'flat'
    Header = 'header'


class RegPrefix(Enum):
    Reg = 'reg'
    Mm  = 'mm'
