from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    'DcnRegDumpError',
    'DefinitionError',
    'DefinitionsNotFound',
    'IncompleteDefinitionPair',
    'MalformedDefinition',
    'NoDeviceFound',
    'RegisterSkipped',
    'UndefinedRegister',
    'UnreadableRegister',
]


class DcnRegDumpError(Exception):
    """Base class for all dcnregdump errors."""
    pass


# Fatal errors: raised before any register access and reported by the caller

class DefinitionError(DcnRegDumpError):
    """Base class for register definition loading errors."""
    pass


class DefinitionsNotFound(DefinitionError):
    """Raised when no definition source exists for a DCN version."""

    def __init__(self, version: str, available: Sequence[str] = ()) -> None:
        self.version = version
        self.available = list(available)
        super().__init__(f'No register definition files found for DCN {version}')


class IncompleteDefinitionPair(DefinitionError):
    """Raised when one file of an offset/bit-field pair is missing."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'Missing register definition file: {path}')


class MalformedDefinition(DefinitionError, ValueError):
    """Raised when a definition line cannot be parsed."""

    def __init__(self, path: str, lineno: int, line: str) -> None:
        self.path = path
        self.lineno = lineno
        self.line = line
        super().__init__(f'{path}:{lineno}: malformed definition: {line!r}')


class NoDeviceFound(DcnRegDumpError):
    """Raised when no AMD display device is present."""
    pass


# Recoverable errors: reported per register, never abort a dump

class RegisterSkipped(DcnRegDumpError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f'{name}: {reason}')


class UndefinedRegister(RegisterSkipped):
    def __init__(self, name: str) -> None:
        super().__init__(name, 'not defined for this DCN version')


class UnreadableRegister(RegisterSkipped):
    def __init__(self, name: str, address: int, reason: str) -> None:
        self.address = address
        super().__init__(name, f'read failed: {reason}')
