from __future__ import annotations

from abc import ABC, abstractmethod

__all__ = [
    'Target',
]


class Target(ABC):
    """Read-only access to 32-bit device registers by absolute address."""

    @abstractmethod
    def read32(self, addr: int) -> int: ...

    @abstractmethod
    def close(self): ...

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()
