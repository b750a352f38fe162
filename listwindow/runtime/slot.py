"""Single-slot overwrite queue."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class SingleSlot(Generic[T]):
    """Holds at most one value; a newer value replaces the older one."""

    def __init__(self) -> None:
        self._value: T | None = None
        self._occupied = False

    @property
    def occupied(self) -> bool:
        return self._occupied

    def put(self, value: T) -> T | None:
        """Store value and return the displaced one, if any."""
        displaced = self._value if self._occupied else None
        self._value = value
        self._occupied = True
        return displaced

    def offer(self, value: T) -> bool:
        """Store value only when empty. Returns whether it was stored."""
        if self._occupied:
            return False
        self.put(value)
        return True

    def peek(self) -> T | None:
        return self._value if self._occupied else None

    def take(self) -> T | None:
        """Remove and return the held value."""
        value = self._value if self._occupied else None
        self.clear()
        return value

    def clear(self) -> None:
        self._value = None
        self._occupied = False
