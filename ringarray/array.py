"""Immutable, growable circular-buffer array.

An Array is a handle over a fixed-capacity backing store plus two integers:
the logical size and the physical slot holding the first element. Logical
position ``i`` lives at slot ``(start + i) mod capacity``.

Every operation (push, shift, slice) returns a new Array. Handles derived
from one another share their backing store, but a write is only ever made
to a slot no existing handle can see, so no caller observes a mutation.

Key classes:
- Array: the sequence value, implementing the Traversable and Collectable
  protocols.
- ArrayError, CapacityError, SliceError: errors raised for invalid requests.
- EMPTY: marker returned by ``Array.shift`` when there is nothing to remove.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from functools import partial
from typing import Any

from .protocols import (
    Append,
    CollectorSignal,
    Command,
    Cont,
    Done,
    Halt,
    Halted,
    Reducer,
    Result,
    Suspend,
    Suspended,
)
from .traversal import into, member, to_list

DEFAULT_CAPACITY = 8


class ArrayError(Exception):
    """Base class for errors raised by Array operations."""


class CapacityError(ArrayError, ValueError):
    """Requested capacity is not a positive integer.

    Attributes:
        capacity: The rejected value.
    """

    def __init__(self, capacity: Any):
        self.capacity = capacity
        super().__init__(f"capacity must be a positive integer, got {capacity!r}")


class SliceError(ArrayError, ValueError):
    """Slice request falls outside the array.

    Attributes:
        offset: Requested start offset.
        length: Requested length.
        size: Size of the array that was sliced.
    """

    def __init__(self, offset: int, length: int, size: int):
        self.offset = offset
        self.length = length
        self.size = size
        super().__init__(
            f"cannot slice {length} element(s) at offset {offset} "
            f"from an array of size {size}"
        )


class _Empty:
    """Marker returned by ``Array.shift`` on an empty array."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY = _Empty()


class _Store:
    """Backing slots shared by every Array derived from the same build.

    Slots are written once each, in order, at ``frontier``. A handle appends
    in place only when its logical end sits exactly on the frontier and the
    frontier has not reached capacity; every other append goes through a
    fresh store.
    """

    __slots__ = ("slots", "frontier")

    def __init__(self, capacity: int):
        self.slots: list[Any] = [None] * capacity
        self.frontier = 0


class Array:
    """Ordered, immutable sequence with O(1) random access, append and shift."""

    __slots__ = ("_store", "_size", "_start")

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise CapacityError(capacity)
        self._store = _Store(capacity)
        self._size = 0
        self._start = 0

    @classmethod
    def new(
        cls, source: Iterable[Any] | None = None, capacity: int = DEFAULT_CAPACITY
    ) -> Array:
        """Build an Array from any iterable or traversable, preserving order.

        Args:
            source: Elements to collect. None gives an empty array.
            capacity: Initial capacity of the empty array the elements are
                collected into.

        Returns:
            A new Array.
        """
        empty = cls(capacity)
        if source is None:
            return empty
        return into(source, empty)

    def _view(self, size: int, start: int) -> Array:
        view = object.__new__(type(self))
        view._store = self._store
        view._size = size
        view._start = start
        return view

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._store.slots)

    @property
    def start(self) -> int:
        return self._start

    def position(self, offset: int) -> int:
        """Map a signed logical offset to a physical slot index.

        Python's ``%`` already yields a non-negative result for a positive
        modulus, so negative offsets wrap from the end of the store.
        """
        return (self._start + offset) % self.capacity

    def push(self, element: Any) -> Array:
        """Return a new Array with ``element`` appended at the logical end.

        At capacity, the live elements are first replayed into an array of
        twice the capacity. When the store has no unwritten slot left past
        this handle, they are replayed into a fresh store, doubled if the
        array is more than half full.
        """
        store = self._store
        capacity = len(store.slots)
        if self._size == capacity:
            return self._rebuild(capacity * 2).push(element)
        end = self._start + self._size
        if end != store.frontier or end >= capacity:
            grown = capacity * 2 if self._size * 2 > capacity else capacity
            return self._rebuild(grown).push(element)
        store.slots[end] = element
        store.frontier += 1
        return self._view(self._size + 1, self._start)

    def _rebuild(self, capacity: int) -> Array:
        rebuilt = type(self)(capacity)
        for element in self:
            rebuilt = rebuilt.push(element)
        return rebuilt

    def shift(self) -> tuple[Any, Array] | _Empty:
        """Remove the first element.

        Returns:
            ``(element, rest)``, or ``EMPTY`` when the array has no elements.
        """
        if self._size == 0:
            return EMPTY
        element = self._store.slots[self._start]
        return element, self._view(self._size - 1, self.position(1))

    def slice(self, offset: int, length: int) -> Array:
        """Return a view of up to ``length`` elements starting at ``offset``.

        The view shares the backing store. A length running past the end is
        clamped to the elements that exist.

        Raises:
            SliceError: If ``offset`` is negative or past the end, or
                ``length`` is negative.
        """
        if offset < 0 or length < 0 or offset > self._size:
            raise SliceError(offset, length, self._size)
        return self._view(min(length, self._size - offset), self.position(offset))

    def at(self, index: int) -> Any:
        """Return the element at a logical index; negative indices count from the end."""
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError("Array index out of range")
        return self._store.slots[self.position(index)]

    def to_list(self) -> list[Any]:
        return to_list(self)

    def layout(self) -> dict[str, Any]:
        """Describe the physical layout of this handle.

        Slots outside this handle's live range are reported as None, even when
        another handle sharing the store has written them.
        """
        slots: list[Any] = [None] * self.capacity
        for index in range(self._size):
            slot = self.position(index)
            slots[slot] = self._store.slots[slot]
        return {
            "slots": slots,
            "size": self._size,
            "start": self._start,
            "capacity": self.capacity,
        }

    # --- Traversable ---

    def reduce(self, command: Command, reducer: Reducer) -> Result:
        current = self
        while True:
            if isinstance(command, Halt):
                return Halted(command.acc)
            if isinstance(command, Suspend):
                return Suspended(command.acc, partial(current.reduce, reducer=reducer))
            if not isinstance(command, Cont):
                raise TypeError(f"unknown traversal command: {command!r}")
            shifted = current.shift()
            if shifted is EMPTY:
                return Done(command.acc)
            element, current = shifted
            command = reducer(element, command.acc)

    def count(self) -> int:
        return self._size

    def member(self, value: Any) -> None:
        # No faster-than-linear lookup by value; use the generic traversal.
        return None

    def slice_view(self) -> tuple[int, Callable[[int, int], list[Any]]]:
        return self._size, self._materialize

    def _materialize(self, offset: int, length: int) -> list[Any]:
        return self.slice(offset, length).to_list()

    # --- Collectable ---

    def into(self) -> tuple[Array, Callable[[Array, Any], Array]]:
        return self, _collect

    # --- Python sequence surface ---

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        slots = self._store.slots
        for index in range(self._size):
            yield slots[self.position(index)]

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self).new(self.to_list()[index], capacity=self.capacity)
        return self.at(index)

    def __contains__(self, value: Any) -> bool:
        return member(self, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._size == other._size and list(self) == list(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Array<{self.to_list()!r}>"


def _collect(acc: Array, command: Any) -> Array:
    if isinstance(command, Append):
        return acc.push(command.element)
    if command is CollectorSignal.DONE or command is CollectorSignal.HALT:
        return acc
    raise TypeError(f"unknown collector command: {command!r}")
