"""Protocol definitions for ringarray.

This module defines the two collection-interop contracts every sequence type
in the package speaks:

- Traversable: cooperative, externally driven iteration. A consumer drives
  the producer with Cont/Halt/Suspend commands and receives Done/Halted/
  Suspended results.
- Collectable: building a value by accepting a stream of Append commands.

Generic helpers in ``ringarray.traversal`` are written once against these
protocols, never against a concrete type.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Union, runtime_checkable

# --- Traversal commands (consumer -> producer) ---


@dataclass(frozen=True)
class Cont:
    """Ask the producer for the next element."""

    acc: Any


@dataclass(frozen=True)
class Halt:
    """Stop the traversal."""

    acc: Any


@dataclass(frozen=True)
class Suspend:
    """Pause the traversal, keeping its position."""

    acc: Any


Command = Union[Cont, Halt, Suspend]

# --- Traversal results (producer -> consumer) ---


@dataclass(frozen=True)
class Done:
    """The producer ran out of elements."""

    acc: Any


@dataclass(frozen=True)
class Halted:
    """The consumer asked to stop."""

    acc: Any


@dataclass(frozen=True)
class Suspended:
    """The consumer asked to pause.

    Attributes:
        acc: Accumulator at the time of the pause.
        continuation: Callable taking the next Command and resuming exactly
            where the traversal paused.
    """

    acc: Any
    continuation: Callable[[Command], Result]


Result = Union[Done, Halted, Suspended]

Reducer = Callable[[Any, Any], Command]

# --- Insertion commands ---


@dataclass(frozen=True)
class Append:
    """Hand one element to a collector."""

    element: Any


class CollectorSignal(Enum):
    DONE = "done"
    HALT = "halt"


Collector = Callable[[Any, Union[Append, CollectorSignal]], Any]


@runtime_checkable
class Traversable(Protocol):
    """Protocol for values that can be walked element by element.

    Only ``reduce`` is required for correctness. ``count``, ``member`` and
    ``slice_view`` are shortcuts; returning None from any of them makes the
    generic helpers fall back to a full traversal.
    """

    @abstractmethod
    def reduce(self, command: Command, reducer: Reducer) -> Result:
        """Drive the traversal state machine.

        Args:
            command: Initial command, usually ``Cont(initial_acc)``.
            reducer: Called with (element, acc) and returns the next command.

        Returns:
            Done, Halted or Suspended.
        """
        ...

    @abstractmethod
    def count(self) -> int | None:
        """Return the element count without traversing, or None."""
        ...

    @abstractmethod
    def member(self, value: Any) -> bool | None:
        """Return membership without traversing, or None."""
        ...

    @abstractmethod
    def slice_view(self) -> tuple[int, Callable[[int, int], list]] | None:
        """Return (size, materializer) for contiguous ranges, or None.

        ``materializer(offset, length)`` returns the elements of that range
        as a list.
        """
        ...


@runtime_checkable
class Collectable(Protocol):
    """Protocol for values that can be built from a stream of elements."""

    @abstractmethod
    def into(self) -> tuple[Any, Collector]:
        """Return (seed, collector).

        The caller folds ``Append(element)`` commands through ``collector``
        starting from ``seed``, then sends ``CollectorSignal.DONE`` to obtain
        the final value, or ``CollectorSignal.HALT`` to abandon it.
        """
        ...
