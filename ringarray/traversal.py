"""Generic helpers over the Traversable and Collectable protocols.

Every helper here accepts anything implementing ``Traversable`` as well as
plain Python iterables, which are adapted through ``IterableTraversal``.
None of them know about a concrete sequence type; shortcuts such as
``count`` and ``slice_view`` are used when the traversable offers them.

Key functions:
    reduce: Fold every element into an accumulator.
    to_list: Materialize the elements in order.
    count: Number of elements.
    member: Whether a value is present.
    map: Apply a function to every element.
    filter: Keep elements matching a predicate.
    take: First N elements, stopping the traversal early.
    slice: A contiguous range of elements.
    zip: Walk several traversables in lockstep using suspension.
    into: Drain a traversable into a collectable.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Collection, Iterable, Iterator, Sequence, Sized
from functools import partial
from typing import Any

from .protocols import (
    Append,
    Collectable,
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
    Traversable,
)


class IterableTraversal:
    """Traversable adapter for plain Python iterables.

    Each ``reduce`` call starts a fresh iterator. Suspended continuations
    share that iterator, so a continuation over a one-shot iterable (such as
    a generator) must only be resumed once.
    """

    def __init__(self, iterable: Iterable[Any]):
        self._iterable = iterable

    def reduce(self, command: Command, reducer: Reducer) -> Result:
        return _reduce_iterator(iter(self._iterable), command, reducer)

    def count(self) -> int | None:
        if isinstance(self._iterable, Sized):
            return len(self._iterable)
        return None

    def member(self, value: Any) -> bool | None:
        if isinstance(self._iterable, Collection):
            return value in self._iterable
        return None

    def slice_view(self) -> tuple[int, Callable[[int, int], list]] | None:
        if not isinstance(self._iterable, Sequence):
            return None
        items = self._iterable
        return len(items), lambda offset, length: list(items[offset : offset + length])

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"IterableTraversal({self._iterable!r})"


def _reduce_iterator(iterator: Iterator[Any], command: Command, reducer: Reducer) -> Result:
    while True:
        if isinstance(command, Halt):
            return Halted(command.acc)
        if isinstance(command, Suspend):
            return Suspended(command.acc, partial(_reduce_iterator, iterator, reducer=reducer))
        if not isinstance(command, Cont):
            raise TypeError(f"unknown traversal command: {command!r}")
        try:
            element = next(iterator)
        except StopIteration:
            return Done(command.acc)
        command = reducer(element, command.acc)


def as_traversable(value: Any) -> Traversable:
    """Return ``value`` itself if it is Traversable, else wrap an iterable.

    Raises:
        TypeError: If ``value`` is neither traversable nor iterable.
    """
    if isinstance(value, Traversable):
        return value
    if isinstance(value, Iterable):
        return IterableTraversal(value)
    raise TypeError(f"{type(value).__name__!r} object is not traversable")


def reduce(traversable: Any, initial: Any, fun: Callable[[Any, Any], Any]) -> Any:
    """Fold ``fun(element, acc)`` over every element, starting from ``initial``."""
    result = as_traversable(traversable).reduce(
        Cont(initial), lambda element, acc: Cont(fun(element, acc))
    )
    return result.acc


def to_list(traversable: Any) -> list[Any]:
    def collect(element, acc):
        acc.append(element)
        return Cont(acc)

    return as_traversable(traversable).reduce(Cont([]), collect).acc


def count(traversable: Any) -> int:
    traversable = as_traversable(traversable)
    known = traversable.count()
    if known is not None:
        return known
    return reduce(traversable, 0, lambda _element, acc: acc + 1)


def member(traversable: Any, value: Any) -> bool:
    traversable = as_traversable(traversable)
    known = traversable.member(value)
    if known is not None:
        return known

    def check(element, _acc):
        if element == value:
            return Halt(True)
        return Cont(False)

    return traversable.reduce(Cont(False), check).acc


def map(traversable: Any, fun: Callable[[Any], Any]) -> list[Any]:
    def apply(element, acc):
        acc.append(fun(element))
        return Cont(acc)

    return as_traversable(traversable).reduce(Cont([]), apply).acc


def filter(traversable: Any, predicate: Callable[[Any], bool]) -> list[Any]:
    def keep(element, acc):
        if predicate(element):
            acc.append(element)
        return Cont(acc)

    return as_traversable(traversable).reduce(Cont([]), keep).acc


def take(traversable: Any, amount: int) -> list[Any]:
    """Return the first ``amount`` elements.

    A negative ``amount`` takes that many elements from the end instead.
    The traversal is halted as soon as enough elements have been seen.
    """
    traversable = as_traversable(traversable)
    if amount == 0:
        return []
    if amount < 0:
        total = traversable.count()
        if total is None:
            return list(reduce(traversable, deque(maxlen=-amount), _keep_last))
        start = max(total + amount, 0)
        return slice(traversable, start, total - start)

    def step(element, acc):
        acc.append(element)
        if len(acc) >= amount:
            return Halt(acc)
        return Cont(acc)

    return traversable.reduce(Cont([]), step).acc


def _keep_last(element, acc):
    acc.append(element)
    return acc


def slice(traversable: Any, offset: int, length: int) -> list[Any]:
    """Return up to ``length`` elements starting at ``offset``.

    Uses the traversable's ``slice_view`` when it has one, otherwise skips
    ``offset`` elements and collects the rest with an early halt.

    Raises:
        ValueError: If ``offset`` or ``length`` is negative.
    """
    if offset < 0 or length < 0:
        raise ValueError(f"offset and length must be non-negative, got {offset}, {length}")
    traversable = as_traversable(traversable)
    if length == 0:
        return []
    view = traversable.slice_view()
    if view is not None:
        size, materialize = view
        if offset >= size:
            return []
        return materialize(offset, min(length, size - offset))

    def step(element, acc):
        skipped, items = acc
        if skipped < offset:
            return Cont((skipped + 1, items))
        items.append(element)
        if len(items) >= length:
            return Halt((skipped, items))
        return Cont((skipped, items))

    return traversable.reduce(Cont((0, [])), step).acc[1]


def _suspend_each(element, _acc):
    return Suspend(element)


def zip(*traversables: Any) -> list[tuple[Any, ...]]:
    """Walk the traversables in lockstep, stopping at the shortest.

    Each traversable is paused after every element, so none of them is
    walked further than the shortest one. When one runs out, the others
    are halted.
    """
    steps = [
        partial(as_traversable(t).reduce, reducer=_suspend_each) for t in traversables
    ]
    if not steps:
        return []
    rows: list[tuple[Any, ...]] = []
    while True:
        row = []
        for index, step in enumerate(steps):
            result = step(Cont(None))
            if not isinstance(result, Suspended):
                for other_index, other in enumerate(steps):
                    if other_index != index:
                        other(Halt(None))
                return rows
            row.append(result.acc)
            steps[index] = result.continuation
        rows.append(tuple(row))


def into(source: Any, target: Any) -> Any:
    """Drain every element of ``source`` into ``target``.

    Args:
        source: Traversable or iterable producing the elements.
        target: Collectable receiving them, or a list to extend a copy of.

    Returns:
        The collected value.

    Raises:
        TypeError: If ``target`` is neither Collectable nor a list.
    """
    if isinstance(target, list):
        return target + to_list(source)
    if not isinstance(target, Collectable):
        raise TypeError(f"{type(target).__name__!r} object is not collectable")
    seed, collector = target.into()
    latest = seed

    def push(element, acc):
        nonlocal latest
        latest = collector(acc, Append(element))
        return Cont(latest)

    try:
        result = as_traversable(source).reduce(Cont(seed), push)
    except Exception:
        collector(latest, CollectorSignal.HALT)
        raise
    return collector(result.acc, CollectorSignal.DONE)
