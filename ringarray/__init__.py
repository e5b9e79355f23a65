"""ringarray: an immutable, growable circular-buffer array.

The Array type offers list-like ordered storage with O(1) random access,
amortized O(1) append and O(1) removal from the front. Every operation
returns a new value.

Arrays interoperate with generic code through two protocols:
- Traversable: cooperative iteration driven by Cont/Halt/Suspend commands,
  used by the helpers in ringarray.traversal (map, take, zip, slice, ...).
- Collectable: building a value from a stream of Append commands, used by
  ringarray.traversal.into and Array.new.

A Click command line (``ringarray``) replays operations against an array.
"""

__all__ = [
    "EMPTY",
    "Array",
    "ArrayError",
    "CapacityError",
    "SliceError",
    "__version__",
]
__version__ = "0.1.0"

from .array import EMPTY, Array, ArrayError, CapacityError, SliceError  # noqa: E402
