import itertools
import uuid
from typing import Protocol


class IIDGenerator(Protocol):
    """
    Protocol for ID generation strategies.
    Aggregates never mint their own identity; handlers ask a generator.
    """

    def next_id(self) -> str:
        """Generates the next unique identifier."""
        ...


class UUID4Generator(IIDGenerator):
    """
    Default ID generator using UUIDv4.
    Zero external dependencies.
    """

    def next_id(self) -> str:
        """Returns a string representation of a random UUIDv4."""
        return str(uuid.uuid4())


class SequentialIdGenerator(IIDGenerator):
    """
    Deterministic generator for tests and fixtures.

    Produces well-formed UUID strings with a monotonic suffix, so ids still
    pass UUID-format validation on value objects::

        00000000-0000-4000-8000-000000000001
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"00000000-0000-4000-8000-{next(self._counter):012d}"
