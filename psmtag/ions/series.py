"""Ion series definitions and direction classification.

The six peptide backbone ladders are a, b, c (N-terminal, growing forward
from the N-terminus) and x, y, z (C-terminal, growing from the C-terminus).
Integer codes follow the usual annotator convention a=0 ... z=5 so that
fragment arrays produced by Numba kernels can be converted without lookups.
"""

import operator
from enum import Enum, IntEnum
from typing import Union


class Direction(Enum):
    """Terminus a fragment ladder grows from."""
    FORWARD = "forward"  # N-terminal: a, b, c
    REVERSE = "reverse"  # C-terminal: x, y, z


class IonSeries(IntEnum):
    """Peptide fragment ion series."""
    A = 0
    B = 1
    C = 2
    X = 3
    Y = 4
    Z = 5

    @property
    def letter(self) -> str:
        return self.name.lower()

    @property
    def direction(self) -> Direction:
        return Direction.FORWARD if self in FORWARD_SERIES else Direction.REVERSE

    @property
    def is_forward(self) -> bool:
        return self.direction is Direction.FORWARD

    @classmethod
    def from_value(cls, value: Union['IonSeries', str, int]) -> 'IonSeries':
        """Resolve a series from an IonSeries, a letter ('b', 'Y') or an integer code.

        Raises
        ------
        ValueError
            If the value does not name one of the six series.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            raise ValueError(f"Unknown ion series: {value!r}")
        # bool is an int subclass but never a series code
        if isinstance(value, bool):
            raise ValueError(f"Unknown ion series: {value!r}")
        # Integer codes only; floats such as 1.7 are not series codes
        try:
            return cls(operator.index(value))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown ion series: {value!r}") from None

    def __str__(self) -> str:
        return self.letter


FORWARD_SERIES = (IonSeries.A, IonSeries.B, IonSeries.C)
REVERSE_SERIES = (IonSeries.X, IonSeries.Y, IonSeries.Z)


def classify(series: Union[IonSeries, str, int]) -> Direction:
    """Classify an ion series as FORWARD (a/b/c) or REVERSE (x/y/z).

    Parameters
    ----------
    series : IonSeries, str or int
        Series, its letter or its integer code

    Returns
    -------
    Direction
        FORWARD for N-terminal ladders, REVERSE for C-terminal ladders

    Examples
    --------
    >>> classify('b')
    <Direction.FORWARD: 'forward'>
    >>> classify(IonSeries.Y)
    <Direction.REVERSE: 'reverse'>
    """
    return IonSeries.from_value(series).direction
