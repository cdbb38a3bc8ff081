"""Longest contiguous annotated stretch of a peptide.

Runs are found on boolean coverage arrays with a strict ``>`` comparison,
so among equally long runs the first one found wins. Results are always
returned as a substring of the peptide in N- to C-terminal reading order.
"""

from typing import Iterable, Optional, Tuple

import numpy as np
from numba import njit

from ..ions.series import IonSeries, Direction
from ..ions.ion_match import IonMatch
from .bitmap import build_coverage, build_series_coverage


@njit(cache=True)
def longest_true_run(mask: np.ndarray) -> Tuple[int, int]:
    """Start index and length of the first longest run of True values.

    Parameters
    ----------
    mask : np.ndarray (bool)
        Coverage array

    Returns
    -------
    start, length : int
        (0, 0) if no value is True

    Examples
    --------
    >>> longest_true_run(np.array([True, False, True, True]))
    (2, 2)
    """
    best_start = 0
    best_length = 0
    current_start = 0
    current_length = 0
    for i in range(len(mask)):
        if mask[i]:
            if current_length == 0:
                current_start = i
            current_length += 1
        else:
            if current_length > best_length:
                best_start = current_start
                best_length = current_length
            current_length = 0
    if current_length > best_length:
        best_start = current_start
        best_length = current_length
    return best_start, best_length


def longest_run(
    coverage: np.ndarray,
    sequence: str,
    direction: Direction = Direction.FORWARD,
) -> str:
    """Longest covered stretch of ``sequence`` as a substring.

    Parameters
    ----------
    coverage : np.ndarray (bool)
        Coverage array with one entry per residue. FORWARD arrays are in
        residue order; REVERSE arrays are in ladder order (index i is
        residue L - 1 - i), as returned by build_series_coverage().
    sequence : str
        Peptide sequence
    direction : Direction
        Orientation of ``coverage``

    Returns
    -------
    str
        Covered residues in N- to C-terminal order, '' if none
    """
    if len(coverage) != len(sequence):
        raise ValueError(
            f"Coverage length {len(coverage)} does not match sequence length {len(sequence)}"
        )
    start, length = longest_true_run(np.ascontiguousarray(coverage, dtype=np.bool_))
    if length == 0:
        return ""
    if direction is Direction.REVERSE:
        # Ladder positions start..start+length-1 read C- to N-terminal
        end = len(sequence) - start
        return sequence[end - length:end]
    return sequence[start:start + length]


def longest_annotated_tag(sequence: str, ion_matches: Iterable[IonMatch]) -> str:
    """Longest stretch covered by merged forward and reverse corroboration."""
    maps = build_coverage(len(sequence), ion_matches)
    return longest_run(maps.merged, sequence)


def longest_single_series_tag(
    sequence: str,
    ion_matches: Iterable[IonMatch],
    series: Optional[IonSeries] = None,
    charge: int = 1,
    allow_neutral_losses: bool = False,
) -> str:
    """Longest stretch covered by a single ion series.

    Only ions of ``charge`` without neutral loss (unless allowed) count.
    With ``series=None`` all six series are scanned in a, b, c, x, y, z
    order and the first longest stretch is kept.
    """
    coverage = build_series_coverage(
        len(sequence), ion_matches,
        charge=charge,
        allow_neutral_losses=allow_neutral_losses,
    )
    candidates = list(IonSeries) if series is None else [IonSeries.from_value(series)]

    longest = ""
    for ion_series in candidates:
        tag = longest_run(coverage[ion_series], sequence, ion_series.direction)
        if len(tag) > len(longest):
            longest = tag
    return longest
