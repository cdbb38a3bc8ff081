"""Per-residue coverage bitmaps from matched fragment ions.

Fragment ions are first recorded in ladder-indexed bitmaps: index
``number - 1`` of a ladder is True when an ion confirms the backbone bond
``number`` residues away from the ladder's origin terminus. Residue
coverage is then derived with the two-in-a-row rule: a residue is covered
only when the bonds on both of its sides are confirmed within the same
ladder direction. The terminus a ladder starts from counts as confirmed,
so the first residue of a ladder needs a single ion.

A lone fragment ion localises a bond, not a residue. Two adjacent
confirmed bonds bracket exactly one residue.

Forward (a/b/c) ladder index i maps to residue i. Reverse (x/y/z) ladder
index i maps to residue ``L - 1 - i``. The same kernel handles both.
"""

from typing import Dict, Iterable, NamedTuple, Optional

import numpy as np
from numba import njit

from ..ions.series import IonSeries, Direction
from ..ions.ion_match import IonMatch, validate_ion_matches


class CoverageMaps(NamedTuple):
    """Coverage bitmaps for one peptide-spectrum match.

    Attributes
    ----------
    forward : np.ndarray, shape (L,), bool
        Ladder-indexed bonds confirmed by a/b/c ions
    reverse : np.ndarray, shape (L,), bool
        Ladder-indexed bonds confirmed by x/y/z ions
    merged : np.ndarray, shape (L,), bool
        Residue coverage, forward and reverse corroboration OR'ed together
    """
    forward: np.ndarray
    reverse: np.ndarray
    merged: np.ndarray


# =============================================================================
# Numba Kernels
# =============================================================================

@njit(cache=True)
def _corroborate_into(ladder: np.ndarray, reverse: bool, out: np.ndarray) -> None:
    """Mark residues bracketed by two consecutive confirmed bonds (in place)."""
    n = len(ladder)
    previous = True  # origin terminus
    for i in range(n):
        current = ladder[i]
        if current and previous:
            if reverse:
                out[n - i - 1] = True
            else:
                out[i] = True
        previous = current


@njit(cache=True)
def _corroborate_ladder_order(ladder: np.ndarray) -> np.ndarray:
    """Two-in-a-row rule, keeping ladder order."""
    n = len(ladder)
    out = np.zeros(n, dtype=np.bool_)
    previous = True
    for i in range(n):
        current = ladder[i]
        out[i] = current and previous
        previous = current
    return out


# =============================================================================
# Builders
# =============================================================================

def ladder_bitmap(
    ion_matches: Iterable[IonMatch],
    sequence_length: int,
    direction: Optional[Direction] = None,
    series: Optional[IonSeries] = None,
    charge: Optional[int] = None,
    allow_neutral_losses: bool = True,
) -> np.ndarray:
    """Record confirmed bonds of the ions passing all filters.

    Parameters
    ----------
    ion_matches : iterable of IonMatch
        Ion matches (numbers within [1, sequence_length - 1])
    sequence_length : int
        Peptide length
    direction : Direction, optional
        Keep only ions of this direction
    series : IonSeries, optional
        Keep only ions of this series
    charge : int, optional
        Keep only ions of this charge
    allow_neutral_losses : bool
        If False, ions with a neutral loss are ignored

    Returns
    -------
    ladder : np.ndarray (bool)
        ``ladder[number - 1]`` is True for every contributing ion

    Raises
    ------
    ValueError
        If any ion number lies outside [1, sequence_length - 1]
    """
    ion_matches = validate_ion_matches(ion_matches, sequence_length)
    ladder = np.zeros(sequence_length, dtype=np.bool_)
    if series is not None:
        series = IonSeries.from_value(series)
    for ion in ion_matches:
        if direction is not None and ion.direction is not direction:
            continue
        if series is not None and ion.series is not series:
            continue
        if charge is not None and ion.charge != charge:
            continue
        if not allow_neutral_losses and ion.has_neutral_loss:
            continue
        ladder[ion.number - 1] = True
    return ladder


def corroborate(ladder: np.ndarray, direction: Direction) -> np.ndarray:
    """Per-residue coverage of one ladder under the two-in-a-row rule.

    Returns a new array in residue (N- to C-terminal) order.
    """
    out = np.zeros(len(ladder), dtype=np.bool_)
    _corroborate_into(
        np.ascontiguousarray(ladder, dtype=np.bool_),
        direction is Direction.REVERSE,
        out,
    )
    return out


def build_coverage(sequence_length: int, ion_matches: Iterable[IonMatch]) -> CoverageMaps:
    """Build forward, reverse and merged coverage for one PSM.

    All fragment ions contribute regardless of charge or neutral loss.

    Examples
    --------
    >>> maps = build_coverage(7, [IonMatch('b', 2), IonMatch('b', 3)])
    >>> maps.merged.nonzero()[0]
    array([2])
    """
    ion_matches = validate_ion_matches(ion_matches, sequence_length)

    forward = ladder_bitmap(ion_matches, sequence_length, direction=Direction.FORWARD)
    reverse = ladder_bitmap(ion_matches, sequence_length, direction=Direction.REVERSE)

    merged = np.zeros(sequence_length, dtype=np.bool_)
    _corroborate_into(forward, False, merged)
    _corroborate_into(reverse, True, merged)

    return CoverageMaps(forward=forward, reverse=reverse, merged=merged)


def build_series_coverage(
    sequence_length: int,
    ion_matches: Iterable[IonMatch],
    charge: int = 1,
    allow_neutral_losses: bool = False,
) -> Dict[IonSeries, np.ndarray]:
    """Corroborated coverage per ion series, in ladder order.

    Only ions with the given charge (and without neutral loss unless
    allowed) contribute. These filters apply here only; merged coverage
    from build_coverage() is unaffected.

    Returns
    -------
    dict
        IonSeries -> bool array where index i is ladder position i + 1.
        For reverse series, index i corresponds to residue L - 1 - i.
    """
    ion_matches = validate_ion_matches(ion_matches, sequence_length)
    coverage = {}
    for series in IonSeries:
        ladder = ladder_bitmap(
            ion_matches,
            sequence_length,
            series=series,
            charge=charge,
            allow_neutral_losses=allow_neutral_losses,
        )
        coverage[series] = _corroborate_ladder_order(ladder)
    return coverage


# =============================================================================
# Coverage Percentages
# =============================================================================

def coverage_percentage(coverage: np.ndarray) -> float:
    """Percentage of covered residues (0.0 for an empty peptide)."""
    n = len(coverage)
    if n == 0:
        return 0.0
    return 100.0 * int(np.count_nonzero(coverage)) / n


def ladder_coverage_percentage(sequence_length: int, ion_matches: Iterable[IonMatch]) -> float:
    """Percentage of ladder positions explained by any fragment ion.

    No corroboration and no direction: an ion with number n marks position
    n - 1 whatever its series. This is the looser "sequence coverage" of
    PSM reports, kept next to the corroborated coverage for comparison.
    """
    ion_matches = validate_ion_matches(ion_matches, sequence_length)
    return coverage_percentage(ladder_bitmap(ion_matches, sequence_length))
