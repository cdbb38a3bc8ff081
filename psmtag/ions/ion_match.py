"""Matched fragment ion model and input validation.

An IonMatch is one annotated peak: which ladder it belongs to, its ladder
position ("number", counted in residues from the series' origin terminus),
charge, whether a neutral loss was applied, and the measured m/z and
intensity. Only series, number, charge and the neutral loss flag drive
coverage; m/z and intensity are carried for reporting.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from .series import IonSeries, Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IonMatch:
    """A single fragment ion matched to a spectrum peak."""

    series: IonSeries
    number: int
    charge: int = 1
    has_neutral_loss: bool = False
    mz: float = 0.0
    intensity: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'series', IonSeries.from_value(self.series))
        object.__setattr__(self, 'number', int(self.number))
        object.__setattr__(self, 'charge', int(self.charge))
        if self.number < 1:
            raise ValueError(f"Ion number must be >= 1, got {self.number}")
        if self.charge < 1:
            raise ValueError(f"Ion charge must be >= 1, got {self.charge}")

    @property
    def direction(self) -> Direction:
        return self.series.direction

    @property
    def label(self) -> str:
        """Conventional label, e.g. 'y3++' or 'b5-NL'."""
        label = f"{self.series.letter}{self.number}" + "+" * self.charge
        if self.has_neutral_loss:
            label += "-NL"
        return label


def validate_ion_matches(
    ion_matches: Iterable[IonMatch],
    sequence_length: int,
) -> List[IonMatch]:
    """Check that every ion ladder position fits the peptide.

    A ladder position never spans the full peptide, so valid numbers are
    1 to sequence_length - 1.

    Parameters
    ----------
    ion_matches : iterable of IonMatch
        Annotated fragment ions
    sequence_length : int
        Peptide length in residues

    Returns
    -------
    list of IonMatch
        The ion matches, materialised as a list

    Raises
    ------
    ValueError
        If any ion number lies outside [1, sequence_length - 1]
    """
    ion_matches = list(ion_matches)
    max_number = sequence_length - 1
    for ion in ion_matches:
        if not 1 <= ion.number <= max_number:
            logger.error(
                f"Ion {ion.label} does not fit a peptide of length {sequence_length}"
            )
            raise ValueError(
                f"Ion number {ion.number} of {ion.label} is outside [1, {max_number}] "
                f"for a peptide of length {sequence_length}"
            )
    return ion_matches


def ion_matches_from_arrays(
    series_codes: Union[np.ndarray, Sequence[int]],
    numbers: Union[np.ndarray, Sequence[int]],
    charges: Union[np.ndarray, Sequence[int]],
    neutral_loss: Optional[Union[np.ndarray, Sequence[bool]]] = None,
    mz: Optional[Union[np.ndarray, Sequence[float]]] = None,
    intensity: Optional[Union[np.ndarray, Sequence[float]]] = None,
) -> List[IonMatch]:
    """Build IonMatch objects from parallel fragment arrays.

    Parameters
    ----------
    series_codes, numbers, charges : array-like
        Parallel arrays as produced by the fragment generator
        (series code a=0 ... z=5, 1-based ladder number, charge)
    neutral_loss : array-like of bool, optional
        Neutral loss flags (default: all False)
    mz, intensity : array-like of float, optional
        Observed values (default: 0.0)

    Returns
    -------
    list of IonMatch
    """
    n = len(series_codes)
    if not (len(numbers) == n and len(charges) == n):
        raise ValueError("series_codes, numbers and charges must have the same length")
    if neutral_loss is None:
        neutral_loss = np.zeros(n, dtype=np.bool_)
    if mz is None:
        mz = np.zeros(n, dtype=np.float64)
    if intensity is None:
        intensity = np.zeros(n, dtype=np.float64)

    return [
        IonMatch(
            series=IonSeries.from_value(int(series_codes[i])),
            number=int(numbers[i]),
            charge=int(charges[i]),
            has_neutral_loss=bool(neutral_loss[i]),
            mz=float(mz[i]),
            intensity=float(intensity[i]),
        )
        for i in range(n)
    ]
