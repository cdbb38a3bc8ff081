"""Theoretical fragment ladders with Numba JIT compilation.

Generates m/z values for a/b/c/x/y/z ions at every ladder position
1 to L - 1, for each requested charge and optional neutral losses.
Output arrays use the same series codes as IonSeries (a=0 ... z=5).

Key optimizations:
1. ord() encoding for string-to-array conversion (no string operations in Numba)
2. Cumulative residue masses computed once per peptide
3. Pre-allocated output arrays
"""

from typing import NamedTuple, Sequence, Union

import numpy as np
import numba

from ..constants import PROTON_MASS, AA_MASSES, ION_OFFSETS, RESIDUE_MASSES
from ..ions.series import IonSeries


class FragmentLadder(NamedTuple):
    """Theoretical fragments of one peptide (parallel arrays)."""
    mz: np.ndarray          # float64
    series: np.ndarray      # uint8, IonSeries code
    number: np.ndarray      # int32, 1-based ladder position
    charge: np.ndarray      # uint8
    neutral_loss: np.ndarray  # bool


def encode_peptide_to_ord(peptide: str) -> np.ndarray:
    """Encode peptide string to ord() array for Numba processing.

    Examples
    --------
    >>> encode_peptide_to_ord("PEPTIDE")
    array([80, 69, 80, 84, 73, 68, 69], dtype=uint8)
    """
    return np.array([ord(c) for c in peptide], dtype=np.uint8)


@numba.jit(nopython=True, cache=True)
def _generate_ladders(
    peptide_ord: np.ndarray,
    series_codes: np.ndarray,
    charges: np.ndarray,
    loss_masses: np.ndarray,
):
    peptide_length = len(peptide_ord)
    n_positions = max(peptide_length - 1, 0)
    n_variants = 1 + len(loss_masses)
    max_fragments = n_positions * len(series_codes) * len(charges) * n_variants

    fragment_mz = np.empty(max_fragments, dtype=np.float64)
    fragment_series = np.empty(max_fragments, dtype=np.uint8)
    fragment_number = np.empty(max_fragments, dtype=np.int32)
    fragment_charge = np.empty(max_fragments, dtype=np.uint8)
    fragment_loss = np.empty(max_fragments, dtype=np.bool_)

    # cumsum[k] = mass of the first k residues
    cumsum = np.zeros(peptide_length + 1, dtype=np.float64)
    for i in range(peptide_length):
        cumsum[i + 1] = cumsum[i] + AA_MASSES[peptide_ord[i]]
    total = cumsum[peptide_length]

    idx = 0
    for code in series_codes:
        offset = ION_OFFSETS[code]
        for number in range(1, n_positions + 1):
            if code <= 2:
                residues_mass = cumsum[number]
            else:
                residues_mass = total - cumsum[peptide_length - number]
            neutral_mass = residues_mass + offset
            for charge in charges:
                for variant in range(n_variants):
                    mass = neutral_mass
                    if variant > 0:
                        mass -= loss_masses[variant - 1]
                    fragment_mz[idx] = (mass + charge * PROTON_MASS) / charge
                    fragment_series[idx] = code
                    fragment_number[idx] = number
                    fragment_charge[idx] = charge
                    fragment_loss[idx] = variant > 0
                    idx += 1

    return (
        fragment_mz[:idx],
        fragment_series[:idx],
        fragment_number[:idx],
        fragment_charge[:idx],
        fragment_loss[:idx],
    )


def generate_fragment_ions(
    sequence: str,
    series: Sequence[Union[IonSeries, str, int]] = (IonSeries.B, IonSeries.Y),
    charges: Sequence[int] = (1, 2),
    neutral_losses: Sequence[float] = (),
) -> FragmentLadder:
    """Generate theoretical fragment m/z values for a peptide.

    Parameters
    ----------
    sequence : str
        Peptide sequence (unmodified residues)
    series : sequence of IonSeries, str or int
        Ion series to generate (default: b and y)
    charges : sequence of int
        Fragment charge states
    neutral_losses : sequence of float
        Neutral loss masses; each fragment is also generated once per loss
        with ``neutral_loss`` set

    Returns
    -------
    FragmentLadder

    Examples
    --------
    >>> ladder = generate_fragment_ions("PEPTIDE", series=('b',), charges=(1,))
    >>> ladder.number
    array([1, 2, 3, 4, 5, 6], dtype=int32)
    """
    series_codes = np.array(
        [int(IonSeries.from_value(s)) for s in series], dtype=np.int64
    )
    charge_array = np.array(charges, dtype=np.int64)
    if np.any(charge_array < 1):
        raise ValueError(f"Fragment charges must be >= 1, got {list(charges)}")
    loss_array = np.array(neutral_losses, dtype=np.float64)
    unknown = sorted({aa for aa in sequence if aa not in RESIDUE_MASSES})
    if unknown:
        raise ValueError(f"Unknown residues in {sequence}: {''.join(unknown)}")

    return FragmentLadder(*_generate_ladders(
        encode_peptide_to_ord(sequence), series_codes, charge_array, loss_array
    ))
