"""Fragment ion annotation of a peak list.

Matches theoretical fragment ladders to an observed, m/z-sorted spectrum
and returns IonMatch records ready for coverage computation. Each
theoretical fragment is assigned the nearest peak on either side of its
sorted insertion point, if that peak lies within the ppm tolerance.
"""

import logging
from typing import List, Sequence, Union

import numpy as np

from ..constants import NEUTRAL_LOSSES
from ..ions.series import IonSeries
from ..ions.ion_match import IonMatch, ion_matches_from_arrays
from ..fragments.generator import generate_fragment_ions

logger = logging.getLogger(__name__)


def closest_peak_indices(
    spectrum_mz: np.ndarray,
    target_mz: np.ndarray,
    tol_ppm: float,
) -> np.ndarray:
    """Closest peak within PPM tolerance for every target m/z.

    Parameters
    ----------
    spectrum_mz : np.ndarray
        Observed m/z values, sorted ascending (not validated)
    target_mz : np.ndarray
        Theoretical fragment m/z values, any order
    tol_ppm : float
        Mass tolerance in parts per million of the target m/z

    Returns
    -------
    indices : np.ndarray (int64)
        Peak index per target, -1 where no peak is within tolerance.
        Equidistant neighbours resolve to the lower m/z peak.

    Examples
    --------
    >>> closest_peak_indices(np.array([100.05, 200.10]), np.array([200.11, 150.0]), 50)
    array([ 1, -1])
    """
    spectrum_mz = np.asarray(spectrum_mz, dtype=np.float64)
    target_mz = np.atleast_1d(np.asarray(target_mz, dtype=np.float64))
    n_peaks = len(spectrum_mz)
    if n_peaks == 0 or len(target_mz) == 0:
        return np.full(len(target_mz), -1, dtype=np.int64)

    upper = np.clip(np.searchsorted(spectrum_mz, target_mz), 0, n_peaks - 1)
    lower = np.clip(upper - 1, 0, n_peaks - 1)
    lower_error = np.abs(spectrum_mz[lower] - target_mz)
    upper_error = np.abs(spectrum_mz[upper] - target_mz)

    closest = np.where(lower_error <= upper_error, lower, upper)
    error = np.minimum(lower_error, upper_error)
    within = error <= target_mz * tol_ppm / 1e6
    return np.where(within, closest, -1).astype(np.int64)


def annotate_spectrum(
    sequence: str,
    spectrum_mz: np.ndarray,
    spectrum_intensity: np.ndarray,
    series: Sequence[Union[IonSeries, str, int]] = (IonSeries.B, IonSeries.Y),
    charges: Sequence[int] = (1, 2),
    neutral_losses: Sequence[str] = (),
    tol_ppm: float = 20.0,
    min_intensity: float = 0.0,
) -> List[IonMatch]:
    """Annotate a spectrum with the fragment ions of a peptide.

    Parameters
    ----------
    sequence : str
        Candidate peptide
    spectrum_mz : np.ndarray
        Observed m/z values, sorted ascending
    spectrum_intensity : np.ndarray
        Observed intensities (parallel to spectrum_mz)
    series : sequence
        Ion series to search
    charges : sequence of int
        Fragment charges to search
    neutral_losses : sequence of str
        Neutral loss names from NEUTRAL_LOSSES ('H2O', 'NH3')
    tol_ppm : float
        Fragment mass tolerance in PPM
    min_intensity : float
        Minimum intensity of a matched peak

    Returns
    -------
    list of IonMatch
        One entry per matched theoretical fragment, in ladder order
    """
    spectrum_mz = np.asarray(spectrum_mz, dtype=np.float64)
    spectrum_intensity = np.asarray(spectrum_intensity, dtype=np.float64)
    if len(spectrum_mz) != len(spectrum_intensity):
        raise ValueError("spectrum_mz and spectrum_intensity must have the same length")

    try:
        loss_masses = [NEUTRAL_LOSSES[name] for name in neutral_losses]
    except KeyError as e:
        raise ValueError(
            f"Unknown neutral loss: {e.args[0]}. Use one of {sorted(NEUTRAL_LOSSES)}"
        ) from None

    ladder = generate_fragment_ions(sequence, series, charges, loss_masses)
    peak_indices = closest_peak_indices(spectrum_mz, ladder.mz, tol_ppm)
    matched = peak_indices >= 0
    matched[matched] = spectrum_intensity[peak_indices[matched]] >= min_intensity
    peaks = peak_indices[matched]

    ion_matches = ion_matches_from_arrays(
        ladder.series[matched],
        ladder.number[matched],
        ladder.charge[matched],
        neutral_loss=ladder.neutral_loss[matched],
        mz=spectrum_mz[peaks],
        intensity=spectrum_intensity[peaks],
    )
    logger.debug(
        f"{sequence}: {len(ion_matches)}/{len(ladder.mz)} fragments matched "
        f"within {tol_ppm} ppm"
    )
    return ion_matches
