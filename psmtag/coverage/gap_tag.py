"""Gap-annotated sequence tags.

Covered residues are written literally; each maximal run of uncovered
residues is collapsed into its summed monoisotopic residue mass between
delimiters, e.g. ``PEP<214.13>IDE``.

Gap masses are rendered with a fixed number of decimals using Python
format specifications, so output does not depend on the locale.
"""

from typing import Dict, Iterable, Optional

import numpy as np

from ..constants import RESIDUE_MASSES
from ..ions.ion_match import IonMatch
from .bitmap import build_coverage
from .params import CoverageParams


def residue_mass(residue: str, residue_masses: Optional[Dict[str, float]] = None) -> float:
    """Monoisotopic mass of a residue.

    Raises
    ------
    ValueError
        If the residue is not in the mass table
    """
    table = RESIDUE_MASSES if residue_masses is None else residue_masses
    try:
        return table[residue]
    except KeyError:
        raise ValueError(f"Unknown residue: {residue!r}") from None


def format_gap(mass: float, decimals: int = 2, open_token: str = "<", close_token: str = ">") -> str:
    """Format a gap mass, e.g. ``<113.08>``."""
    return f"{open_token}{mass:.{decimals}f}{close_token}"


def render_tag(
    coverage: np.ndarray,
    sequence: str,
    residue_masses: Optional[Dict[str, float]] = None,
    decimals: int = 2,
    open_token: str = "<",
    close_token: str = ">",
) -> str:
    """Render a peptide with uncovered runs replaced by their mass.

    Parameters
    ----------
    coverage : np.ndarray (bool)
        Merged residue coverage (see build_coverage())
    sequence : str
        Peptide sequence
    residue_masses : dict, optional
        Residue -> monoisotopic mass (default: standard table)
    decimals : int
        Fixed decimals of rendered gap masses
    open_token, close_token : str
        Gap delimiters

    Returns
    -------
    str
        Gap-annotated tag, '' for an empty sequence

    Examples
    --------
    >>> render_tag(np.array([1, 1, 0, 1], dtype=bool), "PEIK")
    'PE<113.08>K'
    """
    if len(coverage) != len(sequence):
        raise ValueError(
            f"Coverage length {len(coverage)} does not match sequence length {len(sequence)}"
        )
    parts = []
    gap = 0.0
    for covered, residue in zip(coverage, sequence):
        if covered:
            if gap > 0:
                parts.append(format_gap(gap, decimals, open_token, close_token))
                gap = 0.0
            parts.append(residue)
        else:
            gap += residue_mass(residue, residue_masses)
    if gap > 0:
        parts.append(format_gap(gap, decimals, open_token, close_token))
    return "".join(parts)


def gap_annotated_tag(
    sequence: str,
    ion_matches: Iterable[IonMatch],
    params: Optional[CoverageParams] = None,
) -> str:
    """Gap-annotated tag of a PSM from its fragment ion matches."""
    if params is None:
        params = CoverageParams()
    maps = build_coverage(len(sequence), ion_matches)
    return render_tag(
        maps.merged,
        sequence,
        residue_masses=params.residue_masses,
        decimals=params.gap_mass_decimals,
        open_token=params.gap_open,
        close_token=params.gap_close,
    )
