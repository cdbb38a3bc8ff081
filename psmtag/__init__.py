"""psmtag - Fragment ion coverage and sequence tags for peptide-spectrum matches.

Given the fragment ions annotated on a spectrum for a candidate peptide,
psmtag derives which residues are confidently covered, the longest
annotated stretch (merged or within a single ion series), and a condensed
tag where uncovered residue runs are written as their summed mass.
"""

__version__ = "0.1.0"

from psmtag import ions
from psmtag import coverage
from psmtag import features
from psmtag import fragments
from psmtag import search

from psmtag.ions import IonMatch, IonSeries, Direction, classify
from psmtag.coverage import CoverageParams
from psmtag.features import PsmContext, compute_features

__all__ = [
    "ions",
    "coverage",
    "features",
    "fragments",
    "search",
    "IonMatch",
    "IonSeries",
    "Direction",
    "classify",
    "CoverageParams",
    "PsmContext",
    "compute_features",
]
