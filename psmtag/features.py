"""Named PSM features computed from fragment ion coverage.

Each feature is a pure function of a PsmContext, registered under the
column name used in PSM reports. Report writers look features up by name
and format the returned values themselves.

Examples
--------
>>> ctx = PsmContext("PEPTIDE", [IonMatch('b', n) for n in range(2, 7)])
>>> compute_features(ctx)["longest_amino_acid_sequence_annotated"]
'PTID'
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .ions.ion_match import IonMatch
from .coverage.params import CoverageParams
from .coverage.bitmap import (
    build_coverage,
    coverage_percentage,
    ladder_coverage_percentage,
)
from .coverage.runs import longest_annotated_tag, longest_single_series_tag
from .coverage.gap_tag import gap_annotated_tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PsmContext:
    """Inputs for one peptide-spectrum match."""

    sequence: str
    ion_matches: Tuple[IonMatch, ...]
    params: CoverageParams = field(default_factory=CoverageParams)

    def __post_init__(self):
        object.__setattr__(self, 'ion_matches', tuple(self.ion_matches))


FeatureFunction = Callable[[PsmContext], object]

_FEATURES: Dict[str, FeatureFunction] = {}


def register_feature(name: str) -> Callable[[FeatureFunction], FeatureFunction]:
    """Decorator registering a feature function under ``name``."""
    def decorator(func: FeatureFunction) -> FeatureFunction:
        if name in _FEATURES:
            raise ValueError(f"Feature already registered: {name}")
        _FEATURES[name] = func
        return func
    return decorator


def get_feature(name: str) -> FeatureFunction:
    try:
        return _FEATURES[name]
    except KeyError:
        raise KeyError(
            f"Unknown feature: {name}. Available: {', '.join(available_features())}"
        ) from None


def available_features() -> List[str]:
    return list(_FEATURES)


# =============================================================================
# Registered Features
# =============================================================================

@register_feature("sequence_coverage")
def sequence_coverage(ctx: PsmContext) -> float:
    """Percentage of residues covered by corroborated fragment ions.

    Some PSM reports use the column name sequence_coverage for the
    uncorroborated share of ladder positions with any fragment ion. That
    value is registered here as fragment_ion_coverage.
    """
    maps = build_coverage(len(ctx.sequence), ctx.ion_matches)
    return coverage_percentage(maps.merged)


@register_feature("fragment_ion_coverage")
def fragment_ion_coverage(ctx: PsmContext) -> float:
    """Percentage of ladder positions with any fragment ion."""
    return ladder_coverage_percentage(len(ctx.sequence), ctx.ion_matches)


@register_feature("longest_amino_acid_sequence_annotated")
def longest_amino_acid_sequence_annotated(ctx: PsmContext) -> str:
    return longest_annotated_tag(ctx.sequence, ctx.ion_matches)


@register_feature("longest_amino_acid_sequence_annotated_single_series")
def longest_amino_acid_sequence_annotated_single_series(ctx: PsmContext) -> str:
    params = ctx.params
    return longest_single_series_tag(
        ctx.sequence,
        ctx.ion_matches,
        series=params.single_series,
        charge=params.single_series_charge,
        allow_neutral_losses=params.single_series_neutral_losses,
    )


@register_feature("amino_acids_annotated")
def amino_acids_annotated(ctx: PsmContext) -> str:
    return gap_annotated_tag(ctx.sequence, ctx.ion_matches, ctx.params)


# =============================================================================
# Computation
# =============================================================================

def compute_feature(name: str, ctx: PsmContext) -> object:
    return get_feature(name)(ctx)


def compute_features(ctx: PsmContext, names: Optional[Iterable[str]] = None) -> Dict[str, object]:
    """Compute several features for one PSM.

    Parameters
    ----------
    ctx : PsmContext
        PSM inputs
    names : iterable of str, optional
        Feature names, in output order (default: all registered features)

    Returns
    -------
    dict
        Feature name -> value
    """
    if names is None:
        names = available_features()
    names = list(names)
    logger.debug(f"Computing {len(names)} features for {ctx.sequence}")
    return {name: compute_feature(name, ctx) for name in names}


def compute_features_batch(
    contexts: Iterable[PsmContext],
    names: Optional[Iterable[str]] = None,
) -> List[Dict[str, object]]:
    """Compute features for many PSMs.

    Every PSM is computed independently, so callers may split ``contexts``
    across worker processes (e.g. joblib) without coordination.
    """
    contexts = list(contexts)
    names = available_features() if names is None else list(names)
    for name in names:
        get_feature(name)

    logger.info(f"Computing {len(names)} features for {len(contexts):,} PSMs...")
    results = [compute_features(ctx, names) for ctx in contexts]
    logger.info(f"✓ Computed features for {len(results):,} PSMs")
    return results
