"""Fragment ion model: series classification and matched ion records."""

from .series import (
    IonSeries,
    Direction,
    classify,
    FORWARD_SERIES,
    REVERSE_SERIES,
)
from .ion_match import (
    IonMatch,
    validate_ion_matches,
    ion_matches_from_arrays,
)

__all__ = [
    'IonSeries',
    'Direction',
    'classify',
    'FORWARD_SERIES',
    'REVERSE_SERIES',
    'IonMatch',
    'validate_ion_matches',
    'ion_matches_from_arrays',
]
