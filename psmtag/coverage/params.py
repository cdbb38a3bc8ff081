"""Parameters for coverage and tag computation."""

from dataclasses import dataclass
from typing import Dict, Optional

from ..ions.series import IonSeries


@dataclass
class CoverageParams:
    """Settings for the single-series tag and the gap-annotated tag.

    Gap masses are rounded to ``gap_mass_decimals`` fixed decimals so that
    rendered tags are reproducible and can be compared as strings.
    """

    # Single-series longest tag filters
    single_series_charge: int = 1
    single_series_neutral_losses: bool = False
    single_series: Optional[IonSeries] = None  # None scans all six series

    # Gap rendering
    gap_mass_decimals: int = 2
    gap_open: str = "<"
    gap_close: str = ">"
    residue_masses: Optional[Dict[str, float]] = None  # None uses the standard table

    def __post_init__(self):
        if self.single_series_charge < 1:
            raise ValueError(
                f"single_series_charge must be >= 1, got {self.single_series_charge}"
            )
        if self.gap_mass_decimals < 0:
            raise ValueError(
                f"gap_mass_decimals must be >= 0, got {self.gap_mass_decimals}"
            )
        if self.single_series is not None:
            self.single_series = IonSeries.from_value(self.single_series)

    @classmethod
    def high_precision(cls) -> 'CoverageParams':
        """Parameters with 6-decimal gap masses, for numeric comparison downstream."""
        return cls(gap_mass_decimals=6)
