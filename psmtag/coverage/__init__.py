"""Fragment ion coverage, longest tags and gap-annotated tags.

Core algorithms:
1. Ladder bitmaps from matched ions (forward a/b/c, reverse x/y/z)
2. Two-in-a-row corroboration into per-residue coverage
3. Longest covered stretch (merged or single series)
4. Gap tags with uncovered runs collapsed into residue mass sums
"""

from .params import CoverageParams
from .bitmap import (
    CoverageMaps,
    ladder_bitmap,
    corroborate,
    build_coverage,
    build_series_coverage,
    coverage_percentage,
    ladder_coverage_percentage,
)
from .runs import (
    longest_true_run,
    longest_run,
    longest_annotated_tag,
    longest_single_series_tag,
)
from .gap_tag import (
    residue_mass,
    format_gap,
    render_tag,
    gap_annotated_tag,
)

__all__ = [
    'CoverageParams',
    # Bitmaps
    'CoverageMaps',
    'ladder_bitmap',
    'corroborate',
    'build_coverage',
    'build_series_coverage',
    'coverage_percentage',
    'ladder_coverage_percentage',
    # Runs
    'longest_true_run',
    'longest_run',
    'longest_annotated_tag',
    'longest_single_series_tag',
    # Gap tags
    'residue_mass',
    'format_gap',
    'render_tag',
    'gap_annotated_tag',
]
