"""Tests for coverage bitmaps and the two-in-a-row corroboration rule."""

import numpy as np
import pytest

from psmtag.ions import IonMatch, IonSeries, Direction
from psmtag.coverage import (
    ladder_bitmap,
    corroborate,
    build_coverage,
    build_series_coverage,
    coverage_percentage,
    ladder_coverage_percentage,
)


def covered(mask):
    return list(np.nonzero(mask)[0])


class TestLadderBitmap:
    """Test recording of confirmed bonds."""

    def test_ladder_index_is_number_minus_one(self):
        ladder = ladder_bitmap([IonMatch('b', 2), IonMatch('y', 5)], 7)
        assert covered(ladder) == [1, 4]

    def test_direction_filter(self):
        ions = [IonMatch('b', 2), IonMatch('y', 5)]
        assert covered(ladder_bitmap(ions, 7, direction=Direction.FORWARD)) == [1]
        assert covered(ladder_bitmap(ions, 7, direction=Direction.REVERSE)) == [4]

    def test_series_charge_and_loss_filters(self):
        ions = [
            IonMatch('b', 1),
            IonMatch('b', 2, charge=2),
            IonMatch('b', 3, has_neutral_loss=True),
            IonMatch('a', 4),
        ]
        ladder = ladder_bitmap(
            ions, 7, series=IonSeries.B, charge=1, allow_neutral_losses=False
        )
        assert covered(ladder) == [0]

    def test_duplicate_ions(self):
        """Test the same position matched twice marks one bond."""
        ladder = ladder_bitmap([IonMatch('b', 2), IonMatch('b', 2, charge=2)], 7)
        assert covered(ladder) == [1]

    def test_number_spanning_full_peptide_rejected(self):
        """Test an ion numbered L is not recorded as the last bond."""
        with pytest.raises(ValueError, match=r"outside \[1, 6\]"):
            ladder_bitmap([IonMatch('b', 6), IonMatch('b', 7)], 7)

    def test_number_beyond_peptide_rejected(self):
        """Test an ion numbered past the peptide end raises ValueError."""
        with pytest.raises(ValueError, match="outside"):
            ladder_bitmap([IonMatch('y', 9)], 7)

    def test_rejected_even_when_filtered_out(self):
        """Test range checks apply before series filters."""
        with pytest.raises(ValueError):
            ladder_bitmap([IonMatch('y', 7)], 7, series=IonSeries.B)


class TestCorroborate:
    """Test the two-in-a-row rule."""

    def test_isolated_ion_covers_nothing(self):
        """Test a lone ion away from the terminus localises no residue."""
        ladder = np.array([False, False, True, False, False])
        assert covered(corroborate(ladder, Direction.FORWARD)) == []

    def test_first_ion_bracketed_by_terminus(self):
        """Test the first ladder position counts the terminus as confirmed."""
        ladder = np.array([True, False, False, False, False])
        assert covered(corroborate(ladder, Direction.FORWARD)) == [0]

    def test_consecutive_forward_ions(self):
        """Test b2, b3 bracket residue 2."""
        ladder = np.array([False, True, True, False, False, False, False])
        assert covered(corroborate(ladder, Direction.FORWARD)) == [2]

    def test_reverse_maps_to_opposite_end(self):
        """Test y2, y3 bracket residue L - 3."""
        ladder = np.array([False, True, True, False, False, False, False])
        assert covered(corroborate(ladder, Direction.REVERSE)) == [4]

    def test_first_reverse_ion(self):
        """Test y1 alone covers the C-terminal residue."""
        ladder = np.array([True, False, False, False])
        assert covered(corroborate(ladder, Direction.REVERSE)) == [3]

    def test_input_not_mutated(self):
        ladder = np.array([True, True, False])
        before = ladder.copy()
        corroborate(ladder, Direction.REVERSE)
        np.testing.assert_array_equal(ladder, before)

    def test_empty(self):
        assert len(corroborate(np.zeros(0, dtype=bool), Direction.FORWARD)) == 0


class TestBuildCoverage:
    """Test merged forward/reverse coverage."""

    def test_full_b_ladder(self, simple_peptide, b_ladder):
        """Test b2..b6 covers residues 2..5."""
        maps = build_coverage(len(simple_peptide), b_ladder)
        assert covered(maps.forward) == [1, 2, 3, 4, 5]
        assert covered(maps.reverse) == []
        assert covered(maps.merged) == [2, 3, 4, 5]
        assert coverage_percentage(maps.merged) == pytest.approx(100 * 4 / 7)

    def test_mixed_ladders(self, simple_peptide, mixed_ions):
        """Test b2, b3, y2, y3 cover one residue from each end."""
        maps = build_coverage(len(simple_peptide), mixed_ions)
        assert covered(maps.merged) == [2, 4]
        assert 0 < coverage_percentage(maps.merged) < 100

    def test_merge_is_or(self, simple_peptide):
        """Test residues covered by either direction are covered."""
        ions = [IonMatch('b', 1), IonMatch('y', 1)]
        maps = build_coverage(len(simple_peptide), ions)
        assert covered(maps.merged) == [0, 6]

    def test_all_charges_and_losses_count(self, simple_peptide):
        ions = [IonMatch('b', 2, charge=2), IonMatch('b', 3, has_neutral_loss=True)]
        maps = build_coverage(len(simple_peptide), ions)
        assert covered(maps.merged) == [2]

    def test_no_ions(self, simple_peptide):
        maps = build_coverage(len(simple_peptide), [])
        assert not maps.merged.any()
        assert coverage_percentage(maps.merged) == 0.0

    def test_empty_sequence(self):
        maps = build_coverage(0, [])
        assert len(maps.merged) == 0
        assert coverage_percentage(maps.merged) == 0.0

    def test_out_of_range_number_rejected(self, simple_peptide):
        """Test ions spanning the full peptide fail fast."""
        with pytest.raises(ValueError):
            build_coverage(len(simple_peptide), [IonMatch('b', 7)])

    def test_idempotent(self, simple_peptide, mixed_ions):
        first = build_coverage(len(simple_peptide), mixed_ions)
        second = build_coverage(len(simple_peptide), mixed_ions)
        np.testing.assert_array_equal(first.merged, second.merged)

    def test_monotonic_in_ion_matches(self, simple_peptide):
        """Test adding ions never decreases coverage."""
        all_ions = [
            IonMatch('b', 1), IonMatch('y', 4), IonMatch('b', 2),
            IonMatch('y', 3), IonMatch('b', 4), IonMatch('y', 2),
            IonMatch('b', 3), IonMatch('y', 1),
        ]
        previous = 0.0
        for k in range(len(all_ions) + 1):
            maps = build_coverage(len(simple_peptide), all_ions[:k])
            current = coverage_percentage(maps.merged)
            assert current >= previous
            previous = current
        assert previous == 100.0


class TestBuildSeriesCoverage:
    """Test single-series coverage arrays."""

    def test_one_array_per_series(self, simple_peptide, b_ladder):
        coverage = build_series_coverage(len(simple_peptide), b_ladder)
        assert set(coverage) == set(IonSeries)
        assert covered(coverage[IonSeries.B]) == [2, 3, 4, 5]
        assert not coverage[IonSeries.Y].any()

    def test_reverse_series_kept_in_ladder_order(self, simple_peptide):
        ions = [IonMatch('y', n) for n in (2, 3, 4)]
        coverage = build_series_coverage(len(simple_peptide), ions)
        assert covered(coverage[IonSeries.Y]) == [2, 3]

    def test_charge_two_ignored(self, simple_peptide):
        """Test charge 2 ions never reach single-series arrays."""
        ions = [IonMatch('b', n, charge=2) for n in range(2, 7)]
        coverage = build_series_coverage(len(simple_peptide), ions)
        assert not any(array.any() for array in coverage.values())
        # Merged coverage is unaffected by the filter
        assert covered(build_coverage(len(simple_peptide), ions).merged) == [2, 3, 4, 5]

    def test_neutral_losses_ignored_by_default(self, simple_peptide):
        ions = [IonMatch('b', n, has_neutral_loss=True) for n in range(1, 4)]
        coverage = build_series_coverage(len(simple_peptide), ions)
        assert not coverage[IonSeries.B].any()
        coverage = build_series_coverage(
            len(simple_peptide), ions, allow_neutral_losses=True
        )
        assert covered(coverage[IonSeries.B]) == [0, 1, 2]

    def test_series_do_not_corroborate_each_other(self, simple_peptide):
        """Test b2 and c3 do not bracket a residue together."""
        ions = [IonMatch('b', 2), IonMatch('c', 3)]
        coverage = build_series_coverage(len(simple_peptide), ions)
        assert not any(array.any() for array in coverage.values())


class TestLadderCoveragePercentage:
    """Test the uncorroborated ladder coverage."""

    def test_counts_distinct_positions(self, simple_peptide, mixed_ions):
        """Test b2/y2 and b3/y3 share ladder positions."""
        assert ladder_coverage_percentage(len(simple_peptide), mixed_ions) == \
            pytest.approx(100 * 2 / 7)

    def test_at_least_corroborated_coverage(self, simple_peptide, b_ladder):
        corroborated = coverage_percentage(
            build_coverage(len(simple_peptide), b_ladder).merged
        )
        assert ladder_coverage_percentage(len(simple_peptide), b_ladder) >= corroborated

    def test_empty(self):
        assert ladder_coverage_percentage(0, []) == 0.0
