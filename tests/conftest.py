"""Pytest configuration for psmtag tests.

Common fixtures: peptides, ion match sets and the residue mass table.
"""

import pytest

from psmtag.ions import IonMatch


@pytest.fixture
def simple_peptide():
    """Simple peptide for basic tests."""
    return "PEPTIDE"


@pytest.fixture
def tryptic_peptides():
    """Collection of typical tryptic peptides."""
    return [
        "PEPTIDE",
        "ACDEK",
        "TESTPEPTIDER",
        "YGGFMTSEK",
        "LGEHNIDVLEGNEQFINAAK",
    ]


@pytest.fixture
def b_ladder():
    """Full b2..b6 ladder of PEPTIDE, charge 1, no loss."""
    return [IonMatch('b', n) for n in range(2, 7)]


@pytest.fixture
def mixed_ions():
    """b2, b3, y2, y3 of PEPTIDE."""
    return [
        IonMatch('b', 2),
        IonMatch('b', 3),
        IonMatch('y', 2),
        IonMatch('y', 3),
    ]


@pytest.fixture
def residue_masses():
    """Residue mass table."""
    from psmtag.constants import RESIDUE_MASSES
    return RESIDUE_MASSES
