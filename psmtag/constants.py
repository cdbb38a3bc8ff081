"""Physical constants and residue masses for fragment ion coverage.

Constants are provided in both dictionary and ord()-indexed array formats
so that plain Python code and Numba-compiled kernels can share one table.

Sources
-------
- NIST physical constants: https://physics.nist.gov/cgi-bin/cuu/Value
- IUPAC amino acid masses: https://www.unimod.org/masses.html
"""

import numpy as np

# =============================================================================
# Fundamental Physical Constants (NIST values)
# =============================================================================

# Proton mass, not the hydrogen atom mass
PROTON_MASS = 1.007276466622  # Da

# Hydrogen atom mass (proton + electron)
H_ATOM_MASS = 1.007825032  # Da

H2O_MASS = 18.010564684  # Da
NH3_MASS = 17.026549101  # Da
CO_MASS = 27.994914620  # Da

# =============================================================================
# Fragment Ion Offsets
# =============================================================================

# Neutral fragment mass = sum of residue masses + offset.
# Indexed by ion series code (a=0, b=1, c=2, x=3, y=4, z=5).
A_ION_OFFSET = -CO_MASS
B_ION_OFFSET = 0.0
C_ION_OFFSET = NH3_MASS
X_ION_OFFSET = H2O_MASS + CO_MASS - 2 * H_ATOM_MASS
Y_ION_OFFSET = H2O_MASS
Z_ION_OFFSET = H2O_MASS - NH3_MASS + H_ATOM_MASS  # z-dot

ION_OFFSETS = np.array([
    A_ION_OFFSET,
    B_ION_OFFSET,
    C_ION_OFFSET,
    X_ION_OFFSET,
    Y_ION_OFFSET,
    Z_ION_OFFSET,
], dtype=np.float64)

# Common neutral losses
NEUTRAL_LOSSES = {
    'H2O': H2O_MASS,
    'NH3': NH3_MASS,
}

# =============================================================================
# Amino Acid Monoisotopic Masses (Da)
# =============================================================================

# Residue masses (not including N/C terminals)
AA_MASSES_DICT = {
    'A': 71.037114,   # Alanine
    'R': 156.101111,  # Arginine
    'N': 114.042927,  # Asparagine
    'D': 115.026943,  # Aspartic acid
    'C': 103.009185,  # Cysteine (unmodified)
    'E': 129.042593,  # Glutamic acid
    'Q': 128.058578,  # Glutamine
    'G': 57.021464,   # Glycine
    'H': 137.058912,  # Histidine
    'I': 113.084064,  # Isoleucine
    'L': 113.084064,  # Leucine
    'K': 128.094963,  # Lysine
    'M': 131.040485,  # Methionine
    'F': 147.068414,  # Phenylalanine
    'P': 97.052764,   # Proline
    'S': 87.032028,   # Serine
    'T': 101.047679,  # Threonine
    'W': 186.079313,  # Tryptophan
    'Y': 163.063320,  # Tyrosine
    'V': 99.068414,   # Valine
}

# Ambiguous or rare one-letter codes, mapped to the closest standard mass
AA_MASSES_NONSTANDARD = {
    'Z': 128.058578,  # Glu/Gln -> Gln
    'B': 114.042927,  # Asp/Asn -> Asn
    'J': 113.084064,  # Leu/Ile
    'U': 150.953636,  # Selenocysteine
    'O': 237.147727,  # Pyrrolysine
}

# Full lookup used for gap masses
RESIDUE_MASSES = {**AA_MASSES_DICT, **AA_MASSES_NONSTANDARD}

# =============================================================================
# ord()-Indexed Array for Numba
# =============================================================================

# Access via: AA_MASSES[ord('A')] -> 71.037114
# Unknown residues stay at 0.0
AA_MASSES = np.zeros(256, dtype=np.float64)
for aa, mass in RESIDUE_MASSES.items():
    AA_MASSES[ord(aa)] = mass
