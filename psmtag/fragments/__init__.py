"""Theoretical a/b/c/x/y/z fragment ladders."""

from .generator import (
    FragmentLadder,
    encode_peptide_to_ord,
    generate_fragment_ions,
)

__all__ = [
    'FragmentLadder',
    'encode_peptide_to_ord',
    'generate_fragment_ions',
]
