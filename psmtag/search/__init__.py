"""Spectrum annotation: matching theoretical fragments to observed peaks."""

from .fragment_matching import (
    closest_peak_indices,
    annotate_spectrum,
)

__all__ = [
    'closest_peak_indices',
    'annotate_spectrum',
]
