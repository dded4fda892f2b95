"""Gabor patch generation.

Builds a periodic grating (sine, cosine, square or sawtooth) windowed by a
circular or elliptical Gaussian and returns it as a float RGB array.
"""

from .computing import (
    CoordinateGrid,
    apply_waveform,
    build_grid,
    composite_patch,
    generate_gabor_patch,
    render_patch,
    synthesize_envelope,
    synthesize_grating,
)
from .conversion import clip_patch, out_of_gamut_fraction, patch_to_uint8
from .model import (
    GaborPatchError,
    InvalidArgumentCount,
    InvalidPatchSize,
    PatchOptions,
    PatchParameters,
    UnsupportedGratingType,
    UnsupportedStyle,
    resolve_parameters,
)

__version__ = "0.1.0"

__all__ = [
    "CoordinateGrid",
    "GaborPatchError",
    "InvalidArgumentCount",
    "InvalidPatchSize",
    "PatchOptions",
    "PatchParameters",
    "UnsupportedGratingType",
    "UnsupportedStyle",
    "apply_waveform",
    "build_grid",
    "clip_patch",
    "composite_patch",
    "generate_gabor_patch",
    "out_of_gamut_fraction",
    "patch_to_uint8",
    "render_patch",
    "resolve_parameters",
    "synthesize_envelope",
    "synthesize_grating",
]
