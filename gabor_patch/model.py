"""
Parameter layer for Gabor patch generation.

Contains:
- ``PatchOptions``: caller-facing options, every field nullable (``None`` = absent).
- ``PatchParameters``: the fully resolved, immutable parameter set.
- ``resolve_parameters``: permissive resolver that swaps invalid optional values
  for their defaults instead of raising.
- The exception hierarchy for the few hard failures.

Nothing here builds images, so it can be tested in isolation.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import asdict, dataclass, fields
from typing import Any, Literal, Mapping, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)

# ── Constants ──────────────────────────────────────────────────────────────────
GratingType = Literal["sine", "cosine", "square", "sawtooth"]
PatchStyle = Literal["uniform", "bipolar"]

GRATING_TYPES: tuple[str, ...] = ("sine", "cosine", "square", "sawtooth")
PATCH_STYLES: tuple[str, ...] = ("uniform", "bipolar")

GRATING_TYPE_ALIASES: dict[str, str] = {
    "sine": "sine",
    "sin": "sine",
    "cosine": "cosine",
    "cos": "cosine",
    "square": "square",
    "sawtooth": "sawtooth",
}
STYLE_ALIASES: dict[str, str] = {
    "uniform": "uniform",
    "uni": "uniform",
    "bipolar": "bipolar",
    "bi": "bipolar",
}

DEFAULT_GRATING_ROTATION = 0.0
DEFAULT_GRATING_TYPE: GratingType = "cosine"
DEFAULT_FILTER_ASPECT = 1.0
DEFAULT_FILTER_ROTATION = 0.0
DEFAULT_FORE_COLOUR: tuple[float, float, float] = (1.0, 1.0, 1.0)
DEFAULT_BACK_COLOUR: tuple[float, float, float] = (0.5, 0.5, 0.5)
DEFAULT_CONTRAST = 1.0
DEFAULT_STYLE: PatchStyle = "uniform"
DEFAULT_PHASE = 0.0

# Positional order of generate_gabor_patch arguments.
PARAMETER_ORDER: tuple[str, ...] = (
    "patch_size",
    "grating_frequency",
    "grating_rotation",
    "grating_type",
    "filter_sigma",
    "filter_aspect",
    "filter_rotation",
    "fore_colour",
    "back_colour",
    "contrast",
    "style",
    "phase",
)
MIN_ARGUMENTS = 1
MAX_ARGUMENTS = len(PARAMETER_ORDER)


# ── Errors ─────────────────────────────────────────────────────────────────────
class GaborPatchError(ValueError):
    """Base class for hard failures during patch generation."""


class InvalidArgumentCount(GaborPatchError):
    pass


class InvalidPatchSize(GaborPatchError):
    pass


class UnsupportedGratingType(GaborPatchError):
    pass


class UnsupportedStyle(GaborPatchError):
    pass


# ── Options / parameters ───────────────────────────────────────────────────────
@dataclass(frozen=True)
class PatchOptions:
    """Optional generation inputs. ``None`` marks a field as not provided."""

    grating_frequency: Optional[float] = None
    grating_rotation: Optional[float] = None
    grating_type: Optional[str] = None
    filter_sigma: Optional[float] = None
    filter_aspect: Optional[float] = None
    filter_rotation: Optional[float] = None
    fore_colour: Optional[Sequence[float]] = None
    back_colour: Optional[Sequence[float]] = None
    contrast: Optional[float] = None
    style: Optional[str] = None
    phase: Optional[float] = None

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> PatchOptions:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            valid = ", ".join(sorted(known))
            raise InvalidArgumentCount(f"Unknown option(s) {unknown}. Valid options: {valid}")
        return cls(**dict(values))


@dataclass(frozen=True)
class PatchParameters:
    patch_size: int
    grating_frequency: float
    grating_rotation: float
    grating_type: GratingType
    filter_sigma: float
    filter_aspect: float
    filter_rotation: float
    fore_colour: tuple[float, float, float]
    back_colour: tuple[float, float, float]
    contrast: float
    style: PatchStyle
    phase: float

    @property
    def grid_size(self) -> int:
        """Side length of the output; always odd."""
        return 2 * (self.patch_size // 2) + 1

    @property
    def is_circular(self) -> bool:
        return self.filter_aspect == 1.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ── Value coercion ─────────────────────────────────────────────────────────────
def _as_real(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, numbers.Real):
        return None
    out = float(value)
    if not math.isfinite(out):
        return None
    return out


def _as_colour(value: Any) -> Optional[tuple[float, float, float]]:
    if value is None or isinstance(value, (str, bytes)):
        return None
    # Row or column vectors such as [[1, 0, 0]] count as three components.
    try:
        components = list(np.ravel(value))
    except (TypeError, ValueError):
        return None
    if len(components) != 3:
        return None
    reals = [_as_real(c) for c in components]
    if any(c is None for c in reals):
        return None
    return (reals[0], reals[1], reals[2])


def _as_name(value: Any, aliases: Mapping[str, str]) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return aliases.get(value.strip().lower())


def as_patch_size(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidPatchSize(f"patch_size must be a positive integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        size = int(value)
    elif math.isfinite(float(value)) and float(value).is_integer():
        size = int(value)
    else:
        raise InvalidPatchSize(f"patch_size must be a positive integer, got {value!r}")
    if size < 1:
        raise InvalidPatchSize(f"patch_size must be a positive integer, got {value!r}")
    return size


def _substitute(name: str, value: Any, default: Any) -> Any:
    if value is not None:
        logger.debug("Replacing invalid %s=%r with default %r", name, value, default)
    return default


# ── Resolver ───────────────────────────────────────────────────────────────────
def resolve_parameters(patch_size: Any, options: Optional[PatchOptions] = None) -> PatchParameters:
    """
    Fill in every optional field of ``options`` for a patch of ``patch_size`` pixels.

    Absent or out-of-domain optional values are replaced by their defaults;
    only an unusable ``patch_size`` raises.
    """
    size = as_patch_size(patch_size)
    opts = options if options is not None else PatchOptions()
    size_default = size / 10.0

    frequency = _as_real(opts.grating_frequency)
    if frequency is None or frequency <= 0:
        frequency = _substitute("grating_frequency", opts.grating_frequency, size_default)

    grating_rotation = _as_real(opts.grating_rotation)
    if grating_rotation is None:
        grating_rotation = _substitute("grating_rotation", opts.grating_rotation, DEFAULT_GRATING_ROTATION)

    grating_type = _as_name(opts.grating_type, GRATING_TYPE_ALIASES)
    if grating_type is None:
        grating_type = _substitute("grating_type", opts.grating_type, DEFAULT_GRATING_TYPE)

    sigma = _as_real(opts.filter_sigma)
    if sigma is None or sigma <= 0:
        sigma = _substitute("filter_sigma", opts.filter_sigma, size_default)

    aspect = _as_real(opts.filter_aspect)
    if aspect is None or aspect <= 0:
        aspect = _substitute("filter_aspect", opts.filter_aspect, DEFAULT_FILTER_ASPECT)

    filter_rotation = _as_real(opts.filter_rotation)
    if filter_rotation is None:
        filter_rotation = _substitute("filter_rotation", opts.filter_rotation, DEFAULT_FILTER_ROTATION)

    fore = _as_colour(opts.fore_colour)
    if fore is None:
        fore = _substitute("fore_colour", opts.fore_colour, DEFAULT_FORE_COLOUR)

    back = _as_colour(opts.back_colour)
    if back is None:
        back = _substitute("back_colour", opts.back_colour, DEFAULT_BACK_COLOUR)

    contrast = _as_real(opts.contrast)
    if contrast is None or not 0.0 <= contrast <= 1.0:
        contrast = _substitute("contrast", opts.contrast, DEFAULT_CONTRAST)

    style = _as_name(opts.style, STYLE_ALIASES)
    if style is None:
        style = _substitute("style", opts.style, DEFAULT_STYLE)

    # No upper bound: phase > 1 simply wraps around the cycle.
    phase = _as_real(opts.phase)
    if phase is None or phase < 0:
        phase = _substitute("phase", opts.phase, DEFAULT_PHASE)

    return PatchParameters(
        patch_size=size,
        grating_frequency=frequency,
        grating_rotation=grating_rotation,
        grating_type=grating_type,
        filter_sigma=sigma,
        filter_aspect=aspect,
        filter_rotation=filter_rotation,
        fore_colour=fore,
        back_colour=back,
        contrast=contrast,
        style=style,
        phase=phase,
    )
