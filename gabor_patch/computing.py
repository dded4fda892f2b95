import logging
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from .model import (
    GRATING_TYPES,
    MAX_ARGUMENTS,
    MIN_ARGUMENTS,
    PARAMETER_ORDER,
    PATCH_STYLES,
    InvalidArgumentCount,
    InvalidPatchSize,
    PatchOptions,
    PatchParameters,
    UnsupportedGratingType,
    UnsupportedStyle,
    resolve_parameters,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoordinateGrid:
    """Integer pixel offsets from the centre pixel, ``x[i, j] = offsets[j]``, ``y[i, j] = offsets[i]``."""

    x: np.ndarray
    y: np.ndarray
    offsets: np.ndarray

    @property
    def size(self) -> int:
        return int(self.offsets.shape[0])


def build_grid(patch_size: int) -> CoordinateGrid:
    half = patch_size // 2
    offsets = np.arange(-half, half + 1)
    x_grid, y_grid = np.meshgrid(offsets, offsets)
    return CoordinateGrid(x=x_grid, y=y_grid, offsets=offsets)


# ── Waveforms (period 2*pi, amplitude [-1, 1]) ────────────────────────────────
def sine_wave(argument: np.ndarray) -> np.ndarray:
    return np.sin(argument)


def cosine_wave(argument: np.ndarray) -> np.ndarray:
    return np.cos(argument)


def square_wave(argument: np.ndarray) -> np.ndarray:
    """+1 wherever the matching cosine is non-negative, -1 elsewhere."""
    return np.where(np.cos(argument) >= 0.0, 1.0, -1.0)


def sawtooth_wave(argument: np.ndarray) -> np.ndarray:
    """Rising ramp through 0 at argument 0, resetting from +1 to -1 at odd multiples of pi."""
    return np.mod(np.asarray(argument, dtype=np.float64) / np.pi + 1.0, 2.0) - 1.0


WAVEFORMS: dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "sine": sine_wave,
    "cosine": cosine_wave,
    "square": square_wave,
    "sawtooth": sawtooth_wave,
}


def apply_waveform(argument: np.ndarray, grating_type: str) -> np.ndarray:
    waveform = WAVEFORMS.get(grating_type)
    if waveform is None:
        valid = ", ".join(GRATING_TYPES)
        raise UnsupportedGratingType(f"Unknown grating type '{grating_type}'. Valid options: {valid}")
    return waveform(argument)


def grating_argument(grid: CoordinateGrid, params: PatchParameters) -> np.ndarray:
    """
    Phase of the grating at every pixel, in radians.

    Rotation 0 varies along x only, so the bars are vertical.
    """
    theta = np.deg2rad(params.grating_rotation)
    # Divide last so the centre stays at exactly 0 for any frequency.
    along = np.cos(theta) * grid.x + np.sin(theta) * grid.y
    return 2.0 * np.pi * along / params.grating_frequency + params.phase * 2.0 * np.pi


def synthesize_grating(grid: CoordinateGrid, params: PatchParameters) -> np.ndarray:
    return apply_waveform(grating_argument(grid, params), params.grating_type)


# ── Gaussian envelope ─────────────────────────────────────────────────────────
def circular_envelope(grid: CoordinateGrid, sigma: float) -> np.ndarray:
    with np.errstate(over="ignore", under="ignore"):
        profile = np.exp(-0.5 * (grid.offsets / sigma) ** 2)
    return np.outer(profile, profile)


def elliptical_envelope(
    grid: CoordinateGrid,
    sigma: float,
    aspect: float,
    rotation_deg: float,
) -> np.ndarray:
    """
    Rotated anisotropic Gaussian, peak 1 at the centre.

    ``sigma`` applies along x and ``sigma * aspect`` along y before rotation.
    The angle is negated so filter and grating turn the same way on screen.
    Coordinates are rotated then scaled by each sigma before squaring, which
    equals exp(-(a*x**2 + 2*b*x*y + c*y**2)) with the usual a, b, c.
    """
    sigma_x = sigma
    sigma_y = sigma * aspect
    theta = np.deg2rad(-rotation_deg)
    cos_t, sin_t = np.cos(theta), np.sin(theta)
    u = cos_t * grid.x - sin_t * grid.y
    v = sin_t * grid.x + cos_t * grid.y
    with np.errstate(over="ignore", under="ignore"):
        return np.exp(-0.5 * (u / sigma_x) ** 2 - 0.5 * (v / sigma_y) ** 2)


def synthesize_envelope(grid: CoordinateGrid, params: PatchParameters) -> np.ndarray:
    if params.is_circular:
        return circular_envelope(grid, params.filter_sigma)
    return elliptical_envelope(grid, params.filter_sigma, params.filter_aspect, params.filter_rotation)


# ── Compositing ───────────────────────────────────────────────────────────────
def composite_patch(grating: np.ndarray, envelope: np.ndarray, params: PatchParameters) -> np.ndarray:
    """
    Blend background and foreground colours per channel. Values are not clipped.

    uniform: modulation in [0, 1], moves only from background toward foreground.
    bipolar: modulation in [-1, 1], moves both toward and away from foreground.
    """
    if params.style == "bipolar":
        modulation = grating * envelope
    elif params.style == "uniform":
        modulation = (0.5 + 0.5 * grating) * envelope
    else:
        valid = ", ".join(PATCH_STYLES)
        raise UnsupportedStyle(f"Unknown style '{params.style}'. Valid options: {valid}")

    h, w = modulation.shape
    out = np.empty((h, w, 3), dtype=np.float64)
    for c in range(3):
        fg_c = params.fore_colour[c]
        bg_c = params.back_colour[c]
        out[..., c] = bg_c + (fg_c - bg_c) * params.contrast * modulation
    return out


def render_patch(params: PatchParameters) -> np.ndarray:
    """Run grid, grating, envelope and compositing for already resolved parameters."""
    grid = build_grid(params.patch_size)
    grating = synthesize_grating(grid, params)
    envelope = synthesize_envelope(grid, params)
    patch = composite_patch(grating, envelope, params)
    logger.debug("Rendered %s patch with shape %s", params.grating_type, patch.shape)
    return patch


# ── Entry point ───────────────────────────────────────────────────────────────
def _bind_arguments(args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
    n_given = len(args) + len(kwargs)
    if not MIN_ARGUMENTS <= n_given <= MAX_ARGUMENTS:
        raise InvalidArgumentCount(
            f"generate_gabor_patch takes {MIN_ARGUMENTS} to {MAX_ARGUMENTS} arguments ({n_given} given)"
        )
    bound = dict(zip(PARAMETER_ORDER, args))
    for name, value in kwargs.items():
        if name not in PARAMETER_ORDER:
            valid = ", ".join(PARAMETER_ORDER)
            raise InvalidArgumentCount(f"Unknown argument '{name}'. Valid options: {valid}")
        if name in bound:
            raise InvalidArgumentCount(f"Argument '{name}' given both by position and by name")
        bound[name] = value
    if "patch_size" not in bound:
        raise InvalidPatchSize("patch_size is required")
    return bound


def generate_gabor_patch(*args: Any, **kwargs: Any) -> np.ndarray:
    """
    Generate a Gabor patch as a float (H, W, 3) RGB array.

    Arguments follow ``PARAMETER_ORDER`` and may be given by position or name;
    only ``patch_size`` is required and ``None`` marks any other one as absent.
    H = W = 2 * (patch_size // 2) + 1, so even sizes gain a row and column.
    Output is not clipped to [0, 1].
    """
    bound = _bind_arguments(args, kwargs)
    patch_size = bound.pop("patch_size")
    params = resolve_parameters(patch_size, PatchOptions(**bound))
    logger.debug("Resolved Gabor patch parameters: %s", params)
    return render_patch(params)
