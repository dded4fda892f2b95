import numpy as np
from skimage.util import img_as_ubyte


def clip_patch(patch: np.ndarray, low: float = 0.0, high: float = 1.0) -> np.ndarray:
    return np.clip(patch, low, high)


def patch_to_uint8(patch: np.ndarray) -> np.ndarray:
    """
    Convert a float patch to display-ready uint8 RGB.

    Values outside [0, 1] (e.g. from a non-midpoint background) are clipped first.
    """
    return img_as_ubyte(clip_patch(np.asarray(patch, dtype=np.float64)))


def out_of_gamut_fraction(patch: np.ndarray, low: float = 0.0, high: float = 1.0) -> float:
    arr = np.asarray(patch)
    if arr.size == 0:
        return 0.0
    return float(np.mean((arr < low) | (arr > high)))
