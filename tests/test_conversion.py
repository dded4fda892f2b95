import numpy as np

from gabor_patch.computing import generate_gabor_patch
from gabor_patch.conversion import clip_patch, out_of_gamut_fraction, patch_to_uint8


def test_clip_patch_returns_new_array():
    patch = np.array([[[-0.2, 0.5, 1.3]]])
    clipped = clip_patch(patch)
    np.testing.assert_array_equal(clipped, [[[0.0, 0.5, 1.0]]])
    assert patch[0, 0, 2] == 1.3


def test_patch_to_uint8_clips_before_converting():
    patch = np.array([[[0.0, 1.0, 1.7], [-0.4, 0.0, 1.0]]])
    out = patch_to_uint8(patch)
    assert out.dtype == np.uint8
    assert out.shape == patch.shape
    np.testing.assert_array_equal(out, [[[0, 255, 255], [0, 0, 255]]])


def test_generated_patch_converts_for_display():
    patch = generate_gabor_patch(21, style="bipolar", back_colour=(0.9, 0.9, 0.9), fore_colour=(0.1, 0.1, 0.1))
    out = patch_to_uint8(patch)
    assert out.shape == (21, 21, 3)
    assert out.dtype == np.uint8


def test_out_of_gamut_fraction():
    patch = np.array([[-0.1, 0.5], [1.2, 1.0]])
    assert out_of_gamut_fraction(patch) == 0.5
    assert out_of_gamut_fraction(np.empty((0, 0, 3))) == 0.0


def test_default_patch_is_in_gamut():
    assert out_of_gamut_fraction(generate_gabor_patch(32)) == 0.0
