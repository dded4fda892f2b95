import pytest


@pytest.fixture
def reference_kwargs():
    # 11 px patch, centre pixel sits on a cosine peak under a unit envelope
    return {
        "patch_size": 11,
        "grating_frequency": 1.1,
        "grating_rotation": 0,
        "grating_type": "cosine",
        "filter_sigma": 1.1,
        "filter_aspect": 1,
        "fore_colour": (1, 1, 1),
        "back_colour": (0.5, 0.5, 0.5),
        "contrast": 1,
        "style": "uniform",
        "phase": 0,
    }


@pytest.fixture
def default_kwargs():
    """Explicit spelling of every default for a 20 px patch."""
    return {
        "grating_frequency": 2.0,
        "grating_rotation": 0,
        "grating_type": "cosine",
        "filter_sigma": 2.0,
        "filter_aspect": 1,
        "filter_rotation": 0,
        "fore_colour": (1, 1, 1),
        "back_colour": (0.5, 0.5, 0.5),
        "contrast": 1,
        "style": "uniform",
        "phase": 0,
    }
