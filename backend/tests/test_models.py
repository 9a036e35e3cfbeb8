import pytest
from pydantic import ValidationError

from studio.models import BackgroundMode, DesignParameters, DesignSettings


def test_defaults_match_editor_start_state():
    params = DesignParameters()
    assert params.image is None
    assert (params.brightness, params.contrast, params.saturation, params.blur) == (1.12, 1.08, 1.18, 0)
    assert params.background_mode == BackgroundMode.GRADIENT
    assert params.scene_key == "studio"
    assert params.badge == "20% Off"


@pytest.mark.parametrize(
    "field,value,expected",
    [
        ("brightness", 5.0, 1.6),
        ("brightness", 0.1, 0.8),
        ("contrast", 2.0, 1.6),
        ("saturation", 0.0, 0.6),
        ("saturation", 9.0, 1.8),
        ("blur", -1.0, 0.0),
        ("blur", 10.0, 3.0),
        ("blur", 1.5, 1.5),
    ],
)
def test_adjustments_are_clamped(field, value, expected):
    assert getattr(DesignParameters(**{field: value}), field) == expected


def test_unknown_scene_rejected():
    with pytest.raises(ValidationError, match="Unknown scene"):
        DesignParameters(scene_key="underwater")


def test_bad_color_rejected():
    with pytest.raises(ValidationError, match="Unknown color"):
        DesignParameters(solid_color="#12345z")


def test_none_copy_means_omitted():
    params = DesignParameters(badge=None, cta=None)
    assert params.badge == ""
    assert params.cta == ""


def test_parameters_are_frozen():
    params = DesignParameters()
    with pytest.raises(ValidationError):
        params.brightness = 1.5


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_adjustments_rejected(value):
    with pytest.raises(ValidationError):
        DesignParameters(brightness=value)
    with pytest.raises(ValidationError):
        DesignParameters(blur=value)


def test_settings_carry_no_image():
    assert "image" not in DesignSettings.model_fields
    assert "image" in DesignParameters.model_fields
