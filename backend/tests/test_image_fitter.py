import itertools

import pytest

from studio.services.image_fitter import fit_image


def test_wide_image_is_scaled_down():
    fit = fit_image(2000, 1000, 500, 500, 1.2)
    assert fit.scale == pytest.approx(0.25)
    assert fit.width == pytest.approx(500)
    assert fit.height == pytest.approx(250)
    assert fit.x == pytest.approx(0)
    assert fit.y == pytest.approx(125)


def test_small_image_is_capped():
    fit = fit_image(100, 50, 500, 500, 1.2)
    assert fit.scale == pytest.approx(1.2)
    assert (fit.width, fit.height) == pytest.approx((120, 60))


def test_right_aligned_and_vertically_centered_in_region():
    fit = fit_image(400, 400, 712, 920, 1.2, left=748, top=140)
    assert (fit.width, fit.height) == pytest.approx((480, 480))
    assert fit.x + fit.width == pytest.approx(748 + 712)
    assert fit.y == pytest.approx(140 + (920 - 480) / 2)


def test_never_exceeds_cap_or_region():
    sizes = [1, 7, 120, 999, 4000]
    regions = [10, 333, 712, 2500]
    for nw, nh, aw, ah in itertools.product(sizes, sizes, regions, regions):
        fit = fit_image(nw, nh, aw, ah, 1.2)
        assert fit.scale <= 1.2
        assert fit.width <= aw + 1e-9
        assert fit.height <= ah + 1e-9
        assert fit.width / fit.height == pytest.approx(nw / nh)


@pytest.mark.parametrize("nw,nh", [(0, 100), (100, 0), (0, 0)])
def test_degenerate_image_yields_empty_placement(nw, nh):
    fit = fit_image(nw, nh, 500, 500, 1.2)
    assert fit.is_empty
    assert fit.width == 0 and fit.height == 0
