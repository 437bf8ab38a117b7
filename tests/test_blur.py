import numpy as np

from maskblur.models.blur import BlurMargin, blur_region, expand_rect
from maskblur.models.geometry import Rect

SHAPE = (600, 800, 3)


def test_expand_rect_applies_margins():
    rect = expand_rect(Rect(100, 100, 40, 40), BlurMargin(1, 2, 3, 4), SHAPE)
    assert rect == Rect(96, 99, 46, 44)


def test_expand_rect_is_clamped():
    rect = expand_rect(Rect(770, 5, 30, 30), BlurMargin(10, 10, 0, 0), SHAPE)
    assert rect == Rect(770, 0, 30, 35)


def test_default_margin_keeps_rect():
    assert expand_rect(Rect(1, 2, 3, 4), BlurMargin(), SHAPE) == Rect(1, 2, 3, 4)


def test_blur_region_only_touches_region(scene):
    rect = Rect(700, 10, 40, 40)
    before = scene.copy()
    out = blur_region(scene, rect, 3, 10)

    assert np.array_equal(scene, before)
    rows, cols = rect.slices()
    assert not np.array_equal(out[rows, cols], scene[rows, cols])
    outside = np.ones(scene.shape[:2], dtype=bool)
    outside[rows, cols] = False
    assert np.array_equal(out[outside], scene[outside])


def test_blur_empty_region_is_noop(scene):
    out = blur_region(scene, Rect(0, 0, 0, 0), 3, 10)
    assert np.array_equal(out, scene)
