from maskblur.models.geometry import Rect, UNBOUNDED, resolve_roi

SHAPE = (600, 800, 3)


def test_default_roi_covers_whole_image():
    assert resolve_roi(Rect(0, 0, 0, 0), SHAPE) == Rect(0, 0, 800, 600)


def test_negative_offsets_count_from_right_and_bottom():
    assert resolve_roi(Rect(-50, 0, 0, 0), SHAPE) == resolve_roi(Rect(750, 0, 0, 0), SHAPE)
    assert resolve_roi(Rect(0, -500, 0, 0), SHAPE) == Rect(0, 100, 800, 500)


def test_roi_is_clamped_to_image():
    assert resolve_roi(Rect(700, 500, 300, 300), SHAPE) == Rect(700, 500, 100, 100)
    assert resolve_roi(Rect(-1000, 0, 0, 0), SHAPE) == Rect(0, 0, 800, 600)


def test_roi_outside_image_is_empty():
    roi = resolve_roi(Rect(900, 0, 10, 10), SHAPE)
    assert roi.is_empty
    assert roi.area == 0


def test_unbounded_size():
    assert Rect(0, 0, UNBOUNDED, UNBOUNDED).clamp(SHAPE) == Rect(0, 0, 800, 600)


def test_contains_and_slices():
    outer = Rect(0, 0, 100, 100)
    assert outer.contains(Rect(60, 60, 40, 40))
    assert not outer.contains(Rect(61, 60, 40, 40))
    assert Rect(5, 10, 3, 4).slices() == (slice(10, 14), slice(5, 8))
