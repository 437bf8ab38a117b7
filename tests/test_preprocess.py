import numpy as np

from maskblur.models.preprocess import (
    INVERTED, NORMAL, binarize, invert, prepare_input, prepare_mask, to_gray
)


def test_to_gray_and_invert(scene):
    gray = to_gray(scene)
    assert gray.shape == scene.shape[:2]
    assert np.array_equal(invert(gray), 255 - gray)


def test_to_gray_copies_single_channel_input():
    gray = np.full((4, 4), 7, dtype=np.uint8)
    out = to_gray(gray)
    out[0, 0] = 0
    assert gray[0, 0] == 7


def test_binarize_uses_strict_cutoff():
    gray = np.array([[79, 80, 81]], dtype=np.uint8)
    assert binarize(gray, 80).tolist() == [[0, 0, 255]]


def test_prepare_input_keeps_originals(scene):
    before = scene.copy()
    prepared = prepare_input(scene, 80)

    assert np.array_equal(scene, before)
    assert set(np.unique(prepared.gray_binary)) <= {0, 255}
    assert np.array_equal(prepared.score_image(NORMAL), to_gray(scene))
    assert np.array_equal(prepared.score_image(INVERTED), 255 - to_gray(scene))
    assert prepared.search_image(INVERTED) is prepared.inverted_binary


def test_masks_are_not_thresholded():
    img = np.arange(100, dtype=np.uint8).reshape(10, 10)
    mask = prepare_mask("m", img)
    assert np.array_equal(mask.variant(NORMAL), img)
    assert np.array_equal(mask.variant(INVERTED), 255 - img)
