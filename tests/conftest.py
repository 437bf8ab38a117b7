"""
Shared fixtures: a synthetic scene with a logo pasted at a known place
"""

import cv2
import numpy as np
import pytest

from maskblur.utils.config import RunConfig

LOGO_POS = (700, 10)
LOGO_SIZE = 40


def make_logo(size: int = LOGO_SIZE) -> np.ndarray:
    """High-contrast 3-channel pattern that survives thresholding unchanged"""
    logo = np.zeros((size, size), dtype=np.uint8)
    block = size // 5
    for row in range(5):
        for col in range(5):
            if (row + col) % 2 == 0:
                logo[row * block:(row + 1) * block, col * block:(col + 1) * block] = 255
    logo[size // 2 - 2:size // 2 + 2, :] = 0
    logo[:4, :] = 255
    return cv2.cvtColor(logo, cv2.COLOR_GRAY2BGR)


def make_background(width: int = 800, height: int = 600, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(100, 160, size=(height, width, 3), dtype=np.uint8)


@pytest.fixture
def logo():
    return make_logo()


@pytest.fixture
def scene(logo):
    img = make_background()
    x, y = LOGO_POS
    img[y:y + LOGO_SIZE, x:x + LOGO_SIZE] = logo
    return img


@pytest.fixture
def scene_files(tmp_path, scene, logo):
    input_path = tmp_path / "in.png"
    mask_path = tmp_path / "logo.png"
    assert cv2.imwrite(str(input_path), scene)
    assert cv2.imwrite(str(mask_path), logo)
    return {
        'input': str(input_path),
        'mask': str(mask_path),
        'output': str(tmp_path / "out.png"),
        'dir': tmp_path,
    }


@pytest.fixture
def run_config(scene_files):
    return RunConfig(
        input_path=scene_files['input'],
        output_path=scene_files['output'],
        mask_paths=(scene_files['mask'],),
    ).validate()
