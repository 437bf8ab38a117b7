import numpy as np
import pytest
from PIL import Image

from maskblur.utils.errors import InputDecodeError
from maskblur.utils.io import apply_exif_rotation, load_masks, read_image, read_input


def test_exif_orientation_is_applied(tmp_path):
    path = tmp_path / "rotated.jpg"
    exif = Image.Exif()
    exif[0x0112] = 6
    Image.new("RGB", (60, 20), (200, 10, 10)).save(path, exif=exif.tobytes())

    img = read_image(str(path))
    assert img.shape == (60, 20, 3)


def test_apply_exif_rotation():
    img = np.zeros((2, 3, 3), dtype=np.uint8)
    assert apply_exif_rotation(img, 1).shape == (2, 3, 3)
    assert apply_exif_rotation(img, 8).shape == (3, 2, 3)


def test_missing_files(tmp_path):
    assert read_image(str(tmp_path / "missing.png")) is None
    with pytest.raises(InputDecodeError):
        read_input(str(tmp_path / "missing.png"))
    with pytest.raises(InputDecodeError):
        load_masks([str(tmp_path / "missing.png")])
