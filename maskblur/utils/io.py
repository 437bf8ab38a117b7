"""
Image decoding with EXIF rotation support
"""

import os
import cv2
import numpy as np
import logging
from typing import List, Optional, Sequence
from PIL import Image, ExifTags, UnidentifiedImageError

from maskblur.models.preprocess import MaskImage, prepare_mask
from maskblur.utils.errors import InputDecodeError, MaskDecodeWarning, report

logger = logging.getLogger(__name__)


def _exif_orientation(image_path: str) -> Optional[int]:
    try:
        with Image.open(image_path) as pil_img:
            exif = pil_img.getexif()
    except (OSError, UnidentifiedImageError):
        return None

    for tag, value in exif.items():
        if ExifTags.TAGS.get(tag) == 'Orientation':
            return value
    return None


def read_image(image_path: str) -> Optional[np.ndarray]:
    """
    Read a 3-channel BGR image with EXIF rotation correction

    Args:
        image_path: Path to image file

    Returns:
        BGR image array or None if failed
    """
    if not os.path.isfile(image_path):
        logger.error(f"Image file does not exist: {image_path}")
        return None

    # OpenCV would rotate on its own; ignore that and apply the tag once below
    img_bgr = cv2.imread(image_path, cv2.IMREAD_COLOR | cv2.IMREAD_IGNORE_ORIENTATION)
    if img_bgr is None or img_bgr.size == 0:
        logger.error(f"Failed to read image: {image_path}")
        return None

    orientation = _exif_orientation(image_path)
    if orientation:
        img_bgr = apply_exif_rotation(img_bgr, orientation)

    logger.debug(f"Loaded image: {image_path}, shape: {img_bgr.shape}")
    return img_bgr


def apply_exif_rotation(img: np.ndarray, orientation: int) -> np.ndarray:
    """
    Apply rotation based on EXIF orientation tag

    Args:
        img: Input image array
        orientation: EXIF orientation value (1-8)

    Returns:
        Rotated image array
    """
    if orientation == 2:  # Mirror horizontal
        return cv2.flip(img, 1)
    elif orientation == 3:  # Rotate 180
        return cv2.rotate(img, cv2.ROTATE_180)
    elif orientation == 4:  # Mirror vertical
        return cv2.flip(img, 0)
    elif orientation == 5:  # Transpose
        return cv2.rotate(cv2.flip(img, 1), cv2.ROTATE_90_COUNTERCLOCKWISE)
    elif orientation == 6:  # Rotate 90
        return cv2.rotate(img, cv2.ROTATE_90_CLOCKWISE)
    elif orientation == 7:  # Transverse
        return cv2.rotate(cv2.flip(img, 1), cv2.ROTATE_90_CLOCKWISE)
    elif orientation == 8:  # Rotate 270
        return cv2.rotate(img, cv2.ROTATE_90_COUNTERCLOCKWISE)
    return img


def read_input(image_path: str) -> np.ndarray:
    """Read the main input image; failure is fatal"""
    img = read_image(image_path)
    if img is None:
        raise InputDecodeError(f"failed to read input image {image_path}")
    return img


def load_masks(mask_paths: Sequence[str]) -> List[MaskImage]:
    """
    Decode masks in order, skipping the ones that fail

    Args:
        mask_paths: Mask file paths

    Returns:
        Prepared masks

    Raises:
        InputDecodeError: If no mask could be decoded
    """
    masks = []
    for path in mask_paths:
        img = read_image(path)
        if img is None:
            report(MaskDecodeWarning(f"skipping empty/invalid mask image {path}"), logger)
            continue
        masks.append(prepare_mask(path, img))

    if not masks:
        raise InputDecodeError("No valid mask files provided")

    logger.info(f"Loaded {len(masks)} of {len(mask_paths)} mask(s)")
    return masks
