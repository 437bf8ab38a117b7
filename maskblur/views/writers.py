"""
Output writers for the redacted image
"""

import os
import cv2
import numpy as np
import logging

from maskblur.utils.errors import OutputWriteError

logger = logging.getLogger(__name__)


def save_image(path: str, bgr: np.ndarray, quality: int = 95) -> None:
    """
    Save BGR image with appropriate format

    Args:
        path: Output file path
        bgr: BGR image array
        quality: JPEG quality (1-100) if saving as JPEG

    Raises:
        OutputWriteError: If the image could not be encoded or written
    """
    # Determine format from extension
    ext = os.path.splitext(path)[1].lower()

    if ext in ['.jpg', '.jpeg']:
        encode_params = [cv2.IMWRITE_JPEG_QUALITY, quality]
    elif ext == '.png':
        encode_params = [cv2.IMWRITE_PNG_COMPRESSION, 1]
    else:
        encode_params = []

    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        success = cv2.imwrite(path, bgr, encode_params)
    except (OSError, cv2.error) as e:
        raise OutputWriteError(f"failed to save to file {path}: {e}") from e

    if not success:
        raise OutputWriteError(f"failed to save to file {path}")
    logger.debug(f"Saved image: {path}")
