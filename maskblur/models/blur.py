"""
Commit stage: Gaussian blur over the accepted region
"""

import cv2
import numpy as np
import logging
from typing import NamedTuple, Sequence

from maskblur.models.geometry import Rect

logger = logging.getLogger(__name__)


class BlurMargin(NamedTuple):
    """Extra pixels blurred around the match"""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


def expand_rect(rect: Rect, margin: BlurMargin, shape: Sequence[int]) -> Rect:
    """
    Grow ``rect`` by the blur margin and clamp it to the image bounds

    Args:
        rect: Accepted match rectangle
        margin: Margin as (top, right, bottom, left)
        shape: Shape of the output image

    Returns:
        Expanded and clamped rectangle
    """
    expanded = Rect(
        rect.x - margin.left,
        rect.y - margin.top,
        rect.width + margin.left + margin.right,
        rect.height + margin.top + margin.bottom,
    )
    clamped = expanded.clamp(shape)
    if clamped != expanded:
        logger.debug(f"Blur region {expanded} clamped to {clamped}")
    return clamped


def blur_region(img: np.ndarray, rect: Rect, kernel_size: int,
                deviation: float) -> np.ndarray:
    """
    Blur ``rect`` of a copy of ``img``

    Args:
        img: Image to redact (left untouched)
        rect: Region to blur, already clamped
        kernel_size: Positive odd Gaussian kernel size
        deviation: Gaussian standard deviation

    Returns:
        New image with the region blurred
    """
    out = img.copy()
    if rect.is_empty:
        logger.warning(f"Blur region {rect} is empty, nothing to blur")
        return out

    rows, cols = rect.slices()
    region = out[rows, cols]
    out[rows, cols] = cv2.GaussianBlur(region, (kernel_size, kernel_size), deviation)
    logger.debug(f"Blurred {rect} with kernel {kernel_size}, deviation {deviation}")
    return out
